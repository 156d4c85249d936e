"""Row generators for seed data."""

from bulkseed.generators.base import BaseGenerator
from bulkseed.generators.faker_generator import (
    FakerGenerator,
    UniqueFakerGenerator,
    seed_generators,
)

__all__ = ["BaseGenerator", "FakerGenerator", "UniqueFakerGenerator", "seed_generators"]
