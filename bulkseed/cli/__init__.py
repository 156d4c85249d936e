"""Command line interface for bulkseed."""
