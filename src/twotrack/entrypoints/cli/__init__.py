"""Command-line entrypoint for twotrack."""
