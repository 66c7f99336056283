"""Command line tools for site grayscale mode."""
