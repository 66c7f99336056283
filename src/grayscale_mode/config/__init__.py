"""Static configuration constants for grayscale mode."""
