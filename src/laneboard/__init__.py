"""Four-lane task board with deadline expiration and rescue flow."""

__version__ = "0.1.0"
