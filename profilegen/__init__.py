"""Generate a GitHub profile README from account and language statistics."""

__version__ = "0.1.0"
