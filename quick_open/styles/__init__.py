"""Shared CSS for Quick Open screens."""

from quick_open.styles.base import BASE_CSS

__all__ = ["BASE_CSS"]
