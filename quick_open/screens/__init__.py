"""Screens for Quick Open."""

from quick_open.screens.finder import FinderScreen

__all__ = ["FinderScreen"]
