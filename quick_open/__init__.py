"""Quick Open: fuzzy finder for files, file contents, open buffers and commands."""

__version__ = "0.1.0"
