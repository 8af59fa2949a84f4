"""Text-file handling for a simple editor: charsets, line endings, indentation and search."""

__version__ = "0.8.17"
__all__ = ["encoding", "sbprober", "textfile", "indent", "search"]