"""Autoimport CLI: insert Python import statements for the identifier at point."""

__version__ = "0.3.0"
