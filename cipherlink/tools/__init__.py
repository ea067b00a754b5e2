"""Command-line tools for CipherLink."""
