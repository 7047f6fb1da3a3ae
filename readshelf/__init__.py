"""Top-level package for readshelf, a personal read-it-later archive.

This package contains the CLI entrypoint and the supporting modules for
extracting article metadata with an AI backend, normalizing model output,
and persisting articles per user.
"""

__all__ = []
