"""
Movie Catalog Application Package.

This package contains the movie domain rules, the database repository,
the HTTP API and shared utilities.
"""

__version__ = "1.0.0"
