"""Subfapp: topical communities with membership-gated posts."""

__version__ = "0.1.0"
