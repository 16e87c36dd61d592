"""Slug derivation for community names."""
from __future__ import annotations

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Return the URL-safe slug for a display name.

    The name is lowercased and every run of characters outside ``[a-z0-9]``
    collapses to a single hyphen; hyphens at either end are dropped. The
    function is idempotent: ``slugify(slugify(x)) == slugify(x)``.

    Raises:
        ValueError: If nothing alphanumeric remains.
    """
    slug = _NON_ALNUM_RUN.sub("-", name.lower()).strip("-")
    if not slug:
        raise ValueError("Community name must contain letters or digits")
    return slug
