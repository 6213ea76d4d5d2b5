#!/usr/bin/env python3
"""
slugify.py
----------
Slug generation for label and keyword natural keys.

Label entities are looked up by slug, so "Golden Retriever",
"golden retriever" and "Golden  Retriever" resolve to the same row.

Usage:
    from mediameta.utils.slugify import slugify

    slugify("Golden Retriever")  # "golden-retriever"
    slugify("Café / Bar")        # "cafe-bar"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata


def slugify(text: str, max_length: int = 160) -> str:
    """
    Convert text to a lowercase ASCII slug.

    - Normalize accents (Café → cafe)
    - Remove apostrophes (dog's → dogs)
    - Replace ampersands with 'and'
    - Turn slashes, spaces and underscores into hyphens
    - Strip everything else that is not alphanumeric
    - Collapse repeated hyphens

    Args:
        text: Input text to slugify
        max_length: Maximum slug length

    Returns:
        Slug string, empty when nothing usable remains

    Examples:
        >>> slugify("Golden Retriever")
        'golden-retriever'
        >>> slugify("Rock & Roll")
        'rock-and-roll'
        >>> slugify("Berlin (Mitte)")
        'berlin-mitte'
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = text.replace("'", "")
    text = re.sub(r"[(){}\[\]]", " ", text)
    text = text.replace("&", "and")
    text = text.replace("/", "-")
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")

    if len(text) > max_length:
        text = text[:max_length].rstrip("-")

    return text
