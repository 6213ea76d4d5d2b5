"""
Utilities package for mediameta.

- txt: Clipping, title casing and the keyword tokenizer
- slugify: Natural keys for labels

Import specific modules:
    from mediameta.utils import txt
    from mediameta.utils.slugify import slugify
"""
from . import txt
from .slugify import slugify

__all__ = ["txt", "slugify"]
