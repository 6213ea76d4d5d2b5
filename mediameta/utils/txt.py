"""
txt.py
-------------------
Text utilities shared by the reconciliation engine.

- clip: bounded, whitespace-trimmed field values
- title: word-initial capitalization for synthesized titles
- keywords: the shared tokenizer behind the keyword index
- unique_words / unique_keywords: deduplicated keyword lists
"""

from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Iterable, List

# ----- Field limits -----
CLIP_TITLE = 300
CLIP_DESCRIPTION = 16000
CLIP_KEYWORD = 64
CLIP_LABEL = 128

# Words of unicode letters, optionally joined by hyphens
_WORD_RE = re.compile(r"[^\W\d_][^\W\d_\-]*(?:-[^\W\d_]+)*")
_TITLE_RE = re.compile(r"(^|[^\w'])(\w)")

STOP_WORDS = frozenset(
    {
        "a", "about", "above", "after", "again", "all", "also", "am", "an",
        "and", "any", "are", "as", "at", "be", "because", "been", "before",
        "being", "below", "between", "both", "but", "by", "can", "did", "do",
        "does", "doing", "down", "during", "each", "few", "for", "from",
        "further", "had", "has", "have", "having", "he", "her", "here",
        "hers", "him", "his", "how", "if", "in", "into", "is", "it", "its",
        "just", "me", "more", "most", "my", "no", "nor", "not", "now", "of",
        "off", "on", "once", "only", "or", "other", "our", "ours", "out",
        "over", "own", "same", "she", "should", "so", "some", "such", "than",
        "that", "the", "their", "them", "then", "there", "these", "they",
        "this", "those", "through", "to", "too", "under", "until", "up",
        "very", "was", "we", "were", "what", "when", "where", "which",
        "while", "who", "whom", "why", "will", "with", "you", "your",
        "img", "dsc", "photo", "image", "jpg", "jpeg", "unknown",
    }
)


def clip(text: str, size: int) -> str:
    """
    Trim whitespace and cut text to at most ``size`` characters.

    Returns an empty string for None or whitespace-only input.
    """
    if not text:
        return ""

    text = text.strip()
    if len(text) > size:
        text = text[:size].rstrip()

    return text


def title(text: str) -> str:
    """
    Capitalize the first letter of every word, leaving the rest untouched.

    Unlike ``str.title`` this keeps "NYC" intact and does not
    capitalize after apostrophes.

    >>> title("golden retriever / berlin")
    'Golden Retriever / Berlin'
    >>> title("23 birthday")
    '23 Birthday'
    """
    if not text:
        return ""

    return _TITLE_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text.strip())


def quote(text: str) -> str:
    """Wrap text in double quotes for log messages."""
    return f'"{text}"'


def words(text: str) -> List[str]:
    """
    Split text into words made of letters and inner hyphens.

    Numbers and punctuation act as separators. Single characters are dropped.
    """
    if not text:
        return []

    result = []
    for word in _WORD_RE.findall(text):
        word = word.strip("-")
        if len(word) < 2:
            continue
        result.append(word)

    return result


def keywords(text: str) -> List[str]:
    """
    Tokenize text into lowercase keywords.

    Latin words shorter than three characters are dropped; stop words are
    kept so the keyword store can flag them on creation.

    >>> keywords("Golden Retriever at the Beach, 2020")
    ['golden', 'retriever', 'at', 'the', 'beach']
    """
    result = []
    for word in words(text):
        word = word.lower()
        if word.isascii() and len(word) < 3 and word not in STOP_WORDS:
            continue
        result.append(clip(word, CLIP_KEYWORD))

    return result


def is_stop_word(word: str) -> bool:
    """True when the keyword carries no search value."""
    return word.lower() in STOP_WORDS or len(word) < 2


def unique_words(items: Iterable[str]) -> List[str]:
    """Sorted, deduplicated, non-empty words."""
    return sorted({w.strip() for w in items if w and w.strip()})


def unique_keywords(text: str) -> List[str]:
    """Sorted unique keywords found in free text."""
    return unique_words(keywords(text))
