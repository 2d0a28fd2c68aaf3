"""Accent-insensitive text folding and trigram similarity.

The trigram scheme follows PostgreSQL's pg_trgm extension: text is split
into alphanumeric words, each word is padded with two leading blanks and
one trailing blank, and similarity is the ratio of shared trigrams to all
distinct trigrams of both strings. Keeping the two in step means rows the
database returns for a ``%`` match score the same way here.
"""

import re
import unicodedata

_WORD_PATTERN = re.compile(r"[^\W_]+")


def fold(text: str | None) -> str:
    """Lower-case, strip accents and collapse whitespace."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(stripped.casefold().split())


def trigrams(text: str | None) -> set[str]:
    """Return the pg_trgm-style trigram set of ``text``."""
    result: set[str] = set()
    for word in _WORD_PATTERN.findall(fold(text)):
        padded = f"  {word} "
        for index in range(len(padded) - 2):
            result.add(padded[index : index + 3])
    return result


def trigram_similarity(left: str | None, right: str | None) -> float:
    """Return a similarity score between 0 and 1."""
    left_set = trigrams(left)
    right_set = trigrams(right)
    if not left_set or not right_set:
        return 0.0
    return len(left_set & right_set) / len(left_set | right_set)
