"""Title-casing for snippet titles."""

from __future__ import annotations

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "as", "at", "but", "by", "for", "in", "nor",
        "of", "on", "or", "per", "the", "to", "vs", "with", "from",
    }
)


def title_case(text: str) -> str:
    """Capitalize each word except inner stop words; collapses whitespace."""
    words = text.lower().split()
    last = len(words) - 1
    out = []
    for index, word in enumerate(words):
        if index in (0, last) or word not in STOP_WORDS:
            word = word[:1].upper() + word[1:]
        out.append(word)
    return " ".join(out)
