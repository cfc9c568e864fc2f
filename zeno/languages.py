"""Language relevance ranking for the add flow.

Languages whose name (or a description word) appears in the snippet title
are offered first; the rest follow by popularity.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from .entries import Language

NAME_WORD_WEIGHT = 100
NAME_SUBSTRING_WEIGHT = 10
MIN_SUBSTRING_LEN = 3
MIN_DESCRIPTION_WORD_LEN = 3

# Letters and digits only; ``\w`` would also accept underscores.
_WORD_RE = re.compile(r"[^\W_]+")


def _contains_word(text: str, word: str) -> bool:
    return re.search(r"\b" + re.escape(word) + r"\b", text) is not None


def match_score(language: Language, title: str) -> int:
    """Score how strongly ``title`` points at ``language`` (0 means no match)."""
    text = title.lower()
    name = language.name.lower()
    score = 0

    if name and _contains_word(text, name):
        score += len(name) * NAME_WORD_WEIGHT
    elif len(name) >= MIN_SUBSTRING_LEN and name in text:
        score += len(name) * NAME_SUBSTRING_WEIGHT

    longest = 0
    for word in _WORD_RE.findall(language.description.lower()):
        if len(word) >= MIN_DESCRIPTION_WORD_LEN and len(word) > longest and _contains_word(text, word):
            longest = len(word)
    return score + longest


def order_languages(languages: Sequence[Language], title: str) -> list[Language]:
    """Return matching languages first (score, count, name), then the rest (count, name)."""
    scored = [(match_score(language, title), language) for language in languages]
    matches = [pair for pair in scored if pair[0] > 0]
    others = [language for score, language in scored if score <= 0]
    matches.sort(key=lambda pair: (-pair[0], -pair[1].count, pair[1].name))
    others.sort(key=lambda language: (-language.count, language.name))
    return [language for _, language in matches] + others
