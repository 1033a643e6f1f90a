"""Banned-term screen applied to chat lines posted over REST."""

import re

BANNED_TERMS = (
    "hate",
    "racist",
    "violence",
    "threat",
    "kill",
    "die",
    "stupid",
    "idiot",
    "fuck",
    "shit",
    "damn",
    "bitch",
    "asshole",
    "loser",
    "retard",
    "gay",
    "nazi",
    "terror",
    "bomb",
    "weapon",
    "drug",
    "illegal",
)

# Whole words only, plus simple plurals, so "diet" or "studied" pass.
_BANNED_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(term) for term in BANNED_TERMS) + r")s?\b",
    re.IGNORECASE,
)


def contains_banned_term(text: str) -> bool:
    return bool(_BANNED_RE.search(text or ""))
