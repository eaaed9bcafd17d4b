"""Lyric text normalization.

Lyric lines are stored in one canonical shape: punctuation stripped, single
spaces, sentence case, and the conventional capitalization of divine names
and titles used in worship songs ("Dios", "Espíritu Santo", "Rey De Reyes").
"""

from __future__ import annotations

import re

# Phrases are matched as whole words; both accented and unaccented spellings
# are listed because charts are often typed without accents.
DIVINE_WORDS: tuple[str, ...] = (
    "dios",
    "señor",
    "padre",
    "hijo",
    "santo",
    "espíritu santo",
    "espiritu santo",
    "jesús",
    "jesus",
    "jeshua",
    "yeshua",
    "cristo",
    "jesucristo",
    "salvador",
    "mesías",
    "mesias",
    "emanuel",
    "emmanuel",
    "jehová",
    "jehova",
    "yahveh",
    "yahweh",
    "adonai",
    "elohim",
    "el shaddai",
    "altísimo",
    "altisimo",
    "todopoderoso",
    "omnipotente",
    "creador",
    "redentor",
    "cordero",
    "rey de reyes",
    "león de judá",
    "alfa y omega",
)

INVALID_CHARACTERS_RE = re.compile(r"""[().*/\\"',;:\-_=+\[\]{}<>|~`@#$%^&]""")
WHITESPACE_RE = re.compile(r"\s+")

_DIVINE_WORD_RES = tuple(
    re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE) for word in DIVINE_WORDS
)


def normalize(text: str) -> str:
    """Normalize a lyric line.

    Parameters
    ----------
    text : str
        Raw lyric text.

    Returns
    -------
    str
        The cleaned line. Empty or whitespace-only input is returned as-is.

    Examples
    --------
    >>> normalize("  GLORIA a dios, en las alturas!  ")
    'Gloria a Dios en las alturas!'
    >>> normalize("el espiritu santo")
    'El Espiritu Santo'
    """
    if not text or not text.strip():
        return text

    normalized = text.strip()
    normalized = remove_invalid_characters(normalized)
    normalized = normalize_spaces(normalized)
    # Lowercase first so the divine-word pass sees a uniform string
    normalized = normalized.lower()
    normalized = capitalize_first_letter(normalized)
    return capitalize_divine_words(normalized)


def remove_invalid_characters(text: str) -> str:
    """Strip punctuation and symbols that never belong in stored lyrics."""
    return INVALID_CHARACTERS_RE.sub("", text)


def normalize_spaces(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return WHITESPACE_RE.sub(" ", text).strip()


def capitalize_first_letter(text: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def _capitalize_phrase(match: re.Match[str]) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in match.group(0).split(" "))


def capitalize_divine_words(text: str) -> str:
    """Capitalize every word of each divine name or title found in ``text``.

    Examples
    --------
    >>> capitalize_divine_words("santo es el rey de reyes")
    'Santo es el Rey De Reyes'
    """
    for pattern in _DIVINE_WORD_RES:
        text = pattern.sub(_capitalize_phrase, text)
    return text


def get_divine_words() -> list[str]:
    """Return the divine words list as a new list."""
    return list(DIVINE_WORDS)
