"""Normalization of display names into camel-case field names."""

from __future__ import annotations

import re
import unicodedata
from itertools import groupby

_APOSTROPHES = re.compile(r"['’]")

# Latin-1 Supplement and Latin Extended-A letters get folded to ASCII.
_LATIN_LETTERS = re.compile("[\u00c0-\u00d6\u00d8-\u00f6\u00f8-\u017f]")
_COMBINING_MARKS = re.compile("[\u0300-\u036f\ufe20-\ufe2f\u20d0-\u20ff]")

# Letters without a canonical decomposition.
_LETTER_FOLDS = {
    "Æ": "Ae", "æ": "ae", "Ð": "D", "ð": "d", "Ø": "O", "ø": "o",
    "Þ": "Th", "þ": "th", "ß": "ss", "Đ": "D", "đ": "d", "Ħ": "H",
    "ħ": "h", "ı": "i", "Ĳ": "IJ", "ĳ": "ij", "ĸ": "k", "Ŀ": "L",
    "ŀ": "l", "Ł": "L", "ł": "l", "ŉ": "'n", "Ŋ": "N", "ŋ": "n",
    "Œ": "Oe", "œ": "oe", "Ŧ": "T", "ŧ": "t", "ſ": "s",
}


def _fold_letter(match: re.Match[str]) -> str:
    letter = match.group()
    if letter in _LETTER_FOLDS:
        return _LETTER_FOLDS[letter]
    return unicodedata.normalize("NFD", letter)[0]


def _deburr(text: str) -> str:
    """Fold accented Latin letters to ASCII; other scripts pass through."""
    return _COMBINING_MARKS.sub("", _LATIN_LETTERS.sub(_fold_letter, text))


def _is_word_char(char: str) -> bool:
    return char.isalnum() or unicodedata.category(char).startswith("M")


def _is_boundary(prev: str, char: str, following: str) -> bool:
    if prev.isdigit() != char.isdigit():
        return True
    if prev.islower() and char.isupper():
        return True
    # End of an acronym: "HTTPServer" splits before "S".
    return prev.isupper() and char.isupper() and following.islower()


def _split_run(run: str) -> list[str]:
    words = []
    start = 0
    for i in range(1, len(run)):
        following = run[i + 1] if i + 1 < len(run) else ""
        if _is_boundary(run[i - 1], run[i], following):
            words.append(run[start:i])
            start = i
    words.append(run[start:])
    return words


def split_words(display: str) -> list[str]:
    """Split a display name into words.

    Any character that is not a letter, digit or combining mark separates
    words. Within a run, words break on lower-to-upper case changes, at the
    end of an acronym and between letters and digits. Scripts without case,
    such as CJK, keep their runs whole.

    >>> split_words("Available Bike-Stands")
    ['Available', 'Bike', 'Stands']
    >>> split_words("HTTPServer2")
    ['HTTP', 'Server', '2']
    >>> split_words("名前 年齢")
    ['名前', '年齢']
    """
    text = _APOSTROPHES.sub("", _deburr(display))
    words: list[str] = []
    for is_word, chars in groupby(text, key=_is_word_char):
        if is_word:
            words.extend(_split_run("".join(chars)))
    return words


def to_field_name(display: str) -> str:
    """Convert a display name to its normalized camel-case field name.

    The first word is lower-cased and every following word capitalized,
    so ``"Station ID"`` becomes ``"stationId"`` and ``"last_update"``
    becomes ``"lastUpdate"``.
    """
    words = split_words(display)
    if not words:
        return ""
    head, *tail = words
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in tail)
