"""Ingredient name normalization."""

import re

_NON_WORD = re.compile(r"[^\w\s]")
_PLURAL_SUFFIX = re.compile(r"(s|es)$")


def normalize_ingredient(name: str) -> str:
    """
    Normalize an ingredient name for nutrition lookup and the reverse index.

    - Lowercase
    - Remove punctuation (anything that is not a word character or whitespace)
    - Strip one trailing "s" or "es"
    - Trim surrounding whitespace

    >>> normalize_ingredient(" Tomatoes! ")
    'tomato'
    """
    name = _NON_WORD.sub("", name.lower()).strip()
    return _PLURAL_SUFFIX.sub("", name, count=1).strip()
