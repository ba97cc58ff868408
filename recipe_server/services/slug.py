"""
Recipe Server: Recipe Ids
============================

What:  Derives recipe ids from display names and checks the id grammar.
Why:   Ids appear in URLs, so they must be URL-safe and predictable:
       "Tomato Soup" always becomes "tomato-soup".
How:   python-slugify does the transliteration and lowercasing; the regex
       below is the grammar every id must satisfy.

Id grammar:
    one or more lowercase alphanumeric segments joined by single hyphens
        chicken-soup      ✅
        soup              ✅
        Chicken-Soup      ❌ uppercase
        chicken--soup     ❌ empty segment
        -soup / soup-     ❌ empty segment
"""

import re

from slugify import slugify as _slugify

ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(name: str) -> str:
    """
    Convert a recipe name into its id.

    Deterministic and pure. The result either matches ID_PATTERN or is the
    empty string (when the name holds no letters or digits at all).
    """
    return _slugify(name, separator="-", lowercase=True)


def is_valid_id(value: str) -> bool:
    return bool(ID_PATTERN.fullmatch(value))
