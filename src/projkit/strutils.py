"""String canonicalization helpers for matching user-typed names."""

import re

_NOISE = re.compile(r"[_\-\s]")


def canonize(s: str) -> str:
    """Lowercase *s* and drop underscores, dashes and whitespace."""
    return _NOISE.sub("", s).lower()


def is_similar(a: str, b: str) -> bool:
    return canonize(a) == canonize(b)
