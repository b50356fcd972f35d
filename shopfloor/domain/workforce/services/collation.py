"""
Display-name collation for machine cards.

Python's default string ordering sorts by code point, which puts Turkish
letters such as "Ç" and "Ş" after "Z". Plant machine names are Turkish, so
the team view orders them by the Turkish alphabet instead.
"""

from collections.abc import Callable

# q, w and x are not Turkish letters but occur in imported machine names
TURKISH_ALPHABET = "abcçdefgğhıijklmnoöpqrsştuüvwxyz"

_TURKISH_RANK = {letter: rank for rank, letter in enumerate(TURKISH_ALPHABET)}

# Turkish dotted/dotless i pairs do not round-trip through str.lower()
_TURKISH_LOWER = str.maketrans({"I": "ı", "İ": "i"})

SortKey = Callable[[str], tuple]


def turkish_lower(value: str) -> str:
    return value.translate(_TURKISH_LOWER).lower()


def _char_weight(char: str) -> tuple[int, int]:
    if char.isspace() or not char.isalnum():
        return (0, ord(char))
    if char.isdigit():
        return (1, ord(char))
    rank = _TURKISH_RANK.get(char)
    if rank is not None:
        return (2, rank)
    return (3, ord(char))


def turkish_sort_key(value: str) -> tuple:
    """Case-insensitive Turkish alphabet key, original string as tie-breaker."""
    folded = turkish_lower(value)
    return (tuple(_char_weight(char) for char in folded), value)


def default_sort_key(value: str) -> tuple:
    return (value.casefold(), value)


def sort_key_for_locale(locale: str) -> SortKey:
    """
    Resolve the display-name sort key for a configured locale.

    Raises:
        ValueError: If the locale is not supported
    """
    if locale == "tr":
        return turkish_sort_key
    if locale == "default":
        return default_sort_key
    raise ValueError(f"Unsupported machine sort locale: {locale}")
