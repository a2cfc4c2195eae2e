"""
Reduced alphabet and bijective base-21 numbering for grid labels.

Letters that are easily confused with digits or with each other when written
by hand (I, L, O, Q, S) are left out. Positions are numbered the way
spreadsheet columns are: 1 -> "A", 21 -> "Z", 22 -> "AA", 23 -> "AB".
"""

from typing import Tuple

# Kolejność ma znaczenie - indeks litery to jej cyfra (bez zera)
ALPHABET = (
    "A", "B", "C", "D", "E", "F", "G", "H", "J", "K", "M",
    "N", "P", "R", "T", "U", "V", "W", "X", "Y", "Z",
)  # fmt: skip

BASE = len(ALPHABET)

EXCLUDED = frozenset("ILOQS")

_INDEX = {letter: i for i, letter in enumerate(ALPHABET)}


def encode(position: int) -> str:
    """
    Encode a 1-based position as a letter label.

    Parameters
    ----------
    position : int
        Position to encode, must be >= 1.

    Returns
    -------
    str
        Label in the reduced alphabet.

    Raises
    ------
    ValueError
        If position is not a positive integer.

    Examples
    --------
    >>> encode(1)
    'A'
    >>> encode(21)
    'Z'
    >>> encode(22)
    'AA'
    """
    if isinstance(position, bool) or not isinstance(position, int):
        raise ValueError(f"Position must be an integer, got: {type(position)}")
    if position < 1:
        raise ValueError(f"Position must be >= 1, got: {position}")

    digits = []
    n = position
    while n > 0:
        n -= 1
        digits.append(ALPHABET[n % BASE])
        n //= BASE

    return "".join(reversed(digits))


def decode(label: str) -> int:
    """
    Decode a letter label back into its 1-based position.

    Parameters
    ----------
    label : str
        Label to decode. Case-insensitive.

    Returns
    -------
    int
        Position such that ``encode(position) == label.upper()``.

    Raises
    ------
    ValueError
        If the label is empty or contains a symbol outside the alphabet.

    Examples
    --------
    >>> decode("AB")
    23
    """
    if not isinstance(label, str) or not label:
        raise ValueError("Label must be a non-empty string")

    position = 0
    for letter in label.upper():
        if letter not in _INDEX:
            raise ValueError(
                f"Invalid label: '{label}'. "
                f"Allowed letters: {''.join(ALPHABET)}"
            )
        position = position * BASE + _INDEX[letter] + 1

    return position


def is_valid_label(label: str) -> bool:
    """Return True if label is a non-empty string of alphabet letters."""
    return isinstance(label, str) and bool(label) and all(c in _INDEX for c in label)


def sort_key(label: str) -> Tuple[int, Tuple[int, ...]]:
    """
    Return a key ordering labels the same way as their positions.

    Shorter labels sort first, equal lengths sort by alphabet index.
    """
    return (len(label), tuple(_INDEX[c] for c in label.upper()))
