"""
Text normalization and cleaning for identifier input.

This module provides the string helpers every validator builds on:
- Unicode normalization (fullwidth digits, zero-width spaces, dash variants)
- Separator removal with an optional alphabet check
- Small digit and slicing helpers
"""

import unicodedata
import re
from typing import Optional, Tuple, List

from natid_engine.errors import ErrorKind


def normalize_text(text: str) -> str:
    """
    Normalize raw identifier input.

    Handles common copy/paste artefacts:
    - Fullwidth characters (０ → 0, Ｂ → B)
    - Zero-width characters that break digit runs
    - Unicode dashes and hyphens

    Args:
        text: Raw input text

    Returns:
        Normalized text
    """
    if not text:
        return text

    # NFKC normalization: converts fullwidth to ASCII equivalents
    text = unicodedata.normalize('NFKC', text)

    # U+200B-U+200F, U+2060 word joiner, U+FEFF BOM
    text = re.sub(r'[\u200b-\u200f\u2060\ufeff]', '', text)

    # U+2010-U+2015 hyphen/dash family, U+2212 minus sign
    text = re.sub(r'[\u2010-\u2015\u2212]', '-', text)

    return text


def clean(
    value: str,
    deletechars: str = '',
    alphabet: Optional[str] = None,
) -> Tuple[str, Optional[ErrorKind]]:
    """
    Remove separator characters from an identifier.

    Args:
        value: Raw identifier
        deletechars: Characters to strip anywhere in the value
        alphabet: If given, every remaining character must be in it

    Returns:
        Tuple of (cleaned_value, error)
        - cleaned_value: the value after normalization and stripping, even on error
        - error: ErrorKind.INVALID_FORMAT if a character falls outside alphabet
    """
    if value is None:
        return '', ErrorKind.INVALID_FORMAT

    cleaned = normalize_text(str(value))
    if deletechars:
        cleaned = ''.join(c for c in cleaned if c not in deletechars)
    cleaned = cleaned.strip()

    if alphabet is not None and any(c not in alphabet for c in cleaned):
        return cleaned, ErrorKind.INVALID_FORMAT

    return cleaned, None


def isdigits(value: str) -> bool:
    """True for a non-empty string made only of ASCII digits."""
    return bool(value) and all('0' <= c <= '9' for c in value)


def split_at(value: str, *points: int) -> List[str]:
    """
    Split a string at the given offsets.

    split_at("930401", 2, 4) -> ["93", "04", "01"]
    """
    parts = []
    start = 0
    for point in points:
        parts.append(value[start:point])
        start = point
    parts.append(value[start:])
    return parts
