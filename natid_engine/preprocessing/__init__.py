"""Preprocessing for identifier cleaning and normalization."""

from .text_normalizer import (
    normalize_text,
    clean,
    isdigits,
    split_at,
)

__all__ = [
    'normalize_text',
    'clean',
    'isdigits',
    'split_at',
]
