"""
Identifier validators.

One hand-written scheme (the Belgian National Number) plus an adapter that
exposes any python-stdnum module through the same Validator contract.
"""

from .base import Validator, ValidationResult
from .be_nn import BelgianNationalNumber
from .stdnum_adapter import StdnumValidator
from natid_engine.errors import ErrorKind

__all__ = [
    "Validator",
    "ValidationResult",
    "ErrorKind",
    "BelgianNationalNumber",
    "StdnumValidator",
]
