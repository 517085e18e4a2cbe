"""
Validator contract shared by every identifier scheme.

Each scheme implements compact / format / validate over one country's
identifier format. validate() never raises for bad input; it returns a
ValidationResult carrying either the compact form or an ErrorKind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any

from natid_engine.errors import ErrorKind


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single validate() call."""
    is_valid: bool
    compact: Optional[str] = None
    error: Optional[ErrorKind] = None
    is_individual: bool = False
    is_company: bool = False

    @classmethod
    def ok(cls, compact: str, is_individual: bool = False, is_company: bool = False) -> "ValidationResult":
        return cls(True, compact=compact, is_individual=is_individual, is_company=is_company)

    @classmethod
    def fail(cls, error: ErrorKind) -> "ValidationResult":
        return cls(False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.is_valid:
            return {
                "is_valid": True,
                "compact": self.compact,
                "is_individual": self.is_individual,
                "is_company": self.is_company,
            }
        return {"is_valid": False, "error": self.error.value}


class Validator(ABC):
    """
    Base class for identifier schemes.

    Subclasses set the descriptive attributes and implement the three
    operations. Instances hold no per-call state and can be shared freely.
    """

    scheme: str = ""
    name: str = ""
    local_name: str = ""
    abbreviation: str = ""

    @abstractmethod
    def compact(self, value: str) -> str:
        """
        Strip formatting characters.

        Raises:
            stdnum.exceptions.InvalidFormat: input contains characters outside
                the scheme's alphabet
        """

    @abstractmethod
    def format(self, value: str) -> str:
        """Human-readable rendering. Never raises."""

    @abstractmethod
    def validate(self, value: str) -> ValidationResult:
        """Run the full validation pipeline."""

    def is_valid(self, value: str) -> bool:
        return self.validate(value).is_valid

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r}>"
