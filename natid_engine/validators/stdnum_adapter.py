"""
Validator contract over python-stdnum modules.

Every scheme without a hand-written implementation is served by the
matching stdnum module (e.g. "nl.bsn" -> stdnum.nl.bsn). The module is
imported on first use so a registry listing dozens of schemes stays cheap
to build.
"""

import importlib
import logging
from types import ModuleType
from typing import Optional

from stdnum.exceptions import ValidationError

from natid_engine.errors import ErrorKind
from natid_engine.preprocessing.text_normalizer import clean
from natid_engine.validators.base import Validator, ValidationResult

logger = logging.getLogger(__name__)

# Separators stdnum modules strip in their own compact()
DEFAULT_SEPARATORS = " -./,:"


class StdnumValidator(Validator):
    """
    Adapter for a single python-stdnum module.

    Args:
        module_path: Module path below the stdnum package, e.g. "be.vat"
        is_individual: Classification flag reported on success
        is_company: Classification flag reported on success
    """

    def __init__(self, module_path: str, is_individual: bool = False, is_company: bool = False):
        self.module_path = module_path
        self.scheme = module_path
        self.is_individual = is_individual
        self.is_company = is_company
        self._module: Optional[ModuleType] = None

    @property
    def module(self) -> ModuleType:
        if self._module is None:
            self._module = importlib.import_module(f"stdnum.{self.module_path}")
            logger.debug(f"Loaded stdnum.{self.module_path}")
        return self._module

    @property
    def name(self) -> str:
        return self._describe("name") or self.module_path

    @property
    def local_name(self) -> str:
        return self._describe("local_name")

    @property
    def abbreviation(self) -> str:
        return self._describe("abbreviation") or self.module_path.split(".")[-1].upper()

    def _describe(self, field: str) -> str:
        # stdnum keeps the human-readable name as the first docstring line
        if field == "name":
            doc = (self.module.__doc__ or "").strip()
            return doc.splitlines()[0].rstrip(".") if doc else ""
        return getattr(self.module, field, "")

    def compact(self, value: str) -> str:
        try:
            return self.module.compact(value)
        except ValidationError:
            raise
        except (TypeError, ValueError, AttributeError) as e:
            logger.debug(f"stdnum.{self.module_path}.compact rejected input: {e}")
            raise ErrorKind.INVALID_FORMAT.to_exception()

    def format(self, value: str) -> str:
        formatter = getattr(self.module, "format", None)
        for fn in (formatter, self.module.compact):
            if fn is None:
                continue
            try:
                return fn(value)
            except (ValidationError, TypeError, ValueError, IndexError, AttributeError):
                continue
        cleaned, _ = clean(value, DEFAULT_SEPARATORS)
        return cleaned

    def validate(self, value: str) -> ValidationResult:
        try:
            number = self.module.validate(value)
        except ValidationError as e:
            return ValidationResult.fail(ErrorKind.from_exception(e))
        except (TypeError, ValueError, IndexError, AttributeError) as e:
            # stdnum modules may index into malformed input before their own checks
            logger.debug(f"stdnum.{self.module_path}.validate failed on input: {e}")
            return ValidationResult.fail(ErrorKind.INVALID_FORMAT)

        return ValidationResult.ok(
            number,
            is_individual=self.is_individual,
            is_company=self.is_company,
        )

    def __repr__(self):
        return f"<StdnumValidator {self.module_path!r}>"
