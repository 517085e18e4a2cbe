"""
Presidio recognizers backed by identifier validators

Regex patterns find candidate numbers in free text; each match is then run
through a Validator. Matches that pass get the maximum score, matches that
fail are dropped by Presidio.

Usage:
    from natid_engine.recognizers import get_belgian_recognizers

    for recognizer in get_belgian_recognizers():
        analyzer.registry.add_recognizer(recognizer)
"""

from typing import List, Optional

from presidio_analyzer import Pattern, PatternRecognizer

from natid_engine.validators.base import Validator
from natid_engine.validators.be_nn import BelgianNationalNumber
from natid_engine.validators.stdnum_adapter import StdnumValidator


class ValidatedIdRecognizer(PatternRecognizer):
    """PatternRecognizer whose matches are confirmed by a Validator."""

    def __init__(self, validator: Validator, supported_entity: str, patterns: List[Pattern], **kwargs):
        self.validator = validator
        super().__init__(supported_entity=supported_entity, patterns=patterns, **kwargs)

    def validate_result(self, pattern_text: str) -> Optional[bool]:
        return self.validator.validate(pattern_text).is_valid


def get_belgian_recognizers(validator: Optional[BelgianNationalNumber] = None) -> List[ValidatedIdRecognizer]:
    """
    Recognizers for the Belgian National Number and VAT number.

    Args:
        validator: National Number validator to confirm matches with
            (defaults to one reading the system clock)
    """
    national_number = ValidatedIdRecognizer(
        validator or BelgianNationalNumber(),
        supported_entity="NATIONAL_ID",
        name="BelgianNationalNumberRecognizer",
        patterns=[
            # 93.04.01-001.96 (official rendering)
            Pattern(
                name="be_nn_formatted",
                regex=r"\b\d{2}\.\d{2}\.\d{2}-\d{3}\.\d{2}\b",
                score=0.6,
            ),
            # 930401 001 96, 930401-001-96, 93040100196
            Pattern(
                name="be_nn_plain",
                regex=r"\b\d{6}[-\s]?\d{3}[-\s]?\d{2}\b",
                score=0.3,
            ),
        ],
        context=["rijksregisternummer", "numéro national", "national number",
                 "rrn", "niss", "insz", "registre national"],
    )

    vat = ValidatedIdRecognizer(
        StdnumValidator("be.vat", is_company=True),
        supported_entity="VAT_ID",
        name="BelgianVatRecognizer",
        patterns=[
            # BE 0403.019.261, BE0403019261
            Pattern(
                name="be_vat",
                regex=r"\bBE\s?[01]\d{3}\.?\d{3}\.?\d{3}\b",
                score=0.5,
            ),
        ],
        context=["btw", "tva", "vat", "ondernemingsnummer", "numéro d'entreprise"],
    )

    return [national_number, vat]
