"""
Belgian National Number (Numéro National / Rijksregisternummer)

Format: YYMMDD SSS CC (11 digits)
- YYMMDD: Date of birth, "000001" when unknown, "YY0000" when only the year is known
- SSS: Sequence number (odd for men, even for women)
- CC: Check digits, 97 - (basis mod 97)

The two-digit year is completed with both "19" and "20". A century is kept
when it yields a real calendar date that is not later than one day from now.
For people born in 2000 or later the sequence number is prefixed with a 2
before taking the modulus, so the check digits also pin down the century.

Usage:
    from natid_engine.validators import be_nn

    be_nn.validate("93.04.01-001.96").is_valid   # True
    be_nn.get_birth_date("93040100196")          # date(1993, 4, 1)
"""

from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from stdnum.exceptions import InvalidFormat

from natid_engine.errors import ErrorKind
from natid_engine.preprocessing.text_normalizer import clean, isdigits, split_at
from natid_engine.validators.base import Validator, ValidationResult


NUMBER_LENGTH = 11
UNKNOWN_DOB = "000001"
CENTURIES = ("19", "20")
SEPARATORS = " -."
DIGITS = "0123456789"

# Birth dates up to this far past "now" are still accepted
FUTURE_SLACK = timedelta(days=1)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def _date_fields(first_six: str) -> List[str]:
    return split_at(first_six, 2, 4)


def is_unknown_dob(first_six: str) -> bool:
    return first_six == UNKNOWN_DOB


def is_year_only_dob(first_six: str) -> bool:
    yy, mm, dd = _date_fields(first_six)
    return isdigits(yy) and mm == "00" and dd == "00"


def candidate_dates(first_six: str, now: datetime) -> List[date]:
    """
    Complete YYMMDD with each century.

    Returns the real calendar dates, oldest first, that fall no later than
    now + FUTURE_SLACK.
    """
    yy, mm, dd = _date_fields(first_six)
    limit = _as_utc(now) + FUTURE_SLACK

    dates = []
    for century in CENTURIES:
        try:
            birth = date(int(century + yy), int(mm), int(dd))
        except ValueError:
            continue
        if _midnight(birth) <= limit:
            dates.append(birth)
    return dates


def candidate_years(first_six: str, now: datetime) -> List[int]:
    """Completed years for a year-only birth date whose 1 January has been reached."""
    yy = _date_fields(first_six)[0]
    limit = _as_utc(now) + FUTURE_SLACK
    years = [int(century + yy) for century in CENTURIES]
    return [year for year in years if _midnight(date(year, 1, 1)) <= limit]


def checksum_basis(year: int, base_number: int) -> int:
    """Dividend for the mod-97 check: "2" + SSS for births from 2000 onwards."""
    if year < 2000:
        return base_number
    # Zero-padded: base 5 gives 2005, not 25
    return int("2%03d" % base_number)


def checksum_matches(basis: int, checksum: int) -> bool:
    # basis % 97 == 0 requires 97, so a checksum of 0 never passes
    return basis % 97 + checksum == 97


class BelgianNationalNumber(Validator):
    """
    Validator for the Belgian National Number.

    The current time is read from the injected clock, or from the `now`
    argument of validate() when one is given.
    """

    scheme = "be.nn"
    name = "Belgian National Number"
    local_name = "Numéro National"
    abbreviation = "NN, NISS"

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or _utc_now

    def now(self) -> datetime:
        return _as_utc(self._clock())

    def compact(self, value: str) -> str:
        number, error = clean(value, SEPARATORS, DIGITS)
        if error:
            raise error.to_exception()
        return number

    def format(self, value: str) -> str:
        number, _ = clean(value, SEPARATORS)
        if len(number) != NUMBER_LENGTH or not isdigits(number):
            return number
        return "%s.%s.%s-%s.%s" % (number[:2], number[2:4], number[4:6], number[6:9], number[9:])

    def validate(self, value: str, now: Optional[datetime] = None) -> ValidationResult:
        try:
            number = self.compact(value)
        except InvalidFormat:
            return ValidationResult.fail(ErrorKind.INVALID_FORMAT)

        error = self._check(number, self._resolve(now))
        if error:
            return ValidationResult.fail(error)

        return ValidationResult.ok(number, is_individual=True, is_company=False)

    def get_birth_year(self, value: str, now: Optional[datetime] = None) -> Optional[int]:
        """
        Year of birth, with the century the check digits agree with.

        Returns None when the date of birth is unknown.

        Raises:
            stdnum.exceptions.ValidationError: the number is invalid
        """
        number, now = self._valid_number(value, now)
        if is_unknown_dob(number[:6]):
            return None
        return self._matching_years(number, now)[0]

    def get_birth_date(self, value: str, now: Optional[datetime] = None) -> Optional[date]:
        """
        Full date of birth, or None when only the year (or nothing) is known.

        Raises:
            stdnum.exceptions.ValidationError: the number is invalid
        """
        number, now = self._valid_number(value, now)
        first_six = number[:6]
        if is_unknown_dob(first_six) or is_year_only_dob(first_six):
            return None
        year = self._matching_years(number, now)[0]
        _, mm, dd = _date_fields(first_six)
        return date(year, int(mm), int(dd))

    def get_gender(self, value: str, now: Optional[datetime] = None) -> str:
        """'M' for an odd sequence number, 'F' for an even one."""
        number, _ = self._valid_number(value, now)
        return "M" if int(number[6:9]) % 2 else "F"

    def _resolve(self, now: Optional[datetime]) -> datetime:
        return _as_utc(now) if now is not None else self.now()

    def _valid_number(self, value: str, now: Optional[datetime]) -> Tuple[str, datetime]:
        number = self.compact(value)
        now = self._resolve(now)
        error = self._check(number, now)
        if error:
            raise error.to_exception()
        return number, now

    def _check(self, number: str, now: datetime) -> Optional[ErrorKind]:
        if not isdigits(number) or int(number) <= 0:
            return ErrorKind.INVALID_FORMAT
        if len(number) != NUMBER_LENGTH:
            return ErrorKind.INVALID_LENGTH
        if not self._valid_structure(number[:6], now):
            return ErrorKind.INVALID_FORMAT
        if not self._matching_years(number, now):
            return ErrorKind.INVALID_CHECKSUM
        return None

    def _valid_structure(self, first_six: str, now: datetime) -> bool:
        if is_unknown_dob(first_six) or is_year_only_dob(first_six):
            return True
        return bool(candidate_dates(first_six, now))

    def _checksum_bases(self, number: str, now: datetime) -> List[Tuple[Optional[int], int]]:
        """(year, basis) pairs; the year is None for an unknown date of birth."""
        first_six = number[:6]
        base_number = int(number[6:9])

        if is_unknown_dob(first_six):
            return [(None, base_number)]

        if is_year_only_dob(first_six):
            years = candidate_years(first_six, now)
        else:
            years = [birth.year for birth in candidate_dates(first_six, now)]

        return [(year, checksum_basis(year, base_number)) for year in years]

    def _matching_years(self, number: str, now: datetime) -> List[Optional[int]]:
        checksum = int(number[9:])
        return [
            year for year, basis in self._checksum_bases(number, now)
            if checksum_matches(basis, checksum)
        ]


_default = BelgianNationalNumber()

name = _default.name
local_name = _default.local_name
abbreviation = _default.abbreviation
compact = _default.compact
format = _default.format
validate = _default.validate
is_valid = _default.is_valid
get_birth_year = _default.get_birth_year
get_birth_date = _default.get_birth_date
get_gender = _default.get_gender
