from datetime import date, datetime, timezone

import pytest
from stdnum.exceptions import InvalidChecksum, InvalidFormat, InvalidLength

from natid_engine.errors import ErrorKind
from natid_engine.validators import be_nn
from natid_engine.validators.be_nn import BelgianNationalNumber, checksum_basis


def at(*args):
    return datetime(*args, tzinfo=timezone.utc)


def test_valid_number_is_individual(nn):
    result = nn.validate("93040100196")
    assert result.is_valid is True
    assert result.compact == "93040100196"
    assert result.is_individual is True
    assert result.is_company is False
    assert result.error is None


@pytest.mark.parametrize("value", [
    "93.04.01-001.96",
    "930401 001 96",
    " 93040100196 ",
    "930401-001-96",
    "９３０４０１００１９６",  # fullwidth digits
])
def test_formatting_characters_are_ignored(nn, value):
    result = nn.validate(value)
    assert result.is_valid
    assert result.compact == "93040100196"


def test_compact_strips_separators(nn):
    assert nn.compact("93.04.01-001.96") == "93040100196"


def test_compact_rejects_letters(nn):
    with pytest.raises(InvalidFormat):
        nn.compact("93040100X96")


def test_format_renders_official_layout(nn):
    assert nn.format("93040100196") == "93.04.01-001.96"


@pytest.mark.parametrize("value, expected", [
    ("93040100X96", "93040100X96"),
    ("12-3", "123"),
    ("", ""),
])
def test_format_never_raises(nn, value, expected):
    assert nn.format(value) == expected


@pytest.mark.parametrize("number", [
    "93040100196",
    "05031200235",
    "00000100592",
    "85000001087",
    "00022900136",
])
def test_compact_of_format_is_identity(nn, number):
    assert nn.validate(number).is_valid
    assert nn.compact(nn.format(number)) == number


@pytest.mark.parametrize("value", [
    "9304010019A",
    "00000000000",
    "",
    "abc",
])
def test_non_digits_and_non_positive_are_format_errors(nn, value):
    assert nn.validate(value).error is ErrorKind.INVALID_FORMAT


@pytest.mark.parametrize("length", [n for n in range(1, 20) if n != 11])
def test_wrong_length_is_length_error(nn, length):
    assert nn.validate("1" * length).error is ErrorKind.INVALID_LENGTH


@pytest.mark.parametrize("value", [
    "93130100196",  # month 13
    "93023000196",  # 30 February
    "93040000196",  # day 00 with a month
    "97022900196",  # 29 February in a non-leap year (1997 and 2097)
])
def test_impossible_dates_are_format_errors(nn, value):
    assert nn.validate(value).error is ErrorKind.INVALID_FORMAT


def test_leap_day_accepted(nn):
    assert nn.validate("96022900196").is_valid


def test_bad_checksum(nn):
    assert nn.validate("93040100195").error is ErrorKind.INVALID_CHECKSUM


def test_unknown_dob_passes_structure_unconditionally(nn):
    assert nn.validate("00000100592").is_valid
    # Only the checksum can fail
    assert nn.validate("00000100500").error is ErrorKind.INVALID_CHECKSUM
    assert nn.validate("00000100591").error is ErrorKind.INVALID_CHECKSUM


def test_unknown_dob_ignores_the_clock():
    validator = BelgianNationalNumber(clock=lambda: at(1950, 1, 1))
    assert validator.validate("00000100592").is_valid


def test_year_only_dob(nn):
    assert nn.validate("85000001087").is_valid
    assert nn.get_birth_year("85000001087") == 1985
    assert nn.get_birth_date("85000001087") is None


def test_year_only_dob_tries_both_centuries(nn):
    assert nn.validate("20000000493").is_valid  # 1920
    assert nn.validate("20000000433").is_valid  # 2020
    assert nn.get_birth_year("20000000493") == 1920
    assert nn.get_birth_year("20000000433") == 2020


def test_year_only_dob_skips_years_not_started():
    validator = BelgianNationalNumber(clock=lambda: at(2019, 6, 1))
    assert validator.validate("20000000493").is_valid
    assert validator.validate("20000000433").error is ErrorKind.INVALID_CHECKSUM


def test_year_only_dob_accepts_year_starting_within_a_day():
    validator = BelgianNationalNumber(clock=lambda: at(2019, 12, 31))
    assert validator.validate("20000000433").is_valid


def test_century_ambiguity_checks_both_bases(nn):
    # 1905-03-12 and 2005-03-12 are both real past dates
    assert nn.validate("05031200295").is_valid
    assert nn.validate("05031200235").is_valid
    assert nn.validate("05031200236").error is ErrorKind.INVALID_CHECKSUM
    assert nn.get_birth_year("05031200295") == 1905
    assert nn.get_birth_year("05031200235") == 2005


def test_twenty_first_century_basis():
    assert checksum_basis(1999, 1) == 1
    assert checksum_basis(2000, 1) == 2001
    assert checksum_basis(2005, 37) == 2037
    # Sequence number keeps its three digits after the "2"
    assert checksum_basis(2005, 5) == 2005


def test_leap_day_only_valid_in_2000(nn):
    assert nn.validate("00022900136").is_valid
    assert nn.get_birth_date("00022900136") == date(2000, 2, 29)


@pytest.mark.parametrize("number", [
    "00000109797",  # unknown date, basis 97
    "00000100097",  # unknown date, basis 0
    "93040109797",  # 1993, basis 97
    "05031203797",  # 2005, basis 2037
])
def test_zero_remainder_requires_97(nn, number):
    assert nn.validate(number).is_valid
    assert nn.validate(number[:9] + "00").error is ErrorKind.INVALID_CHECKSUM


def test_future_only_dates_are_format_errors():
    validator = BelgianNationalNumber(clock=lambda: at(1990, 1, 1))
    assert validator.validate("95010100196").error is ErrorKind.INVALID_FORMAT


def test_2000_leap_day_is_future_before_2000():
    validator = BelgianNationalNumber(clock=lambda: at(1999, 6, 1))
    assert validator.validate("00022900136").error is ErrorKind.INVALID_FORMAT


def test_one_day_of_slack():
    validator = BelgianNationalNumber(clock=lambda: at(1995, 1, 1))
    assert validator.validate("95010200196").is_valid
    assert validator.validate("95010300196").error is ErrorKind.INVALID_FORMAT


def test_explicit_now_overrides_clock(nn):
    assert nn.validate("95010100196").is_valid
    assert nn.validate("95010100196", now=at(1990, 1, 1)).error is ErrorKind.INVALID_FORMAT


def test_naive_now_is_read_as_utc(nn):
    assert nn.validate("95010200196", now=datetime(1995, 1, 1)).is_valid


def test_birth_date_and_gender(nn):
    assert nn.get_birth_date("93.04.01-001.96") == date(1993, 4, 1)
    assert nn.get_birth_year("93.04.01-001.96") == 1993
    assert nn.get_gender("93040100196") == "M"
    assert nn.get_gender("05031200235") == "F"


def test_unknown_dob_has_no_birth_year(nn):
    assert nn.get_birth_year("00000100592") is None
    assert nn.get_birth_date("00000100592") is None


def test_helpers_raise_stdnum_errors(nn):
    with pytest.raises(InvalidChecksum):
        nn.get_birth_date("93040100195")
    with pytest.raises(InvalidLength):
        nn.get_gender("930401")
    with pytest.raises(InvalidFormat):
        nn.get_birth_year("93130100196")


def test_module_level_functions():
    assert be_nn.is_valid("93.04.01-001.96")
    assert be_nn.compact("93.04.01-001.96") == "93040100196"
    assert be_nn.format("93040100196") == "93.04.01-001.96"
    assert be_nn.validate("93040100196").is_individual
    assert be_nn.name == "Belgian National Number"
