"""
Country -> validator registry

Routes a (identifier class, country code, value) lookup to the candidate
validators registered for that country and reports a tri-state outcome:
unchecked (nothing registered), invalid (every candidate rejected) or
valid (first candidate that accepted).

Usage:
    from natid_engine.registry import get_registry, IdentifierClass

    registry = get_registry()
    result = registry.validate_for_country(IdentifierClass.PERSON, "be", "93.04.01-001.96")
    if result.checked and result.is_valid:
        print(result.validator, result.result.compact)
"""

import importlib.util
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple, Union, List, Any

from natid_engine.engine_config import EngineConfig, get_config
from natid_engine.validators.base import Validator, ValidationResult
from natid_engine.validators.be_nn import BelgianNationalNumber
from natid_engine.validators.stdnum_adapter import StdnumValidator

logger = logging.getLogger(__name__)


class IdentifierClass(Enum):
    """What kind of holder an identifier belongs to."""
    PERSON = "person"
    ENTITY = "entity"
    EU_VAT = "eu_vat"


# =============================================================================
# DEFAULT TABLES
# =============================================================================
# Format: country_code -> scheme keys, tried in order
# Scheme keys are module paths below stdnum ("in_" / "is_" avoid keywords),
# except "be.nn" which is implemented in natid_engine.validators.be_nn

PERSON_SCHEMES: Dict[str, Tuple[str, ...]] = {
    "BE": ("be.nn",),             # Belgian National Number
    "BG": ("bg.egn",),            # Bulgarian EGN
    "BY": ("by.unp",),            # Belarusian UNP
    "CH": ("ch.ssn",),            # Swiss AHV/AVS
    "CN": ("cn.ric",),            # Chinese Resident ID
    "CU": ("cu.ni",),             # Cuban NI
    "CZ": ("cz.rc",),             # Czech birth number
    "DE": ("de.idnr",),           # German Steuer-ID
    "DK": ("dk.cpr",),            # Danish CPR
    "EE": ("ee.ik",),             # Estonian Isikukood
    "ES": ("es.dni", "es.nie"),   # Spanish DNI / foreigner NIE
    "FI": ("fi.hetu",),           # Finnish HETU
    "FR": ("fr.nir", "fr.nif"),   # French NIR / tax number
    "GB": ("gb.utr",),            # UK Unique Taxpayer Reference
    "GR": ("gr.amka",),           # Greek AMKA
    "HR": ("hr.oib",),            # Croatian OIB
    "ID": ("id.npwp",),           # Indonesian NPWP
    "IE": ("ie.pps",),            # Irish PPS
    "IL": ("il.idnr",),           # Israeli ID
    "IN": ("in_.pan", "in_.aadhaar"),  # Indian PAN / Aadhaar
    "IS": ("is_.kennitala",),     # Icelandic Kennitala
    "IT": ("it.codicefiscale",),  # Italian Codice Fiscale
    "KR": ("kr.rrn",),            # South Korean RRN
    "LI": ("li.peid",),           # Liechtenstein PEID
    "LT": ("lt.asmens",),         # Lithuanian Asmens kodas
    # lv.pvn also accepts legal-entity codes; those are reported as individual here
    "LV": ("lv.pvn",),            # Latvian personal code
    "MU": ("mu.nid",),            # Mauritian NID
    "MX": ("mx.curp",),           # Mexican CURP
    "MY": ("my.nric",),           # Malaysian NRIC
    "NL": ("nl.onderwijsnummer", "nl.bsn"),  # Dutch education number / BSN
    "NO": ("no.fodselsnummer",),  # Norwegian Fødselsnummer
    "NZ": ("nz.ird",),            # New Zealand IRD
    "PE": ("pe.cui",),            # Peruvian CUI
    "PL": ("pl.pesel",),          # Polish PESEL
    "SE": ("se.personnummer",),   # Swedish Personnummer
    "TH": ("th.pin",),            # Thai PIN
    "US": ("us.ssn",),            # US SSN
    "ZA": ("za.tin", "za.idnr"),  # South African TIN / ID
}

ENTITY_SCHEMES: Dict[str, Tuple[str, ...]] = {
    "AU": ("au.abn", "au.acn", "au.tfn"),
    "BE": ("be.vat",),
    "BG": ("bg.vat",),
    "BY": ("by.unp",),
    "CH": ("ch.uid", "ch.vat"),
    "CN": ("cn.uscc",),
    "CY": ("cy.vat",),
    "CZ": ("cz.dic",),
    "DE": ("de.vat", "de.stnr"),
    "DK": ("dk.cvr",),
    "EE": ("ee.kmkr", "ee.registrikood"),
    "ES": ("es.cif", "es.nif"),
    "FI": ("fi.alv", "fi.ytunnus"),
    "FR": ("fr.siren", "fr.siret", "fr.tva"),
    "GB": ("gb.vat",),
    "GR": ("gr.vat",),
    "HR": ("hr.oib",),
    "HU": ("hu.anum",),
    "ID": ("id.npwp",),
    "IE": ("ie.vat",),
    "IL": ("il.hp",),
    "IN": ("in_.gstin",),
    "IS": ("is_.kennitala", "is_.vsk"),
    "IT": ("it.iva",),
    "JP": ("jp.cn",),
    "KR": ("kr.brn",),
    "LI": ("li.peid",),
    "LT": ("lt.pvm",),
    "LU": ("lu.tva",),
    "LV": ("lv.pvn",),
    "MC": ("mc.tva",),
    "MD": ("md.idno",),
    "MT": ("mt.vat",),
    "NL": ("nl.btw",),
    "NZ": ("nz.ird",),
    "PE": ("pe.ruc",),
    "SG": ("sg.uen",),
    "TW": ("tw.ubn",),
    "US": ("us.ein",),
    "UY": ("uy.rut",),
    "VN": ("vn.mst",),
    "ZA": ("za.tin",),
}

EU_VAT_SCHEMES: Dict[str, Tuple[str, ...]] = {
    "AD": ("ad.nrt",),
    "BE": ("be.vat",),
    "BG": ("bg.vat",),
    "CH": ("ch.vat",),
    "CY": ("cy.vat",),
    "DE": ("de.vat",),
    "DK": ("dk.cvr",),
    "ES": ("es.nif",),
    "FR": ("fr.tva",),
    "GR": ("gr.vat",),
    "IE": ("ie.vat",),
    "IT": ("it.iva",),
    "LT": ("lt.pvm",),
    "LU": ("lu.tva",),
    "LV": ("lv.pvn",),
    "MT": ("mt.vat",),
    "NL": ("nl.btw",),
}

DEFAULT_TABLES: Dict[IdentifierClass, Dict[str, Tuple[str, ...]]] = {
    IdentifierClass.PERSON: PERSON_SCHEMES,
    IdentifierClass.ENTITY: ENTITY_SCHEMES,
    IdentifierClass.EU_VAT: EU_VAT_SCHEMES,
}


@dataclass(frozen=True)
class RegistryResult:
    """
    Outcome of a registry lookup.

    checked is False when no validator is registered for the country; in
    that case is_valid is None.
    """
    checked: bool
    is_valid: Optional[bool] = None
    validator: Optional[str] = None
    result: Optional[ValidationResult] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.checked:
            return {"checked": False}
        data: Dict[str, Any] = {"checked": True, "is_valid": self.is_valid}
        if self.validator:
            data["validator"] = self.validator
        if self.result is not None:
            data.update(self.result.to_dict())
        return data


class ValidatorRegistry:
    """
    Read-only mapping of identifier class -> country -> candidate validators.

    Built once; the tables are frozen so one instance can be shared between
    threads.
    """

    def __init__(self, tables: Mapping[IdentifierClass, Mapping[str, Sequence[Validator]]]):
        self._tables = MappingProxyType({
            id_class: MappingProxyType({
                country.upper(): tuple(validators)
                for country, validators in table.items()
            })
            for id_class, table in tables.items()
        })

    def get_validators(self, id_class: Union[IdentifierClass, str], country_code: str) -> Tuple[Validator, ...]:
        table = self._tables.get(IdentifierClass(id_class), {})
        return table.get((country_code or "").upper(), ())

    def supported_countries(self, id_class: Union[IdentifierClass, str]) -> List[str]:
        return sorted(self._tables.get(IdentifierClass(id_class), {}))

    def validate_for_country(
        self,
        id_class: Union[IdentifierClass, str],
        country_code: str,
        value: str,
    ) -> RegistryResult:
        """
        Validate a value against every scheme registered for a country.

        Args:
            id_class: IdentifierClass (or its string value, e.g. "person")
            country_code: ISO 3166-1 alpha-2 code, any case
            value: Raw identifier

        Returns:
            RegistryResult; the first accepting validator wins
        """
        validators = self.get_validators(id_class, country_code)
        if not validators:
            logger.debug(f"No {IdentifierClass(id_class).value} validators for {country_code!r}")
            return RegistryResult(checked=False)

        for validator in validators:
            result = validator.validate(value)
            if result.is_valid:
                return RegistryResult(True, True, validator.name, result)

        logger.debug(f"{len(validators)} validator(s) rejected value for {country_code!r}")
        return RegistryResult(True, False)

    def validate_person(self, country_code: str, value: str) -> RegistryResult:
        return self.validate_for_country(IdentifierClass.PERSON, country_code, value)

    def validate_entity(self, country_code: str, value: str) -> RegistryResult:
        return self.validate_for_country(IdentifierClass.ENTITY, country_code, value)

    def validate_eu_vat(self, country_code: str, value: str) -> RegistryResult:
        return self.validate_for_country(IdentifierClass.EU_VAT, country_code, value)


def create_validator(
    scheme: str,
    id_class: IdentifierClass,
    clock: Optional[Callable[[], datetime]] = None,
) -> Validator:
    """
    Instantiate the validator for a scheme key.

    Raises:
        KeyError: scheme is not a "country.module" key, or python-stdnum
            has no such module
    """
    if scheme.count(".") != 1:
        raise KeyError(scheme)
    if scheme == "be.nn":
        return BelgianNationalNumber(clock=clock)
    # Locate the module without executing it; the adapter imports it on first use
    try:
        spec = importlib.util.find_spec(f"stdnum.{scheme}")
    except ImportError:
        spec = None
    if spec is None:
        logger.warning(f"Unknown scheme {scheme!r}: no stdnum.{scheme} module")
        raise KeyError(scheme)
    return StdnumValidator(
        scheme,
        is_individual=id_class is IdentifierClass.PERSON,
        is_company=id_class is not IdentifierClass.PERSON,
    )


def build_registry(
    config: Optional[EngineConfig] = None,
    tables: Optional[Mapping[IdentifierClass, Mapping[str, Sequence[str]]]] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ValidatorRegistry:
    """
    Build a registry from scheme tables, skipping what the config disables.

    Args:
        config: EngineConfig (defaults to the global instance)
        tables: Scheme tables (defaults to DEFAULT_TABLES)
        clock: Injected "now" for date-aware validators
    """
    config = config or get_config()
    tables = tables if tables is not None else DEFAULT_TABLES

    built: Dict[IdentifierClass, Dict[str, List[Validator]]] = {}
    for id_class, table in tables.items():
        if id_class is IdentifierClass.EU_VAT and not config.eu_vat_enabled:
            continue
        built[id_class] = {}
        for country, schemes in table.items():
            if not config.is_country_enabled(country):
                continue
            validators = [
                create_validator(scheme, id_class, clock)
                for scheme in schemes
                if config.is_scheme_enabled(scheme)
            ]
            if validators:
                built[id_class][country] = validators

    logger.debug(
        "Registry built: " + ", ".join(f"{c.value}={len(t)}" for c, t in built.items())
    )
    return ValidatorRegistry(built)


# Global instance for convenience
_registry_instance: Optional[ValidatorRegistry] = None


def get_registry() -> ValidatorRegistry:
    """Get the global registry, built from the global config on first use"""
    global _registry_instance
    if _registry_instance is None:
        _registry_instance = build_registry()
    return _registry_instance


def validate_person(country_code: str, value: str) -> RegistryResult:
    """Validate a personal ID number for a country"""
    return get_registry().validate_person(country_code, value)


def validate_entity(country_code: str, value: str) -> RegistryResult:
    """Validate an entity (business) ID number for a country"""
    return get_registry().validate_entity(country_code, value)
