#!/usr/bin/env python3
"""
natid command line

Usage:
    natid validate be.nn "93.04.01-001.96"
    natid check BE "93.04.01-001.96"                # person registry lookup
    natid check --class entity BE "BE 0403.019.261"
    natid compact nl.bsn "1112.22.333"
    natid format be.nn 93040100196
    natid schemes --class eu_vat

Results are printed as JSON. Exit status: 0 valid, 1 invalid,
2 unchecked country or unknown scheme.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from stdnum.exceptions import ValidationError

from natid_engine.engine_config import VERSION, EngineConfig
from natid_engine.errors import ErrorKind
from natid_engine.registry import (
    DEFAULT_TABLES,
    IdentifierClass,
    build_registry,
    create_validator,
)
from natid_engine.validators.base import Validator

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_UNCHECKED = 2


def _emit(data: Dict[str, Any]):
    print(json.dumps(data, ensure_ascii=False))


def _scheme_class(scheme: str) -> IdentifierClass:
    """Classification a scheme gets in the default tables (person wins)."""
    for id_class in (IdentifierClass.PERSON, IdentifierClass.ENTITY, IdentifierClass.EU_VAT):
        if any(scheme in schemes for schemes in DEFAULT_TABLES[id_class].values()):
            return id_class
    return IdentifierClass.ENTITY


def _clock(args):
    if not args.now:
        return None
    now = datetime.fromisoformat(args.now)
    return lambda: now


def _load_validator(args) -> Optional[Validator]:
    try:
        validator = create_validator(args.scheme, _scheme_class(args.scheme), _clock(args))
        # Touch the name so unknown stdnum modules fail here
        validator.name
    except (KeyError, ImportError) as e:
        logger.debug(f"Unknown scheme {args.scheme!r}: {e}")
        _emit({"error": f"unknown scheme: {args.scheme}"})
        return None
    return validator


def cmd_validate(args) -> int:
    validator = _load_validator(args)
    if validator is None:
        return EXIT_UNCHECKED
    result = validator.validate(args.value)
    _emit({"scheme": args.scheme, **result.to_dict()})
    return EXIT_VALID if result.is_valid else EXIT_INVALID


def cmd_compact(args) -> int:
    validator = _load_validator(args)
    if validator is None:
        return EXIT_UNCHECKED
    try:
        _emit({"scheme": args.scheme, "compact": validator.compact(args.value)})
    except ValidationError as e:
        _emit({"scheme": args.scheme, "error": ErrorKind.from_exception(e).value})
        return EXIT_INVALID
    return EXIT_VALID


def cmd_format(args) -> int:
    validator = _load_validator(args)
    if validator is None:
        return EXIT_UNCHECKED
    _emit({"scheme": args.scheme, "formatted": validator.format(args.value)})
    return EXIT_VALID


def cmd_check(args) -> int:
    registry = build_registry(config=EngineConfig(args.config) if args.config else None, clock=_clock(args))
    result = registry.validate_for_country(args.id_class, args.country, args.value)
    _emit({"country": args.country.upper(), "class": args.id_class, **result.to_dict()})
    if not result.checked:
        return EXIT_UNCHECKED
    return EXIT_VALID if result.is_valid else EXIT_INVALID


def cmd_schemes(args) -> int:
    registry = build_registry(config=EngineConfig(args.config) if args.config else None)
    _emit({
        country: [v.scheme for v in registry.get_validators(args.id_class, country)]
        for country in registry.supported_countries(args.id_class)
    })
    return EXIT_VALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="natid", description="Validate national identification numbers")
    parser.add_argument('--version', action='version', version=f"%(prog)s {VERSION}")
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging on stderr')
    parser.add_argument('--now', help='ISO timestamp to use as the current time')
    parser.add_argument('--config', help='Path to engine config JSON')

    sub = parser.add_subparsers(dest='command', required=True)
    classes = [c.value for c in IdentifierClass]

    for name, fn, help_text in (
        ('validate', cmd_validate, 'Validate a value against one scheme'),
        ('compact', cmd_compact, 'Print the compact form of a value'),
        ('format', cmd_format, 'Print the formatted form of a value'),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument('scheme', help='Scheme key, e.g. be.nn or nl.bsn')
        p.add_argument('value')
        p.set_defaults(func=fn)

    p = sub.add_parser('check', help='Validate a value for a country through the registry')
    p.add_argument('--class', dest='id_class', choices=classes, default=IdentifierClass.PERSON.value)
    p.add_argument('country', help='ISO 3166-1 alpha-2 country code')
    p.add_argument('value')
    p.set_defaults(func=cmd_check)

    p = sub.add_parser('schemes', help='List registered schemes per country')
    p.add_argument('--class', dest='id_class', choices=classes, default=IdentifierClass.PERSON.value)
    p.set_defaults(func=cmd_schemes)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    if args.now:
        try:
            datetime.fromisoformat(args.now)
        except ValueError:
            parser.error(f"--now is not an ISO timestamp: {args.now}")

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
