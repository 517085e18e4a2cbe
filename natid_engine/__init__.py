"""
natid engine - National identification number validation

Compacts and validates personal and business identifiers for dozens of
countries, with a hand-written Belgian National Number validator and
python-stdnum for the rest of the catalog.
"""

from natid_engine.engine_config import VERSION
__version__ = VERSION

# Lazy imports so that importing the package does not pull in Presidio
_lazy_imports = {
    "BelgianNationalNumber": ".validators.be_nn",
    "StdnumValidator": ".validators.stdnum_adapter",
    "Validator": ".validators.base",
    "ValidationResult": ".validators.base",
    "ErrorKind": ".errors",
    "IdentifierClass": ".registry",
    "RegistryResult": ".registry",
    "ValidatorRegistry": ".registry",
    "build_registry": ".registry",
    "get_registry": ".registry",
    "validate_person": ".registry",
    "validate_entity": ".registry",
    "get_belgian_recognizers": ".recognizers",
}


def __getattr__(name):
    """Lazy import for submodules."""
    if name in _lazy_imports:
        import importlib
        module = importlib.import_module(_lazy_imports[name], __package__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_lazy_imports)
