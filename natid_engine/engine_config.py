#!/usr/bin/env python3
"""
Engine Config - Manages which identifier schemes the registry exposes
"""

import json
import logging
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, List, Optional

logger = logging.getLogger(__name__)

# Engine version - single source of truth
VERSION = "1.0.0"

# Default config location (~/.natid/engine_config.json)
DEFAULT_CONFIG_PATH = Path.home() / ".natid" / "engine_config.json"


class EngineConfig:
    """
    Registry configuration with JSON persistence.

    Scheme keys are stdnum-style module paths ("be.nn", "nl.bsn").
    Country codes are ISO 3166-1 alpha-2 and stored upper-case.
    """

    def __init__(self, config_path: str = None):
        """
        Initialize config manager

        Args:
            config_path: Path to config file (default: ~/.natid/engine_config.json)
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

        self.config: Dict[str, Any] = {
            "disabled_schemes": [],
            "disabled_countries": [],
            "eu_vat_enabled": True,
            "created_at": datetime.now().isoformat(),
            "updated_at": datetime.now().isoformat(),
        }

        self._load_config()

    def _load_config(self):
        """Load config from file if it exists"""
        if not self.config_path.exists():
            return
        try:
            with open(self.config_path, 'r') as f:
                saved = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
            return

        if not isinstance(saved, dict):
            logger.warning(f"Ignoring config {self.config_path}: expected a JSON object")
            return

        self.config["disabled_schemes"] = sorted(set(saved.get("disabled_schemes", [])))
        self.config["disabled_countries"] = sorted({c.upper() for c in saved.get("disabled_countries", [])})
        self.config["eu_vat_enabled"] = bool(saved.get("eu_vat_enabled", True))
        self.config["created_at"] = saved.get("created_at", self.config["created_at"])
        self.config["updated_at"] = saved.get("updated_at", self.config["updated_at"])

    def save(self):
        """Save config to file"""
        self.config["updated_at"] = datetime.now().isoformat()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def is_scheme_enabled(self, scheme: str) -> bool:
        return scheme not in self.config["disabled_schemes"]

    def is_country_enabled(self, country_code: str) -> bool:
        return country_code.upper() not in self.config["disabled_countries"]

    def set_scheme_enabled(self, scheme: str, enabled: bool):
        """Enable or disable a scheme and persist the change"""
        disabled = set(self.config["disabled_schemes"])
        if enabled:
            disabled.discard(scheme)
        else:
            disabled.add(scheme)
        self.config["disabled_schemes"] = sorted(disabled)
        self.save()

    def set_country_enabled(self, country_code: str, enabled: bool):
        """Enable or disable every scheme of a country and persist the change"""
        disabled = set(self.config["disabled_countries"])
        if enabled:
            disabled.discard(country_code.upper())
        else:
            disabled.add(country_code.upper())
        self.config["disabled_countries"] = sorted(disabled)
        self.save()

    @property
    def eu_vat_enabled(self) -> bool:
        return self.config["eu_vat_enabled"]

    def get_disabled_schemes(self) -> List[str]:
        return list(self.config["disabled_schemes"])

    def reset(self):
        """Reset to shipped defaults"""
        self.config["disabled_schemes"] = []
        self.config["disabled_countries"] = []
        self.config["eu_vat_enabled"] = True
        self.save()


# Global instance for convenience
_config_instance: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global config instance"""
    global _config_instance
    if _config_instance is None:
        _config_instance = EngineConfig()
    return _config_instance
