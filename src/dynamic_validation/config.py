"""Validator configuration loaded from YAML.

A configuration file names validator classes and groups validator
definitions into profiles that can be added to records:

    catalog:
      minimumNumber: myapp.validators.MinimumNumberValidator

    definitions:
      order:
        - type: minimumNumber
          params:
            minimum: 4

Files are checked against a bundled JSON Schema before anything is
imported or registered.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError

from dynamic_validation.contract import DynamicValidationError
from dynamic_validation.registry import ValidatorCatalog
from dynamic_validation.types import ValidatorDefinition

logger = logging.getLogger(__name__)

ENV_VAR = "DYNAMIC_VALIDATION_CONFIG"
DEFAULT_FILENAME = "validators.yaml"

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "validators.schema.json"


class ConfigError(DynamicValidationError, ValueError):
    """A validator configuration file could not be parsed or is malformed."""


@dataclass
class ValidatorFile:
    """Parsed contents of a validator configuration file.

    Attributes:
        catalog: Validator name -> dotted import path
        definitions: Profile name -> validator definitions, in file order
        source: File the contents were read from, if any
    """

    catalog: dict[str, str] = field(default_factory=dict)
    definitions: dict[str, list[ValidatorDefinition]] = field(default_factory=dict)
    source: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Path | None = None) -> ValidatorFile:
        definitions = {
            profile: [ValidatorDefinition.from_dict(item) for item in items]
            for profile, items in (data.get("definitions") or {}).items()
        }
        return cls(
            catalog=dict(data.get("catalog") or {}),
            definitions=definitions,
            source=source,
        )

    def register_catalog(self) -> None:
        """Import every catalog entry and register it in the ValidatorCatalog."""
        for name, dotted_path in self.catalog.items():
            try:
                ValidatorCatalog.register_path(name, dotted_path)
            except (ImportError, ValueError) as exc:
                logger.warning(
                    "Could not load validator '%s' from %s: %s", name, dotted_path, exc
                )
                raise
            logger.debug("Registered validator '%s' from %s", name, dotted_path)

    def definitions_for(self, profile: str) -> list[ValidatorDefinition]:
        """Definitions for a profile. Unknown profiles yield an empty list."""
        if profile not in self.definitions:
            logger.warning(
                "Validator profile '%s' not found in %s", profile, self.source or "configuration"
            )
            return []
        return list(self.definitions[profile])


@dataclass
class ValidatorConfig:
    """Where validator configuration is read from."""

    path: Path | None = None

    @classmethod
    def from_env(cls, base_path: Path | None = None) -> ValidatorConfig:
        """Create config from environment variables.

        Resolution order:
        1. DYNAMIC_VALIDATION_CONFIG env var
        2. {base_path}/validators.yaml, if it exists
        3. No configuration file
        """
        env_path = os.environ.get(ENV_VAR)
        if env_path:
            return cls(path=Path(env_path))

        if base_path and (base_path / DEFAULT_FILENAME).is_file():
            return cls(path=base_path / DEFAULT_FILENAME)

        return cls()

    def load(self) -> ValidatorFile:
        """Load the configured file, or an empty configuration if none is set."""
        if self.path is None:
            return ValidatorFile()
        return load_validator_file(self.path)


def _load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: SchemaError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def load_validator_file(path: Path) -> ValidatorFile:
    """Parse and check a validator configuration file.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or does not
            match the configuration schema
    """
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError:
        raise ConfigError(f"Validator configuration not found: {path}") from None
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML parse error in {path}: {exc}") from exc

    if raw is None:
        logger.warning("Validator configuration %s is empty", path)
        return ValidatorFile(source=path)

    validator = Draft202012Validator(_load_schema())
    problems = [
        f"{_json_path(error) or '<root>'}: {error.message}"
        for error in sorted(validator.iter_errors(raw), key=_json_path)
    ]
    if problems:
        raise ConfigError(f"Invalid validator configuration {path}: " + "; ".join(problems))

    return ValidatorFile.from_dict(raw, source=path)


def configure_from_env(base_path: Path | None = None) -> ValidatorFile:
    """Load configuration from the environment and register its catalog."""
    validator_file = ValidatorConfig.from_env(base_path).load()
    validator_file.register_catalog()
    return validator_file
