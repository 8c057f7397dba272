"""
Session environment seeding.

An environment is a plain dict of variable name → value. It belongs to one
session and outlives every tree evaluated against it.
"""

from __future__ import annotations

import math
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..core.errors import ConfigurationError
from ..parser.scanning import is_identifier


class ConstantsFile(BaseModel):
    """
    Contents of a constants YAML file.

    Example:
        constants:
          e: 2.718281828459045
          g: 9.81
    """

    model_config = ConfigDict(extra="forbid")

    constants: dict[str, float] = {}

    @field_validator("constants")
    @classmethod
    def _names_are_identifiers(cls, value: dict[str, float]) -> dict[str, float]:
        for name in value:
            if not is_identifier(name):
                raise ValueError(f"'{name}' is not a valid variable name")
        return value


def default_environment() -> dict[str, float]:
    """Fresh environment holding the constants every session starts with."""
    return {"pi": math.asin(1.0) * 2.0}


def load_constants(path: str | Path) -> dict[str, float]:
    """
    Read extra constants from a YAML file.

    Raises:
        ConfigurationError: If the file is not a valid constants mapping
    """
    source = str(path)
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid constants file: {exc}", source) from exc

    try:
        return ConstantsFile.model_validate(data).constants
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid constants file: {exc}", source) from exc
