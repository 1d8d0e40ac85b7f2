"""Configuration loading and command-line overrides."""

from __future__ import annotations

import copy
import logging
from typing import Any

import yaml
from pydantic import ValidationError

from prattle.config.schema import PrattleConfig

logger = logging.getLogger(__name__)


def load_config(path: str | None = None) -> PrattleConfig:
    """Load the configuration from a YAML file.

    A missing path, an unreadable or malformed document, or one that fails
    validation all yield the default :class:`PrattleConfig`; the problem is
    logged rather than raised so the tool still runs with standard wire
    settings.
    """
    if path is None:
        logger.debug("No config path provided, using defaults")
        return PrattleConfig()

    data = _read_document(path)
    if data is None:
        return PrattleConfig()

    try:
        config = PrattleConfig.model_validate(data)
    except ValidationError as exc:
        logger.error("Config validation failed for %s: %s", path, exc)
        return PrattleConfig()

    logger.debug(
        "Loaded config %s: encoding=%s terminator=%r",
        path,
        config.wire.encoding,
        config.wire.line_terminator,
    )
    return config


def _read_document(path: str) -> dict[str, Any] | None:
    """Return the YAML mapping at *path*, or ``None`` if there is none."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file not found: %s -- using defaults", path)
        return None
    except yaml.YAMLError as exc:
        logger.error("Failed to parse YAML config %s: %s", path, exc)
        return None

    if data is None:
        # An empty file means "no settings", not a mistake.
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s did not produce a mapping, using defaults", path)
        return None
    return data


def wire_overrides(
    encoding: str | None = None, line_terminator: str | None = None
) -> dict[str, Any]:
    """Build an override dict for the ``wire`` section from optional values.

    Only the values actually given end up in the result, so an empty dict
    means "keep the loaded settings".
    """
    wire: dict[str, Any] = {}
    if encoding is not None:
        wire["encoding"] = encoding
    if line_terminator is not None:
        wire["line_terminator"] = line_terminator
    return {"wire": wire} if wire else {}


def merge_configs(base: PrattleConfig, overrides: dict[str, Any]) -> PrattleConfig:
    """Deep-merge *overrides* into *base* and validate the result.

    *base* is never modified.  If the merged settings are invalid (for
    example an unknown encoding) the error is logged and *base* is
    returned unchanged.
    """
    if not overrides:
        return base

    merged = _deep_merge(base.model_dump(), overrides)

    try:
        return PrattleConfig.model_validate(merged)
    except ValidationError as exc:
        logger.error("Ignoring invalid config overrides %s: %s", overrides, exc)
        return base


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *overrides* into a copy of *base*."""
    result = copy.deepcopy(base)
    for key, value in overrides.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result
