"""Pydantic models for all configuration."""

from __future__ import annotations

import codecs

from pydantic import BaseModel, Field, field_validator

# Escapes accepted in a terminator typed on the command line or in YAML
# single-quoted strings.
_TERMINATOR_ESCAPES = {"\\r": "\r", "\\n": "\n"}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WireConfig(BaseModel):
    """How serialized message lines are turned into bytes."""

    encoding: str = "utf-8"
    line_terminator: str = "\n"

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject codecs Python does not know."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v!r}") from None
        return v

    @field_validator("line_terminator")
    @classmethod
    def validate_line_terminator(cls, v: str) -> str:
        """Expand literal ``\\r``/``\\n`` escapes; a line must end in something."""
        for escape, char in _TERMINATOR_ESCAPES.items():
            v = v.replace(escape, char)
        if not v:
            raise ValueError("line_terminator must not be empty")
        return v


class PrattleConfig(BaseModel):
    """Top-level configuration."""

    log_level: str = "INFO"
    wire: WireConfig = Field(default_factory=WireConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level. Must be one of: {list(_LOG_LEVELS)}")
        return v_upper
