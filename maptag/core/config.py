"""
Configuration for the maptag enrichment stage.

Configuration arrives as flat key/value pairs from the host (or from the
environment). :meth:`MapTagConfig.from_mapping` validates the whole set
at once and reports every problem together.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from .addressing import AddressingMode
from .exceptions import ConfigurationError

MAX_ARGS = 10
DEFAULT_TTL_MINUTES = 180
DEFAULT_ENV_PREFIX = "MAPTAG_"

_ARG_KEY = re.compile(r"arg(\d+)")

# env suffix -> configuration key
_ENV_KEYS = {
    "COMMAND": "command",
    "ADDRESSING_MODE": "addressingMode",
    "REFERENCE_NAME": "referenceName",
    "REFERENCE_GROUP": "referenceGroup",
    "PATTERN": "pattern",
    "TIME_TO_LIVE": "timeToLive",
    **{f"ARG{i}": f"arg{i}" for i in range(MAX_ARGS)},
}


@dataclass(frozen=True)
class ConfigRule:
    """One entry of the declarative configuration policy."""

    key: str
    type: type
    required: bool
    default: Any = None
    description: str = ""


CONFIG_POLICY: tuple[ConfigRule, ...] = (
    ConfigRule("command", str, True, description="External program to run"),
    *(
        ConfigRule(f"arg{i}", str, False, description=f"Positional argument {i}")
        for i in range(MAX_ARGS)
    ),
    ConfigRule("addressingMode", str, True, description="One of: tag, ns_name, ns_value"),
    ConfigRule("referenceName", str, True, description="Tag name, namespace element name or value"),
    ConfigRule("referenceGroup", str, True, description="Capture group used as the join column"),
    ConfigRule("pattern", str, True, description="Regular expression with named groups"),
    ConfigRule(
        "timeToLive",
        int,
        False,
        default=DEFAULT_TTL_MINUTES,
        description="Minutes before the lookup table is rebuilt",
    ),
)


def config_policy() -> tuple[ConfigRule, ...]:
    """Return the configuration policy advertised to the host."""
    return CONFIG_POLICY


class MapTagConfig(BaseModel):
    """Validated, immutable configuration.

    Field names are snake_case; the host-facing keys (``addressingMode``,
    ``timeToLive`` ...) are accepted as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    command: StrictStr
    args: tuple[StrictStr, ...] = Field(default=(), max_length=MAX_ARGS)
    addressing_mode: StrictStr = Field(alias="addressingMode")
    reference_name: StrictStr = Field(alias="referenceName")
    reference_group: StrictStr = Field(alias="referenceGroup")
    pattern: StrictStr
    ttl_minutes: int = Field(default=DEFAULT_TTL_MINUTES, ge=0, alias="timeToLive")

    @field_validator("ttl_minutes", mode="before")
    @classmethod
    def _reject_bool_ttl(cls, value: Any) -> Any:
        # bool is an int subclass; "30" from the environment must still coerce
        if isinstance(value, bool):
            raise ValueError("Input should be a valid integer, not a boolean")
        return value

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.ttl_minutes)

    @property
    def mode(self) -> AddressingMode:
        """The resolved addressing mode.

        Raises:
            UnknownAddressingModeError: If ``addressing_mode`` is unsupported.
        """
        return AddressingMode.parse(self.addressing_mode)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> MapTagConfig:
        """Validate host key/value pairs.

        Positional arguments are read from ``arg0`` .. ``arg9`` in index
        order; missing indices are skipped.

        Raises:
            ConfigurationError: Listing every missing or malformed key.
        """
        errors: list[str] = []
        payload: dict[str, Any] = {}
        args: list[str] = []

        for key, value in values.items():
            if not _ARG_KEY.fullmatch(key):
                payload[key] = value

        for i in range(MAX_ARGS):
            key = f"arg{i}"
            if key not in values:
                continue
            value = values[key]
            if isinstance(value, str):
                args.append(value)
            else:
                errors.append(f"{key}: Input should be a valid string")
        payload["args"] = tuple(args)

        config: Optional[MapTagConfig] = None
        try:
            config = cls.model_validate(payload)
        except ValidationError as exc:
            errors.extend(_format_error(error) for error in exc.errors())

        if errors:
            raise ConfigurationError(errors)
        return config

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        env_file: Union[str, Path, None] = None,
    ) -> MapTagConfig:
        """Load configuration from ``{prefix}*`` environment variables.

        When *env_file* is given its values are read first and real
        environment variables take precedence over them.
        """
        environ: dict[str, Optional[str]] = {}
        if env_file is not None:
            environ.update(dotenv_values(env_file))
        environ.update(os.environ)

        values: dict[str, Any] = {}
        for suffix, key in _ENV_KEYS.items():
            value = environ.get(prefix + suffix)
            if value is not None:
                values[key] = value
        return cls.from_mapping(values)


def _format_error(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "config"
    return f"{location}: {error['msg']}"
