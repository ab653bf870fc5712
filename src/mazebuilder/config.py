"""
Configuration
=============
This module is the central registry for bounds profiles and generator
settings.

Why is this file needed?
------------------------
1. Profiles: the accepted maze sizes are configuration, not code. Two
   profiles ship with the application ("classic" 52 x 33 and "wide" 120 x 33)
   and a settings file may declare its own bounds.
2. Generator: which external program (or URL) produces the mazes, and how
   long we wait for it.

Values are read from a QSettings INI file first, then overridden by
environment variables:

    MAZEBUILDER_PROFILE            name of a built-in bounds profile
    MAZEBUILDER_GENERATOR_URL      use the HTTP transport with this URL
    MAZEBUILDER_GENERATOR_COMMAND  use the subprocess transport with this command
"""
from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from PySide6.QtCore import QSettings

from mazebuilder.controller.generator import (
    DEFAULT_COMMAND, DEFAULT_TIMEOUT_S, HttpGenerator, MazeGenerator, SubprocessGenerator
)
from mazebuilder.exceptions import ConfigurationError
from mazebuilder.model.bounds import DimensionBounds

logger = logging.getLogger(__name__)

ORG_ID = "mazebuilder"
APP_ID = "mazebuilder"
VISIBLE_APP_NAME = "Maze Builder"

BOUND_PROFILES: dict[str, DimensionBounds] = {
    "classic": DimensionBounds(min_width=3, min_height=3, max_width=52, max_height=33),
    "wide": DimensionBounds(min_width=3, min_height=3, max_width=120, max_height=33),
}
DEFAULT_PROFILE = "classic"
CUSTOM_PROFILE = "custom"

TRANSPORTS = ("subprocess", "http")

_BOUND_KEYS = ("min_width", "min_height", "max_width", "max_height")


@dataclass
class GeneratorSettings:
    transport: str = "subprocess"
    command: list[str] = field(default_factory=lambda: list(DEFAULT_COMMAND))
    url: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S


@dataclass
class AppConfig:
    bounds: DimensionBounds = field(default_factory=lambda: BOUND_PROFILES[DEFAULT_PROFILE])
    profile_name: str = DEFAULT_PROFILE
    generator: GeneratorSettings = field(default_factory=GeneratorSettings)


def get_profile(name: str) -> DimensionBounds:
    try:
        return BOUND_PROFILES[name]
    except KeyError:
        known = ", ".join(sorted(BOUND_PROFILES))
        raise ConfigurationError(f"Unknown bounds profile '{name}' (known: {known})") from None


def _as_int(key: str, value: Any) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Setting '{key}' must be an integer, got {value!r}") from None


def _as_float(key: str, value: Any) -> float:
    try:
        result = float(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Setting '{key}' must be a number, got {value!r}") from None
    if result <= 0:
        raise ConfigurationError(f"Setting '{key}' must be positive, got {result}")
    return result


def _as_command(key: str, value: Any) -> list[str]:
    # QSettings returns a list for comma separated INI values
    if isinstance(value, (list, tuple)):
        command = [str(v) for v in value]
    else:
        command = shlex.split(str(value))
    if not command:
        raise ConfigurationError(f"Setting '{key}' must not be empty")
    return command


def _read_bounds(settings: QSettings, profile: str, explicit: bool = False) -> tuple[DimensionBounds, str]:
    bounds = get_profile(profile)
    present = [name for name in _BOUND_KEYS if settings.contains(f"bounds/{name}")]
    if not present:
        return bounds, profile
    if explicit:
        # A profile chosen on the command line is used as is
        logger.info(f"Profile '{profile}' was requested explicitly, ignoring bounds overrides {present}")
        return bounds, profile
    overrides = {name: _as_int(f"bounds/{name}", settings.value(f"bounds/{name}")) for name in present}
    logger.info(f"Bounds overrides {overrides} applied on top of profile '{profile}'")
    values = {name: getattr(bounds, name) for name in _BOUND_KEYS}
    values.update(overrides)
    return DimensionBounds(**values), CUSTOM_PROFILE


def _read_generator(settings: QSettings) -> GeneratorSettings:
    gen = GeneratorSettings()
    if settings.contains("generator/command"):
        gen.command = _as_command("generator/command", settings.value("generator/command"))
    if settings.contains("generator/url"):
        gen.url = str(settings.value("generator/url")).strip()
    if settings.contains("generator/timeout"):
        gen.timeout_s = _as_float("generator/timeout", settings.value("generator/timeout"))
    if settings.contains("generator/transport"):
        gen.transport = str(settings.value("generator/transport")).strip().lower()
    elif gen.url:
        gen.transport = "http"
    return gen


def load_config(
    settings: Optional[QSettings] = None,
    profile: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Builds the application configuration.

    Args:
        settings: Settings store to read. Defaults to the application's
            QSettings (INI format).
        profile: Bounds profile name; wins over settings and environment,
            including single `bounds/*` limits in the settings file.
        environ: Environment mapping, `os.environ` by default.

    Raises:
        ConfigurationError: unknown profile, malformed value or an
            incomplete generator definition.
    """
    if settings is None:
        settings = QSettings()
    if environ is None:
        environ = os.environ

    profile_name = (
        profile
        or environ.get("MAZEBUILDER_PROFILE")
        or str(settings.value("bounds/profile", DEFAULT_PROFILE))
    )
    bounds, profile_name = _read_bounds(settings, profile_name, explicit=profile is not None)

    gen = _read_generator(settings)
    if environ.get("MAZEBUILDER_GENERATOR_COMMAND"):
        gen.command = _as_command("MAZEBUILDER_GENERATOR_COMMAND", environ["MAZEBUILDER_GENERATOR_COMMAND"])
        gen.transport = "subprocess"
    if environ.get("MAZEBUILDER_GENERATOR_URL"):
        gen.url = environ["MAZEBUILDER_GENERATOR_URL"].strip()
        gen.transport = "http"

    if gen.transport not in TRANSPORTS:
        raise ConfigurationError(f"Unknown generator transport '{gen.transport}' (use one of {TRANSPORTS})")
    if gen.transport == "http" and not gen.url:
        raise ConfigurationError("The http transport needs 'generator/url'")

    config = AppConfig(bounds=bounds, profile_name=profile_name, generator=gen)
    logger.debug(f"Loaded configuration: {config}")
    return config


def make_generator(settings: GeneratorSettings) -> MazeGenerator:
    if settings.transport == "http":
        return HttpGenerator(settings.url)
    return SubprocessGenerator(settings.command)
