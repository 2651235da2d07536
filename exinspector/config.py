"""Configuration for the inspector.

Settings are plain dataclasses. ``InspectorConfig.from_env`` maps environment
variables onto them:

    EXINSPECTOR_MAX_FRAMES       -> max_frames
    EXINSPECTOR_MAX_CHAIN_DEPTH  -> max_chain_depth
    EXINSPECTOR_HTML_ERRORS      -> docref.html_errors
    EXINSPECTOR_DOCREF_ROOT      -> docref.docref_root
    EXINSPECTOR_APP_PATHS        -> application_paths (os.pathsep separated)
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .constants import (
    DEFAULT_MAX_CHAIN_DEPTH,
    DEFAULT_MAX_FRAMES,
    INDIRECTION_MARKERS,
)


logger = logging.getLogger(__name__)

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class DocrefSettings:
    """The two settings that gate doc-reference extraction.

    A value of ``None`` means the setting is not defined in the running
    environment, which disables extraction.
    """

    html_errors: Optional[bool] = True
    docref_root: Optional[str] = ""

    def available(self) -> bool:
        return self.html_errors is not None and self.docref_root is not None


@dataclass
class InspectorConfig:
    """Inspector settings."""

    docref: DocrefSettings = field(default_factory=DocrefSettings)
    max_frames: int = DEFAULT_MAX_FRAMES
    max_chain_depth: int = DEFAULT_MAX_CHAIN_DEPTH
    indirection_markers: Tuple[str, ...] = INDIRECTION_MARKERS
    application_paths: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InspectorConfig":
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        config = cls()

        if "EXINSPECTOR_MAX_FRAMES" in env:
            config.max_frames = _parse_int(env, "EXINSPECTOR_MAX_FRAMES", config.max_frames)
        if "EXINSPECTOR_MAX_CHAIN_DEPTH" in env:
            config.max_chain_depth = _parse_int(
                env, "EXINSPECTOR_MAX_CHAIN_DEPTH", config.max_chain_depth
            )
        if "EXINSPECTOR_HTML_ERRORS" in env:
            config.docref.html_errors = (
                env["EXINSPECTOR_HTML_ERRORS"].strip().lower() not in _FALSE_VALUES
            )
        if "EXINSPECTOR_DOCREF_ROOT" in env:
            config.docref.docref_root = env["EXINSPECTOR_DOCREF_ROOT"]
        if env.get("EXINSPECTOR_APP_PATHS"):
            config.application_paths = tuple(
                p for p in env["EXINSPECTOR_APP_PATHS"].split(os.pathsep) if p
            )

        return config


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        value = int(env[name])
    except ValueError:
        logger.warning("Ignoring %s=%r, expected an integer", name, env[name])
        return default
    if value < 1:
        logger.warning("Ignoring %s=%r, expected a positive integer", name, env[name])
        return default
    return value
