"""
Runtime settings, read from the environment (and a .env file if present).

There are no CLI flags beyond the language tag and paths; everything that
tunes matching or output lives here.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from toc_sectioner.pipeline.sectioner import (
    BACKWARD,
    DEFAULT_TOLERANCE_RATIO,
    EXACT,
    FORWARD,
    FUZZY,
)

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)
else:
    load_dotenv()

NO_OUTLINE_SKIP = "skip"
NO_OUTLINE_WHOLE = "whole"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class ConfigurationError(Exception):
    """Raised when an environment setting is missing or invalid."""


def get_env_variable(var_name: str, default: str | None = None) -> str | None:
    """Stripped value of ``var_name``, or ``default`` when unset or blank."""
    value = os.getenv(var_name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _choice(var_name: str, default: str, choices: tuple[str, ...]) -> str:
    value = get_env_variable(var_name, default).lower()
    if value not in choices:
        raise ConfigurationError(f"{var_name} must be one of {', '.join(choices)}, got {value!r}")
    return value


def _flag(var_name: str, default: bool) -> bool:
    value = get_env_variable(var_name)
    if value is None:
        return default
    if value.lower() in _TRUE:
        return True
    if value.lower() in _FALSE:
        return False
    raise ConfigurationError(f"{var_name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class Settings:
    output_path: Path = Path("output.json")
    direction: str = FORWARD
    match_mode: str = FUZZY
    tolerance_ratio: float = DEFAULT_TOLERANCE_RATIO
    outline_depth: int | None = 1     # None: whole tree
    start_after: str | None = None
    strip_toc_echo: bool = False
    preamble_title: str | None = None
    no_outline_policy: str = NO_OUTLINE_SKIP
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        try:
            ratio = float(get_env_variable("MATCH_TOLERANCE", str(DEFAULT_TOLERANCE_RATIO)))
            depth = int(get_env_variable("OUTLINE_DEPTH", "1"))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc

        if not 0 <= ratio < 1:
            raise ConfigurationError(f"MATCH_TOLERANCE must be in [0, 1), got {ratio}")
        if depth < 0:
            raise ConfigurationError(f"OUTLINE_DEPTH must be >= 0, got {depth}")

        return cls(
            output_path=Path(get_env_variable("OUTPUT_PATH", "output.json")),
            direction=_choice("SCAN_DIRECTION", FORWARD, (FORWARD, BACKWARD)),
            match_mode=_choice("MATCH_MODE", FUZZY, (FUZZY, EXACT)),
            tolerance_ratio=ratio,
            outline_depth=depth or None,
            start_after=get_env_variable("OUTLINE_START_AFTER"),
            strip_toc_echo=_flag("STRIP_TOC_ECHO", False),
            preamble_title=get_env_variable("PREAMBLE_TITLE"),
            no_outline_policy=_choice("NO_OUTLINE_POLICY", NO_OUTLINE_SKIP, (NO_OUTLINE_SKIP, NO_OUTLINE_WHOLE)),
            log_level=_choice("LOG_LEVEL", "info", ("debug", "info", "warning", "error")).upper(),
        )
