"""Parser settings, read from the environment (and an optional .env file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

ENV_PREFIX = "SPEC_READER_"

PLACEHOLDER_CONTENT = "[No extractable text — section may contain only figures/tables]"


@dataclass(frozen=True)
class ParserConfig:
    """Tunables shared by the TOC and body passes.

    Attributes:
        toc_max_pages: Upper bound on the number of front pages scanned for the TOC
        toc_min_pages: Lower bound on the number of front pages scanned for the TOC
        footer_title: Running footer text to treat as page furniture. ``None``
            means the document title is used.
        detect_repeated_furniture: Also skip lines repeated at the top/bottom of pages
        furniture_sample_pages: Pages sampled when looking for repeated lines
        furniture_min_repeats: Number of pages a line must appear on to be furniture
        report_title_max: Maximum title length in missing/extra report lines
        log_level: Name of the logging level
        log_file: Optional path of a log file
    """
    toc_max_pages: int = 60
    toc_min_pages: int = 5
    footer_title: Optional[str] = None
    detect_repeated_furniture: bool = False
    furniture_sample_pages: int = 10
    furniture_min_repeats: int = 3
    report_title_max: int = 200
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "ParserConfig":
        """Build a config from ``SPEC_READER_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigError: if a variable holds a value of the wrong type
        """
        load_dotenv(dotenv_path)
        defaults = cls()
        return cls(
            toc_max_pages=_env_int("TOC_MAX_PAGES", defaults.toc_max_pages),
            toc_min_pages=_env_int("TOC_MIN_PAGES", defaults.toc_min_pages),
            footer_title=os.getenv(ENV_PREFIX + "FOOTER_TITLE") or None,
            detect_repeated_furniture=_env_bool(
                "DETECT_REPEATED_FURNITURE", defaults.detect_repeated_furniture
            ),
            furniture_sample_pages=_env_int("FURNITURE_SAMPLE_PAGES", defaults.furniture_sample_pages),
            furniture_min_repeats=_env_int("FURNITURE_MIN_REPEATS", defaults.furniture_min_repeats),
            report_title_max=_env_int("REPORT_TITLE_MAX", defaults.report_title_max),
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", defaults.log_level).upper(),
            log_file=os.getenv(ENV_PREFIX + "LOG_FILE") or None,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{ENV_PREFIX}{name} must not be negative, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
