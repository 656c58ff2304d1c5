"""Per-run context threaded through every parsing stage."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .config import ParserConfig
from .utils.custom_logger import get_logger


@dataclass(frozen=True)
class ParseContext:
    """Settings, logger and clock for one parsing run.

    ``current_year`` bounds the calendar years rejected as TOC page numbers;
    pin it to make runs reproducible.
    """
    config: ParserConfig = field(default_factory=ParserConfig)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("spec_reader"))
    current_year: int = field(default_factory=lambda: datetime.now().year)

    @classmethod
    def create(cls, config: Optional[ParserConfig] = None, current_year: Optional[int] = None) -> "ParseContext":
        """Build a context whose logger follows the config's level and log file.

        Without a config, settings are read with ``ParserConfig.from_env()``.
        """
        config = config or ParserConfig.from_env()
        logger = get_logger("spec_reader", level=config.log_level, log_file=config.log_file)
        if current_year is None:
            return cls(config=config, logger=logger)
        return cls(config=config, logger=logger, current_year=current_year)
