"""Runtime settings read from the environment.

A project ``.env`` file is loaded first via python-dotenv; variables already
set in the real environment take precedence over it.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "TASKDASH_"


def truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    alt_screen: bool = True
    today: Optional[date] = None
    log_level: int = logging.WARNING
    log_dir: Path = Path(".local/taskdash")
    seed: bool = True

    def current_date(self) -> date:
        return self.today or date.today()


def _parse_today(raw: Optional[str]) -> Optional[date]:
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        logger.warning("Ignoring %sTODAY=%r (expected YYYY-MM-DD)", ENV_PREFIX, raw)
        return None


def _parse_level(raw: Optional[str]) -> int:
    if not raw:
        return logging.WARNING
    level = logging.getLevelName(raw.strip().upper())
    if isinstance(level, int):
        return level
    logger.warning("Ignoring %sLOG_LEVEL=%r", ENV_PREFIX, raw)
    return logging.WARNING


def load_settings(env_file: Optional[Path] = None) -> Settings:
    # search from the working directory, the same .env theme.py reads
    load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
    env = os.environ
    return Settings(
        alt_screen=truthy_env(env.get(ENV_PREFIX + "ALT_SCREEN"), True),
        today=_parse_today(env.get(ENV_PREFIX + "TODAY")),
        log_level=_parse_level(env.get(ENV_PREFIX + "LOG_LEVEL")),
        log_dir=Path(env.get(ENV_PREFIX + "LOG_DIR") or ".local/taskdash"),
        seed=truthy_env(env.get(ENV_PREFIX + "SEED"), True),
    )
