from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SettingsError(RuntimeError):
    pass


@dataclass(frozen=True)
class Settings:
    output_dir: Path
    label_lang: str
    log_level: int


def get_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read IXTABLE_* settings from the environment (or ``env`` when given)."""
    env = os.environ if env is None else env

    output_dir = Path(env.get("IXTABLE_OUTPUT_DIR") or ".").expanduser()

    label_lang = (env.get("IXTABLE_LABEL_LANG") or "en").strip().lower()
    if not label_lang:
        raise SettingsError("IXTABLE_LABEL_LANG is set but empty")

    level_name = (env.get("IXTABLE_LOG_LEVEL") or "WARNING").strip().upper()
    if level_name not in _LOG_LEVELS:
        raise SettingsError(f"IXTABLE_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}; got {level_name!r}")

    return Settings(
        output_dir=output_dir,
        label_lang=label_lang,
        log_level=getattr(logging, level_name),
    )
