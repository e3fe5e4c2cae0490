"""Environment-driven configuration for stagesplit."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from stagesplit.core.timer import DEFAULT_SYSTEM_NAME, DEFAULT_WIDTH
from stagesplit.errors import SettingsError


def _int_setting(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as exc:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True, frozen=True)
class Settings:
    """Runtime settings loaded from environment variables.

    ``cut_point`` is ``None`` unless ``STAGESPLIT_CUT_POINT`` is set; the
    coordinator factory then falls back to the profile's cut point or the
    default one.
    """

    cut_point: Optional[str]
    profile_path: Optional[Path]
    system_name: str
    report_width: int
    log_level: str

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables with sensible defaults."""

        profile = os.getenv("STAGESPLIT_PROFILE")
        return cls(
            cut_point=os.getenv("STAGESPLIT_CUT_POINT") or None,
            profile_path=Path(profile) if profile else None,
            system_name=os.getenv("STAGESPLIT_SYSTEM_NAME", DEFAULT_SYSTEM_NAME),
            report_width=_int_setting("STAGESPLIT_REPORT_WIDTH", DEFAULT_WIDTH),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
