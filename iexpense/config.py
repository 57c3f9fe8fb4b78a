"""Environment-driven settings shared by the iExpense entry points."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in FALSE_VALUES


def _parse_origins(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return ()
    return tuple(origin.strip() for origin in value.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    log_level: str = "WARNING"
    strict_offsets: bool = True
    env: str = "prod"
    allowed_origins: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_dev(self) -> bool:
        return self.env in {"dev", "development"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            data_dir=Path(env.get("IEXPENSE_DATA_DIR") or "data"),
            log_level=(env.get("IEXPENSE_LOG_LEVEL") or "WARNING").upper(),
            strict_offsets=_parse_bool(env.get("IEXPENSE_STRICT_OFFSETS"), True),
            env=(env.get("IEXPENSE_ENV") or "prod").lower(),
            allowed_origins=_parse_origins(env.get("IEXPENSE_ALLOWED_ORIGINS")),
        )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
