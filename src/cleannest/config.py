# src/cleannest/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Simulated backend latencies are settings, so tests can run with zero delays.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "CLEANNEST"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Delays:
    """Simulated backend latencies, in seconds."""

    auth: float = 1.0
    sign_out: float = 0.5
    load: float = 0.5
    create: float = 0.5
    mutate: float = 0.3

    @staticmethod
    def zero() -> "Delays":
        return Delays(auth=0.0, sign_out=0.0, load=0.0, create=0.0, mutate=0.0)


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Simulated backend ----
    delays: Delays
    strict_ids: bool

    # ---- Demo identity returned by sign-in ----
    demo_user_id: str
    demo_user_email: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "cleannest").strip() or "cleannest"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/cleannest"))

        defaults = Delays()
        delays = Delays(
            auth=max(0.0, _env_float(_k("AUTH_DELAY"), defaults.auth)),
            sign_out=max(0.0, _env_float(_k("SIGN_OUT_DELAY"), defaults.sign_out)),
            load=max(0.0, _env_float(_k("LOAD_DELAY"), defaults.load)),
            create=max(0.0, _env_float(_k("CREATE_DELAY"), defaults.create)),
            mutate=max(0.0, _env_float(_k("MUTATE_DELAY"), defaults.mutate)),
        )

        strict_ids = _env_bool(_k("STRICT_IDS"), False)

        demo_user_id = _env(_k("DEMO_USER_ID"), "mock-user-123").strip() or "mock-user-123"
        demo_user_email = (
            _env(_k("DEMO_USER_EMAIL"), "demo@cleannest.com").strip() or "demo@cleannest.com"
        )

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            delays=delays,
            strict_ids=strict_ids,
            demo_user_id=demo_user_id,
            demo_user_email=demo_user_email,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
