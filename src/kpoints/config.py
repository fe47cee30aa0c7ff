"""Ledger configuration loaded from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class ConfigError(ValueError):
    """Invalid configuration value."""


@dataclass(frozen=True)
class LedgerConfig:
    """Deployment constants for the point ledger."""

    circulation_ceiling: int = 1000
    daily_send_limit: int = 3
    min_points: int = 1
    max_points: int = 3
    starting_balance: int = 20
    max_message_length: int = 500
    timezone: str = "Asia/Tokyo"


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> LedgerConfig:
    """Build a LedgerConfig from environment variables.

    Recognized variables: KPOINTS_CIRCULATION_CEILING, KPOINTS_DAILY_SEND_LIMIT,
    KPOINTS_STARTING_BALANCE and KPOINTS_TIMEZONE. Unset variables keep the
    reference deployment defaults.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        LedgerConfig instance

    Raises:
        ConfigError: If a variable holds an invalid value
    """
    if env is None:
        env = os.environ
    defaults = LedgerConfig()

    timezone = env.get("KPOINTS_TIMEZONE") or defaults.timezone
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"Unknown timezone '{timezone}'")

    return LedgerConfig(
        circulation_ceiling=_int_from_env(
            env, "KPOINTS_CIRCULATION_CEILING", defaults.circulation_ceiling
        ),
        daily_send_limit=_int_from_env(env, "KPOINTS_DAILY_SEND_LIMIT", defaults.daily_send_limit),
        starting_balance=_int_from_env(env, "KPOINTS_STARTING_BALANCE", defaults.starting_balance),
        timezone=timezone,
    )
