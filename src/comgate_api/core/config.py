"""
Configuration objects and helpers for the Comgate client.

A process-wide default configuration is read from the environment the first
time it is needed (:func:`get_configuration`). It can be replaced during
application start-up with :func:`configure`. Clients snapshot the default
when they are created, and every field can be overridden per client.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional

from dotenv import dotenv_values

from .errors import ConfigError

__all__ = [
    "BASE_URL",
    "ComgateConfig",
    "configure",
    "get_configuration",
    "load_config",
    "reset_configuration",
]

BASE_URL = "https://payments.comgate.cz"
DEFAULT_TIMEOUT = 60
DEFAULT_OPEN_TIMEOUT = 20
DEFAULT_METHOD = "ALL"

_PARAMETER_TO_ENV_KEY = {
    "merchant_id": "COMGATE_MERCHANT_ID",
    "secret": "COMGATE_SECRET",
    "base_url": "COMGATE_BASE_URL",
    "timeout": "COMGATE_TIMEOUT",
    "open_timeout": "COMGATE_OPEN_TIMEOUT",
    "test_mode": "COMGATE_TEST",
    "default_method": "COMGATE_METHODS",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _collect_parameter_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        overrides[_PARAMETER_TO_ENV_KEY[key]] = _stringify(value)
    return overrides


def _parse_seconds(raw: str, env_key: str) -> float:
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{env_key} must be a number of seconds, got '{raw}'") from exc
    if seconds <= 0:
        raise ConfigError(f"{env_key} must be greater than zero")
    return seconds


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def _merge_environment(
    *,
    env_file: Optional[str],
    base: Optional[Mapping[str, str]],
    overrides: Mapping[str, str],
) -> Dict[str, str]:
    # base (os.environ by default) wins over the .env file; overrides win over both
    merged: Dict[str, str] = {}
    if env_file is not None:
        merged.update(
            (key, value) for key, value in dotenv_values(env_file).items() if value is not None
        )
    merged.update(os.environ if base is None else base)
    merged.update(overrides)
    return merged


@dataclass(frozen=True)
class ComgateConfig:
    merchant_id: Optional[str] = None
    secret: Optional[str] = None
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    open_timeout: float = DEFAULT_OPEN_TIMEOUT
    test_mode: bool = False
    default_method: str = DEFAULT_METHOD

    def missing_credentials(self) -> List[str]:
        """Names of the credential fields that are unset or blank."""
        missing = []
        if not (self.merchant_id or "").strip():
            missing.append("merchant_id")
        if not (self.secret or "").strip():
            missing.append("secret")
        return missing

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ComgateConfig":
        base_url = values.get("COMGATE_BASE_URL", "").strip() or BASE_URL

        return cls(
            merchant_id=_blank_to_none(values.get("COMGATE_MERCHANT_ID")),
            secret=_blank_to_none(values.get("COMGATE_SECRET")),
            base_url=base_url.rstrip("/"),
            timeout=_parse_seconds(
                values.get("COMGATE_TIMEOUT", str(DEFAULT_TIMEOUT)), "COMGATE_TIMEOUT"
            ),
            open_timeout=_parse_seconds(
                values.get("COMGATE_OPEN_TIMEOUT", str(DEFAULT_OPEN_TIMEOUT)),
                "COMGATE_OPEN_TIMEOUT",
            ),
            test_mode=values.get("COMGATE_TEST", "false").strip().lower() == "true",
            default_method=values.get("COMGATE_METHODS", DEFAULT_METHOD),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = None,
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        merchant_id: Optional[str] = None,
        secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float | str] = None,
        open_timeout: Optional[float | str] = None,
        test_mode: Optional[bool] = None,
        default_method: Optional[str] = None,
    ) -> "ComgateConfig":
        parameter_overrides = _collect_parameter_overrides(
            {
                "merchant_id": merchant_id,
                "secret": secret,
                "base_url": base_url,
                "timeout": timeout,
                "open_timeout": open_timeout,
                "test_mode": test_mode,
                "default_method": default_method,
            }
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        return cls.from_mapping(
            _merge_environment(env_file=env_file, base=base, overrides=merged_overrides)
        )


def load_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    merchant_id: Optional[str] = None,
    secret: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float | str] = None,
    open_timeout: Optional[float | str] = None,
    test_mode: Optional[bool] = None,
    default_method: Optional[str] = None,
) -> ComgateConfig:
    """
    Convenience wrapper that mirrors :meth:`ComgateConfig.from_env`.

    Unlike the process-wide default, this reads ``.env`` from the working
    directory unless ``env_file`` is ``None``.
    """
    return ComgateConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        merchant_id=merchant_id,
        secret=secret,
        base_url=base_url,
        timeout=timeout,
        open_timeout=open_timeout,
        test_mode=test_mode,
        default_method=default_method,
    )


_default_config: Optional[ComgateConfig] = None


def get_configuration() -> ComgateConfig:
    """Return the process-wide default, loading it from the environment once."""
    global _default_config
    if _default_config is None:
        _default_config = ComgateConfig.from_env()
        logging.debug("Loaded default Comgate configuration from environment")
    return _default_config


def configure(config: Optional[ComgateConfig] = None, **changes: Any) -> ComgateConfig:
    """
    Replace the process-wide default configuration.

    Pass a complete :class:`ComgateConfig`, individual field changes applied
    on top of the current default, or both. Intended for application start-up;
    clients created earlier keep the configuration they were built with.
    """
    global _default_config
    current = config if config is not None else get_configuration()
    _default_config = replace(current, **changes)
    return _default_config


def reset_configuration() -> None:
    """Forget the process-wide default so the next access re-reads the environment."""
    global _default_config
    _default_config = None
