"""
Public, high-level helpers for talking to the Comgate payment gateway.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import ComgateClient
from .core.config import ComgateConfig, load_config

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[ComgateConfig] = None,
    session: Optional[requests.Session] = None,
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
) -> ComgateClient:
    """
    Construct a :class:`ComgateClient`.

    Callers can either supply a ready-made :class:`ComgateConfig` or let the
    helper assemble one from the environment, a ``.env`` file and keyword
    arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            merchant_id,
            secret,
            base_url,
            timeout,
            open_timeout,
            test_mode,
            default_method,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ComgateConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_config(
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
    return ComgateClient(config=cfg, session=session)
