"""
eazyscripts/config.py
---------------------
EazyScripts Python Client — Environment Configuration
-----------------------------------------------------
Reads client settings from the process environment (optionally seeded from
a ``.env`` file via python-dotenv).  The client core never reads the
environment itself; this module is what ``EazyScriptsClient.from_env()``
uses.

Variables:
    EAZYSCRIPTS_KEY         application key                  (required)
    EAZYSCRIPTS_SECRET      application secret               (required)
    EAZYSCRIPTS_SUBDOMAIN   tenant subdomain                 (required)
    EAZYSCRIPTS_HOST        service host (default eazyscripts.net)
    EAZYSCRIPTS_TIMEOUT     request timeout in seconds (default 30)

Project: EazyScripts Python Client
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from eazyscripts.exceptions import ConfigurationError
from eazyscripts.schemas import DEFAULT_HOST

logger = logging.getLogger(__name__)

_REQUIRED = ("EAZYSCRIPTS_KEY", "EAZYSCRIPTS_SECRET", "EAZYSCRIPTS_SUBDOMAIN")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    key:       str = Field(repr=False)
    secret:    str = Field(repr=False)
    subdomain: str
    host:      str = DEFAULT_HOST
    timeout:   float = Field(default=30.0, gt=0)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Load client settings from the environment.

    Args:
        env_file: Path of a dotenv file to load first (e.g. ``".env.testing"``).
                  Values already present in the environment are not
                  overridden.  When *None*, a ``.env`` in the working
                  directory is used if present.

    Returns:
        A frozen ``Settings`` instance.

    Raises:
        ConfigurationError: if a required variable is missing or the timeout
                            is not a positive number.
    """
    load_dotenv(env_file or os.path.join(os.getcwd(), ".env"), override=False)

    missing = [name for name in _REQUIRED if not os.getenv(name, "").strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )

    raw_timeout = os.getenv("EAZYSCRIPTS_TIMEOUT", "").strip() or "30"
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigurationError(
            f"EAZYSCRIPTS_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
        ) from exc
    if timeout <= 0:
        raise ConfigurationError(
            f"EAZYSCRIPTS_TIMEOUT must be positive, got {raw_timeout!r}"
        )

    settings = Settings(
        key=os.environ["EAZYSCRIPTS_KEY"].strip(),
        secret=os.environ["EAZYSCRIPTS_SECRET"].strip(),
        subdomain=os.environ["EAZYSCRIPTS_SUBDOMAIN"].strip(),
        host=os.getenv("EAZYSCRIPTS_HOST", "").strip() or DEFAULT_HOST,
        timeout=timeout,
    )
    logger.debug(
        "eazyscripts.config: loaded settings for subdomain=%s host=%s.",
        settings.subdomain,
        settings.host,
    )
    return settings
