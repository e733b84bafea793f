"""Runtime settings, read from the environment with CLI overrides."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from dispute_delta.exceptions import ConfigurationError

DEFAULT_AMOUNT_TOLERANCE = 0.05
DEFAULT_DATE_FORMAT = "%d/%m/%Y"
DEFAULT_LOG_LEVEL = "WARNING"

_ENV_PREFIX = "DISPUTE_DELTA_"


class Settings(BaseModel):
    """Tunables for a comparison run.

    The matching core never reads these globally; the CLI builds one
    ``Settings`` and passes the individual values into the engines.
    """

    amount_tolerance: float = Field(default=DEFAULT_AMOUNT_TOLERANCE, gt=0)
    date_format: str = DEFAULT_DATE_FORMAT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``DISPUTE_DELTA_*`` environment variables."""
        env = os.environ if environ is None else environ

        values: dict = {}
        raw_tolerance = env.get(f"{_ENV_PREFIX}AMOUNT_TOLERANCE", "").strip()
        if raw_tolerance:
            try:
                tolerance = float(raw_tolerance)
            except ValueError:
                raise ConfigurationError(
                    "amount_tolerance", f"expected a number, got {raw_tolerance!r}"
                ) from None
            if tolerance <= 0:
                raise ConfigurationError("amount_tolerance", "must be greater than 0")
            values["amount_tolerance"] = tolerance

        date_format = env.get(f"{_ENV_PREFIX}DATE_FORMAT", "").strip()
        if date_format:
            values["date_format"] = date_format

        log_level = env.get(f"{_ENV_PREFIX}LOG_LEVEL", "").strip()
        if log_level:
            values["log_level"] = log_level.upper()

        return cls(**values)
