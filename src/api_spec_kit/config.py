"""Settings shared by the generators and the CLI.

Values come from ``API_SPEC_KIT_*`` environment variables; the defaults
reproduce the fixed organisational literals of the generated artifacts.
"""

import logging
import os
from typing import Any, ClassVar

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_URL = (
    "https://bitbucket.hq.il.tleumi/projects/PLA/repos/openapi-dictionaries/raw/"
    "Bank_Leumi_Org/Leumi_Base_Type_Components/1.6.yaml"
)


class Settings(BaseModel):
    """Generation settings."""

    ENV_PREFIX: ClassVar[str] = "API_SPEC_KIT_"

    default_target: str = "typescript"
    dictionary_url: str = DEFAULT_DICTIONARY_URL
    default_ticket: str = "APIA-8584"
    default_email: str = "api@example.com"
    sdk_timeout: float = Field(default=30.0, gt=0)
    sdk_max_retries: int = Field(default=3, ge=0)
    sdk_base_delay: float = Field(default=0.5, ge=0)

    @classmethod
    def from_env(cls, **overrides: Any) -> "Settings":
        """Build settings from the environment, with keyword overrides on top."""
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{cls.ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        values.update(overrides)
        logger.debug("Loaded settings from environment: %s", sorted(values))
        return cls(**values)
