"""
Centralized configuration management for the Schema Builder service.

Pydantic v2 settings management to enforce strict validation and
fast-failure on invalid configuration.
"""

from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from schema_builder.app.said.registry import DEFAULT_DIGEST_CODE, DIGEST_REGISTRY


# -------------------------------------------------------------------------
# Settings Model
# -------------------------------------------------------------------------

class Settings(BaseSettings):
    """
    Application settings parsed from the environment.

    Fails fast at startup if the configured digest algorithm is not
    registered or if operational limits are out of range.
    """

    # ---------------------------------------------------------------------
    # Self-addressing
    # ---------------------------------------------------------------------

    digest_code: Annotated[
        str,
        Field(
            default=DEFAULT_DIGEST_CODE,
            description="CESR derivation code of the SAID digest algorithm",
        ),
    ]

    # ---------------------------------------------------------------------
    # Operational Boundaries
    # ---------------------------------------------------------------------

    max_attributes: Annotated[
        int,
        Field(
            default=256,
            ge=1,
            le=4096,
            description="Upper bound on attribute rows per build request",
        ),
    ]

    @field_validator("digest_code")
    @classmethod
    def validate_digest_code(cls, v: str) -> str:
        if v not in DIGEST_REGISTRY:
            raise ValueError(
                f"Unsupported digest_code '{v}'. "
                f"Allowed values: {sorted(DIGEST_REGISTRY)}"
            )
        return v

    model_config = SettingsConfigDict(
        env_prefix="SCHEMA_BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )


# -------------------------------------------------------------------------
# Settings Dependency Provider
# -------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Dependency injection provider for application settings.

    Uses an explicit singleton pattern within the FastAPI lifecycle.
    """
    return Settings()
