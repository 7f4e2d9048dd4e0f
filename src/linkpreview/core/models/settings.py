"""Image store configuration loaded from environment variables."""

from typing import Any, Literal

from pydantic import AliasChoices, Field, StrictStr, ValidationError as PydanticValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linkpreview.core.models.errors import ConfigurationError
from linkpreview.core.utils.constants import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_REGION,
    ENV_IMAGE_STORE_BACKEND,
    ENV_MINIO_PREFIX,
)


class StoreSettings(BaseSettings):
    """
    Settings selecting and configuring the image store backend.

    The backend comes from IMAGE_STORE_BACKEND; connection fields are read
    from MINIO_-prefixed variables (MINIO_HOST, MINIO_PORT, ...). Empty
    variables fall back to field defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_MINIO_PREFIX,
        env_ignore_empty=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    backend: Literal["memory", "s3"] = Field(
        "memory",
        validation_alias=AliasChoices(ENV_IMAGE_STORE_BACKEND, "backend"),
        description="Image store backend",
    )

    host: StrictStr | None = Field(None, description="Object storage host")
    port: int | None = Field(None, ge=1, le=65535, description="Object storage port")
    access_key: StrictStr | None = Field(None, description="Access key for request signing")
    secret_key: StrictStr | None = Field(None, description="Secret key for request signing")
    public_url: StrictStr | None = Field(
        None, description="Base of externally visible image URLs"
    )
    region: StrictStr = Field(DEFAULT_REGION, description="Signing region")

    connect_timeout: float = Field(DEFAULT_CONNECT_TIMEOUT, gt=0)
    read_timeout: float = Field(DEFAULT_READ_TIMEOUT, gt=0)
    # Total attempts, including the first request.
    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1)

    @model_validator(mode="after")
    def validate_s3_fields(self) -> "StoreSettings":
        if self.backend != "s3":
            return self

        missing = [
            name
            for name in ("host", "port", "access_key", "secret_key", "public_url")
            if not getattr(self, name)
        ]
        if missing:
            raise ValueError(f"S3 image store requires: {', '.join(missing)}")

        return self

    @property
    def endpoint_url(self) -> str:
        """Object storage endpoint derived from host and port."""
        return f"http://{self.host}:{self.port}"

    @property
    def public_url_base(self) -> str:
        return (self.public_url or "").rstrip("/")

    @classmethod
    def from_env(cls, **overrides: Any) -> "StoreSettings":
        """Build settings from environment variables.

        Keyword overrides take precedence over the environment.

        Raises:
            ConfigurationError: If the values do not form valid settings
        """
        try:
            return cls(**overrides)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                message="Invalid image store configuration",
                details={
                    "errors": [
                        {
                            "field": ".".join(str(x) for x in err.get("loc", [])) or "settings",
                            "message": err.get("msg", "Invalid value"),
                        }
                        for err in exc.errors()
                    ]
                },
            ) from exc
