"""Configuration management for the Blink Debit client."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from blink_debit.models.exceptions import BlinkInvalidValueException


class BlinkPaySettings(BaseSettings):
    """
    Client settings loaded from keyword arguments, environment or ``.env``.

    Explicit keyword arguments take priority over ``BLINKPAY_*`` environment
    variables, which take priority over the ``.env`` file. One instance is
    shared by every collaborator of a single client.
    """

    debit_url: str = Field(default="", description="Blink Debit URL, e.g. https://sandbox.debit.blinkpay.co.nz")
    client_id: str = Field(default="", description="OAuth2 client ID")
    client_secret: str = Field(default="", description="OAuth2 client secret")
    timeout_seconds: float = Field(default=10.0, description="HTTP request timeout")
    retry_enabled: bool = Field(default=True, description="Retry 429, 5xx and network failures")

    model_config = SettingsConfigDict(
        env_prefix="BLINKPAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("debit_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def base_path(self) -> str:
        """Base URL of the payments v1 API."""
        return f"{self.debit_url}/payments/v1"

    @property
    def token_url(self) -> str:
        return f"{self.debit_url}/oauth2/token"

    def require_credentials(self) -> None:
        """
        Check that everything needed to obtain a token is present.

        Raises:
            BlinkInvalidValueException: If debit URL, client ID or secret is empty
        """
        for name in ("debit_url", "client_id", "client_secret"):
            if not getattr(self, name):
                raise BlinkInvalidValueException(
                    f"BlinkPay {name} is not configured, set it explicitly or via BLINKPAY_{name.upper()}"
                )
