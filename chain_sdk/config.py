"""
Client configuration for the Chain SDK.

Settings can be given explicitly or read from ``CHAIN_*`` environment variables.
"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .version import __version__

DEFAULT_URL = "http://localhost:1999"
DEFAULT_TIMEOUT = 30
DEFAULT_RETRY_COUNT = 0


class ClientConfig(BaseSettings):
    """
    Connection settings for a Chain Core server.

    All settings can be configured via environment variables with the CHAIN_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAIN_",
        env_ignore_empty=True,
        case_sensitive=False,
    )

    url: str = Field(
        default=DEFAULT_URL,
        description="Base URL of the Chain Core API"
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT,
        ge=0,
        description="HTTP timeout in seconds"
    )
    retry_count: int = Field(
        default=DEFAULT_RETRY_COUNT,
        ge=0,
        description="Transport level retries (0 disables retries)"
    )
    user_agent: str = Field(
        default=f"chain-sdk-python/{__version__}",
        description="User-Agent header sent with every request"
    )

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """
        Build a configuration from CHAIN_URL, CHAIN_TIMEOUT, CHAIN_RETRY_COUNT
        and CHAIN_USER_AGENT.

        Raises:
            pydantic.ValidationError: If a numeric variable is not a
                non-negative integer
        """
        return cls()
