from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from solrzero.core.exceptions import ConfigError


class Endpoint(BaseModel):
    """Where the Solr API lives. Every request URL is derived from it."""

    model_config = ConfigDict(frozen=True)

    protocol: Literal["http", "https"] = "http"
    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=8983, ge=1, le=65535)

    @classmethod
    def create(cls, protocol: str, host: str, port: int) -> "Endpoint":
        try:
            return cls(protocol=protocol, host=host, port=port)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid Solr endpoint: {e}") from e

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


class ClientConfig:
    """
    Client-wide settings.

    Values are class-level defaults; an instance overrides them through
    `configure`. Keys:
      - timeout: seconds before the HTTP transport gives up on a request
      - headers: extra headers sent with every request
      - field_defaults: whether FieldBuilder pre-populates stored/indexed/
        docValues/uninvertible = true and multiValued/required = false
    """

    timeout: float = 30.0
    headers: Dict[str, str] = {}
    field_defaults: bool = False

    def __init__(self, **kwargs: Any) -> None:
        self.headers = dict(self.headers)
        self.configure(**kwargs)

    def configure(self, **kwargs: Any) -> None:
        for key, value in kwargs.items():
            if hasattr(self, key) and not key.startswith("_") and not callable(getattr(self, key)):
                setattr(self, key, value)
            else:
                raise AttributeError(f"Invalid configuration key: {key}")


# Module-level configuration used when no explicit ClientConfig is supplied.
config = ClientConfig()


def configure(**kwargs: Any) -> ClientConfig:
    """Update the module-level configuration and return it."""
    config.configure(**kwargs)
    return config


def resolve_config(client_config: Optional[ClientConfig]) -> ClientConfig:
    return client_config if client_config is not None else config
