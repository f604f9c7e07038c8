"""
Pydantic configuration model for the Sakura Cloud DNS provider.

Validates provider config at construction time instead of silently
passing bad values to the HTTP client. The model never reads the process
environment on its own; :meth:`SakuraCloudConfig.from_env` is the one
bootstrap hook that does.
"""

from __future__ import annotations

import os
from typing import Any, Mapping
from pydantic import BaseModel, ConfigDict, Field

from zonesync.base.exceptions import MissingCredentialError

ENV_ACCESS_TOKEN = "SAKURACLOUD_ACCESS_TOKEN"
ENV_ACCESS_TOKEN_SECRET = "SAKURACLOUD_ACCESS_TOKEN_SECRET"
ENV_ZONE = "SAKURACLOUD_ZONE"
ENV_API_ROOT_URL = "SAKURACLOUD_API_ROOT_URL"

DEFAULT_API_ROOT_URL = "https://secure.sakura.ad.jp/cloud/zone"
DEFAULT_ZONE = "is1a"


class SakuraCloudConfig(BaseModel):
    """Configuration for the Sakura Cloud DNS API.

    DNS zones are global resources, so ``zone`` only selects which API
    endpoint serves them; ``is1a`` works for every account.
    """

    model_config = ConfigDict(extra="forbid")

    access_token: str | None = Field(default=None, description="API access token")
    access_token_secret: str | None = Field(
        default=None, description="API access token secret"
    )
    zone: str = Field(default=DEFAULT_ZONE, description="API zone (e.g. 'is1a')")
    api_root_url: str = Field(
        default=DEFAULT_API_ROOT_URL, description="API root URL without zone"
    )
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    user_agent: str = Field(default="zonesync", description="User-Agent header value")

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: Any
    ) -> SakuraCloudConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``.
            **overrides: Explicit field values that win over the environment.

        Returns:
            An unvalidated-for-credentials config; call
            :meth:`require_credentials` before using it.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            "access_token": env.get(ENV_ACCESS_TOKEN),
            "access_token_secret": env.get(ENV_ACCESS_TOKEN_SECRET),
        }
        if env.get(ENV_ZONE):
            values["zone"] = env[ENV_ZONE]
        if env.get(ENV_API_ROOT_URL):
            values["api_root_url"] = env[ENV_API_ROOT_URL]
        values.update(overrides)
        return cls(**values)

    def require_credentials(self) -> SakuraCloudConfig:
        """Ensure both halves of the API token are present.

        Raises:
            MissingCredentialError: If the token or the secret is missing.
        """
        if not self.access_token:
            raise MissingCredentialError(f"No token found ({ENV_ACCESS_TOKEN})")
        if not self.access_token_secret:
            raise MissingCredentialError(f"No secret found ({ENV_ACCESS_TOKEN_SECRET})")
        return self

    @property
    def base_url(self) -> str:
        return f"{self.api_root_url.rstrip('/')}/{self.zone}/api/cloud/1.1"


def validate_config(config: SakuraCloudConfig | dict | None) -> SakuraCloudConfig:
    """Validate and return a typed config model.

    Args:
        config: A config model, a raw dict, or ``None`` for defaults.

    Returns:
        A validated :class:`SakuraCloudConfig`.

    Raises:
        pydantic.ValidationError: If the config is invalid.
    """
    if config is None:
        return SakuraCloudConfig()
    if isinstance(config, SakuraCloudConfig):
        return config
    return SakuraCloudConfig(**config)


__all__ = [
    "SakuraCloudConfig",
    "validate_config",
    "ENV_ACCESS_TOKEN",
    "ENV_ACCESS_TOKEN_SECRET",
]
