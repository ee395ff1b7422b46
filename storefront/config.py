"""
Storefront configuration.

Settings are read from environment variables (a local ``.env`` file is
loaded first when present). ``get_settings()`` is cached; tests build
``Settings`` directly instead.
"""

import os
from functools import cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

StorageBackendName = Literal["memory", "file", "redis", "null"]

DEFAULT_API_BASE_URL = "http://localhost:8000"
DEFAULT_LOGIN_URL = "http://localhost:8000/api/auth/login"
DEFAULT_LOGIN_FALLBACK_URL = "http://localhost:3000/api/auth/login"
DEFAULT_REQUEST_TIMEOUT = 5.0


class Settings(BaseModel):
    """Runtime settings for the storefront state layer."""

    api_base_url: str = DEFAULT_API_BASE_URL
    login_url: str = DEFAULT_LOGIN_URL
    login_fallback_url: str = DEFAULT_LOGIN_FALLBACK_URL
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    storage_backend: StorageBackendName = "memory"
    storage_path: str = ".storefront/storage.json"
    storage_prefix: str = ""
    upstash_redis_rest_url: str = ""
    upstash_redis_rest_token: str = ""

    # 1.0 reproduces the gateway's simulated latency, 0 disables it
    payment_delay_scale: float = Field(default=1.0, ge=0)

    @field_validator("api_base_url", "login_url", "login_fallback_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        env = os.environ
        values = {
            "api_base_url": env.get("API_BASE_URL"),
            "login_url": env.get("LOGIN_API_URL"),
            "login_fallback_url": env.get("LOGIN_FALLBACK_URL"),
            "request_timeout": env.get("REQUEST_TIMEOUT"),
            "storage_backend": env.get("STORAGE_BACKEND"),
            "storage_path": env.get("STORAGE_PATH"),
            "storage_prefix": env.get("STORAGE_PREFIX"),
            "upstash_redis_rest_url": env.get("UPSTASH_REDIS_REST_URL"),
            "upstash_redis_rest_token": env.get("UPSTASH_REDIS_REST_TOKEN"),
            "payment_delay_scale": env.get("PAYMENT_DELAY_SCALE"),
        }
        return cls(**{k: v for k, v in values.items() if v not in (None, "")})


@cache
def get_settings() -> Settings:
    """Get process-wide settings (singleton)."""
    load_dotenv()
    return Settings.from_env()
