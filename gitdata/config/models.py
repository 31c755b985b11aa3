from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class ApiConfig(BaseModel):
    base_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"
    timeout: float = Field(default=30.0, gt=0)
    user_agent: str = "gitdata"
    blob_write_encoding: Literal["utf-8", "base64"] = "utf-8"
    strict: bool = False

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"base_url must use http or https scheme, got {parsed.scheme!r}")
        if not parsed.netloc:
            raise ValueError("base_url must have a valid host")
        return v.rstrip("/")


class GitDataConfig(BaseModel):
    api: ApiConfig = Field(default_factory=ApiConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
