import os
from typing import Mapping, Optional
from pydantic import BaseModel, Field, ConfigDict

from repo_cloner.domain.exceptions import ConfigurationError

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_USER_AGENT = "repo-cloner"


class Settings(BaseModel):
    """
    Process-wide configuration, built once at startup and handed to the
    components that talk to GitHub.
    """
    model_config = ConfigDict(frozen=True)

    token: str = Field(..., min_length=1, description="GitHub token sent with every request")
    api_url: str = Field(default=DEFAULT_API_URL, description="Base URL of the GitHub REST API")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="Value of the User-Agent header")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Builds settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to `os.environ`.

        Raises:
            ConfigurationError: If GITHUB_TOKEN is unset or empty.
        """
        if environ is None:
            environ = os.environ

        token = environ.get("GITHUB_TOKEN")
        if not token:
            raise ConfigurationError("'GITHUB_TOKEN' environment variable missing")

        api_url = environ.get("GITHUB_API_URL") or DEFAULT_API_URL

        return cls(token=token, api_url=api_url.rstrip("/"))
