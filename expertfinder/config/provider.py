"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from dotenv import load_dotenv

load_dotenv()


def _env(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


def parse_token_list(raw: str) -> List[str]:
    """Split a comma-separated token list, trimming and dropping blanks."""
    return [t.strip() for t in raw.split(",") if t.strip()]


@dataclass
class APIConfig:
    """API configuration."""
    cors_origins: List[str] = field(default_factory=list)


@dataclass
class AuthConfig:
    """Authentication configuration."""
    tokens: List[str]


@dataclass
class OpenAIConfig:
    """LLM provider configuration."""
    api_key: str
    model: str = "gpt-4o-mini"
    base_url: str = "https://api.openai.com/v1"
    answer_max_tokens: int = 800
    topic_max_tokens: int = 10

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass
class SearchConfig:
    """Web search provider configuration."""
    api_key: str
    engine_id: str
    base_url: str = "https://www.googleapis.com/customsearch/v1"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.engine_id)


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_openai_config(self) -> OpenAIConfig:
        """Get LLM provider configuration."""
        ...

    def get_search_config(self) -> SearchConfig:
        """Get web search configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(cors_origins=parse_token_list(os.getenv("FRONTEND_URL", "")))

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration from environment variables."""
        # One-time tokens are required - the service cannot authenticate anyone without them
        auth_tokens_env = os.getenv("AUTH_TOKENS")
        if auth_tokens_env is None:
            raise ValueError(
                "AUTH_TOKENS environment variable is required. "
                "Set it to a comma-separated list of one-time tokens, e.g. abcds,123456"
            )

        return AuthConfig(tokens=parse_token_list(auth_tokens_env))

    def get_openai_config(self) -> OpenAIConfig:
        """Get LLM provider configuration from environment variables."""
        return OpenAIConfig(
            api_key=_env("OPENAI_API_KEY", "OpenAi__ApiKey", default=""),
            model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        )

    def get_search_config(self) -> SearchConfig:
        """Get web search configuration from environment variables."""
        return SearchConfig(
            api_key=_env("GOOGLE_API_KEY", "Google__ApiKey", default=""),
            engine_id=_env("GOOGLE_SEARCH_ENGINE_ID", "Google__SearchEngineId", default=""),
            base_url=os.getenv(
                "GOOGLE_SEARCH_URL", "https://www.googleapis.com/customsearch/v1"
            ),
        )
