"""Application settings."""

import os
from typing import Optional
from pydantic import BaseModel


class Settings(BaseModel):
    """Application configuration settings."""

    # LLM Provider settings
    llm_provider: str = "openai"  # "openai" or "anthropic"
    llm_model: Optional[str] = None  # Override default model
    llm_timeout: float = 60.0
    llm_max_retries: int = 3

    # Intent classification: "keyword", "llm" or "auto"
    classifier_mode: str = "auto"

    # API Keys
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    analytics_api_key: Optional[str] = None

    # Analytics provider
    analytics_base_url: str = "https://api.unleashnfts.com/api/v1"
    analytics_timeout: int = 30
    use_demo_analytics: bool = False  # Forced on when no analytics key is set

    # Memory settings
    memory_max_interactions: int = 50
    memory_context_window: int = 10
    memory_max_age_hours: float = 24.0
    memory_sweep_enabled: bool = True
    memory_sweep_interval_seconds: float = 3600.0

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load API keys from environment if not provided
        if data.get("openai_api_key") is None:
            data["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

        if data.get("anthropic_api_key") is None:
            data["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

        if data.get("analytics_api_key") is None:
            data["analytics_api_key"] = (
                os.environ.get("NFT_ANALYTICS_API_KEY")
                or os.environ.get("BITSCRUNCH_API_KEY")
            )

        super().__init__(**data)

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """
        Build settings from NFT_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        env_map = {
            "llm_provider": "NFT_LLM_PROVIDER",
            "llm_model": "NFT_LLM_MODEL",
            "llm_max_retries": "NFT_LLM_MAX_RETRIES",
            "classifier_mode": "NFT_CLASSIFIER_MODE",
            "analytics_base_url": "NFT_ANALYTICS_BASE_URL",
            "use_demo_analytics": "NFT_DEMO_ANALYTICS",
            "memory_max_interactions": "NFT_MEMORY_MAX_INTERACTIONS",
            "memory_context_window": "NFT_MEMORY_CONTEXT_WINDOW",
            "memory_max_age_hours": "NFT_MEMORY_MAX_AGE_HOURS",
            "memory_sweep_enabled": "NFT_MEMORY_SWEEP_ENABLED",
            "memory_sweep_interval_seconds": "NFT_MEMORY_SWEEP_INTERVAL",
            "host": "NFT_HOST",
            "port": "NFT_PORT",
            "log_level": "NFT_LOG_LEVEL",
        }
        data = {}
        for field, env_var in env_map.items():
            value = os.environ.get(env_var)
            if value is not None and value != "":
                data[field] = value  # pydantic coerces "true", "50", ...
        data.update(overrides)
        return cls(**data)

    def get_llm_api_key(self) -> Optional[str]:
        """Get the API key for the configured LLM provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        elif self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return None

    def demo_analytics_enabled(self) -> bool:
        """Whether the fabricated demo analytics provider should be used."""
        return self.use_demo_analytics or not self.analytics_api_key
