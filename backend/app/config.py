"""Application configuration."""
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings


class Configuration(BaseModel):
    """Credential presence flags the pipeline factory branches on."""

    model_config = ConfigDict(frozen=True)

    has_fetch_key: bool = False
    has_generation_key: bool = False
    has_search_key: bool = False

    @property
    def mock_mode(self) -> bool:
        return not (self.has_fetch_key and self.has_generation_key)


class Settings(BaseSettings):
    """App settings from env."""

    firecrawl_api_key: str = ""
    firecrawl_base_url: str = "https://api.firecrawl.dev"
    firecrawl_timeout_seconds: float = 60.0

    gemini_api_key: str = ""
    # Optional: use OpenAI instead
    openai_api_key: str = ""
    llm_provider: str = "gemini"  # "gemini" | "openai"

    model_extraction: str = "gemini-flash-latest"
    openai_model_extraction: str = "gpt-4o-mini"

    serper_api_key: str = ""
    serper_timeout_seconds: float = 10.0
    search_country: str = "jp"
    search_language: str = "ja"
    max_affiliate_results: int = 5

    mock_delay_seconds: float = 2.0
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def generation_api_key(self) -> str:
        if self.llm_provider.lower() == "openai":
            return self.openai_api_key
        return self.gemini_api_key

    def configuration(self) -> Configuration:
        return Configuration(
            has_fetch_key=bool(self.firecrawl_api_key),
            has_generation_key=bool(self.generation_api_key),
            has_search_key=bool(self.serper_api_key),
        )
