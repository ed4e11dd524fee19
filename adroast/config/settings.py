from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    log_level: str = "INFO"

    llm_provider: str = "anthropic"  # | "openai_compat" | "ollama"

    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-sonnet-4-20250514"

    openai_compat_base_url: str = "http://localhost:8000/v1"
    openai_compat_api_key: str = "NONEEDKEY"
    openai_compat_model: str = "local-model"

    ollama_model: str = "qwen3:4b"
    ollama_base_url: str = "http://localhost:11434"

    temperature: float = 0.3
    max_tokens: int = 4000
    llm_timeout_seconds: float = 90.0

    notion_api_key: str | None = None
    notion_database_id: str = "90888e98cd794663acaf9f94ba7bd494"
    notion_reports_database_id: str | None = None  # None: same database as the leads
    notion_version: str = "2022-06-28"
    notion_timeout_seconds: float = 30.0

    report_base_url: str = "https://koganmarina.com/"

    landing_fetch_timeout_seconds: float = 8.0
    landing_max_chars: int = 8000

    prompt_packs_dir: Path = Path(__file__).resolve().parent.parent / "domain" / "prompts" / "packs"
    prompt_pack: str = "adroast"

    @property
    def reports_database_id(self) -> str:
        return self.notion_reports_database_id or self.notion_database_id


def get_settings() -> Settings:
    """Read configuration from the environment on every call."""
    return Settings()


settings = Settings()
