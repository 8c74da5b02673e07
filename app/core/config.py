from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env wird automatisch gelesen
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "ProofreadAPI"
    environment: str = "dev"
    log_level: str = "INFO"

    # Issue-Erkennung (ein Call pro Proofreading-Durchlauf)
    proofread_model: str = "gpt-4o"
    proofread_temperature: float = 0.3

    # KI-gestütztes Anwenden einzelner Fixes (ein Call pro Zeile + Issue)
    fix_model: str = "gpt-4o-mini"
    fix_temperature: float = 0.1
    fix_max_tokens: int = 500

    # Zulassungsgrenzen für Transkripte (nur API/Service, nicht die Fix-Engine)
    max_lines: int = 1000
    max_chars: int = 120000

    # Default für Requests ohne explizites use_ai
    use_ai_fixes: bool = False


settings = Settings()
