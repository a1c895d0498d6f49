from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Feuerwehr Website"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./brigade.db"

    # Localization
    default_locale: str = "de"
    supported_locales: list[str] = ["de", "en"]
    locale_cookie_name: str = "locale"

    # Document queries
    query_max_attempts: int = 3
    query_base_delay_ms: int = 1000
    document_depth: int = 2
    menu_page_limit: int = 100

    # Routing
    contact_path: str = "/kontakt"
    default_category_path: str = "news"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
