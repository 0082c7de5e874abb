from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    app_name: str = 'dashboard-filters-api'
    app_env: str = Field(default='dev', alias='APP_ENV')
    app_port: int = Field(default=8000, alias='APP_PORT')

    database_url: str = Field(default='sqlite:///./dashfilters.db', alias='DATABASE_URL')
    db_bootstrap_on_start: bool = Field(default=False, alias='DB_BOOTSTRAP_ON_START')
    db_pool_size: int = Field(default=10, alias='DB_POOL_SIZE')
    db_max_overflow: int = Field(default=20, alias='DB_MAX_OVERFLOW')

    cors_origins: str = Field(default='*', alias='CORS_ORIGINS')

    filter_locale: str = Field(default='fr', alias='FILTER_LOCALE')
    filter_year_start: int = Field(default=2023, alias='FILTER_YEAR_START')
    default_filter_scope: str = Field(default='default', alias='DEFAULT_FILTER_SCOPE')

    write_rate_limit: int = Field(default=120, alias='WRITE_RATE_LIMIT')
    write_rate_window_seconds: int = Field(default=60, alias='WRITE_RATE_WINDOW_SECONDS')


settings = Settings()
