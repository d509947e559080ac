from pydantic_settings import BaseSettings, SettingsConfigDict

from pithos.domain.state import SortOrder, Theme


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PITHOS_")

    # Logging
    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Session settings
    autosave_interval_seconds: int = 30
    purge_trash_on_start: bool = True

    # Defaults applied to a fresh vault
    default_theme: Theme = Theme.SYSTEM
    default_sort_order: SortOrder = SortOrder.MODIFIED_DESC


settings = Settings()
