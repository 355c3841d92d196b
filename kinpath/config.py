from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="KINPATH_", env_file=".env", extra="ignore")

    # Basic auth settings. Logins are rejected while these are unset.
    auth_username: str | None = None
    auth_password: str | None = None

    # Session settings
    session_secret: str = "your-super-secret-session-key-change-in-production"

    # Storage settings
    local_tree_store_path: str = "data/trees.json"

    # Resolver settings
    default_max_search_depth: int = 20
    max_search_depth_limit: int = 60
    search_time_budget_seconds: float = 5.0
    index_cache_ttl_seconds: float = 300.0
    default_language: str = "en"

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
