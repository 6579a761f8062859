from functools import lru_cache

from pydantic_settings import BaseSettings

TODOIST_API_BASE = "https://api.todoist.com/rest/v2"


class Settings(BaseSettings):
    todoist_api_token: str = ""
    todoist_api_base: str = TODOIST_API_BASE
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}


@lru_cache
def get_settings() -> Settings:
    return Settings()
