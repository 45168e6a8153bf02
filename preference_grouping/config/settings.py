# preference_grouping/config/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GROUPING_", env_file=".env", extra="ignore")

    default_algorithm: str = "balanced"
    log_level: str = "INFO"
    input_path: str = "inputs/input.json"
    output_dir: str = "outputs"
    json_indent: int = 2

settings = Settings()
