from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    supabase_url: str
    supabase_key: str
    storage_bucket: str = "schwimmschule-photos"
    default_radius_km: int = 25
    curated_page_size: int = 10
    imported_page_size: int = 20
    log_level: str = "INFO"
