from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    pdf_render_scale: float = 2.0

    spreadsheet_engine: str = "openpyxl"

    csv_sample_bytes: int = 250_000
    tabular_row_cap: int = 200

    max_workers: int = 4
    max_file_size_bytes: int = 50 * 1024 * 1024
