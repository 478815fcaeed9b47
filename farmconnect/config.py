from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "FarmConnect 360"
    DATABASE_URL: str = "sqlite:///./farmconnect.db"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    # Sample datasets served through the DataProvider
    SAMPLE_DATA_DIR: str = ""  # empty = data/samples next to the package
    # Optional JSON overrides for emission factors, prices, crop tables, loan types
    REFERENCE_DATA_PATH: str = ""

    CURRENCY_SYMBOL: str = "Rs."

    # Uploads (document locker, disease detection images)
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_MB: int = 10
    STORAGE_QUOTA_MB: int = 100

    # Simulated analysis latency until real inference is wired in
    CROP_ANALYSIS_DELAY_SECONDS: float = 1.5
    DISEASE_ANALYSIS_DELAY_SECONDS: float = 2.0
    ANALYSIS_TIMEOUT_SECONDS: float = 30.0

    # Cloudflare R2 is optional; local uploads/ used when unset
    CLOUDFLARE_R2_ACCOUNT_ID: str = ""
    CLOUDFLARE_R2_ACCESS_KEY_ID: str = ""
    CLOUDFLARE_R2_SECRET_ACCESS_KEY: str = ""
    CLOUDFLARE_R2_BUCKET: str = "farmconnect-documents"

    class Config:
        env_file = ".env"


settings = Settings()
