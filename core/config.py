from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    """
    Application configuration.

    - Secrets are NEVER stored in code.
    - The relay key and DB url are injected via environment variables (.env).
    - Services never read this object directly; they receive a RelayConfig.
    """

    # --------------------------------------------------
    # Takealot Seller API (through the CORS relay)
    # --------------------------------------------------
    TAKEALOT_BASE_URL: str = "https://seller-api.takealot.com/v2"
    CORS_PROXY_URL: str = "https://proxy.cors.sh/"
    CORS_API_KEY: str = ""

    # --------------------------------------------------
    # Database (user settings store)
    # --------------------------------------------------
    DATABASE_URL: str = "sqlite:///./app.db"

    # --------------------------------------------------
    # PDF output
    # --------------------------------------------------
    PDF_SAVE_DIR: str | None = None
    INVOICE_UTC_OFFSET_HOURS: int = 2  # SAST, no DST
    INVOICE_DATE_FORMAT: str = "%d/%m/%Y"

    # --------------------------------------------------
    # HTTP / logging
    # --------------------------------------------------
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"   # Ignore unrelated env vars (Docker / CI friendly)

    def model_post_init(self, __context) -> None:
        """
        Fail fast on a malformed offset (SAST is +2; anything outside a real UTC offset is a typo).
        """
        if not -12 <= self.INVOICE_UTC_OFFSET_HOURS <= 14:
            raise ValueError("INVOICE_UTC_OFFSET_HOURS must be between -12 and 14")


settings = Settings()
