from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # Output
    PDF_OUTPUT_DIR: str = Field(default="./reports")
    PDF_LANGUAGE: str = Field(default="pt")  # pt | en

    # Fonts (DejaVu Sans when available, core Helvetica otherwise)
    PDF_UNICODE_FONT: bool = Field(default=True)
    PDF_FONT_DIR: str = Field(default="")

    # Branding
    BRAND_NAME: str = Field(default="FireSafe Tech")
    DEFAULT_COMPANY_NAME: str = Field(default="Empresa Cliente")
    DEFAULT_COUNTRY: str = Field(default="Brasil")

    # Free-text budgets (characters)
    TEXTAREA_MAX_CHARS: int = Field(default=500)
    TEXTAREA_MAX_CHARS_LIMIT: int = Field(default=1000)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    AUDIT_LOG_FILE: str = Field(default="logs/pdf_audit.log")
    AUDIT_LOG_MAX_BYTES: int = Field(default=10 * 1024 * 1024)
    AUDIT_LOG_BACKUPS: int = Field(default=5)

    @property
    def language(self) -> str:
        lang = self.PDF_LANGUAGE.strip().lower()
        return lang if lang in ("pt", "en") else "pt"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
