import logging
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://tural-server.vercel.app/api"


@dataclass
class Settings:
    # Uzak kitap servisi
    books_api_base_url: str = os.getenv("BOOKS_API_BASE_URL", DEFAULT_BASE_URL)
    books_api_timeout: float = float(os.getenv("BOOKS_API_TIMEOUT", "10"))

    # CLI çıktısı: plain | json | rich
    output_mode: str = os.getenv("BOOKS_CLI_OUTPUT", "plain")

    # Günlükleme
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Book Manager")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")


settings = Settings()


def configure_logging() -> None:
    """Kök günlükleyiciyi ayarlardaki seviyeyle yapılandır."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
    )
