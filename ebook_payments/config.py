import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"

DEFAULT_ORIGINS = [
    "https://donation-jpc.com",
    "https://www.donation-jpc.com",
    "http://localhost:3000",
]


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def _resolve_path(raw: Optional[str]) -> Path:
    if not raw:
        return BASE_DIR / "ebooks" / "um-presente.pdf"
    path = Path(raw)
    # relative paths are taken from the project root, not the cwd
    return path if path.is_absolute() else BASE_DIR / path


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, built once at startup and handed to the app."""

    stripe_secret_key: str
    port: int = 3001
    allowed_origins: List[str] = field(default_factory=lambda: list(DEFAULT_ORIGINS))
    currency: str = "eur"
    product: str = "ebook"
    ebook_path: Path = BASE_DIR / "ebooks" / "um-presente.pdf"
    download_filename: str = "Um-Presente.pdf"
    log_level: str = "INFO"
    service_name: str = "ebook-payments"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(dotenv_path=ENV_PATH)

        secret_key = os.getenv("STRIPE_SECRET_KEY")
        if not secret_key:
            raise RuntimeError("STRIPE_SECRET_KEY is not set. Check your .env file.")

        return cls(
            stripe_secret_key=secret_key,
            port=int(os.getenv("PORT", "3001")),
            allowed_origins=_split_origins(os.getenv("FRONTEND_ORIGINS")),
            currency=os.getenv("PAYMENT_CURRENCY", "eur").lower(),
            ebook_path=_resolve_path(os.getenv("EBOOK_PATH")),
            download_filename=os.getenv("EBOOK_DOWNLOAD_NAME", "Um-Presente.pdf"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
