import os
from pathlib import Path
from typing import List

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_list(val: str | None, default: List[str]) -> List[str]:
    if not val:
        return list(default)
    return [item.strip() for item in val.split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        self.DATA_DIR: Path = Path(os.getenv("BOOKSWAP_DATA_DIR", str(BACKEND_ROOT / "data")))
        self.DB_PATH: Path = Path(os.getenv("BOOKSWAP_DB_PATH", str(self.DATA_DIR / "database.json")))
        self.UPLOADS_DIR: Path = Path(os.getenv("BOOKSWAP_UPLOADS_DIR", str(self.DATA_DIR / "uploads")))
        self.UPLOADS_URL: str = "/" + os.getenv("BOOKSWAP_UPLOADS_URL", "/uploads").strip("/")
        self.CORS_ORIGINS: List[str] = _as_list(os.getenv("BOOKSWAP_CORS_ORIGINS"), ["*"])
        self.LOG_LEVEL: str = os.getenv("BOOKSWAP_LOG_LEVEL", "INFO").upper()
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "3001"))
        self.RELOAD: bool = _as_bool(os.getenv("BOOKSWAP_RELOAD"), False)


settings = Settings()
