import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parent
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: Optional[str] = None) -> Optional[str]:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys)
    if v is None:
        return default
    return float(v)


def _get_list(*keys: str, default: str) -> List[str]:
    v = _get_env(*keys, default=default) or ""
    return [item.strip() for item in v.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    mongo_db_url: str
    db_name: str
    jwt_secret: str
    backend_url: str
    cors_origins: List[str]
    stock_refresh_interval: float
    http_timeout: float
    currency: str
    delivery_fee: float


def _backend_url() -> str:
    url = _get_env("BACKEND_URL", "VITE_BACKEND_URL", default="http://localhost:4000")
    # ":4000" style values lose their scheme in some deployments
    if url.startswith(":"):
        url = "http://localhost" + url
    return url.rstrip("/")


settings = Settings(
    mongo_db_url=_get_env("MONGO_DB_URL", default="mongodb://localhost:27017"),
    db_name=_get_env("DB_NAME", default="Storefront"),
    jwt_secret=_get_env("JWT_SECRET", default="storefront-development-secret-key"),
    backend_url=_backend_url(),
    cors_origins=_get_list("CORS_ORIGINS", default="http://localhost:5173,http://localhost:3000"),
    stock_refresh_interval=_get_float("STOCK_REFRESH_INTERVAL", default=30.0),
    http_timeout=_get_float("HTTP_TIMEOUT", default=10.0),
    currency=_get_env("CURRENCY", default="Rs. "),
    delivery_fee=_get_float("DELIVERY_FEE", default=10.0),
)
