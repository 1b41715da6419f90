import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    secret_key: str
    env: str

    admin_user: str
    admin_pass: str

    data_dir: str
    submissions_filename: str

    port: int
    admin_port: int
    cors_origins: tuple[str, ...]


def _getenv(name: str, default: str = "") -> str:
    return (os.environ.get(name) or default).strip()


def _getint(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s value %r; using default %s", name, raw, default)
        return default


def load_settings() -> Settings:
    origins = tuple(o.strip() for o in _getenv("CORS_ORIGINS", "*").split(",") if o.strip())
    return Settings(
        secret_key=_getenv("SECRET_KEY", "change-me"),
        env=_getenv("ENV", "development"),
        admin_user=_getenv("ADMIN_USER", "admin"),
        admin_pass=_getenv("ADMIN_PASS", "change-me"),
        data_dir=_getenv("DATA_DIR", os.path.join(os.getcwd(), "data")),
        submissions_filename=_getenv("SUBMISSIONS_FILENAME", "submissions.csv"),
        port=_getint("PORT", 3000),
        admin_port=_getint("ADMIN_PORT", 3001),
        cors_origins=origins or ("*",),
    )


def load_config() -> dict:
    s = load_settings()
    is_production = s.env in ("prod", "production")
    return {
        "SECRET_KEY": s.secret_key,
        "ENV": s.env,
        "ADMIN_USER": s.admin_user,
        "ADMIN_PASS": s.admin_pass,
        "DATA_DIR": s.data_dir,
        "SUBMISSIONS_FILENAME": s.submissions_filename,
        "PORT": s.port,
        "ADMIN_PORT": s.admin_port,
        "CORS_ORIGINS": list(s.cors_origins),
        # security defaults
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
        "SESSION_COOKIE_SECURE": is_production,
        # intake payloads are small
        "MAX_CONTENT_LENGTH": 1 * 1024 * 1024,
    }
