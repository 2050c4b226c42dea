import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./dctrack.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    APP_URL = data.get("APP_URL", "http://localhost:8000")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_MINUTES = int(data.get("JWT_EXPIRE_MINUTES", 120))
    SHARE_LINK_HOURS = int(data.get("SHARE_LINK_HOURS", 24))
    AUDIT_PAGE_SIZE = int(data.get("AUDIT_PAGE_SIZE", 25))
    AUDIT_MAX_PAGE_SIZE = int(data.get("AUDIT_MAX_PAGE_SIZE", 100))
    STORAGE_ROOT = data.get("STORAGE_ROOT", os.path.join(ROOT_PATH, "storage"))
    STORAGE_URL_PREFIX = data.get("STORAGE_URL_PREFIX", "/storage")
