"""Configuration settings for the orders API."""
import os
from typing import List


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# Database Configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./database/mydb.sqlite")
# Declare orders.email -> users.email (enforced by the datastore when on)
ORDERS_EMAIL_FOREIGN_KEY = _env_flag("ORDERS_EMAIL_FOREIGN_KEY")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# CORS ("*" in methods/headers lifts the restriction)
CORS_ALLOW_ORIGINS = _env_list("CORS_ALLOW_ORIGINS", "*")
CORS_ALLOW_METHODS = _env_list("CORS_ALLOW_METHODS", "GET,POST")
CORS_ALLOW_HEADERS = _env_list("CORS_ALLOW_HEADERS", "Content-Type")

# Observability
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# Unset means nothing is exported
OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

# Application Settings
SERVICE_NAME = "orders-api"
API_VERSION = "1.0.0"
