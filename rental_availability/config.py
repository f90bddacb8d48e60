"""Application settings, read from the environment (and a local .env file)."""

import os
from pathlib import Path

from dotenv import load_dotenv

from rental_availability.utils.constants import DEFAULT_TIMEZONE

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[1]


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
    APP_ENV = os.getenv("APP_ENV", "development")
    DATA_PATH = os.getenv("DATA_PATH") or str(BASE_DIR / "data.pkl")
    APP_TIMEZONE = os.getenv("APP_TIMEZONE", DEFAULT_TIMEZONE)
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
