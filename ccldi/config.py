# -*- coding: utf-8 -*-
"""
Application configuration read from environment variables (and a .env file).
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./database/ccldi.db")
    ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:8080")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.environ.get("LOG_FILE") or None
    SERVICE_NAME = "CCLDI Backend API"

    # Render still hands out the legacy scheme
    if DATABASE_URL.startswith("postgres://"):
        DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

    @classmethod
    def is_production(cls):
        return cls.ENVIRONMENT == "production"
