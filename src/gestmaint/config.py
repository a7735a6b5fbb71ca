#!/usr/bin/env python3
"""Central configuration for the gestmaint client."""

import os
from pathlib import Path
from typing import Dict, Any

from dotenv import load_dotenv

# Load environment variables from a .env file if present
load_dotenv()

DEFAULT_API_URL = "http://localhost:8080/api"


class Config:
    """Project configuration container."""

    # === PATHS AND STRUCTURE ===
    PROJECT_ROOT = Path(__file__).resolve().parent
    LOGS_DIR = PROJECT_ROOT.parent.parent / "logs"

    # === REST BACKEND ===
    API_CONFIG = {
        "base_url": os.getenv("GESTMAINT_API_URL", DEFAULT_API_URL),
        "chat_url": os.getenv("GESTMAINT_CHAT_URL"),      # None → <base_url>/ai/chat
        "timeout": float(os.getenv("GESTMAINT_TIMEOUT", "30")),
        "user_agent": "gestmaint/0.1",
    }

    # === BATCH LOADING ===
    BATCH_CONFIG = {
        "max_workers": 6,                                 # dashboard = 6 appels parallèles
    }

    # === LOGGING ===
    LOGGING_CONFIG = {
        "dir": LOGS_DIR,
        "prefix": "gestmaint",
        "level": os.getenv("LOG_LEVEL", "INFO"),          # niveau du fichier
        "retention_days": int(os.getenv("GESTMAINT_LOG_RETENTION_DAYS", "7")),
    }

    # === CONTACT PAGE ===
    CONTACT_CONFIG = {
        "email": os.getenv("GESTMAINT_CONTACT_EMAIL", "contact.gestioncdm@gmail.com"),
        "whatsapp": os.getenv("GESTMAINT_CONTACT_WHATSAPP", "212600000000"),
        "subject": "Demande d'information",
    }

    @classmethod
    def get_api_config(cls) -> Dict[str, Any]:
        """Return REST backend configuration."""
        return cls.API_CONFIG.copy()

    @classmethod
    def get_batch_config(cls) -> Dict[str, Any]:
        """Return batch loading configuration."""
        return cls.BATCH_CONFIG.copy()

    @classmethod
    def get_contact_config(cls) -> Dict[str, Any]:
        """Return contact page configuration."""
        return cls.CONTACT_CONFIG.copy()

    @classmethod
    def get_logging_config(cls) -> Dict[str, Any]:
        """Return logging configuration (log directory, level, retention)."""
        return cls.LOGGING_CONFIG.copy()
