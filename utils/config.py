"""Configuration utilities for Voicecraft."""

import os
from dotenv import load_dotenv
from utils.logging import get_logger
from typing import List

# Load environment variables from .env file
load_dotenv()

# Initialize module logger
logger = get_logger(__name__)

# Content types the upload route can turn into text
PLAIN_TEXT = "text/plain"
PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

class Settings:
    """Settings container class for application configuration"""
    def __init__(self):
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

        # CORS Configuration
        self.CORS_ORIGINS = self._get_cors_origins()

        # Text limits
        self.MAX_TEXT_LENGTH = int(os.getenv("MAX_TEXT_LENGTH", "50000"))

        # Upload limits and whitelist
        self.MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
        self.MAX_UPLOAD_BYTES = self.MAX_UPLOAD_MB * 1024 * 1024
        self.ALLOWED_UPLOAD_TYPES = (PLAIN_TEXT, PDF, DOCX)

        # Mock audio rendering
        self.AUDIO_SAMPLE_RATE = int(os.getenv("AUDIO_SAMPLE_RATE", "44100"))
        self.DOWNLOAD_DURATION_SECONDS = int(os.getenv("DOWNLOAD_DURATION_SECONDS", "5"))

        # Request logging middleware
        self.REQUEST_LOGGING_ENABLED = os.getenv("REQUEST_LOGGING_ENABLED", "true").lower() == "true"

    def _get_cors_origins(self) -> List[str]:
        """Get CORS origins based on environment."""
        if self.ENVIRONMENT == "production":
            # Restrict CORS origins in production
            origins_str = os.getenv("CORS_ORIGINS", "")
            if origins_str:
                origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]
                logger.info(f"Production CORS origins: {origins}")
                return origins
            else:
                logger.warning("No CORS_ORIGINS specified for production environment")
                return []
        else:
            # Allow all origins in development
            return ["*"]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

# Create a singleton settings instance
settings = Settings()

def validate_config(cfg: Settings = None) -> bool:
    """Validate that configured limits are usable."""
    cfg = cfg or settings
    config_logger = get_logger(__name__, {"operation": "config_validation"})

    if cfg.MAX_TEXT_LENGTH <= 0:
        config_logger.warning(f"MAX_TEXT_LENGTH must be positive, got {cfg.MAX_TEXT_LENGTH}")
        return False

    if cfg.MAX_UPLOAD_BYTES <= 0:
        config_logger.warning(f"MAX_UPLOAD_MB must be positive, got {cfg.MAX_UPLOAD_MB}")
        return False

    if cfg.AUDIO_SAMPLE_RATE <= 0:
        config_logger.warning(f"AUDIO_SAMPLE_RATE must be positive, got {cfg.AUDIO_SAMPLE_RATE}")
        return False

    if cfg.DOWNLOAD_DURATION_SECONDS < 0:
        config_logger.warning(f"DOWNLOAD_DURATION_SECONDS cannot be negative, got {cfg.DOWNLOAD_DURATION_SECONDS}")
        return False

    if cfg.is_production() and not cfg.CORS_ORIGINS:
        config_logger.warning("Production environment has no CORS origins configured")
        return False

    config_logger.info("Configuration validation successful")
    return True
