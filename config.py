"""Configuration management for the GPay wallet client"""

import os
import logging

from models import BaseUrl
from utils.data_sanitizer import mask_api_key_safe

logger = logging.getLogger(__name__)


class Config:
    """Application configuration"""

    # Environment detection
    # ENVIRONMENT takes priority, then GPAY_ENVIRONMENT
    ENVIRONMENT = os.getenv("ENVIRONMENT", os.getenv("GPAY_ENVIRONMENT", "")).lower().strip()
    IS_PRODUCTION = ENVIRONMENT == "production"
    CURRENT_ENVIRONMENT = "production" if IS_PRODUCTION else "development"

    # GPay credentials (issued per merchant wallet)
    GPAY_API_KEY = os.getenv("GPAY_API_KEY")
    GPAY_SECRET_KEY = os.getenv("GPAY_SECRET_KEY")
    GPAY_PASSWORD = os.getenv("GPAY_PASSWORD")
    GPAY_ENABLED = bool(GPAY_API_KEY and GPAY_SECRET_KEY and GPAY_PASSWORD)

    # GPay routing: accepts a full URL or STAGING / PRODUCTION / DEV
    GPAY_BASE_URL = os.getenv(
        "GPAY_BASE_URL",
        BaseUrl.PRODUCTION.value if IS_PRODUCTION else BaseUrl.STAGING.value,
    ).strip()
    GPAY_LANGUAGE = os.getenv("GPAY_LANGUAGE", "en").strip() or "en"
    GPAY_REQUEST_TIMEOUT = int(os.getenv("GPAY_REQUEST_TIMEOUT", "30"))  # seconds

    @staticmethod
    def validate_gpay_configuration() -> bool:
        """Log GPay configuration posture and report whether the client can be built"""
        logger.info("🔧 GPay Configuration:")
        logger.info(f"   Environment: {Config.CURRENT_ENVIRONMENT.upper()}")
        logger.info(f"   GPAY_API_KEY: {mask_api_key_safe(Config.GPAY_API_KEY)}")

        valid = True
        for name in ("GPAY_SECRET_KEY", "GPAY_PASSWORD"):
            if getattr(Config, name):
                logger.info(f"   {name}: ✅ Configured")
            else:
                logger.warning(f"⚠️ {name} not configured")
                valid = False
        if not Config.GPAY_API_KEY:
            valid = False

        base_url = BaseUrl.resolve(Config.GPAY_BASE_URL)
        if base_url is None:
            logger.error(f"❌ GPAY_BASE_URL is not a known GPay endpoint: {Config.GPAY_BASE_URL}")
            valid = False
        else:
            logger.info(f"   Base URL: {base_url.name} ({base_url.value})")
            if Config.IS_PRODUCTION and base_url is not BaseUrl.PRODUCTION:
                logger.warning(f"⚠️ Production environment is using the {base_url.name} GPay endpoint")

        if Config.GPAY_REQUEST_TIMEOUT <= 0:
            logger.error(f"❌ GPAY_REQUEST_TIMEOUT must be positive, got {Config.GPAY_REQUEST_TIMEOUT}")
            valid = False

        logger.info(f"   Language: {Config.GPAY_LANGUAGE}, Timeout: {Config.GPAY_REQUEST_TIMEOUT}s")
        if valid:
            logger.info("✅ GPay configuration validated")
        return valid
