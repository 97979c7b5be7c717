#!/usr/bin/env python3
"""
GPay Connection Status Checker

Validates GPAY_* configuration, then performs one signed balance query to
confirm credentials, request signing and response verification end to end.
"""

import asyncio
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(__file__))

from config import Config
from services.gpay_exceptions import GPayError
from services.gpay_service import GPayService

logger = logging.getLogger(__name__)


async def check_gpay_status() -> bool:
    """Check GPay configuration and a live signed round trip"""

    print("=" * 60)
    print("GPAY WALLET CONNECTION STATUS CHECK")
    print("=" * 60)
    print()

    print("📋 Environment Configuration:")
    for name in ("GPAY_API_KEY", "GPAY_SECRET_KEY", "GPAY_PASSWORD"):
        print(f"   {name}: {'✅ Set' if getattr(Config, name) else '❌ Not Set'}")
    print(f"   GPAY_BASE_URL: {Config.GPAY_BASE_URL}")
    print()

    if not Config.validate_gpay_configuration():
        print("❌ Configuration incomplete - set the missing GPAY_* variables and retry")
        return False

    print("🔌 Querying wallet balance...")
    try:
        service = GPayService.from_config()
        balance = await service.get_balance()
    except GPayError as e:
        print(f"   ❌ {type(e).__name__}: {e}")
        return False

    print("   ✅ Signed request accepted and response signature verified")
    print(f"   💰 Balance: {balance.balance}")
    print(f"   🕒 Gateway time: {balance.response_time.isoformat() if balance.response_time else 'n/a'}")
    print()
    print("=" * 60)
    return True


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    sys.exit(0 if asyncio.run(check_gpay_status()) else 1)
