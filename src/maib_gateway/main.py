"""Close the merchant's business day.

The gateway expects the business day to be closed once every 24 hours, so this
entry point is meant to be run from cron or a scheduler. Configuration comes
from the ``MAIB_*`` environment variables (see ``maib_gateway.env``).
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys

from .domain.errors import GatewayError
from .env import Settings, get_settings
from .gateway import MaibGateway

logger = logging.getLogger(__name__)


async def close_business_day(settings: Settings) -> dict[str, str]:
    gateway = MaibGateway.from_certificate_file(
        settings.cert_path,
        settings.cert_passphrase,
        settings.merchant_handler_url,
        insecure_skip_verify=settings.insecure_skip_verify,
        timeout=settings.timeout,
    )
    async with gateway:
        return await gateway.create_command().close_day()


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        response = asyncio.run(close_business_day(settings))
    except GatewayError as e:
        logger.error("Closing the business day failed: %s", e)
        return 1
    print(json.dumps(response, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
