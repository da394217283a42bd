import asyncio
import sys

from seed.seed import main
from storefront_e2e.config import settings
from storefront_e2e.logging_config import configure_logging

configure_logging(level=settings.log_level, json_logs=settings.json_logs)
sys.exit(asyncio.run(main()))
