"""
Kaiqiu client core - Main entry point.

Restores the persisted session, refreshes the profile when logged in,
and reports what the UI layer would start with.
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv
load_dotenv()  # feature flags read os.environ at import time

from adapters.loader import create_app_context
from config.features import features

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ],
)
logger = logging.getLogger(__name__)

# Set DEBUG level only for our app loggers, not for noisy libraries
if features.DEBUG_MODE:
    for name in ['adapters', 'core', 'infrastructure', '__main__']:
        logging.getLogger(name).setLevel(logging.DEBUG)
    # Silence noisy HTTP debug logs
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)


async def main():
    """Start the client core, report session status, shut down."""

    # Log feature status
    logger.info("=== Kaiqiu Client Starting ===")
    logger.info("Feature Flags:")
    for key, value in features.to_dict().items():
        logger.info(f"  {key}: {value}")

    context = await create_app_context()
    try:
        session = context.session
        logger.info(f"Preferences file: {context.store.path}")
        logger.info(f"Selected city: {session.city_name}")

        if session.is_authenticated:
            await session.refresh_user_info()
            profile = session.user_info.value
            logger.info(f"Logged in as {profile.uid if profile else 'unknown user'}")
        else:
            logger.info("Not logged in")

        logger.info(f"Recent searches: {session.search_player_his.value}")
    finally:
        await context.close()
        logger.info("Client closed.")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Stopped by user (Ctrl+C)")
