#!/usr/bin/env python3
"""SMTP server startup script for the GroupMirror feed bot.

Starts an aiosmtpd server with FeedBotSMTPHandler. Every accepted email is
parsed for subjectId= and message= and posted to that subject's feed.

Usage:
    python scripts/start_smtp_server.py

Configuration (environment or .env, see config.Settings):
    SMTP_HOST: Bind address (default: 0.0.0.0)
    SMTP_PORT: Listen port (default: 2525)
    SMTP_DOMAIN: Server hostname announced in the greeting
    SMTP_MAX_SIZE: Max email size in bytes (default: 10 MB)
    INBOUND_EMAIL_ADDRESS: Only accept mail for this address (unset = any)
    FEED_BOT_USER_ID: User id the feed items are posted as
    DEFAULT_NETWORK_ID: Network for subjects without one (unset = internal org)
    DATABASE_URL: Database connection string
"""

import asyncio
import logging
import os
import sys

from aiosmtpd.controller import Controller

# Add backend/src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from config import settings
from database import get_db_session
from infrastructure.ingest.smtp_handler import FeedBotSMTPHandler
from observability.logging_config import configure_logging

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
logger = logging.getLogger(__name__)


async def main():
    """Start the SMTP server and block until interrupted."""
    logger.info("=== GroupMirror SMTP Server Starting ===")
    logger.info(f"SMTP Bind: {settings.SMTP_HOST}:{settings.SMTP_PORT}")
    logger.info(f"SMTP Domain: {settings.SMTP_DOMAIN}")
    logger.info(f"Max Message Size: {settings.SMTP_MAX_SIZE} bytes")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[-1]}")  # Hide credentials
    logger.info(f"Posting as: {settings.FEED_BOT_USER_ID}")

    smtp_handler = FeedBotSMTPHandler(
        session_factory=get_db_session,
        bot_user_id=settings.FEED_BOT_USER_ID,
        default_network_id=settings.DEFAULT_NETWORK_ID,
        inbound_address=settings.INBOUND_EMAIL_ADDRESS,
    )

    controller = Controller(
        smtp_handler,
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        server_hostname=settings.SMTP_DOMAIN,
        data_size_limit=settings.SMTP_MAX_SIZE,
        enable_SMTPUTF8=True,
    )
    controller.start()

    logger.info(f"SMTP server started on {settings.SMTP_HOST}:{settings.SMTP_PORT}")
    if settings.INBOUND_EMAIL_ADDRESS:
        logger.info(f"Accepting emails to: {settings.INBOUND_EMAIL_ADDRESS}")
    logger.info("Press Ctrl+C to stop")

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        logger.info("Shutting down SMTP server...")
        controller.stop()
        logger.info("SMTP server stopped")


if __name__ == '__main__':
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, exiting")
        sys.exit(0)
    except Exception as e:
        logger.error(f"SMTP server failed: {e}", exc_info=True)
        sys.exit(1)
