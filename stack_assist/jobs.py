"""Scheduled jobs run outside the API process (cron, systemd timer, ...)."""

import asyncio
import logging

from stack_assist.config import settings
from stack_assist.core.mailer import MailSender
from stack_assist.database import SessionLocal
from stack_assist.schemas.notification_schemas import ScanResultResponse
from stack_assist.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


async def run_expiration_scan() -> ScanResultResponse:
    """Scan every tenant once"""
    db = SessionLocal()
    try:
        return await NotificationService(db).scan_all(MailSender())
    finally:
        db.close()


def main() -> None:
    """Entry point of the stack-assist-scan console script"""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    result = asyncio.run(run_expiration_scan())
    logger.info(
        "Expiration scan finished: %d items, %d notifications, %d emails sent, %d failed",
        result.scanned,
        result.notifications_created,
        result.emails_sent,
        result.emails_failed,
    )


if __name__ == "__main__":
    main()
