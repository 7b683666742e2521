"""
Fail active challenges whose end date has passed.

The application has no scheduler of its own; run this from cron, e.g.::

    */15 * * * * cd /srv/finance-tracker && python -m scripts.expire_challenges
"""

import asyncio

from components.core.config import get_settings
from components.core.init_db import db_manager
from components.core.logging_config import get_logger, setup_logging
from components.category.repository import CategoryRepository
from components.challenge.repository import ChallengeRepository
from components.challenge.service import ChallengeService
from components.expense.repository import ExpenseRepository
from components.notification.dispatcher import NotificationDispatcher
from components.notification.repository import NotificationRepository

logger = get_logger(__name__)


async def expire_challenges() -> int:
    """Run one expiry pass. Returns the number of challenges marked failed."""
    async with db_manager.get_db() as db:
        service = ChallengeService(
            ChallengeRepository(db),
            ExpenseRepository(db),
            CategoryRepository(db),
            NotificationDispatcher(NotificationRepository(db)),
        )
        failed = await service.expire_overdue()
    await db_manager.dispose()
    logger.info(f"Expired {len(failed)} overdue challenges")
    return len(failed)


if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    asyncio.run(expire_challenges())
