"""
Challenge service.

Loads challenges, checks ownership, applies a lifecycle transition, commits it
and then dispatches the notification events the transition returned. Every
transition therefore notifies the user without the HTTP layer having to
remember to do so.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from components.core.config import Settings, get_settings
from components.core.exceptions import ConflictError, InvalidDataError, NotFoundError, ensure_owner
from components.core.logging_config import get_logger
from components.category.repository import CategoryRepository
from components.challenge import lifecycle
from components.challenge.lifecycle import TransitionResult
from components.challenge.metadata import dump_metadata, parse_metadata
from components.challenge.models import Challenge, ChallengeStatus
from components.challenge.repository import ChallengeRepository
from components.challenge.schemas import ChallengeStart
from components.challenge.suggestions import build_suggestions
from components.expense.repository import ExpenseRepository
from components.notification.dispatcher import NotificationDispatcher, NotificationEvent
from components.notification.models import NotificationType

logger = get_logger(__name__)


class ChallengeService:
    """Challenge use cases for one request."""

    def __init__(
        self,
        challenges: ChallengeRepository,
        expenses: ExpenseRepository,
        categories: CategoryRepository,
        dispatcher: NotificationDispatcher,
        settings: Optional[Settings] = None,
    ):
        self.challenges = challenges
        self.expenses = expenses
        self.categories = categories
        self.dispatcher = dispatcher
        self.settings = settings or get_settings()

    async def _get_owned(self, user_id: int, challenge_id: int) -> Challenge:
        challenge = await self.challenges.get_by_id(challenge_id)
        return ensure_owner(challenge, user_id, "Challenge")

    async def _apply(self, result: TransitionResult) -> Challenge:
        challenge = await self.challenges.save(result.challenge)
        await self.dispatcher.dispatch(result.events, keep_loaded=[challenge])
        return challenge

    async def _ensure_no_other_active(self, user_id: int, challenge_id: Optional[int] = None) -> None:
        active = await self.challenges.get_active(user_id)
        if active is not None and active.id != challenge_id:
            raise ConflictError("You already have an active challenge")

    async def list_challenges(self, user_id: int) -> List[Challenge]:
        return await self.challenges.get_for_user(user_id)

    async def get_active(self, user_id: int) -> Challenge:
        challenge = await self.challenges.get_active(user_id)
        if challenge is None:
            raise NotFoundError("No active challenge")
        return challenge

    async def get_suggestions(self, user_id: int, now: Optional[datetime] = None) -> List[Challenge]:
        """
        Pending suggestions of the user, generating a fresh batch when there are none.

        Suggestions whose proposed window has passed do not count as pending;
        once all of them are stale they are retired and replaced. Generated
        suggestions are persisted so they can later be started or dismissed by id.
        """
        now = now or datetime.utcnow()
        existing = await self.challenges.get_for_user(user_id, ChallengeStatus.SUGGESTED)
        pending = [challenge for challenge in existing if challenge.end_date >= now]
        if pending:
            return pending
        if existing:
            for challenge in existing:
                lifecycle.retire(challenge, now)
            await self.challenges.save_all(existing)
            logger.info(f"Retired {len(existing)} stale suggestions of user {user_id}")

        since = (now - timedelta(days=self.settings.SUGGESTION_LOOKBACK_DAYS)).date()
        expenses = await self.expenses.get_since(user_id, since)
        drafts = build_suggestions(
            expenses,
            await self.categories.get_map(),
            lookback_days=self.settings.SUGGESTION_LOOKBACK_DAYS,
            duration_days=self.settings.DEFAULT_CHALLENGE_DAYS,
            limit=self.settings.MAX_SUGGESTIONS,
        )
        if not drafts:
            return []

        suggestions = await self.challenges.add_all([
            Challenge(
                user_id=user_id,
                title=draft.title,
                description=draft.description,
                type=draft.type.value,
                status=ChallengeStatus.SUGGESTED.value,
                start_date=now,
                end_date=now + timedelta(days=draft.duration_days),
                progress=0.0,
                target_value=draft.target_value,
                current_value=0.0,
                created_at=now,
                updated_at=now,
                challenge_metadata=dump_metadata(draft.metadata),
            )
            for draft in drafts
        ])
        logger.info(f"Generated {len(suggestions)} challenge suggestions for user {user_id}")
        await self.dispatcher.dispatch([NotificationEvent(
            user_id=user_id,
            type=NotificationType.CHALLENGE_SUGGESTED,
            title="New challenges for you",
            message=f"We prepared {len(suggestions)} challenges based on your recent spending.",
            data={"challengeIds": [challenge.id for challenge in suggestions]},
        )], keep_loaded=suggestions)
        return suggestions

    async def start(self, user_id: int, payload: ChallengeStart, now: Optional[datetime] = None) -> Challenge:
        """Start a stored suggestion, or create and start a user-defined challenge."""
        now = now or datetime.utcnow()
        if payload.challenge_id is not None:
            challenge = await self._get_owned(user_id, payload.challenge_id)
            await self._ensure_no_other_active(user_id, challenge.id)
            result = lifecycle.start(challenge, now)
            logger.info(f"User {user_id} started suggested challenge {challenge.id}")
            return await self._apply(result)

        if payload.type is None or not payload.title:
            raise InvalidDataError("Either challengeId or type and title are required")
        metadata = parse_metadata(payload.type.value, payload.metadata)
        await self._ensure_no_other_active(user_id)

        days = payload.duration_days or self.settings.DEFAULT_CHALLENGE_DAYS
        challenge = await self.challenges.add(Challenge(
            user_id=user_id,
            title=payload.title,
            description=payload.description,
            type=payload.type.value,
            status=ChallengeStatus.ACTIVE.value,
            start_date=now,
            end_date=now + timedelta(days=days),
            progress=0.0,
            target_value=payload.target_value,
            current_value=0.0,
            created_at=now,
            updated_at=now,
            challenge_metadata=dump_metadata(metadata),
        ))
        logger.info(f"User {user_id} created challenge {challenge.id} ({payload.type.value})")
        await self.dispatcher.dispatch([lifecycle.started_event(challenge)], keep_loaded=[challenge])
        return challenge

    async def cancel(self, user_id: int, challenge_id: int, now: Optional[datetime] = None) -> Challenge:
        challenge = await self._get_owned(user_id, challenge_id)
        result = lifecycle.cancel(challenge, now)
        logger.info(f"User {user_id} cancelled challenge {challenge_id}")
        return await self._apply(result)

    async def update_progress(self, user_id: int, challenge_id: int, progress: float,
                              current_value: Optional[float] = None,
                              now: Optional[datetime] = None) -> Challenge:
        challenge = await self._get_owned(user_id, challenge_id)
        result = lifecycle.update_progress(challenge, progress, current_value, now)
        return await self._apply(result)

    async def expire_overdue(self, now: Optional[datetime] = None) -> List[Challenge]:
        """Fail every active challenge whose end date is before ``now``."""
        now = now or datetime.utcnow()
        failed = []
        for challenge in await self.challenges.get_overdue(now):
            failed.append(await self._apply(lifecycle.fail(challenge, now)))
            logger.info(f"Challenge {challenge.id} of user {challenge.user_id} expired")
        return failed
