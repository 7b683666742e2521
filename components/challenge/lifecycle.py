"""
Challenge lifecycle.

A challenge moves suggested -> active -> completed or failed. Suggested and
active challenges can also be dismissed (cancelled). completed, failed and
dismissed are terminal.

Every function here mutates the challenge in memory, stamps ``updated_at`` and
returns the notification events the transition produces. Persisting both is
the caller's job.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, FrozenSet, List, Optional

from components.core.exceptions import InvalidDataError, InvalidTransitionError
from components.challenge.models import ChallengeStatus, ChallengeType
from components.notification.dispatcher import NotificationEvent
from components.notification.models import NotificationType

ALLOWED_TRANSITIONS: Dict[ChallengeStatus, FrozenSet[ChallengeStatus]] = {
    ChallengeStatus.SUGGESTED: frozenset({ChallengeStatus.ACTIVE, ChallengeStatus.DISMISSED}),
    ChallengeStatus.ACTIVE: frozenset({
        ChallengeStatus.COMPLETED,
        ChallengeStatus.FAILED,
        ChallengeStatus.DISMISSED,
    }),
}

DEFAULT_DURATION = timedelta(days=7)


@dataclass
class TransitionResult:
    challenge: object
    events: List[NotificationEvent] = field(default_factory=list)


def can_transition(current: ChallengeStatus, target: ChallengeStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(ChallengeStatus(current), frozenset())


def _move(challenge, target: ChallengeStatus, now: datetime) -> None:
    current = ChallengeStatus(challenge.status)
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot change challenge from {current.value} to {target.value}"
        )
    challenge.status = target.value
    challenge.updated_at = now


def _event(challenge, type: NotificationType, title: str, message: str) -> NotificationEvent:
    return NotificationEvent(
        user_id=challenge.user_id,
        type=type,
        title=title,
        message=message,
        data={"challengeId": challenge.id, "challengeType": ChallengeType(challenge.type).value},
    )


def clamp_progress(progress: float) -> float:
    progress = float(progress)
    if not math.isfinite(progress):
        raise InvalidDataError("Progress must be a finite number")
    return max(0.0, min(100.0, progress))


def start(challenge, now: Optional[datetime] = None) -> TransitionResult:
    """
    suggested -> active.

    The challenge keeps its proposed duration but is re-anchored to ``now``.
    """
    now = now or datetime.utcnow()
    duration = DEFAULT_DURATION
    if challenge.start_date and challenge.end_date and challenge.end_date > challenge.start_date:
        duration = challenge.end_date - challenge.start_date
    _move(challenge, ChallengeStatus.ACTIVE, now)
    challenge.start_date = now
    challenge.end_date = now + duration
    challenge.progress = 0.0
    return TransitionResult(challenge, [started_event(challenge)])


def started_event(challenge) -> NotificationEvent:
    return _event(
        challenge,
        NotificationType.CHALLENGE_STARTED,
        "Challenge started",
        f"You started the challenge \"{challenge.title}\". Good luck!",
    )


def cancel(challenge, now: Optional[datetime] = None) -> TransitionResult:
    """suggested or active -> dismissed."""
    now = now or datetime.utcnow()
    _move(challenge, ChallengeStatus.DISMISSED, now)
    event = _event(
        challenge,
        NotificationType.CHALLENGE_CANCELLED,
        "Challenge cancelled",
        f"The challenge \"{challenge.title}\" was cancelled.",
    )
    return TransitionResult(challenge, [event])


def retire(challenge, now: Optional[datetime] = None) -> TransitionResult:
    """suggested -> dismissed for a suggestion nobody acted on. Nobody is notified."""
    now = now or datetime.utcnow()
    if ChallengeStatus(challenge.status) != ChallengeStatus.SUGGESTED:
        raise InvalidTransitionError(
            f"Cannot retire a {ChallengeStatus(challenge.status).value} challenge"
        )
    _move(challenge, ChallengeStatus.DISMISSED, now)
    return TransitionResult(challenge)


def complete(challenge, now: Optional[datetime] = None) -> TransitionResult:
    """active -> completed."""
    now = now or datetime.utcnow()
    _move(challenge, ChallengeStatus.COMPLETED, now)
    challenge.progress = 100.0
    event = _event(
        challenge,
        NotificationType.CHALLENGE_COMPLETED,
        "Challenge completed",
        f"Congratulations! You completed the challenge \"{challenge.title}\".",
    )
    return TransitionResult(challenge, [event])


def fail(challenge, now: Optional[datetime] = None) -> TransitionResult:
    """active -> failed."""
    now = now or datetime.utcnow()
    _move(challenge, ChallengeStatus.FAILED, now)
    event = _event(
        challenge,
        NotificationType.CHALLENGE_FAILED,
        "Challenge failed",
        f"The challenge \"{challenge.title}\" ended before it was completed.",
    )
    return TransitionResult(challenge, [event])


def update_progress(challenge, progress: float, current_value: Optional[float] = None,
                    now: Optional[datetime] = None) -> TransitionResult:
    """
    Record progress on an active challenge.

    Progress is clamped into [0, 100]; reaching 100 completes the challenge.
    """
    now = now or datetime.utcnow()
    if ChallengeStatus(challenge.status) != ChallengeStatus.ACTIVE:
        raise InvalidTransitionError(
            f"Cannot update progress of a {ChallengeStatus(challenge.status).value} challenge"
        )
    challenge.progress = clamp_progress(progress)
    if current_value is not None:
        challenge.current_value = current_value
    challenge.updated_at = now

    if challenge.progress >= 100:
        return complete(challenge, now)
    return TransitionResult(challenge)


def is_overdue(challenge, now: datetime) -> bool:
    return ChallengeStatus(challenge.status) == ChallengeStatus.ACTIVE and challenge.end_date < now
