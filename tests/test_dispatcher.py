"""Tests for the best-effort notification dispatcher."""

from sqlalchemy.exc import OperationalError

from components.notification.dispatcher import NotificationDispatcher, NotificationEvent
from components.notification.models import Notification, NotificationType
from components.notification.repository import NotificationRepository


class RecordingSession:
    def __init__(self):
        self.rollbacks = 0
        self.refreshed = []

    async def rollback(self):
        self.rollbacks += 1

    async def refresh(self, instance):
        self.refreshed.append(instance)


class FlakyRepository:
    """Stores notifications in memory and fails for the titles it is given."""

    def __init__(self, failing_titles=()):
        self.session = RecordingSession()
        self.failing_titles = set(failing_titles)

    async def create(self, user_id, type, title, message, data=None):
        if title in self.failing_titles:
            raise OperationalError("INSERT INTO notifications", {}, Exception("database is locked"))
        return Notification(user_id=user_id, type=type.value, title=title, message=message, data=data)


def event(title, type=NotificationType.CHALLENGE_STARTED):
    return NotificationEvent(user_id=1, type=type, title=title, message=f"{title} happened")


async def test_dispatch_stores_every_event():
    repository = FlakyRepository()
    kept = object()

    created = await NotificationDispatcher(repository).dispatch([event("first"), event("second")], keep_loaded=[kept])

    assert [n.title for n in created] == ["first", "second"]
    assert repository.session.rollbacks == 0
    assert repository.session.refreshed == []


async def test_dispatch_skips_failed_event():
    repository = FlakyRepository(failing_titles={"second"})
    challenge, user = object(), object()

    created = await NotificationDispatcher(repository).dispatch(
        [event("first"), event("second"), event("third", NotificationType.CHALLENGE_COMPLETED)],
        keep_loaded=[challenge, user],
    )

    assert [n.title for n in created] == ["first", "third"]
    assert created[1].type == "challenge_completed"
    assert repository.session.rollbacks == 1
    assert repository.session.refreshed == [challenge, user]


async def test_dispatch_all_failed():
    repository = FlakyRepository(failing_titles={"first", "second"})

    created = await NotificationDispatcher(repository).dispatch([event("first"), event("second")])

    assert created == []
    assert repository.session.rollbacks == 2
    assert repository.session.refreshed == []


async def test_dispatch_nothing():
    repository = FlakyRepository()

    assert await NotificationDispatcher(repository).dispatch([]) == []


async def test_dispatch_partial_failure_keeps_instances_usable(db_session, test_user, monkeypatch):
    real_create = NotificationRepository.create

    async def create(self, **kwargs):
        if kwargs["type"] == NotificationType.SPENDING_LIMIT_DANGER:
            raise OperationalError("INSERT INTO notifications", {}, Exception("database is locked"))
        return await real_create(self, **kwargs)

    monkeypatch.setattr(NotificationRepository, "create", create)
    repository = NotificationRepository(db_session)
    user_id = test_user.id
    events = [
        NotificationEvent(user_id=user_id, type=NotificationType.SPENDING_LIMIT_DANGER,
                          title="Limit", message="Almost there"),
        NotificationEvent(user_id=user_id, type=NotificationType.LUXURY_SPENDING,
                          title="Luxury", message="Lots of treats", data={"share": 40.0}),
    ]

    created = await NotificationDispatcher(repository).dispatch(events, keep_loaded=[test_user])

    assert [n.type for n in created] == ["luxury_spending"]
    assert test_user.username == "testuser"
    stored = await repository.get_for_user(user_id)
    assert [(n.type, n.data) for n in stored] == [("luxury_spending", {"share": 40.0})]
