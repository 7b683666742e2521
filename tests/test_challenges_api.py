"""Tests for the challenge endpoints and the challenge service."""

from datetime import datetime, timedelta

from components.category.repository import CategoryRepository
from components.challenge.models import Challenge
from components.challenge.repository import ChallengeRepository
from components.challenge.service import ChallengeService
from components.core.security import create_access_token
from components.expense.repository import ExpenseRepository
from components.notification.dispatcher import NotificationDispatcher
from components.notification.repository import NotificationRepository

CUSTOM_CHALLENGE = {
    "type": "category_limit",
    "title": "Fewer restaurant visits",
    "description": "Keep restaurants under 50",
    "targetValue": 50,
    "metadata": {"categoryId": 1, "limitAmount": 50},
    "durationDays": 10,
}


def make_service(db_session) -> ChallengeService:
    return ChallengeService(
        ChallengeRepository(db_session),
        ExpenseRepository(db_session),
        CategoryRepository(db_session),
        NotificationDispatcher(NotificationRepository(db_session)),
    )


async def notification_types(client):
    return [n["type"] for n in (await client.get("/api/notifications")).json()]


async def test_suggestions_generated_once(auth_client, categories):
    response = await auth_client.get("/api/challenges/suggestions")

    assert response.status_code == 200
    suggestions = response.json()
    assert len(suggestions) == 1
    assert suggestions[0]["type"] == "consistency"
    assert suggestions[0]["status"] == "suggested"
    assert suggestions[0]["metadata"] == {"type": "consistency", "requiredDays": 7}
    assert await notification_types(auth_client) == ["challenge_suggested"]

    again = (await auth_client.get("/api/challenges/suggestions")).json()
    assert [s["id"] for s in again] == [suggestions[0]["id"]]
    assert await notification_types(auth_client) == ["challenge_suggested"]


async def test_start_suggestion_and_complete(auth_client, categories):
    suggestion = (await auth_client.get("/api/challenges/suggestions")).json()[0]

    started = await auth_client.post("/api/challenges/start", json={"challengeId": suggestion["id"]})
    assert started.status_code == 201
    assert started.json()["status"] == "active"
    assert started.json()["progress"] == 0

    active = await auth_client.get("/api/challenges/active")
    assert active.status_code == 200
    assert active.json()["id"] == suggestion["id"]

    halfway = await auth_client.put(
        f"/api/challenges/{suggestion['id']}/update-progress", json={"progress": 50, "currentValue": 3}
    )
    assert halfway.status_code == 200
    assert halfway.json()["status"] == "active"
    assert halfway.json()["progress"] == 50
    assert halfway.json()["currentValue"] == 3

    done = await auth_client.put(f"/api/challenges/{suggestion['id']}/update-progress", json={"progress": 140})
    assert done.json()["status"] == "completed"
    assert done.json()["progress"] == 100

    late = await auth_client.put(f"/api/challenges/{suggestion['id']}/update-progress", json={"progress": 10})
    assert late.status_code == 400

    assert sorted(await notification_types(auth_client)) == [
        "challenge_completed", "challenge_started", "challenge_suggested",
    ]
    assert (await auth_client.get("/api/challenges/active")).status_code == 404


async def test_start_custom_challenge(auth_client, categories):
    response = await auth_client.post("/api/challenges/start", json=CUSTOM_CHALLENGE)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "active"
    assert data["metadata"] == {"type": "category_limit", "categoryId": 1, "limitAmount": 50.0}
    start = datetime.fromisoformat(data["startDate"])
    end = datetime.fromisoformat(data["endDate"])
    assert end - start == timedelta(days=10)
    assert await notification_types(auth_client) == ["challenge_started"]


async def test_only_one_active_challenge(auth_client, categories):
    await auth_client.post("/api/challenges/start", json=CUSTOM_CHALLENGE)

    second = await auth_client.post("/api/challenges/start", json=CUSTOM_CHALLENGE)

    assert second.status_code == 400
    assert second.json() == {"message": "You already have an active challenge"}
    assert len((await auth_client.get("/api/challenges")).json()) == 1


async def test_start_requires_definition(auth_client):
    response = await auth_client.post("/api/challenges/start", json={"title": "No type"})

    assert response.status_code == 400


async def test_start_rejects_invalid_metadata(auth_client):
    bad_weekdays = {"type": "time_based", "title": "Weekend", "metadata": {"weekdays": [9]}}
    wrong_tag = {"type": "time_based", "title": "Weekend", "metadata": {"type": "consistency", "requiredDays": 3}}

    assert (await auth_client.post("/api/challenges/start", json=bad_weekdays)).status_code == 400
    assert (await auth_client.post("/api/challenges/start", json=wrong_tag)).status_code == 400
    assert (await auth_client.get("/api/challenges")).json() == []


async def test_cancel_challenge(auth_client, categories):
    challenge = (await auth_client.post("/api/challenges/start", json=CUSTOM_CHALLENGE)).json()

    response = await auth_client.put(f"/api/challenges/{challenge['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["status"] == "dismissed"

    again = await auth_client.put(f"/api/challenges/{challenge['id']}/cancel")
    assert again.status_code == 400
    assert "challenge_cancelled" in await notification_types(auth_client)


async def test_dismiss_suggestion(auth_client, categories):
    suggestion = (await auth_client.get("/api/challenges/suggestions")).json()[0]

    response = await auth_client.put(f"/api/challenges/{suggestion['id']}/cancel")

    assert response.json()["status"] == "dismissed"


async def test_other_users_challenge(client, test_user, other_user, categories):
    client.cookies.set("session", create_access_token({"sub": str(other_user.id)}))
    theirs = (await client.post("/api/challenges/start", json=CUSTOM_CHALLENGE)).json()

    client.cookies.clear()
    client.cookies.set("session", create_access_token({"sub": str(test_user.id)}))
    response = await client.put(f"/api/challenges/{theirs['id']}/cancel")

    assert response.status_code == 403
    assert (await client.get("/api/challenges")).json() == []


async def test_missing_challenge(auth_client):
    response = await auth_client.put("/api/challenges/999/update-progress", json={"progress": 10})

    assert response.status_code == 404
    assert response.json() == {"message": "Challenge not found"}


async def test_no_active_challenge(auth_client):
    response = await auth_client.get("/api/challenges/active")

    assert response.status_code == 404


async def test_expire_overdue(db_session, test_user):
    now = datetime(2024, 5, 1, 12, 0)
    service = make_service(db_session)
    for days_ago, status in ((10, "active"), (1, "active"), (10, "suggested")):
        start = now - timedelta(days=days_ago)
        db_session.add(Challenge(
            user_id=test_user.id,
            title=f"{status} {days_ago}",
            description="",
            type="consistency",
            status=status,
            start_date=start,
            end_date=start + timedelta(days=7),
            created_at=start,
            updated_at=start,
            challenge_metadata={"type": "consistency", "requiredDays": 7},
        ))
    await db_session.commit()

    failed = await service.expire_overdue(now)

    assert [c.title for c in failed] == ["active 10"]
    assert failed[0].status == "failed"
    notifications = await NotificationRepository(db_session).get_for_user(test_user.id)
    assert [n.type for n in notifications] == ["challenge_failed"]
    assert await service.expire_overdue(now) == []


async def test_non_finite_progress_rejected(auth_client, categories):
    challenge = (await auth_client.post("/api/challenges/start", json=CUSTOM_CHALLENGE)).json()
    url = f"/api/challenges/{challenge['id']}/update-progress"

    for body in ('{"progress": NaN}', '{"progress": Infinity}', '{"progress": 10, "currentValue": NaN}'):
        response = await auth_client.put(url, content=body, headers={"content-type": "application/json"})
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid data"

    active = (await auth_client.get("/api/challenges/active")).json()
    assert active["status"] == "active"
    assert active["progress"] == 0
    assert "challenge_completed" not in await notification_types(auth_client)


async def test_stale_suggestions_are_replaced(auth_client, db_session, test_user, categories):
    now = datetime.utcnow()
    stale = Challenge(
        user_id=test_user.id,
        title="Last month's idea",
        description="",
        type="consistency",
        status="suggested",
        start_date=now - timedelta(days=8),
        end_date=now - timedelta(days=1),
        created_at=now - timedelta(days=8),
        updated_at=now - timedelta(days=8),
        challenge_metadata={"type": "consistency", "requiredDays": 7},
    )
    db_session.add(stale)
    await db_session.commit()
    stale_id = stale.id

    response = await auth_client.get("/api/challenges/suggestions")

    assert response.status_code == 200
    suggestions = response.json()
    assert suggestions
    assert stale_id not in [s["id"] for s in suggestions]
    assert all(datetime.fromisoformat(s["endDate"]) > now for s in suggestions)
    await db_session.refresh(stale)
    assert stale.status == "dismissed"
    assert await notification_types(auth_client) == ["challenge_suggested"]

    again = (await auth_client.get("/api/challenges/suggestions")).json()
    assert [s["id"] for s in again] == [s["id"] for s in suggestions]


async def test_fresh_suggestions_are_kept(db_session, test_user, categories):
    service = make_service(db_session)
    first = await service.get_suggestions(test_user.id, now=datetime(2024, 5, 1))

    within = await service.get_suggestions(test_user.id, now=datetime(2024, 5, 3))
    after = await service.get_suggestions(test_user.id, now=datetime(2024, 6, 1))

    assert [c.id for c in within] == [c.id for c in first]
    assert after and not set(c.id for c in after) & set(c.id for c in first)
    assert {c.status for c in await service.list_challenges(test_user.id)} == {"suggested", "dismissed"}
