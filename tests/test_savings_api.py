"""Tests for savings goals and sub-goals."""

from components.core.security import create_access_token

GOAL = {"title": "Summer holiday", "targetAmount": 1500, "currentAmount": 300}


async def test_create_and_list_goals(auth_client):
    response = await auth_client.post("/api/savings-goals", json=GOAL)

    assert response.status_code == 201
    goal = response.json()
    assert goal["title"] == "Summer holiday"
    assert goal["targetAmount"] == 1500
    assert goal["deadline"] is None

    goals = (await auth_client.get("/api/savings-goals")).json()
    assert [g["id"] for g in goals] == [goal["id"]]


async def test_goal_validation(auth_client):
    response = await auth_client.post("/api/savings-goals", json={"title": "Nothing", "targetAmount": 0})

    assert response.status_code == 400


async def test_update_goal(auth_client):
    goal = (await auth_client.post("/api/savings-goals", json=GOAL)).json()

    response = await auth_client.put(f"/api/savings-goals/{goal['id']}", json={"currentAmount": 450})

    assert response.status_code == 200
    assert response.json()["currentAmount"] == 450
    assert response.json()["title"] == GOAL["title"]


async def test_sub_goals(auth_client):
    goal = (await auth_client.post("/api/savings-goals", json=GOAL)).json()

    flights = await auth_client.post("/api/sub-goals", json={"title": "Flights", "goalId": goal["id"]})
    assert flights.status_code == 201
    assert flights.json()["completed"] is False
    hotel = await auth_client.post("/api/sub-goals", json={"title": "Hotel", "goalId": goal["id"], "progress": 40})
    assert hotel.status_code == 201

    done = await auth_client.put(f"/api/sub-goals/{flights.json()['id']}", json={"progress": 100})
    assert done.status_code == 200
    assert done.json()["completed"] is True

    detail = (await auth_client.get(f"/api/savings-goals/{goal['id']}")).json()
    assert sorted(s["title"] for s in detail["subGoals"]) == ["Flights", "Hotel"]


async def test_sub_goal_progress_out_of_range(auth_client):
    goal = (await auth_client.post("/api/savings-goals", json=GOAL)).json()

    response = await auth_client.post("/api/sub-goals", json={"title": "Too much", "goalId": goal["id"], "progress": 120})

    assert response.status_code == 400


async def test_sub_goal_for_missing_goal(auth_client):
    response = await auth_client.post("/api/sub-goals", json={"title": "Orphan", "goalId": 999})

    assert response.status_code == 404


async def test_other_users_goal(client, test_user, other_user):
    client.cookies.set("session", create_access_token({"sub": str(other_user.id)}))
    theirs = (await client.post("/api/savings-goals", json=GOAL)).json()

    client.cookies.clear()
    client.cookies.set("session", create_access_token({"sub": str(test_user.id)}))

    assert (await client.get(f"/api/savings-goals/{theirs['id']}")).status_code == 403
    assert (await client.put(f"/api/savings-goals/{theirs['id']}", json={"currentAmount": 0})).status_code == 403
    sub_goal = await client.post("/api/sub-goals", json={"title": "Sneaky", "goalId": theirs["id"]})
    assert sub_goal.status_code == 403
    assert (await client.get("/api/savings-goals")).json() == []


async def test_missing_goal(auth_client):
    response = await auth_client.get("/api/savings-goals/999")

    assert response.status_code == 404
    assert response.json() == {"message": "Savings goal not found"}


async def test_goal_amounts_are_whole_cents(auth_client):
    fraction = await auth_client.post("/api/savings-goals", json={"title": "Tiny", "targetAmount": 0.001})
    too_large = await auth_client.post("/api/savings-goals", json={"title": "Moon", "targetAmount": 100000000})

    assert fraction.status_code == 400
    assert too_large.status_code == 400
    listed = await auth_client.get("/api/savings-goals")
    assert listed.status_code == 200
    assert listed.json() == []
