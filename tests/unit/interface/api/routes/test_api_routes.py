"""API tests running the FastAPI app against in-memory persistence."""

from uuid import uuid4

import httpx
import pytest
import pytest_asyncio
from dishka.integrations.fastapi import FastapiProvider

from marquee.config import AuthSettings
from marquee.domain.repository import UserRepository, WatchListRepository
from marquee.interface.api.app import create_app
from marquee.util.background import drain_background_tasks
from marquee.util.jwt import create_token
from tests.conftest import make_user, make_watch_list
from tests.di import build_test_container

ALICE = 1
BOB = 2


@pytest_asyncio.fixture
async def api_env():
    """App wired to a mocked container, with Alice and Bob already registered."""
    container = build_test_container(extra_providers=(FastapiProvider(),))
    async with container() as request_container:
        user_repo = await request_container.get(UserRepository)
        await make_user(user_repo, ALICE, "Alice", "alice")
        await make_user(user_repo, BOB, "Bob", "bob")

    app = create_app(container)
    yield app, container

    await drain_background_tasks()
    await container.close()


def _client(app, user_id: int | None = None) -> httpx.AsyncClient:
    cookies = {}
    if user_id is not None:
        # Default settings, matching the secret the container's JWTService uses
        cookies["auth_token"] = create_token(user_id, AuthSettings())
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
        cookies=cookies,
    )


@pytest.mark.asyncio
async def test_health(api_env):
    app, _ = api_env
    async with _client(app) as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_invite_routes_require_auth(api_env):
    app, _ = api_env
    async with _client(app) as client:
        create = await client.post("/invites/", json={"kind": "friend"})
        pending = await client.get("/invites/pending")

    assert create.status_code == 401
    assert pending.status_code == 401


@pytest.mark.asyncio
async def test_garbage_token_is_unauthenticated(api_env):
    app, _ = api_env
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
        cookies={"auth_token": "not-a-token"},
    ) as client:
        response = await client.get("/notifications/count")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_direct_friend_invite_flow(api_env):
    # Arrange
    app, _ = api_env

    # Act
    async with _client(app, ALICE) as alice:
        created = await alice.post(
            "/invites/", json={"kind": "friend", "target_user_id": BOB}
        )
    invite_id = created.json()["invite"]["invite_id"]
    async with _client(app, BOB) as bob:
        pending = await bob.get("/invites/pending")
        accepted = await bob.post(f"/invites/{invite_id}/accept")
        replay = await bob.post(f"/invites/{invite_id}/accept")
        friends = await bob.get("/sharing/friends")

    # Assert
    assert created.status_code == 201
    assert pending.json()["total"] == 1
    assert accepted.status_code == 200
    assert accepted.json()["relationship"]["kind"] == "friend"
    assert replay.status_code == 409
    assert replay.json() == {
        "success": False,
        "error": "already_resolved",
        "message": "Invite has already been accepted",
        "invite": None,
        "relationship": None,
    }
    # Friends without shared lists are not listed
    assert friends.json()["total_count"] == 0


@pytest.mark.asyncio
async def test_invite_link_flow(api_env):
    app, container = api_env
    async with container() as request_container:
        list_repo = await request_container.get(WatchListRepository)
        watch_list = await make_watch_list(list_repo, ALICE, "Criterion")

    async with _client(app, ALICE) as alice:
        created = await alice.post(
            "/invites/", json={"kind": "list_code", "target_list_id": str(watch_list.id)}
        )
    code = created.json()["invite"]["code"]

    async with _client(app) as anonymous:
        preview = await anonymous.get(f"/invites/list_code/code/{code}")
    async with _client(app, BOB) as bob:
        accepted = await bob.post(f"/invites/list_code/code/{code}/accept")
        kinds = await bob.get("/sharing/list-kinds")

    assert preview.status_code == 200
    assert preview.json()["valid"]
    assert preview.json()["invite"]["inviter_name"] == "Alice"
    assert accepted.json()["relationship"]["list_name"] == "Criterion"
    assert kinds.json()["kinds"] == ["collaborative"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("payload", "status_code", "error"),
    [
        ({"kind": "friend", "target_user_id": ALICE}, 422, "validation_error"),
        ({"kind": "friend", "target_user_id": 999}, 404, "not_found"),
        ({"kind": "list_code", "target_list_id": str(uuid4())}, 404, "list_not_found"),
    ],
)
async def test_create_invite_error_status(api_env, payload, status_code, error):
    app, _ = api_env
    async with _client(app, ALICE) as alice:
        response = await alice.post("/invites/", json=payload)

    assert response.status_code == status_code
    assert response.json()["success"] is False
    assert response.json()["error"] == error


@pytest.mark.asyncio
async def test_duplicate_invite_conflicts(api_env):
    app, _ = api_env
    async with _client(app, ALICE) as alice:
        await alice.post("/invites/", json={"kind": "partner", "target_user_id": BOB})
        second = await alice.post(
            "/invites/", json={"kind": "partner", "target_user_id": BOB}
        )

    assert second.status_code == 409
    assert second.json()["error"] == "duplicate_pending"


@pytest.mark.asyncio
async def test_unknown_invite_link(api_env):
    app, _ = api_env
    async with _client(app) as client:
        missing = await client.get(f"/invites/friend/code/{'x' * 22}")
        malformed = await client.get("/invites/friend/code/bad")

    assert missing.status_code == 404
    assert malformed.status_code == 422


@pytest.mark.asyncio
async def test_decline_and_cancel(api_env):
    app, _ = api_env
    async with _client(app, ALICE) as alice:
        first = (
            await alice.post("/invites/", json={"kind": "friend", "target_user_id": BOB})
        ).json()["invite"]["invite_id"]
    async with _client(app, BOB) as bob:
        cancel_by_bob = await bob.post(f"/invites/{first}/cancel")
        declined = await bob.post(f"/invites/{first}/decline")
    async with _client(app, ALICE) as alice:
        sent = await alice.get("/invites/sent", params={"status": "declined"})

    assert cancel_by_bob.status_code == 403
    assert declined.status_code == 200
    assert [i["invite_id"] for i in sent.json()["invites"]] == [first]


@pytest.mark.asyncio
async def test_notification_routes(api_env):
    # Arrange
    app, _ = api_env
    async with _client(app, ALICE) as alice:
        await alice.post("/invites/", json={"kind": "friend", "target_user_id": BOB})

    async with _client(app, BOB) as bob:
        # Act
        summary = await bob.get("/notifications/summary")
        feed = await bob.get("/notifications/")
        notification_id = feed.json()["notifications"][0]["notification_id"]
        read = await bob.post(f"/notifications/{notification_id}/read")
        count = await bob.get("/notifications/count")
        missing = await bob.delete(f"/notifications/{uuid4()}")
        cleared = await bob.post("/notifications/clear", json={"read_only": True})

    # Assert
    assert summary.json() == {"unread_count": 1, "pending_invite_count": 1, "total": 2}
    assert read.json() == {"success": True}
    assert count.json() == {"count": 0}
    assert missing.status_code == 404
    assert missing.json()["error"] == "not_found"
    assert cleared.json() == {"deleted": 1}


@pytest.mark.asyncio
async def test_relationship_routes(api_env):
    app, _ = api_env
    async with _client(app, ALICE) as alice:
        invite_id = (
            await alice.post("/invites/", json={"kind": "friend", "target_user_id": BOB})
        ).json()["invite"]["invite_id"]
    async with _client(app, BOB) as bob:
        await bob.post(f"/invites/{invite_id}/accept")
        removed = await bob.delete(f"/friends/{ALICE}")
        again = await bob.delete(f"/friends/{ALICE}")
        no_partner = await bob.delete("/partners")

    assert removed.json() == {"success": True}
    assert again.status_code == 404
    assert no_partner.status_code == 404


@pytest.mark.asyncio
async def test_user_search(api_env):
    app, _ = api_env
    async with _client(app, ALICE) as alice:
        found = await alice.get("/users/search", params={"q": "bo"})
        too_short = await alice.get("/users/search", params={"q": "b"})

    assert [u["username"] for u in found.json()["users"]] == ["bob"]
    assert too_short.json() == {"users": []}
