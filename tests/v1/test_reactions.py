# tests/v1/test_reactions.py
"""Tests for post and comment reactions."""

import uuid

from fastapi import status
from fastapi.testclient import TestClient

from safe_space.main import create_app
from safe_space.models import Reaction, ReactionTally

from ..conftest import make_settings


def _toggle(client, headers, **payload):
    return client.post("/api/v1/reactions/toggle", json=payload, headers=headers)


def test_toggle_twice_nets_to_zero(client, auth_token, test_post, db_session) -> None:
    """Toggling the same reaction twice leaves no row and a zero tally."""
    first = _toggle(client, auth_token, post_id=test_post.id, reaction_type="heart")
    assert first.status_code == status.HTTP_200_OK
    assert first.json() == {"active": True, "total": 1}

    second = _toggle(client, auth_token, post_id=test_post.id, reaction_type="heart")
    assert second.json() == {"active": False, "total": 0}

    db_session.expire_all()
    assert db_session.query(Reaction).count() == 0
    tally = db_session.query(ReactionTally).filter_by(post_id=test_post.id).one()
    assert tally.total == 0


def test_toggle_types_are_independent(client, auth_token, other_auth_token, test_post) -> None:
    _toggle(client, auth_token, post_id=test_post.id, reaction_type="hug")
    _toggle(client, other_auth_token, post_id=test_post.id, reaction_type="hug")
    _toggle(client, auth_token, post_id=test_post.id, reaction_type="upvote")

    response = client.get(
        "/api/v1/reactions",
        params={"post_id": test_post.id, "count": "true"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"count": 3, "by_type": {"hug": 2, "upvote": 1}}


def test_toggle_on_comment(client, auth_token, test_comment) -> None:
    response = _toggle(client, auth_token, comment_id=test_comment.id, reaction_type="hug")
    assert response.json() == {"active": True, "total": 1}


def test_add_and_list_reactions(client, auth_token, test_post, test_user_id) -> None:
    response = client.post(
        "/api/v1/reactions",
        json={"post_id": test_post.id, "reaction_type": "hug"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["user_id"] == test_user_id
    assert body["post_id"] == test_post.id
    assert body["comment_id"] is None

    listed = client.get("/api/v1/reactions", params={"post_id": test_post.id})
    assert [r["id"] for r in listed.json()] == [body["id"]]


def test_duplicate_reaction_is_storage_error(client, auth_token, test_post, db_session) -> None:
    payload = {"post_id": test_post.id, "reaction_type": "hug"}
    client.post("/api/v1/reactions", json=payload, headers=auth_token)

    response = client.post("/api/v1/reactions", json=payload, headers=auth_token)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"]

    db_session.expire_all()
    assert db_session.query(ReactionTally).filter_by(post_id=test_post.id).one().total == 1


def test_remove_reaction(client, auth_token, test_post, db_session) -> None:
    payload = {"post_id": test_post.id, "reaction_type": "heart"}
    client.post("/api/v1/reactions", json=payload, headers=auth_token)

    response = client.request("DELETE", "/api/v1/reactions", json=payload, headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True

    again = client.request("DELETE", "/api/v1/reactions", json=payload, headers=auth_token)
    assert again.json() == {"success": True, "message": "No matching reaction"}

    db_session.expire_all()
    assert db_session.query(ReactionTally).filter_by(post_id=test_post.id).one().total == 0


def test_reaction_needs_exactly_one_target(client, auth_token, test_post, test_comment) -> None:
    neither = _toggle(client, auth_token, reaction_type="hug")
    assert neither.status_code == status.HTTP_400_BAD_REQUEST
    assert neither.json() == {"error": "post_id or comment_id is required"}

    both = _toggle(
        client,
        auth_token,
        post_id=test_post.id,
        comment_id=test_comment.id,
        reaction_type="hug",
    )
    assert both.status_code == status.HTTP_400_BAD_REQUEST


def test_unknown_reaction_type(client, auth_token, test_post) -> None:
    response = _toggle(client, auth_token, post_id=test_post.id, reaction_type="angry")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_reaction_on_missing_post(client, auth_token) -> None:
    response = _toggle(client, auth_token, post_id=str(uuid.uuid4()), reaction_type="hug")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Post not found"}


def test_payload_user_must_match_token(client, auth_token, test_post, other_user_id) -> None:
    response = _toggle(
        client,
        auth_token,
        post_id=test_post.id,
        user_id=other_user_id,
        reaction_type="hug",
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_reaction_requires_identity(client, test_post, other_user_id) -> None:
    response = _toggle(
        client,
        {},
        post_id=test_post.id,
        user_id=other_user_id,
        reaction_type="hug",
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_legacy_mode_trusts_payload_user(database, test_post, other_user_id) -> None:
    legacy = TestClient(create_app(make_settings(legacy_open_endpoints=True), database))
    response = _toggle(
        legacy,
        {},
        post_id=test_post.id,
        user_id=other_user_id,
        reaction_type="hug",
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["active"] is True


def test_comment_scoped_reactions(client, auth_token, test_comment, test_user_id) -> None:
    url = f"/api/v1/comments/{test_comment.id}/reactions"

    created = client.post(url, json={"reaction_type": "heart"}, headers=auth_token)
    assert created.status_code == status.HTTP_201_CREATED
    assert created.json()["comment_id"] == test_comment.id

    listed = client.get(url)
    assert [r["user_id"] for r in listed.json()] == [test_user_id]

    removed = client.delete(url, params={"reaction_type": "heart"}, headers=auth_token)
    assert removed.status_code == status.HTTP_200_OK
    assert client.get(url).json() == []


def test_comment_reactions_malformed_id(client) -> None:
    response = client.get("/api/v1/comments/123/reactions")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "'123'" in response.json()["error"]
