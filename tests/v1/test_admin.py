# tests/v1/test_admin.py
"""Tests for the moderator and admin view."""

import uuid

from fastapi import status

from safe_space.models import Comment, Post, Reaction, Report, UserRole


def test_admin_list_forbidden_for_plain_user(client, auth_token) -> None:
    """Callers without a stored role cannot open the admin view."""
    response = client.get("/api/v1/admin/posts", headers=auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"error": "Forbidden - Admin access required"}


def test_admin_list_requires_auth(client) -> None:
    response = client.get("/api/v1/admin/posts")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_list_includes_author_roles(
    client, admin_token, make_post, test_user_id, db_session
) -> None:
    moderator_id = str(uuid.uuid4())
    db_session.add(UserRole(user_id=moderator_id, role="moderator"))
    db_session.commit()
    plain = make_post(test_user_id, title="Plain")
    legacy = make_post(None, author_id=moderator_id, title="Legacy moderator")
    hidden = make_post(test_user_id, title="Hidden", status="moderated")

    response = client.get("/api/v1/admin/posts", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK
    roles = {post["id"]: post["author_role"] for post in response.json()}
    assert roles == {plain.id: "user", legacy.id: "moderator", hidden.id: "user"}


def test_moderator_can_list(client, moderator_token, test_post) -> None:
    response = client.get("/api/v1/admin/posts", headers=moderator_token)
    assert response.status_code == status.HTTP_200_OK
    assert [post["id"] for post in response.json()] == [test_post.id]


def test_admin_post_detail(
    client, admin_token, test_post, make_comment, other_user_id, db_session
) -> None:
    make_comment(test_post, other_user_id)
    make_comment(test_post, other_user_id, status="deleted")
    db_session.add_all(
        [
            Reaction(post_id=test_post.id, user_id=other_user_id, reaction_type="heart"),
            Report(post_id=test_post.id, reporter_id=other_user_id, reason="off-topic"),
        ]
    )
    db_session.commit()

    response = client.get(f"/api/v1/admin/posts/{test_post.id}", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["id"] == test_post.id
    assert len(body["comments"]) == 2
    assert [r["reaction_type"] for r in body["reactions"]] == ["heart"]
    assert [r["reason"] for r in body["reports"]] == ["off-topic"]


def test_admin_detail_malformed_id(client, admin_token) -> None:
    response = client.get("/api/v1/admin/posts/zzz", headers=admin_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_moderate_post_stamps_moderator(client, moderator_token, test_post, verifier) -> None:
    response = client.put(
        f"/api/v1/admin/posts/{test_post.id}",
        json={"status": "moderated"},
        headers=moderator_token,
    )
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["status"] == "moderated"
    assert body["moderation_reason"] == "Content moderated by admin"
    moderator_id = verifier.resolve(moderator_token["Authorization"].split()[1]).id
    assert body["moderated_by"] == moderator_id
    assert body["moderated_at"] is not None


def test_moderate_post_edits_any_field(client, admin_token, test_post) -> None:
    response = client.put(
        f"/api/v1/admin/posts/{test_post.id}",
        json={"title": "Retitled by staff", "moderation_reason": "Clarity"},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] == "Retitled by staff"
    assert response.json()["status"] == "active"


def test_moderate_post_forbidden_for_owner(client, auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/admin/posts/{test_post.id}",
        json={"status": "active"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_soft_delete(client, admin_token, test_post, db_session) -> None:
    response = client.delete(f"/api/v1/admin/posts/{test_post.id}", headers=admin_token)
    assert response.status_code == status.HTTP_200_OK

    db_session.expire_all()
    post = db_session.get(Post, test_post.id)
    assert post.status == "deleted"
    assert post.moderation_reason == "Post deleted by admin"


def test_admin_hard_delete(
    client, admin_token, test_post, test_comment, db_session
) -> None:
    post_id, comment_id = test_post.id, test_comment.id
    response = client.delete(
        f"/api/v1/admin/posts/{post_id}",
        params={"hard": "true"},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_200_OK

    db_session.expunge_all()
    assert db_session.get(Post, post_id) is None
    assert db_session.get(Comment, comment_id) is None


def test_admin_delete_missing_post(client, admin_token) -> None:
    response = client.delete(f"/api/v1/admin/posts/{uuid.uuid4()}", headers=admin_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_moderate_post_rejects_explicit_null(client, admin_token, test_post) -> None:
    for field in ("title", "content", "category", "is_anonymous", "status"):
        response = client.put(
            f"/api/v1/admin/posts/{test_post.id}",
            json={field: None},
            headers=admin_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert field in response.json()["error"]


def test_moderation_reason_may_be_cleared(client, admin_token, test_post) -> None:
    response = client.put(
        f"/api/v1/admin/posts/{test_post.id}",
        json={"moderation_reason": None},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["moderation_reason"] is None
