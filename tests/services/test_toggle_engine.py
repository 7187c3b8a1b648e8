# tests/services/test_toggle_engine.py
"""Tests for the toggle engine against the store directly."""

import uuid

import pytest

from safe_space.core.errors import NotFound, StorageError
from safe_space.models import Comment, CommentUpvote, ReactionTally
from safe_space.repositories.reaction_repo import ReactionRepository
from safe_space.repositories.targets import Target
from safe_space.services import ToggleEngine, ToggleResult


@pytest.fixture()
def engine(db_session) -> ToggleEngine:
    return ToggleEngine(db_session)


def test_upvote_toggle_round_trip(engine, db_session, test_comment) -> None:
    user = str(uuid.uuid4())
    assert engine.toggle_upvote(test_comment.id, user) == ToggleResult(active=True, total=1)
    assert engine.toggle_upvote(test_comment.id, user) == ToggleResult(active=False, total=0)

    db_session.expire_all()
    assert db_session.get(Comment, test_comment.id).upvote_count == 0
    assert db_session.query(CommentUpvote).count() == 0


def test_upvote_count_matches_rows(engine, db_session, test_comment) -> None:
    users = [str(uuid.uuid4()) for _ in range(3)]
    for user in users:
        engine.toggle_upvote(test_comment.id, user)
    engine.toggle_upvote(test_comment.id, users[0])

    db_session.expire_all()
    rows = db_session.query(CommentUpvote).filter_by(comment_id=test_comment.id).count()
    assert db_session.get(Comment, test_comment.id).upvote_count == rows == 2


def test_upvote_missing_comment(engine) -> None:
    with pytest.raises(NotFound, match="Comment not found"):
        engine.toggle_upvote(str(uuid.uuid4()), str(uuid.uuid4()))


def test_reaction_tallies_follow_rows(engine, db_session, test_post) -> None:
    target = Target.post(test_post.id)
    users = [str(uuid.uuid4()) for _ in range(2)]
    for user in users:
        engine.toggle_reaction(target, user, "hug")
    engine.toggle_reaction(target, users[0], "heart")

    repo = ReactionRepository(db_session)
    assert repo.tallies_for(target) == {"hug": 2, "heart": 1}
    assert repo.count_for(target) == 3


def test_remove_only_decrements_existing(engine, db_session, test_post) -> None:
    target = Target.post(test_post.id)
    user = str(uuid.uuid4())
    engine.add_reaction(target, user, "upvote")

    assert engine.remove_reaction(target, str(uuid.uuid4()), "upvote") is False
    assert engine.remove_reaction(target, user, "upvote") is True
    assert engine.remove_reaction(target, user, "upvote") is False

    db_session.expire_all()
    tally = db_session.query(ReactionTally).filter_by(post_id=test_post.id).one()
    assert tally.total == 0


def test_duplicate_add_rolls_back(engine, db_session, test_post) -> None:
    target = Target.post(test_post.id)
    user = str(uuid.uuid4())
    engine.add_reaction(target, user, "heart")

    with pytest.raises(StorageError):
        engine.add_reaction(target, user, "heart")

    assert ReactionRepository(db_session).tallies_for(target) == {"heart": 1}


def test_missing_target_for_reaction(engine) -> None:
    with pytest.raises(NotFound, match="Post not found"):
        engine.toggle_reaction(Target.post(str(uuid.uuid4())), str(uuid.uuid4()), "hug")
