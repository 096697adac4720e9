# tests/services/test_social_graph.py
"""Tests for follow and like toggles."""

import pytest

from plaza.core import errors
from plaza.repositories import PostRepository, UserRepository
from plaza.services import FollowState, ModerationService, SocialGraphService


def _fresh(db_session, user_id):
    user = UserRepository(db_session).get_by_id(user_id)
    db_session.refresh(user)
    return user


def test_follow_then_unfollow_restores_state(db_session, carol, bob) -> None:
    """Following twice toggles back to the original graph."""
    graph = SocialGraphService(db_session)

    assert graph.follow(carol.id, bob.id) == FollowState.FOLLOWED
    assert carol.id in _fresh(db_session, bob.id).followers
    assert bob.id in _fresh(db_session, carol.id).following

    assert graph.follow(carol.id, bob.id) == FollowState.UNFOLLOWED
    assert _fresh(db_session, bob.id).followers == []
    assert _fresh(db_session, carol.id).following == []


def test_follow_self_is_forbidden(db_session, alice) -> None:
    """A user can never follow themselves."""
    with pytest.raises(errors.Forbidden):
        SocialGraphService(db_session).follow(alice.id, alice.id)

    assert _fresh(db_session, alice.id).followers == []
    assert _fresh(db_session, alice.id).following == []


def test_follow_missing_user(db_session, alice) -> None:
    """Following an unknown user fails with NotFound; malformed ids with InvalidArgument."""
    graph = SocialGraphService(db_session)

    with pytest.raises(errors.NotFound):
        graph.follow(alice.id, "a" * 32)
    with pytest.raises(errors.InvalidArgument):
        graph.follow(alice.id, "bogus")


@pytest.mark.parametrize("damaged_side", ["followers", "following"])
def test_one_sided_edge_is_repaired_by_follow(db_session, carol, bob, damaged_side) -> None:
    """With only one side recorded, the toggle resolves to follow and restores both sides."""
    users = UserRepository(db_session)
    if damaged_side == "followers":
        users.add_to_set(bob.id, "followers", carol.id)
    else:
        users.add_to_set(carol.id, "following", bob.id)

    state = SocialGraphService(db_session).follow(carol.id, bob.id)

    assert state == FollowState.FOLLOWED
    assert _fresh(db_session, bob.id).followers == [carol.id]
    assert _fresh(db_session, carol.id).following == [bob.id]


def test_follow_edges_are_independent_per_direction(db_session, alice, bob) -> None:
    """A follows B and B follows A are two separate edges."""
    graph = SocialGraphService(db_session)
    graph.follow(alice.id, bob.id)
    graph.follow(bob.id, alice.id)

    assert _fresh(db_session, alice.id).followers == [bob.id]
    assert _fresh(db_session, alice.id).following == [bob.id]

    graph.follow(alice.id, bob.id)

    assert _fresh(db_session, alice.id).following == []
    assert _fresh(db_session, alice.id).followers == [bob.id]
    assert _fresh(db_session, bob.id).following == [alice.id]


def test_followers_and_following_reads(db_session, alice, bob, carol) -> None:
    graph = SocialGraphService(db_session)
    graph.follow(bob.id, alice.id)
    graph.follow(carol.id, alice.id)

    assert [user.id for user in graph.followers(alice.id)] == [bob.id, carol.id]
    assert [user.id for user in graph.following(bob.id)] == [alice.id]


def test_like_toggle_mirrors_user_index(db_session, carol, approved_post) -> None:
    """Like adds to both sides; a second like removes from both."""
    graph = SocialGraphService(db_session)
    post_id = approved_post.id

    assert graph.like_post(carol.id, post_id) == [carol.id]
    assert _fresh(db_session, carol.id).likes == [post_id]

    assert graph.like_post(carol.id, post_id) == []
    assert _fresh(db_session, carol.id).likes == []


def test_likes_are_most_recent_first(db_session, alice, bob, carol, approved_post) -> None:
    """New likers are prepended to the post's likes."""
    graph = SocialGraphService(db_session)
    post_id = approved_post.id

    graph.like_post(bob.id, post_id)
    graph.like_post(carol.id, post_id)
    assert graph.like_post(alice.id, post_id) == [alice.id, carol.id, bob.id]


def test_like_symmetry_under_interleaving(db_session, alice, bob, carol) -> None:
    """U in P.likes iff P in U.likes after any sequence of toggles."""
    moderation = ModerationService(db_session)
    first = moderation.submit(alice.id, "one")
    second = moderation.submit(bob.id, "two")
    moderation.approve(carol.id, first.id)
    moderation.approve(carol.id, second.id)
    post_ids = [first.id, second.id]
    user_ids = [alice.id, bob.id, carol.id]

    graph = SocialGraphService(db_session)
    sequence = [
        (alice.id, first.id), (bob.id, first.id), (carol.id, second.id),
        (alice.id, second.id), (alice.id, first.id), (bob.id, second.id),
        (carol.id, first.id), (bob.id, first.id),
    ]
    posts = PostRepository(db_session)
    for actor_id, post_id in sequence:
        graph.like_post(actor_id, post_id)
        for pid in post_ids:
            post = posts.get_by_id(pid)
            db_session.refresh(post)
            for uid in user_ids:
                user = _fresh(db_session, uid)
                assert (uid in post.likes) == (pid in user.likes)


def test_cannot_like_pending_post(db_session, carol, pending_post) -> None:
    """Likes on a post awaiting moderation are an invalid state."""
    with pytest.raises(errors.InvalidState):
        SocialGraphService(db_session).like_post(carol.id, pending_post.id)
    assert _fresh(db_session, carol.id).likes == []


def test_like_missing_post(db_session, carol) -> None:
    with pytest.raises(errors.NotFound):
        SocialGraphService(db_session).like_post(carol.id, "b" * 32)


def test_half_applied_like_converges(db_session, carol, approved_post) -> None:
    """If only the post side was written, the next toggle cleans up both sides."""
    post_id = approved_post.id
    PostRepository(db_session).add_to_set(post_id, "likes", carol.id)

    assert SocialGraphService(db_session).like_post(carol.id, post_id) == []
    assert _fresh(db_session, carol.id).likes == []
