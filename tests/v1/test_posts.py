# tests/v1/test_posts.py
"""Tests for post submission, reads and deletion."""

from fastapi import status


def test_create_post_is_pending(client, alice, alice_auth) -> None:
    response = client.post("/api/v1/posts/", json={"text": "Hello plaza"}, headers=alice_auth)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["text"] == "Hello plaza"
    assert data["author_id"] == alice.id
    assert data["author"]["username"] == "Alice"
    assert data["moderation_state"] == "pending"
    assert data["approval_pending"] is True
    assert data["approved"] is False


def test_create_post_empty_text(client, alice_auth) -> None:
    response = client.post("/api/v1/posts/", json={"text": "   "}, headers=alice_auth)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["kind"] == "ValidationError"


def test_create_post_missing_field(client, alice_auth) -> None:
    response = client.post("/api/v1/posts/", json={}, headers=alice_auth)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_posts_only_approved(client, bob_auth, pending_post, approved_post) -> None:
    response = client.get("/api/v1/posts/", headers=bob_auth)

    assert response.status_code == status.HTTP_200_OK
    assert [post["id"] for post in response.json()] == [approved_post.id]


def test_list_posts_invalid_sort(client, bob_auth) -> None:
    response = client.get("/api/v1/posts/", params={"sort": "random"}, headers=bob_auth)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_get_pending_post_is_hidden(client, alice_auth, bob_auth, pending_post) -> None:
    """Pending posts answer exactly like missing ones, even to their author."""
    pending = client.get(f"/api/v1/posts/{pending_post.id}", headers=bob_auth)
    own = client.get(f"/api/v1/posts/{pending_post.id}", headers=alice_auth)
    missing = client.get(f"/api/v1/posts/{'a' * 32}", headers=bob_auth)

    assert pending.status_code == status.HTTP_404_NOT_FOUND
    assert pending.json() == missing.json() == own.json()


def test_get_post_malformed_id(client, bob_auth) -> None:
    response = client.get("/api/v1/posts/xyz", headers=bob_auth)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["kind"] == "InvalidArgument"


def test_get_approved_post(client, bob_auth, approved_post) -> None:
    response = client.get(f"/api/v1/posts/{approved_post.id}", headers=bob_auth)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["approved"] is True
    assert data["approved_at"] is not None


def test_my_pending_posts(client, alice_auth, bob_auth, pending_post) -> None:
    mine = client.get("/api/v1/posts/pending/mine", headers=alice_auth)
    theirs = client.get("/api/v1/posts/pending/mine", headers=bob_auth)

    assert [post["id"] for post in mine.json()] == [pending_post.id]
    assert theirs.json() == []


def test_delete_post_by_author(client, alice_auth, bob_auth, approved_post) -> None:
    post_id = approved_post.id
    client.put(f"/api/v1/posts/{post_id}/like", headers=bob_auth)

    response = client.delete(f"/api/v1/posts/{post_id}", headers=alice_auth)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["post_id"] == post_id
    assert client.get(f"/api/v1/posts/{post_id}", headers=bob_auth).status_code == 404
    assert post_id not in client.get("/api/v1/users/me", headers=bob_auth).json()["likes"]
    assert post_id not in client.get("/api/v1/users/me", headers=alice_auth).json()["posts"]


def test_delete_post_by_other_user(client, bob_auth, approved_post) -> None:
    response = client.delete(f"/api/v1/posts/{approved_post.id}", headers=bob_auth)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["kind"] == "Forbidden"
