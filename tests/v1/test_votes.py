# tests/v1/test_votes.py
"""Tests for vote endpoints."""

from fastapi import status

from myriad_api.core.errors import COMMENT_FIRST_MESSAGE
from myriad_api.models import Post, User, Vote


def test_upvote_post(client, db_session, test_user, other_user, auth_token, test_post) -> None:
    """Counters are up to date when the response arrives."""
    response = client.post(
        "/api/v1/votes",
        json={"type": "post", "reference_id": test_post.id, "state": True},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["user_id"] == test_user.id
    assert data["to_user_id"] == other_user.id
    assert db_session.get(Post, test_post.id).metric["upvotes"] == 1
    assert db_session.get(User, other_user.id).metric["total_kudos"] == 1


def test_downvote_requires_debate_comment(client, db_session, auth_token, test_post) -> None:
    response = client.post(
        "/api/v1/votes",
        json={"type": "post", "reference_id": test_post.id, "state": False},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == COMMENT_FIRST_MESSAGE
    assert db_session.query(Vote).count() == 0


def test_downvote_after_debate_comment(
    client, db_session, test_user, auth_token, test_post, make_comment
) -> None:
    make_comment(test_user, test_post, section="debate")

    response = client.post(
        "/api/v1/votes",
        json={"type": "post", "reference_id": test_post.id, "state": False},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert db_session.get(Post, test_post.id).metric["downvotes"] == 1


def test_vote_again_replaces_state(client, db_session, auth_token, test_post, make_comment, test_user) -> None:
    """One vote per user and target; the second call flips it."""
    make_comment(test_user, test_post, section="debate")
    body = {"type": "post", "reference_id": test_post.id}

    first = client.post("/api/v1/votes", json={**body, "state": True}, headers=auth_token)
    second = client.post("/api/v1/votes", json={**body, "state": False}, headers=auth_token)

    assert first.json()["id"] == second.json()["id"]
    assert db_session.query(Vote).one().state is False
    metric = db_session.get(Post, test_post.id).metric
    assert (metric["upvotes"], metric["downvotes"]) == (0, 1)


def test_vote_through_post_route(client, db_session, drain, auth_token, test_post) -> None:
    """The post route shares the rules but updates counters in the background."""
    response = client.post(
        f"/api/v1/posts/{test_post.id}/votes", json={"state": True}, headers=auth_token
    )
    drain()

    assert response.status_code == status.HTTP_200_OK
    assert "id" in response.json()
    assert db_session.get(Post, test_post.id).popular_count == 1


def test_post_route_debate_gate(client, auth_token, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/votes", json={"state": False}, headers=auth_token
    )

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["detail"] == COMMENT_FIRST_MESSAGE


def test_delete_vote(client, db_session, other_user, auth_token, test_post) -> None:
    created = client.post(
        "/api/v1/votes",
        json={"type": "post", "reference_id": test_post.id, "state": True},
        headers=auth_token,
    ).json()

    response = client.delete(f"/api/v1/votes/{created['id']}", headers=auth_token)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.query(Vote).count() == 0
    assert db_session.get(Post, test_post.id).metric["upvotes"] == 0
    assert db_session.get(User, other_user.id).metric["total_kudos"] == 0


def test_delete_someone_elses_vote(client, auth_token, other_auth_token, test_post) -> None:
    created = client.post(
        "/api/v1/votes",
        json={"type": "post", "reference_id": test_post.id, "state": True},
        headers=auth_token,
    ).json()

    response = client.delete(f"/api/v1/votes/{created['id']}", headers=other_auth_token)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_vote_missing_target(client, auth_token) -> None:
    response = client.post(
        "/api/v1/votes",
        json={"type": "post", "reference_id": "missing", "state": True},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
