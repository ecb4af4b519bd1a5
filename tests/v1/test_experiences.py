# tests/v1/test_experiences.py
"""Tests for experiences and the posts placed in them."""

from fastapi import status

from myriad_api.db.time import utcnow
from myriad_api.models import Experience, Post, User


def _experience(client, headers, name="daily"):
    return client.post("/api/v1/experiences", json={"name": name}, headers=headers)


def test_create_experience(client, db_session, drain, test_user, auth_token) -> None:
    response = _experience(client, auth_token)
    drain()

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["created_by"] == test_user.id
    assert db_session.get(User, test_user.id).metric["total_experiences"] == 1


def test_add_post_to_experience(client, db_session, auth_token, test_post) -> None:
    """The experience index on the post is updated alongside the join row."""
    experience_id = _experience(client, auth_token).json()["id"]

    response = client.post(
        f"/api/v1/experiences/{experience_id}/posts/{test_post.id}", headers=auth_token
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert db_session.get(Post, test_post.id).experience_index == {experience_id: 1}

    again = client.post(
        f"/api/v1/experiences/{experience_id}/posts/{test_post.id}", headers=auth_token
    )
    assert again.json()["detail"] == "Already added to experience"


def test_only_creator_adds_posts(client, auth_token, other_auth_token, test_post) -> None:
    experience_id = _experience(client, auth_token).json()["id"]

    response = client.post(
        f"/api/v1/experiences/{experience_id}/posts/{test_post.id}", headers=other_auth_token
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_deleted_experience_is_null(client, db_session, test_user) -> None:
    experience = Experience(name="old", created_by=test_user.id, deleted_at=utcnow())
    db_session.add(experience)
    db_session.commit()

    response = client.get(f"/api/v1/experiences/{experience.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() is None
