# tests/v1/test_friends.py
"""Tests for friend requests, responses and blocks."""

from fastapi import status

from myriad_api.models import Friend, Notification, User


def _request(client, requestee, headers, status_value="pending"):
    return client.post(
        "/api/v1/friends",
        json={"requestee_id": requestee.id, "status": status_value},
        headers=headers,
    )


def test_friend_request_notifies_requestee(client, db_session, drain, other_user, auth_token) -> None:
    response = _request(client, other_user, auth_token)
    drain()

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["status"] == "pending"
    notification = db_session.query(Notification).one()
    assert (notification.type, notification.to_user_id) == ("friend_request", other_user.id)


def test_duplicate_request_is_rejected(client, drain, other_user, auth_token) -> None:
    _request(client, other_user, auth_token)
    drain()

    response = _request(client, other_user, auth_token)
    assert response.json()["detail"] == "Please wait for this user to approve your request"


def test_request_to_yourself(client, test_user, auth_token) -> None:
    response = _request(client, test_user, auth_token)
    assert response.json()["detail"] == "Cannot request to yourself"


def test_approve_request(client, db_session, drain, test_user, other_user, auth_token, other_auth_token) -> None:
    friend_id = _request(client, other_user, auth_token).json()["id"]
    drain()

    forbidden = client.patch(
        f"/api/v1/friends/{friend_id}", json={"status": "approved"}, headers=auth_token
    )
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    response = client.patch(
        f"/api/v1/friends/{friend_id}", json={"status": "approved"}, headers=other_auth_token
    )
    drain()

    assert response.json()["status"] == "approved"
    assert db_session.get(User, test_user.id).metric["total_friends"] == 1
    accept = db_session.query(Notification).filter_by(type="friend_accept").one()
    assert accept.to_user_id == test_user.id


def test_block_replaces_pending_request(client, db_session, drain, other_user, auth_token) -> None:
    _request(client, other_user, auth_token)
    drain()

    response = _request(client, other_user, auth_token, status_value="blocked")
    drain()

    assert response.status_code == status.HTTP_201_CREATED
    assert db_session.query(Friend).one().status == "blocked"


def test_unfriend(client, db_session, drain, test_user, other_user, auth_token, other_auth_token) -> None:
    friend_id = _request(client, other_user, auth_token).json()["id"]
    client.patch(f"/api/v1/friends/{friend_id}", json={"status": "approved"}, headers=other_auth_token)
    drain()

    response = client.delete(f"/api/v1/friends/{friend_id}", headers=auth_token)
    drain()

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.query(Friend).count() == 0
    assert db_session.get(User, other_user.id).metric["total_friends"] == 0
