from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from blog_api.app.core import errors
from blog_api.app.core.store import InMemoryStore, PostStore
from blog_api.app.main import create_app
from blog_api.app.schemas.user import Role, User


def _valid_update(**overrides):
    body = {"name": "Gabriel C.", "email": "Gabriel@Example.com", "role": "user", "age": 23}
    body.update(overrides)
    return body


def test_get_user_returns_full_record(client: TestClient) -> None:
    response = client.get("/users/1")

    assert response.status_code == 200
    assert response.json() == {
        "id": 1,
        "name": "Thiago",
        "email": "flamengodecoracao@gmail.com",
        "password": "flamengo123",
        "age": 30,
        "role": "admin",
    }


def test_get_user_rejects_non_numeric_id(client: TestClient) -> None:
    response = client.get("/users/abc")

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_USER_ID_INVALID}


@pytest.mark.parametrize("user_id", ["99", "1.5"])
def test_get_user_unknown_id(client: TestClient, user_id: str) -> None:
    response = client.get(f"/users/{user_id}")

    assert response.status_code == 404
    assert response.json() == {"message": errors.MSG_USER_NOT_FOUND}


@pytest.mark.parametrize("user_id", ["inf", "infinity", "1_0", "nan"])
def test_get_user_rejects_non_finite_and_underscored_ids(client: TestClient, user_id: str) -> None:
    response = client.get(f"/users/{user_id}")

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_USER_ID_INVALID}


@pytest.mark.parametrize(("user_id", "expected"), [("0x1", 1), ("0b10", 2), ("0o3", 3), ("1e0", 1)])
def test_get_user_accepts_prefixed_and_exponent_ids(client: TestClient, user_id: str, expected: int) -> None:
    response = client.get(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json()["id"] == expected


def test_age_range_rejects_underscored_bounds(client: TestClient) -> None:
    response = client.get("/users/age-range", params={"min": "1_0", "max": "30"})

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_AGE_RANGE_NOT_NUMERIC}


def test_age_range_returns_matching_users_in_store_order(client: TestClient) -> None:
    response = client.get("/users/age-range", params={"min": "20", "max": "30"})

    assert response.status_code == 200
    assert [user["id"] for user in response.json()] == [1, 2]


def test_age_range_bounds_are_inclusive(client: TestClient) -> None:
    response = client.get("/users/age-range", params={"min": "19", "max": "19"})

    assert [user["id"] for user in response.json()] == [3]


def test_age_range_without_matches_is_empty_list(client: TestClient) -> None:
    response = client.get("/users/age-range", params={"min": "50", "max": "60"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize("params", [{}, {"min": "10"}, {"max": "10"}, {"min": "", "max": "10"}])
def test_age_range_requires_both_bounds(client: TestClient, params) -> None:
    response = client.get("/users/age-range", params=params)

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_AGE_RANGE_REQUIRED}


def test_age_range_rejects_non_numeric_bounds(client: TestClient) -> None:
    response = client.get("/users/age-range", params={"min": "abc", "max": "30"})

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_AGE_RANGE_NOT_NUMERIC}


def test_update_user_replaces_profile_and_lowercases_email(client: TestClient) -> None:
    response = client.put("/users/2", json=_valid_update())

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == errors.MSG_USER_UPDATED
    assert payload["user"] == {
        "id": 2,
        "name": "Gabriel C.",
        "email": "gabriel@example.com",
        "password": "paulaodasolda123",
        "age": 23,
        "role": "user",
    }
    assert client.get("/users/2").json()["email"] == "gabriel@example.com"


def test_update_user_accepts_zero_age(client: TestClient) -> None:
    response = client.put("/users/3", json=_valid_update(email="mavi@gmail.com", age=0))

    assert response.status_code == 200
    assert response.json()["user"]["age"] == 0


def test_update_user_may_keep_own_email_in_other_case(client: TestClient) -> None:
    response = client.put("/users/2", json=_valid_update(email="MGM@GMAIL.COM"))

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "mgm@gmail.com"


def test_update_user_rejects_email_of_another_user(client: TestClient, users: InMemoryStore) -> None:
    response = client.put("/users/2", json=_valid_update(email="MAVI@gmail.com"))

    assert response.status_code == 409
    assert response.json() == {"message": errors.MSG_EMAIL_IN_USE}
    assert users.get(2).email == "mgm@gmail.com"


def test_update_user_checks_id_before_body(client: TestClient) -> None:
    response = client.put("/users/abc", json={})

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_USER_ID_INVALID}


@pytest.mark.parametrize("missing", ["name", "email", "role", "age"])
def test_update_user_requires_every_field(client: TestClient, missing: str) -> None:
    body = _valid_update()
    del body[missing]

    response = client.put("/users/2", json=body)

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_UPDATE_FIELDS_REQUIRED}


def test_update_user_treats_empty_name_as_missing(client: TestClient) -> None:
    response = client.put("/users/2", json=_valid_update(name=""))

    assert response.json() == {"message": errors.MSG_UPDATE_FIELDS_REQUIRED}


@pytest.mark.parametrize(
    "overrides",
    [{"age": "23"}, {"age": True}, {"age": None}, {"name": 42}, {"email": ["a@b.c"]}, {"role": 1}],
)
def test_update_user_rejects_wrong_types(client: TestClient, overrides) -> None:
    response = client.put("/users/2", json=_valid_update(**overrides))

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_INVALID_TYPES}


def test_update_user_rejects_unknown_role(client: TestClient) -> None:
    response = client.put("/users/2", json=_valid_update(role="superuser"))

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_INVALID_ROLE}


@pytest.mark.parametrize("age", [-1, 22.5])
def test_update_user_rejects_invalid_age(client: TestClient, age) -> None:
    response = client.put("/users/2", json=_valid_update(age=age))

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_INVALID_AGE}


def test_update_user_unknown_id(client: TestClient) -> None:
    response = client.put("/users/42", json=_valid_update())

    assert response.status_code == 404
    assert response.json() == {"message": errors.MSG_USER_NOT_FOUND}


def test_update_user_with_unreadable_body(client: TestClient) -> None:
    response = client.put("/users/2", content="not json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_INVALID_BODY}


@pytest.mark.parametrize("params", [{}, {"confirm": "yes"}, {"confirm": "TRUE"}])
def test_cleanup_requires_confirmation(client: TestClient, users: InMemoryStore, params) -> None:
    response = client.delete("/users/cleanup-inactive", params=params)

    assert response.status_code == 400
    assert response.json() == {"message": errors.MSG_CLEANUP_CONFIRM_REQUIRED}
    assert len(users) == 3


def test_cleanup_keeps_admins_and_authors(client: TestClient, users: InMemoryStore, make_post) -> None:
    make_post(author_id=2)

    response = client.delete("/users/cleanup-inactive", params={"confirm": "true"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == errors.MSG_CLEANUP_DONE
    assert [user["id"] for user in payload["removedUsers"]] == [3]
    assert [user.id for user in users.all()] == [1, 2]


def test_cleanup_is_idempotent(client: TestClient) -> None:
    first = client.delete("/users/cleanup-inactive", params={"confirm": "true"})
    second = client.delete("/users/cleanup-inactive", params={"confirm": "true"})

    assert [user["id"] for user in first.json()["removedUsers"]] == [2, 3]
    assert second.status_code == 200
    assert second.json()["removedUsers"] == []


def test_cleanup_with_admin_and_user_and_no_posts(settings) -> None:
    users = InMemoryStore(
        [
            User(id=1, name="Ana", email="ana@example.com", password="x", age=40, role=Role.admin),
            User(id=2, name="Bruno", email="bruno@example.com", password="y", age=20, role=Role.user),
        ]
    )
    app = create_app(settings=settings, users=users, posts=PostStore())

    with TestClient(app) as client:
        response = client.delete("/users/cleanup-inactive", params={"confirm": "true"})

    assert [user["id"] for user in response.json()["removedUsers"]] == [2]
    assert [user.id for user in users.all()] == [1]
