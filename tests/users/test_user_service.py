from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from conftest import make_user
from src.timesheet_payroll.timesheet_payroll.core.enums import Role
from src.timesheet_payroll.timesheet_payroll.core.exceptions import (
    AuthenticationError,
    NotFoundError,
    ValidationError,
)
from src.timesheet_payroll.timesheet_payroll.users.service import AuthService, UserService


def test_authenticate_success(users):
    users.add(make_user(1, "alice", password="secret1"))

    s_user = AuthService(users).authenticate("alice", "secret1")

    assert s_user.user_id == 1
    assert s_user.role == Role.EMPLOYEE
    assert s_user.department == "Production"


@pytest.mark.parametrize("username,password", [("alice", "wrong-pass"), ("nobody", "secret1"), ("", "")])
def test_authenticate_rejects_bad_credentials(users, username, password):
    users.add(make_user(1, "alice", password="secret1"))

    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate(username, password)


def test_inactive_user_cannot_log_in(users):
    users.add(make_user(1, "alice", password="secret1", is_active=False))

    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate("alice", "secret1")


def test_create_user_hashes_password(users):
    svc = UserService(users)

    user_id = svc.create_user(username=" bob ", password="hunter22", department="Warehouse", staff_house=True)

    user = users.get_by_id(user_id)
    assert user.username == "bob"
    assert user.staff_house is True
    assert user.role == Role.EMPLOYEE
    assert check_password_hash(user.password_hash, "hunter22")


def test_create_user_validation(users):
    users.add(make_user(1, "alice"))
    svc = UserService(users)

    with pytest.raises(ValidationError, match="already exists"):
        svc.create_user(username="alice", password="secret1")
    with pytest.raises(ValidationError, match="at least 6"):
        svc.create_user(username="bob", password="123")
    with pytest.raises(ValidationError, match="Invalid role"):
        svc.create_user(username="bob", password="secret1", role="manager")
    with pytest.raises(ValidationError, match="Username is required"):
        svc.create_user(username="  ", password="secret1")


def test_update_user_changes_only_given_fields(users):
    users.add(make_user(1, "alice", department="Production"))
    svc = UserService(users)

    updated = svc.update_user(1, staff_house=True, role="admin")

    stored = users.get_by_id(1)
    assert updated == stored
    assert stored.staff_house is True
    assert stored.role == Role.ADMIN
    assert stored.department == "Production"
    assert stored.is_active is True


def test_update_user_password_and_missing_user(users):
    users.add(make_user(1, "alice", password="secret1"))
    svc = UserService(users)

    svc.update_user(1, password="newsecret")
    AuthService(users).authenticate("alice", "newsecret")

    with pytest.raises(NotFoundError):
        svc.update_user(99, department="X")


def test_list_users_exposes_no_password_hash(users):
    users.add(make_user(1, "alice"))

    listed = UserService(users).list_users()

    assert listed == [
        {"id": 1, "username": "alice", "role": "employee", "department": "Production", "staff_house": False, "active": True}
    ]


@pytest.mark.parametrize("department", [5, ["Production"], {"name": "Production"}])
def test_department_must_be_text(users, department):
    users.add(make_user(1, "alice"))
    svc = UserService(users)

    with pytest.raises(ValidationError, match="Department must be text"):
        svc.create_user(username="bob", password="secret1", department=department)
    with pytest.raises(ValidationError, match="Department must be text"):
        svc.update_user(1, department=department)

    assert users.get_by_id(1).department == "Production"


def test_non_text_credentials_are_rejected(users):
    users.add(make_user(1, "alice", password="secret1"))

    with pytest.raises(ValidationError):
        UserService(users).create_user(username=42, password="secret1")
    with pytest.raises(ValidationError):
        UserService(users).create_user(username="bob", password=1234567)
    with pytest.raises(AuthenticationError):
        AuthService(users).authenticate(["alice"], "secret1")
