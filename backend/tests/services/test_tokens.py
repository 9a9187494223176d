# backend/tests/services/test_tokens.py
from datetime import timedelta

import jwt
import pytest

from projectmanager.auth.guards import Role, check_roles
from projectmanager.auth.middleware import bearer_token
from projectmanager.auth.tokens import Identity, TokenService

SECRET = "unit-test-secret-with-enough-length-for-hs256"


@pytest.fixture
def tokens():
    return TokenService(SECRET, ttl=timedelta(hours=1))


def test_issue_and_verify(tokens):
    identity = tokens.verify(tokens.issue(7, "alice", ["user"]))

    assert identity.authenticated
    assert identity.user_id == 7
    assert identity.username == "alice"
    assert identity.roles == frozenset({"user"})


def test_expired_token_is_rejected(tokens):
    token = tokens.issue(7, "alice", ["user"], ttl=timedelta(seconds=-1))
    assert tokens.verify(token) is None


def test_tampered_token_is_rejected(tokens):
    token = tokens.issue(7, "alice", ["user"])
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    assert tokens.verify(tampered) is None


def test_token_signed_with_other_secret_is_rejected(tokens):
    other = TokenService("a-completely-different-secret-value-for-hs256")
    assert tokens.verify(other.issue(7, "alice", ["admin"])) is None


def test_token_without_subject_is_rejected(tokens):
    token = jwt.encode({"username": "alice", "exp": 9999999999}, SECRET, algorithm="HS256")
    assert tokens.verify(token) is None


def test_garbage_is_rejected(tokens):
    assert tokens.verify("not.a.token") is None


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("")


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc", "abc"),
    ("bearer abc", "abc"),
    ("Basic abc", None),
    ("Bearer", None),
    ("", None),
    (None, None),
])
def test_bearer_token(header, expected):
    assert bearer_token(header) == expected


def test_roles_have_no_hierarchy():
    admin_only = Identity(user_id=1, roles=frozenset({"admin"}), authenticated=True)
    both = Identity(user_id=2, roles=frozenset({"user", "admin"}), authenticated=True)

    assert check_roles(admin_only, Role.ADMIN)
    assert not check_roles(admin_only, Role.USER)
    assert check_roles(both, Role.USER, Role.ADMIN)


def test_anonymous_holds_no_role():
    anonymous = Identity.anonymous()

    assert not anonymous.authenticated
    assert not check_roles(anonymous, Role.USER)
    assert not anonymous.has_role("user")
