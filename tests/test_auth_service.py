"""
Tests for the authentication facade and factory.
"""

import logging
from datetime import timedelta

import pytest

from expertfinder.modules.auth import (
    AuthFactory,
    DefaultAuthenticationService,
    MisconfiguredAuthorityError,
    extract_bearer_token,
)
from conftest import StaticConfigProvider


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc", "abc"),
        ("bearer abc", "abc"),
        ("BEARER   abc  ", "abc"),
        ("abc", "abc"),
        ("  abc  ", "abc"),
        ("Bearer ", None),
        ("", None),
        ("   ", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_exchange_then_authenticate(auth_service):
    session = auth_service.exchange("abc123")

    result = auth_service.authenticate(f"Bearer {session}")

    assert result.ok is True
    assert result.session_token == session
    assert auth_service.authenticate(session).ok is True


def test_exchange_rejected_twice_the_same(auth_service):
    auth_service.exchange("abc123")

    assert auth_service.exchange("abc123") is None
    assert auth_service.exchange("never-existed") is None


def test_authenticate_failures_are_uniform(auth_service, clock):
    session = auth_service.exchange("abc123")
    clock.advance(hours=5)

    expired = auth_service.authenticate(f"Bearer {session}")
    unknown = auth_service.authenticate("Bearer garbage")
    missing = auth_service.authenticate(None)

    assert expired == unknown == missing
    assert expired.ok is False
    assert expired.error == "Invalid credentials"


def test_revoke(auth_service):
    session = auth_service.exchange("abc123")

    auth_service.revoke(f"Bearer {session}")

    assert auth_service.authenticate(f"Bearer {session}").ok is False
    auth_service.revoke(None)
    auth_service.revoke("Bearer unknown")


def test_audit_log_never_contains_tokens(auth_service, caplog, monkeypatch):
    # the app's logging config stops propagation at the package logger
    monkeypatch.setattr(logging.getLogger("expertfinder"), "propagate", True)

    with caplog.at_level(logging.INFO, logger="expertfinder"):
        session = auth_service.exchange("abc123")
        auth_service.exchange("abc123")
        auth_service.revoke(session)

    assert "session_created" in caplog.text
    assert "one_time_token_rejected" in caplog.text
    assert "session_revoked" in caplog.text
    assert "abc123" not in caplog.text
    assert session not in caplog.text


def test_factory_builds_from_config(clock):
    service = AuthFactory.build(
        StaticConfigProvider(tokens=["x", "y"]),
        session_lifetime=timedelta(hours=1),
        clock=clock,
    )

    assert isinstance(service, DefaultAuthenticationService)
    assert service.authority.unused_token_count() == 2
    assert service.authority.session_lifetime == timedelta(hours=1)


def test_factory_without_token_source_fails():
    with pytest.raises(ValueError):
        AuthFactory.build(StaticConfigProvider(tokens=None))


def test_build_for_testing_requires_tokens():
    with pytest.raises(MisconfiguredAuthorityError):
        AuthFactory.build_for_testing(None)
