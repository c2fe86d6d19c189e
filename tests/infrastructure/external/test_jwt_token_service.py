"""Tests for JWTTokenService."""

import pytest

from evoting.domain.exceptions import InvalidCredentialsError
from evoting.infrastructure.config.settings import Settings
from evoting.infrastructure.external.jwt_token_service import JWTTokenService


@pytest.fixture
def service() -> JWTTokenService:
    return JWTTokenService(Settings(secret_key="unit-test-secret"))


def test_round_trip_keeps_claims(service: JWTTokenService) -> None:
    token = service.issue(
        {"id": 7, "name": "Ada", "email": "ada@example.com", "access": "USER"}
    )

    claims = service.decode(token)

    assert claims["id"] == 7
    assert claims["access"] == "USER"
    assert isinstance(claims["exp"], int)


def test_issue_does_not_mutate_claims(service: JWTTokenService) -> None:
    claims = {"id": 7}

    service.issue(claims)

    assert claims == {"id": 7}


def test_expired_token_is_rejected() -> None:
    service = JWTTokenService(
        Settings(secret_key="unit-test-secret", access_token_expire_minutes=-1)
    )

    with pytest.raises(InvalidCredentialsError):
        service.decode(service.issue({"id": 7}))


def test_expiry_can_be_overridden_per_token(service: JWTTokenService) -> None:
    short = service.decode(service.issue({"id": 7}))
    long = service.decode(service.issue({"id": 7}, expires_minutes=480))

    assert long["exp"] - short["exp"] >= (480 - 120) * 60 - 5

    with pytest.raises(InvalidCredentialsError):
        service.decode(service.issue({"id": 7}, expires_minutes=-1))


@pytest.mark.parametrize("token", ["not-a-token", ""])
def test_garbage_is_rejected(service: JWTTokenService, token: str) -> None:
    with pytest.raises(InvalidCredentialsError):
        service.decode(token)


def test_other_secret_is_rejected(service: JWTTokenService) -> None:
    token = JWTTokenService(Settings(secret_key="someone-else")).issue({"id": 7})

    with pytest.raises(InvalidCredentialsError):
        service.decode(token)
