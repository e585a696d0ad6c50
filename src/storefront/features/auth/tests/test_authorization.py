from datetime import timedelta

import pytest
from fastapi import status
from jose import jwt

from ....core.config import ALGORITHM
from ....core.errors import Forbidden, Unauthenticated
from ....features.auth.authorization import authorize_request, verify_credential
from ....features.auth.security import create_access_token, create_user_token


def test_verify_credential_returns_identity():
    token = create_user_token("user-1", "employee")
    identity = verify_credential(token)
    assert identity.subject == "user-1"
    assert identity.role == "employee"


@pytest.mark.parametrize("credential", [None, "", "short"])
def test_missing_or_short_credential_is_unauthenticated(credential):
    with pytest.raises(Unauthenticated):
        verify_credential(credential)


def test_expired_token_is_unauthenticated():
    token = create_user_token("user-1", "admin", expires_delta=timedelta(seconds=-5))
    with pytest.raises(Unauthenticated) as exc_info:
        verify_credential(token)
    assert exc_info.value.detail == "Token expired"


def test_bad_signature_is_unauthenticated():
    token = jwt.encode({"sub": "user-1", "role": "admin"}, "some-other-secret", algorithm=ALGORITHM)
    with pytest.raises(Unauthenticated):
        verify_credential(token)


def test_garbage_token_is_unauthenticated():
    with pytest.raises(Unauthenticated):
        verify_credential("this-is-not-a-jwt-at-all")


def test_token_without_role_is_forbidden():
    token = create_access_token({"sub": "user-1"})
    with pytest.raises(Forbidden):
        verify_credential(token)


def test_authorize_request_normalizes_path():
    token = create_user_token("user-1", "employee")
    context = authorize_request("get", "/api/v1//sales/?page=2", token)
    assert context.path == "/api/v1/sales"
    assert context.method == "GET"
    assert context.identity.role == "employee"


def test_authorize_request_denies_unlisted_route():
    token = create_user_token("user-1", "employee")
    with pytest.raises(Forbidden):
        authorize_request("DELETE", "/api/v1/products/abc", token)


@pytest.mark.asyncio
async def test_request_without_token_is_rejected(client):
    response = await client.get("/api/v1/sales")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_legacy_header_is_accepted(client, employee_token):
    response = await client.get("/api/v1/sales", headers={"x-auth-token": employee_token})
    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_employee_cannot_read_reports(client, employee_headers):
    response = await client.get("/api/v1/reports/summary?date=2024-05-10", headers=employee_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_admin_can_read_reports(client, admin_headers):
    response = await client.get("/api/v1/reports/summary?date=2024-05-10", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_unknown_role_is_forbidden(client):
    token = create_user_token("user-9", "auditor")
    response = await client.get("/api/v1/sales", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.asyncio
async def test_disabled_user_token_is_rejected(client, employee_headers, employee_user):
    response = await client.get("/api/v1/sales", headers=employee_headers)
    assert response.status_code == status.HTTP_200_OK

    employee_user.is_active = False
    await employee_user.save(update_fields=["is_active"])

    response = await client.get("/api/v1/sales", headers=employee_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_token_for_unknown_user_is_rejected(client):
    token = create_user_token("no-such-user", "employee")
    response = await client.get("/api/v1/sales", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
