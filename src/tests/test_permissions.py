import pytest

from storefront.core.permissions import (
    ADMIN,
    EMPLOYEE,
    PERMISSIONS,
    PermissionRule,
    is_allowed,
    normalize_path,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("/api/v1/sales", "/api/v1/sales"),
        ("/api/v1/sales/", "/api/v1/sales"),
        ("//api//v1/sales/?page=2", "/api/v1/sales"),
        ("/api/v1/reports/summary?date=2024-05-10#top", "/api/v1/reports/summary"),
        ("", "/"),
        ("/", "/"),
    ],
)
def test_normalize_path(raw, expected):
    assert normalize_path(raw) == expected


@pytest.mark.parametrize(
    "role, path, method, allowed",
    [
        (ADMIN, "/api/v1/products", "POST", True),
        (ADMIN, "/api/v1/products/2abc", "DELETE", True),
        (ADMIN, "/api/v1/reports/summary?date=2024-05-10", "GET", True),
        (ADMIN, "/api/v1/reports/daily/2024-05-10", "GET", True),
        (ADMIN, "/api/v1/reports/daily", "POST", True),
        (ADMIN, "/api/v1/reports/summary", "POST", False),
        (EMPLOYEE, "/api/v1/products", "GET", True),
        (EMPLOYEE, "/api/v1/products", "POST", False),
        (EMPLOYEE, "/api/v1/products/2abc", "PUT", False),
        (EMPLOYEE, "/api/v1/sales", "post", True),
        (EMPLOYEE, "/api/v1/sales/2abc", "DELETE", True),
        (EMPLOYEE, "/api/v1/sales/2abc/items", "GET", False),
        (EMPLOYEE, "/api/v1/reports/summary", "GET", False),
        (EMPLOYEE, "/api/v1/auth/register", "POST", False),
        (EMPLOYEE, "/api/v1/auth/me", "PATCH", True),
        ("auditor", "/api/v1/sales", "GET", False),
    ],
)
def test_is_allowed(role, path, method, allowed):
    assert is_allowed(role, path, method) is allowed


def test_custom_rules_are_honoured():
    rules = (PermissionRule(role="auditor", path="/api/v1/reports/{rest:path}", methods=("get",)),)
    assert is_allowed("auditor", "/api/v1/reports/stock", "GET", rules)
    assert not is_allowed("auditor", "/api/v1/reports/stock", "GET")


def test_permission_table_is_immutable():
    assert isinstance(PERMISSIONS, tuple)
    with pytest.raises(AttributeError):
        PERMISSIONS[0].role = EMPLOYEE
