"""Static role/route permission table.

The table is loaded once at import time and never mutated. A request is
allowed when *any* rule matches its role, normalized path and method.
Path patterns use the same syntax as FastAPI routes: ``{param}`` matches a
single segment and ``{param:path}`` matches the rest of the path.
"""
import re
from dataclasses import dataclass, field
from typing import Pattern, Tuple

from starlette.routing import compile_path

API_PREFIX = "/api/v1"

ADMIN = "admin"
EMPLOYEE = "employee"

ANY_METHOD = "*"


@dataclass(frozen=True)
class PermissionRule:
    role: str
    path: str
    methods: Tuple[str, ...]
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        path_regex, _, _ = compile_path(self.path)
        object.__setattr__(self, "regex", path_regex)
        object.__setattr__(self, "methods", tuple(m.upper() for m in self.methods))

    def matches(self, role: str, path: str, method: str) -> bool:
        if self.role != role:
            return False
        if ANY_METHOD not in self.methods and method.upper() not in self.methods:
            return False
        return self.regex.match(path) is not None


def _rule(role: str, path: str, *methods: str) -> PermissionRule:
    return PermissionRule(role=role, path=f"{API_PREFIX}{path}", methods=methods)


PERMISSIONS: Tuple[PermissionRule, ...] = (
    # admin
    _rule(ADMIN, "/products", "GET", "POST"),
    _rule(ADMIN, "/products/{product_id}", "GET", "PUT", "DELETE"),
    _rule(ADMIN, "/sales", "GET", "POST"),
    _rule(ADMIN, "/sales/{sale_id}", "GET", "DELETE"),
    _rule(ADMIN, "/expenses", "GET", "POST"),
    _rule(ADMIN, "/expenses/{expense_id}", "GET", "DELETE"),
    _rule(ADMIN, "/reports/{rest:path}", "GET"),
    _rule(ADMIN, "/reports/daily", "POST"),
    _rule(ADMIN, "/auth/register", "POST"),
    _rule(ADMIN, "/auth/me", ANY_METHOD),
    # employee
    _rule(EMPLOYEE, "/products", "GET"),
    _rule(EMPLOYEE, "/products/{product_id}", "GET"),
    _rule(EMPLOYEE, "/sales", "GET", "POST"),
    _rule(EMPLOYEE, "/sales/{sale_id}", "GET", "DELETE"),
    _rule(EMPLOYEE, "/expenses", "GET", "POST"),
    _rule(EMPLOYEE, "/expenses/{expense_id}", "GET", "DELETE"),
    _rule(EMPLOYEE, "/auth/me", ANY_METHOD),
)

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_path(raw_path: str) -> str:
    """Strip the query string, collapse slashes and drop a trailing slash."""
    path = raw_path.split("?", 1)[0].split("#", 1)[0]
    path = _REPEATED_SLASHES.sub("/", "/" + path.strip())
    if len(path) > 1:
        path = path.rstrip("/")
    return path or "/"


def is_allowed(
    role: str, path: str, method: str, rules: Tuple[PermissionRule, ...] = PERMISSIONS
) -> bool:
    """Pure lookup: does any rule grant ``method`` on ``path`` to ``role``?"""
    normalized = normalize_path(path)
    return any(rule.matches(role, normalized, method) for rule in rules)
