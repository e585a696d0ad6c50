"""
Root conftest for the pytest test suite.

Each test runs against a fresh, isolated in-memory SQLite database that is
created by the autouse ``initialize_test_db`` fixture. The HTTP client talks
to the ASGI app directly; the app's own lifespan (database init and the
report scheduler) is not run, so the test fixture owns the connection.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: (autouse) Creates a fresh DB schema and seeds users.
- `client`: Unauthenticated httpx AsyncClient bound to the app.
- `admin_headers` / `employee_headers`: Authorization headers for the seeded users.
- `product_factory`: Creates catalogue products with sensible defaults.
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from tortoise import Tortoise

from storefront.core.database import build_tortoise_config
from storefront.features.auth.models import Role, User
from storefront.features.auth.security import create_user_token, get_password_hash
from storefront.features.products.models import Category, Garment, Product, ProductType
from storefront.main import app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "adminpassword123"
EMPLOYEE_EMAIL = "employee@example.com"
EMPLOYEE_PASSWORD = "employeepassword123"


async def add_admin_user() -> User:
    return await User.create(
        email=ADMIN_EMAIL,
        name="Admin Fixture",
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=Role.ADMIN,
    )


async def add_employee_user() -> User:
    return await User.create(
        email=EMPLOYEE_EMAIL,
        name="Employee Fixture",
        hashed_password=get_password_hash(EMPLOYEE_PASSWORD),
        role=Role.EMPLOYEE,
    )


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes a fresh in-memory database for each test function and
    seeds one admin and one employee.
    """
    await Tortoise.init(config=build_tortoise_config("sqlite://:memory:"))
    await Tortoise.generate_schemas()
    await add_admin_user()
    await add_employee_user()

    yield

    await Tortoise.close_connections()


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user() -> User:
    return await User.get(email=ADMIN_EMAIL)


@pytest_asyncio.fixture
async def employee_user() -> User:
    return await User.get(email=EMPLOYEE_EMAIL)


@pytest.fixture
def admin_token(admin_user: User) -> str:
    return create_user_token(admin_user.public_id, Role.ADMIN.value)


@pytest.fixture
def employee_token(employee_user: User) -> str:
    return create_user_token(employee_user.public_id, Role.EMPLOYEE.value)


@pytest.fixture
def admin_headers(admin_token: str) -> dict:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def employee_headers(employee_token: str) -> dict:
    return {"Authorization": f"Bearer {employee_token}"}


@pytest_asyncio.fixture
async def product_factory():
    """A factory to create products."""

    async def _factory(
        name: str = "Body manga larga",
        quantity: int = 10,
        sale_price: float = 5.0,
        cost_price: float = 2.0,
        category: Category = Category.BABY,
    ) -> Product:
        return await Product.create(
            name=name,
            category=category,
            type=ProductType.UNISEX,
            garment=Garment.TSHIRT,
            size="6M",
            color="Blanco",
            quantity=quantity,
            cost_price=cost_price,
            sale_price=sale_price,
        )

    return _factory
