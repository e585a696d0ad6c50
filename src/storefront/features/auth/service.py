"""Business logic for authentication, such as user creation and retrieval."""
from typing import Optional

from . import models


async def get_user_by_email(email: str) -> Optional[models.User]:
    """Retrieves a user by their email address.

    Args:
        email: The email address of the user to retrieve.

    Returns:
        The User object if found, otherwise None.
    """
    return await models.User.get_or_none(email=email.strip().lower())


async def get_user_by_public_id(public_id: str) -> Optional[models.User]:
    return await models.User.get_or_none(public_id=public_id)


async def create_user(user_in: dict, hashed_password_val: str) -> models.User:
    """Creates a new user in the database.

    Args:
        user_in: A dictionary containing the user data (excluding password).
        hashed_password_val: The hashed password for the new user.

    Returns:
        The newly created User object.
    """
    user_data = dict(user_in)
    user_data["email"] = user_data["email"].strip().lower()
    return await models.User.create(**user_data, hashed_password=hashed_password_val)
