from .config import DATABASE_URL

MODEL_MODULES = [
    "storefront.features.auth.models",
    "storefront.features.products.models",
    "storefront.features.sales.models",
    "storefront.features.expenses.models",
    "storefront.features.reports.models",
]


def build_tortoise_config(db_url: str = DATABASE_URL) -> dict:
    """Tortoise config shared by the API, the CLI and aerich."""
    return {
        "connections": {"default": db_url},
        "apps": {
            "models": {  # This is an app label, can be anything
                "models": [*MODEL_MODULES, "aerich.models"],
                "default_connection": "default",
            }
        },
        # Timestamps are stored in UTC; business-day maths happens in code.
        "use_tz": True,
        "timezone": "UTC",
    }


TORTOISE_ORM = build_tortoise_config()
