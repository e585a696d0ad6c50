import os

# Values come from the environment; defaults are suitable for local development only.
SECRET_KEY: str = os.getenv("SECRET_KEY", "storefront-dev-secret-!ChangeMe!")
ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Credentials shorter than this are rejected before any decoding is attempted.
MIN_TOKEN_LENGTH: int = int(os.getenv("MIN_TOKEN_LENGTH", "10"))

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./storefront.sqlite3")

# Calendar days for reporting are cut at midnight in this zone, not the host's.
BUSINESS_TIMEZONE: str = os.getenv("BUSINESS_TIMEZONE", "America/Argentina/Buenos_Aires")

REPORT_SCHEDULER_ENABLED: bool = os.getenv("REPORT_SCHEDULER_ENABLED", "true").lower() in ("true", "1", "t")
REPORT_RUN_TIME: str = os.getenv("REPORT_RUN_TIME", "23:59")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
