import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG = LOG_LEVEL == "DEBUG"

DATABASE_URL = os.getenv("DATABASE_URL")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL must be set in the environment")

ALLOWED_ORIGINS_RAW = os.getenv("ALLOWED_ORIGINS")
if not ALLOWED_ORIGINS_RAW:
    raise ValueError("ALLOWED_ORIGINS must be set in the environment")

ALLOWED_ORIGINS: list[str] = [
    origin.strip() for origin in ALLOWED_ORIGINS_RAW.split(",")
]

INVITATION_TTL_DAYS = int(os.getenv("INVITATION_TTL_DAYS", "30"))
MAX_GUESTS = int(os.getenv("MAX_GUESTS", "50"))
INVITATION_BASE_URL = os.getenv("INVITATION_BASE_URL", "http://localhost:3000/invite")
MAX_DATE_WINDOW_DAYS = int(os.getenv("MAX_DATE_WINDOW_DAYS", "731"))
