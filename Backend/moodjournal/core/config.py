import os
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./moodjournal.db")

# Bearer tokens (issued by the identity service)
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

# Analytics
DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")
MONTH_UNLOCK_DAYS = int(os.getenv("MONTH_UNLOCK_DAYS", "15"))
YEAR_UNLOCK_DAYS = int(os.getenv("YEAR_UNLOCK_DAYS", "60"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
