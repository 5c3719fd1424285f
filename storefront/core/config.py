import os
from dotenv import load_dotenv

load_dotenv()

# -----------------------
# Database Config
# -----------------------
DB_TYPE = os.getenv("DB_TYPE", "sqlite").lower()

if DB_TYPE == "postgres":
    DATABASE_URL = os.getenv("DATABASE_URL")
    if not DATABASE_URL:
        raise ValueError("DATABASE_URL is required for Postgres setup")
elif DB_TYPE == "sqlite":
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./storefront.db")
else:
    raise ValueError(f"Unsupported DB_TYPE: {DB_TYPE}")

DB_TIMEOUT_SECONDS = float(os.getenv("DB_TIMEOUT_SECONDS", "5"))

# -----------------------
# JWT Config
# -----------------------
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise ValueError("JWT_SECRET environment variable must be set")

JWT_ALGORITHM = "HS256"
JWT_ISSUER = "OldSouqsApp"
ACCESS_TOKEN_EXPIRE_HOURS = 24

# -----------------------
# Sirv (image hosting)
# -----------------------
SIRV_CLIENT_ID = os.getenv("SIRV_CLIENT_ID", "")
SIRV_CLIENT_SECRET = os.getenv("SIRV_CLIENT_SECRET", "")
SIRV_API_URL = os.getenv("SIRV_API_URL", "https://api.sirv.com/v2")
SIRV_BASE_URL = os.getenv("SIRV_BASE_URL", "https://old-souqs.sirv.com/")
SIRV_TIMEOUT_SECONDS = float(os.getenv("SIRV_TIMEOUT_SECONDS", "30"))

# -----------------------
# Orders
# -----------------------
DELIVERY_FEE = float(os.getenv("DELIVERY_FEE", "0"))

# -----------------------
# Logging / bootstrap
# -----------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@oldsouqs.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")
