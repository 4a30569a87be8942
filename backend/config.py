import os
from dotenv import load_dotenv

# This will load the .env file only if the variables are not already set
# (e.g., by docker-compose). It's safe to run everywhere.
load_dotenv()

# --- UPSTREAM APIS ---
STEAM_API_KEY = os.getenv("STEAM_API_KEY")
FACEIT_API_KEY = os.getenv("FACEIT_API_KEY")
STEAM_API_BASE_URL = "https://api.steampowered.com"
FACEIT_API_BASE_URL = "https://open.faceit.com/data/v4"
MATCH_HISTORY_LIMIT = 20
HTTP_TIMEOUT_SECONDS = 10.0

# --- REDIS ---
REDIS_URL = os.getenv("REDIS_URL")

# --- CACHING ---
CACHE_EXPIRATION_SECONDS = 86400  # 1 day

# --- TRACKING ---
TRACKING_URL = os.getenv("TRACKING_URL")
TRACKING_DOMAIN = os.getenv("TRACKING_DOMAIN", "profile-peek.com")

# --- HTTP ---
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost,http://localhost:5173").split(",")
    if origin.strip()
]

REQUIRED_ENV_VARS = ["REDIS_URL", "STEAM_API_KEY", "FACEIT_API_KEY", "TRACKING_URL"]


def ensure_set():
    """Fails startup if any required environment variable is missing."""
    missing = [name for name in REQUIRED_ENV_VARS if not globals().get(name)]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
