import os
from typing import List

SQLITE_URL = "sqlite:///./nfl_predictor.db"
POSTGRES_URL = os.environ.get("DATABASE_URL")

DATABASE_URL = POSTGRES_URL if POSTGRES_URL else SQLITE_URL

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_JSON = os.environ.get("LOG_JSON", "false").lower() == "true"

ALLOWED_ORIGINS: List[str] = os.environ.get("ALLOWED_ORIGINS", "*").split(",")

SEED_SAMPLE_DATA = os.environ.get("SEED_SAMPLE_DATA", "true").lower() == "true"

SERVICE_NAME = "NFL Game Predictor API"
SERVICE_VERSION = "1.0.0"

# Free predictions per guest device before the paywall
GUEST_CREDIT_LIMIT = int(os.environ.get("GUEST_CREDIT_LIMIT", "10"))

SPORTSDATA_API_KEY = os.environ.get("SPORTSDATA_API_KEY", "")
SPORTSDATA_BASE_URL = os.environ.get("SPORTSDATA_BASE_URL", "https://api.sportsdata.io/v3/nfl")
SPORTSDATA_TIMEOUT = float(os.environ.get("SPORTSDATA_TIMEOUT", "30"))
SPORTSDATA_RATE_LIMIT_MAX_REQUESTS = int(os.environ.get("SPORTSDATA_RATE_LIMIT_MAX_REQUESTS", "100"))
SPORTSDATA_RATE_LIMIT_WINDOW = int(os.environ.get("SPORTSDATA_RATE_LIMIT_WINDOW", "60"))

# Season served by /games when none is requested
SCOREBOARD_DEFAULT_SEASON = int(os.environ.get("SCOREBOARD_DEFAULT_SEASON", "2024"))
