import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# -----------------------------------------
#  Environment (.env at the project root)
# -----------------------------------------
_CURRENT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _CURRENT_DIR.parent
_ENV_PATH = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_PATH)


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


DEFAULT_TOP_N = int(os.getenv("RECOMMENDATION_TOP_N", "10"))
TOP_SIMILAR_USERS = int(os.getenv("RECOMMENDATION_TOP_SIMILAR_USERS", "10"))
TRENDING_JITTER = float(os.getenv("RECOMMENDATION_TRENDING_JITTER", "0.2"))
RANDOM_SEED = _optional_int("RECOMMENDATION_RANDOM_SEED")
LOG_LEVEL = os.getenv("RECOMMENDATION_LOG_LEVEL", "INFO").upper()
