"""
KENOBRAIN - Settings

Environment-driven settings for the CLI and the web server. Values come from
the process environment, optionally seeded from a `.env` file.
The engine itself never reads these; callers pass them in.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent.parent
PAYOUTS_DIR = Path(os.getenv("PAYOUTS_DIR", BASE_DIR / "payouts"))
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", BASE_DIR / "public"))


class ServerConfig:
    HOST = os.getenv("KENO_HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", "3000"))
    DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"


class ReportConfig:
    DEFAULT_PAYOUT_FILE = os.getenv("DEFAULT_PAYOUT_FILE", "payouts_original.csv")
    ODDS_DECIMALS = int(os.getenv("ODDS_DECIMALS", "2"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Display format shared by every entry point
    LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    LOG_DATEFMT = "%H:%M:%S"
