"""Configuration management for the Larder service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from larder.utilities.constants import DAYS_BEFORE_EXPIRY as _DEFAULT_DAYS, LOW_STOCK_THRESHOLD as _DEFAULT_LOW

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Date Format
DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Inventory Alerts Configuration
DAYS_BEFORE_EXPIRY: Final[int] = int(os.getenv('DAYS_BEFORE_EXPIRY', str(_DEFAULT_DAYS)))
LOW_STOCK_THRESHOLD: Final[dict[str, float]] = {
    unit: float(os.getenv(f'LOW_STOCK_THRESHOLD_{unit.upper()}', str(default)))
    for unit, default in _DEFAULT_LOW.items()
}

# Event buffer exposed by the web observers
MAX_EVENTS: Final[int] = int(os.getenv('MAX_EVENTS', '300'))
