import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_PORT = 3001
DEFAULT_DATABASE_URL = 'sqlite+aiosqlite:///transactions.db'


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid PORT value {raw!r}, falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning(f"PORT {port} out of range, falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def _parse_origins(raw: str) -> List[str]:
    origins = [origin.strip() for origin in raw.split(',') if origin.strip()]
    return origins or ['*']


@dataclass
class Settings:
    host: str = '0.0.0.0'
    port: int = DEFAULT_PORT
    database_url: str = DEFAULT_DATABASE_URL
    db_echo: bool = False
    cors_allow_origins: List[str] = field(default_factory=lambda: ['*'])
    log_level: str = 'INFO'
    log_file: str = 'logs/transaction_api.log'


def get_settings() -> Settings:
    """Read settings from the process environment."""
    return Settings(
        host=os.getenv('HOST', '0.0.0.0'),
        port=_parse_port(os.getenv('PORT', str(DEFAULT_PORT))),
        database_url=os.getenv('DATABASE_URL', DEFAULT_DATABASE_URL),
        db_echo=os.getenv('DB_ECHO', 'false').lower() in ('1', 'true'),
        cors_allow_origins=_parse_origins(os.getenv('CORS_ALLOW_ORIGINS', '*')),
        log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        log_file=os.getenv('LOG_FILE', 'logs/transaction_api.log'),
    )
