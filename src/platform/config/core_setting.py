from pathlib import Path
from typing import Annotated, List, Literal

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


def _split_csv(v: str | List[str], default: List[str]) -> List[str]:
    if isinstance(v, str) and v.startswith('['):
        return orjson.loads(v)
    if isinstance(v, str):
        return [i.strip() for i in v.split(',') if i.strip()]
    elif isinstance(v, list):
        return v
    return default


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Seat Scheduling Service'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # HTTP server (script/serve.py)
    API_HOST: str = '0.0.0.0'
    API_PORT: int = 8100
    API_WORKERS: int = 1  # More than one requires SEAT_LOCK_BACKEND=kvrocks

    # Security (tokens are issued by the external auth service, we only decode them)
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'fastapiusersauth'

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        return _split_csv(v, [])

    # Database
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'seat_scheduling'
    POSTGRES_PORT: int = 5432

    # SQLAlchemy pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Kvrocks Configuration (Redis protocol + Kvrocks storage)
    KVROCKS_HOST: str = 'localhost'
    KVROCKS_PORT: int = 6666
    KVROCKS_DB: int = 0
    KVROCKS_PASSWORD: str = ''
    KVROCKS_KEY_PREFIX: str = ''
    REDIS_DECODE_RESPONSES: bool = True

    # Kvrocks Connection Pool Configuration
    KVROCKS_POOL_MAX_CONNECTIONS: int = 50
    KVROCKS_POOL_SOCKET_TIMEOUT: int = 10
    KVROCKS_POOL_SOCKET_CONNECT_TIMEOUT: int = 10
    KVROCKS_POOL_SOCKET_KEEPALIVE: bool = True
    KVROCKS_POOL_HEALTH_CHECK_INTERVAL: int = 30

    # Seat locking
    SEAT_LOCK_BACKEND: Literal['kvrocks', 'memory'] = 'kvrocks'
    SEAT_LOCK_TTL_SECONDS: int = 10  # Upper bound on a single read-decide-write
    SEAT_LOCK_WAIT_SECONDS: float = 5.0  # Give up with "Seat is busy" after this

    # Booking rules
    MIN_BOOKING_MINUTES: int = 30  # Also the minimum break and minimum free slot
    ACTIVE_BOOKING_SCOPE: Literal['global', 'location', 'unrestricted'] = 'global'
    SEAT_LOCATIONS: Annotated[List[str], NoDecode] = ['Main Library', 'Reading Hall 1', 'Reading Hall 2']
    SEATS_PER_LOCATION: int = 50

    @field_validator('SEAT_LOCATIONS', mode='before')
    @classmethod
    def assemble_seat_locations(cls, v: str | List[str]) -> List[str]:
        return _split_csv(v, ['Main Library'])

    # Attendance geofence
    VENUE_LATITUDE: float = 25.261071
    VENUE_LONGITUDE: float = 82.983812
    ATTENDANCE_RADIUS_METERS: float = 100.0
    ATTENDANCE_GRACE_MINUTES: int = 20

    # Auto-cancel scheduler
    AUTO_CANCEL_POLL_INTERVAL_SECONDS: float = 5.0
    AUTO_CANCEL_BATCH_SIZE: int = 100
    AUTO_CANCEL_RETRY_BASE_SECONDS: float = 2.0
    AUTO_CANCEL_RETRY_MAX_SECONDS: float = 300.0


settings = Settings()  # type: ignore
