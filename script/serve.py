#!/usr/bin/env python3
"""
API Server
Run src.main:app under granian (ASGI), same as `granian src.main:app --interface asgi`

Notes:
- Host, port and worker count come from API_HOST / API_PORT / API_WORKERS
- The in-process seat lock only covers one worker; use SEAT_LOCK_BACKEND=kvrocks
  before raising API_WORKERS
"""

from granian import Granian
from granian.constants import Interfaces

from src.platform.config.core_setting import settings


def main() -> None:
    if settings.API_WORKERS > 1 and settings.SEAT_LOCK_BACKEND == 'memory':
        print('❌ SEAT_LOCK_BACKEND=memory cannot exclude bookings across workers')
        exit(1)

    print(
        f'🚀 Serving on {settings.API_HOST}:{settings.API_PORT} '
        f'({settings.API_WORKERS} worker(s), lock backend {settings.SEAT_LOCK_BACKEND})'
    )
    Granian(
        'src.main:app',
        address=settings.API_HOST,
        port=settings.API_PORT,
        interface=Interfaces.ASGI,
        workers=settings.API_WORKERS,
    ).serve()


if __name__ == '__main__':
    main()
