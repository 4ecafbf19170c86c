#!/usr/bin/env python3
"""
Expired Booking Sweep
Persist `completed` for live bookings whose end time has passed

Reads already report such bookings as completed; this sweep writes the status
back so historical queries and the pending-attendance scan stay small.
Safe to run from cron while the API is serving (takes the same seat locks).
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.database.orm_db_setting import dispose_engine
from src.platform.state.kvrocks_client import kvrocks_client


async def main() -> None:
    print('🧹 Completing expired bookings...')

    if settings.SEAT_LOCK_BACKEND == 'kvrocks':
        await kvrocks_client.initialize()

    try:
        completed = await container.complete_expired_bookings_use_case().execute()
        print(f'   ✅ {completed} bookings marked as completed')
    except Exception as e:
        print(f'❌ Sweep failed: {e}')
        exit(1)
    finally:
        await dispose_engine()
        if settings.SEAT_LOCK_BACKEND == 'kvrocks':
            await kvrocks_client.disconnect()


if __name__ == '__main__':
    asyncio.run(main())
