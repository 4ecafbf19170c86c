#!/usr/bin/env python3
"""
Seat Seed Script
Create seats 1..SEATS_PER_LOCATION at every SEAT_LOCATIONS entry

Notes:
- Idempotent: existing (location, seat_number) pairs are skipped
- Run `alembic upgrade head` first
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.database.orm_db_setting import dispose_engine


async def main() -> None:
    print('🌱 Seeding seats...')
    print('=' * 50)
    print(f'📍 Locations: {", ".join(settings.SEAT_LOCATIONS)}')
    print(f'🪑 Seats per location: {settings.SEATS_PER_LOCATION}')

    try:
        use_case = container.seed_seats_use_case()
        created = await use_case.execute(
            locations=settings.SEAT_LOCATIONS,
            seats_per_location=settings.SEATS_PER_LOCATION,
        )
        print(f'   ✅ Created {created} seats')
    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        exit(1)
    finally:
        await dispose_engine()

    print('=' * 50)
    print('🌱 Seat seeding completed!')


if __name__ == '__main__':
    asyncio.run(main())
