from typing import List

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.seating.app.interface.i_seat_repo import ISeatRepo


class SeedSeatsUseCase:
    def __init__(self, *, seat_repo: ISeatRepo) -> None:
        self.seat_repo = seat_repo

    @Logger.io
    async def execute(self, *, locations: List[str], seats_per_location: int) -> int:
        """
        Make sure seats 1..N exist at every location; re-running creates nothing new.

        Returns:
            Number of seats created
        """
        if seats_per_location < 1:
            raise ValidationError('seats_per_location must be positive')
        if not locations:
            raise ValidationError('At least one location is required')

        created = 0
        for location in locations:
            created += await self.seat_repo.ensure_seats(
                location=location, seat_numbers=list(range(1, seats_per_location + 1))
            )
        Logger.base.info(
            f'🪑 [SEED] {created} seats created across {len(locations)} locations '
            f'({seats_per_location} per location)'
        )
        return created
