import pytest

from src.platform.exception.exceptions import ValidationError
from src.service.seating.app.command.seed_seats_use_case import SeedSeatsUseCase
from test.service.seating.fakes import InMemorySeatRepo


class TestSeedSeats:
    @pytest.mark.asyncio
    async def test_seeding_is_idempotent(self, seat_repo: InMemorySeatRepo) -> None:
        use_case = SeedSeatsUseCase(seat_repo=seat_repo)

        # Fixture already holds Main Library #1-2 and Reading Hall 1 #1
        created = await use_case.execute(
            locations=['Main Library', 'Reading Hall 1'], seats_per_location=3
        )
        assert created == 3

        again = await use_case.execute(
            locations=['Main Library', 'Reading Hall 1'], seats_per_location=3
        )
        assert again == 0
        assert len(await seat_repo.list_seats(location='Reading Hall 1')) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'locations, per_location, message',
        [
            (['Main Library'], 0, 'seats_per_location must be positive'),
            ([], 5, 'At least one location is required'),
        ],
    )
    async def test_rejects_bad_input(
        self, seat_repo: InMemorySeatRepo, locations: list, per_location: int, message: str
    ) -> None:
        with pytest.raises(ValidationError, match=message):
            await SeedSeatsUseCase(seat_repo=seat_repo).execute(
                locations=locations, seats_per_location=per_location
            )
