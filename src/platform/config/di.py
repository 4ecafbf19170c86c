"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.seating.app.command.auto_cancel_booking_use_case import AutoCancelBookingUseCase
from src.service.seating.app.command.complete_expired_bookings_use_case import (
    CompleteExpiredBookingsUseCase,
)
from src.service.seating.app.command.seed_seats_use_case import SeedSeatsUseCase
from src.service.seating.domain.attendance_geofence_checker import AttendanceGeofenceChecker
from src.service.seating.domain.availability_computer import AvailabilityComputer
from src.service.seating.domain.booking_conflict_resolver import BookingConflictResolver
from src.service.seating.domain.break_manager import BreakManager
from src.service.seating.domain.value_object.geo_point import GeoPoint
from src.service.seating.driven_adapter.clock.system_clock import SystemClock
from src.service.seating.driven_adapter.repo.booking_repo_impl import BookingRepoImpl
from src.service.seating.driven_adapter.repo.seat_repo_impl import SeatRepoImpl
from src.service.seating.driven_adapter.repo.user_location_repo_impl import UserLocationRepoImpl
from src.service.seating.driven_adapter.state.in_memory_seat_lock import InMemorySeatLock
from src.service.seating.driven_adapter.state.kvrocks_attendance_deadline_store import (
    KvrocksAttendanceDeadlineStore,
)
from src.service.seating.driven_adapter.state.kvrocks_seat_lock import KvrocksSeatLock
from src.service.seating.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.seating.driving_adapter.scheduler.auto_cancel_scheduler import (
    AutoCancelScheduler,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    clock = providers.Singleton(SystemClock)

    # Repositories (stateless - use session_factory per-request)
    seat_repo = providers.Singleton(SeatRepoImpl, session_factory=database.provided.session)
    booking_repo = providers.Singleton(BookingRepoImpl, session_factory=database.provided.session)
    user_location_repo = providers.Singleton(
        UserLocationRepoImpl, session_factory=database.provided.session
    )

    # Kvrocks state
    attendance_deadline_store = providers.Singleton(KvrocksAttendanceDeadlineStore)

    # Seat/user mutual exclusion: Kvrocks across instances, in-process for a single worker
    seat_lock = providers.Selector(
        config_service.provided.SEAT_LOCK_BACKEND,
        kvrocks=providers.Singleton(
            KvrocksSeatLock,
            ttl_seconds=config_service.provided.SEAT_LOCK_TTL_SECONDS,
            wait_seconds=config_service.provided.SEAT_LOCK_WAIT_SECONDS,
        ),
        memory=providers.Singleton(
            InMemorySeatLock,
            wait_seconds=config_service.provided.SEAT_LOCK_WAIT_SECONDS,
        ),
    )

    # Domain services (pure, configured once)
    availability_computer = providers.Singleton(
        AvailabilityComputer, min_slot_minutes=config_service.provided.MIN_BOOKING_MINUTES
    )
    booking_conflict_resolver = providers.Singleton(
        BookingConflictResolver,
        min_booking_minutes=config_service.provided.MIN_BOOKING_MINUTES,
        active_booking_scope=config_service.provided.ACTIVE_BOOKING_SCOPE,
    )
    break_manager = providers.Singleton(
        BreakManager, min_break_minutes=config_service.provided.MIN_BOOKING_MINUTES
    )
    venue = providers.Singleton(
        GeoPoint,
        latitude=config_service.provided.VENUE_LATITUDE,
        longitude=config_service.provided.VENUE_LONGITUDE,
    )
    attendance_geofence_checker = providers.Singleton(
        AttendanceGeofenceChecker,
        venue=venue,
        radius_meters=config_service.provided.ATTENDANCE_RADIUS_METERS,
    )
    attendance_grace_minutes = config_service.provided.ATTENDANCE_GRACE_MINUTES

    # Use cases driven by background workers and scripts (no HTTP `depends`)
    auto_cancel_booking_use_case = providers.Singleton(
        AutoCancelBookingUseCase,
        booking_repo=booking_repo,
        seat_lock=seat_lock,
        clock=clock,
        grace_minutes=attendance_grace_minutes,
    )
    complete_expired_bookings_use_case = providers.Singleton(
        CompleteExpiredBookingsUseCase,
        booking_repo=booking_repo,
        seat_lock=seat_lock,
        clock=clock,
        grace_minutes=attendance_grace_minutes,
    )
    seed_seats_use_case = providers.Singleton(SeedSeatsUseCase, seat_repo=seat_repo)

    # Attendance deadlines: durable store + worker (started in main.py lifespan)
    attendance_scheduler = providers.Singleton(
        AutoCancelScheduler,
        deadline_store=attendance_deadline_store,
        auto_cancel_use_case=auto_cancel_booking_use_case,
        booking_repo=booking_repo,
        clock=clock,
        grace_minutes=attendance_grace_minutes,
        poll_interval=config_service.provided.AUTO_CANCEL_POLL_INTERVAL_SECONDS,
        batch_size=config_service.provided.AUTO_CANCEL_BATCH_SIZE,
        retry_base_seconds=config_service.provided.AUTO_CANCEL_RETRY_BASE_SECONDS,
        retry_max_seconds=config_service.provided.AUTO_CANCEL_RETRY_MAX_SECONDS,
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
