"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.seating.app.command import (
    add_break_use_case,
    cancel_booking_use_case,
    confirm_attendance_use_case,
    create_booking_use_case,
    report_location_use_case,
)
from src.service.seating.app.query import (
    get_availability_use_case,
    get_booking_use_case,
    list_available_seats_use_case,
    list_my_bookings_use_case,
    list_seats_use_case,
)
from src.service.seating.driving_adapter.http_controller.auth import current_member


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    add_break_use_case,
    cancel_booking_use_case,
    confirm_attendance_use_case,
    report_location_use_case,
    get_availability_use_case,
    get_booking_use_case,
    list_available_seats_use_case,
    list_my_bookings_use_case,
    list_seats_use_case,
    current_member,
]
