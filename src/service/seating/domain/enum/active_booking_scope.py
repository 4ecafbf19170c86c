from enum import StrEnum


class ActiveBookingScope(StrEnum):
    """Where a member may hold at most one live booking"""

    GLOBAL = 'global'
    LOCATION = 'location'
    UNRESTRICTED = 'unrestricted'
