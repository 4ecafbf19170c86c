from enum import StrEnum


class AvailabilityStatus(StrEnum):
    AVAILABLE = 'available'  # One free slot covering the whole window
    LIMITED = 'limited'
    BOOKED = 'booked'  # No free slot of the minimum length
