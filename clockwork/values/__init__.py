"""Date/time value types."""
from .time_of_day import REFERENCE_DATE, TimeOfDay
from .timestamp import Timestamp

__all__ = ["REFERENCE_DATE", "TimeOfDay", "Timestamp"]
