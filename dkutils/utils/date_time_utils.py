"""
Date/time helpers around a single wall-clock instant.

``DateTimeUtils`` holds a naive ``datetime`` interpreted in a fixed zone
(UTC unless configured otherwise). All arithmetic returns new ``datetime``
values; the wrapper itself never changes.
"""

import re
from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Union
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from ..config import get_settings
from ..core.exceptions import InvalidDateFormatError

DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
DEFAULT_TIME_ZONE = "UTC"

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

WEEKDAYS = ("MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY")

# Directives supported by both strftime and strptime on every platform
_KNOWN_DIRECTIVES = frozenset("aAwdbBmyYHIpMSfzZjUWcxXGuV%")
_DIRECTIVE_PATTERN = re.compile(r"%(.?)", re.DOTALL)

ZoneLike = Union[str, tzinfo, None]
DateLike = Union[date, datetime, int]


def is_valid_date_format(date_format: Optional[str]) -> bool:
    if not date_format:
        return False
    return all(
        match.group(1) in _KNOWN_DIRECTIVES
        for match in _DIRECTIVE_PATTERN.finditer(date_format)
    )


def resolve_date_format(date_format: Optional[str]) -> str:
    """Fall back to the configured default pattern and reject unknown directives."""
    if date_format is None:
        date_format = get_settings().default_date_format
    if not is_valid_date_format(date_format):
        raise InvalidDateFormatError(date_format)
    return date_format


def _resolve_zone(zone: ZoneLike) -> tzinfo:
    if zone is None:
        return ZoneInfo(get_settings().default_time_zone)
    if isinstance(zone, str):
        return ZoneInfo(zone)
    return zone


def _to_wall_clock(value: datetime, zone: tzinfo) -> datetime:
    """Aware values are converted into the zone; naive values are taken as-is."""
    if value.tzinfo is None:
        return value
    return value.astimezone(zone).replace(tzinfo=None)


def _as_date(value: DateLike, month: Optional[int], day: Optional[int]) -> date:
    if isinstance(value, date):
        return value
    return date(value, month, day)


def _truncated_units(delta: timedelta, unit: timedelta) -> int:
    micros = delta // timedelta(microseconds=1)
    unit_micros = unit // timedelta(microseconds=1)
    whole = abs(micros) // unit_micros
    return whole if micros >= 0 else -whole


# ===== Calendar questions about arbitrary dates =====

def is_leap_year(value: DateLike) -> bool:
    year = value.year if isinstance(value, date) else value
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def is_weekend(value: DateLike, month: Optional[int] = None, day: Optional[int] = None) -> bool:
    return _as_date(value, month, day).isoweekday() in (6, 7)


def is_weekday(value: DateLike, month: Optional[int] = None, day: Optional[int] = None) -> bool:
    return not is_weekend(value, month, day)


def weekday_name(value: DateLike, month: Optional[int] = None, day: Optional[int] = None) -> str:
    return WEEKDAYS[_as_date(value, month, day).isoweekday() - 1]


def week_of_year(value: DateLike, month: Optional[int] = None, day: Optional[int] = None) -> int:
    """ISO-8601 week number."""
    return _as_date(value, month, day).isocalendar()[1]


class DateTimeUtils:
    """
    Immutable wrapper around one instant.

    Args:
        value: wall-clock time; aware values are converted into ``zone``.
            Defaults to the current time in ``zone``.
        zone: IANA zone name or tzinfo; defaults to the configured zone (UTC)
    """

    is_valid_date_format = staticmethod(is_valid_date_format)

    def __init__(self, value: Optional[datetime] = None, zone: ZoneLike = None):
        self._zone = _resolve_zone(zone)
        if value is None:
            value = datetime.now(self._zone)
        self._value = _to_wall_clock(value, self._zone)

    @classmethod
    def parse(
        cls,
        date_string: str,
        date_format: Optional[str] = None,
        zone: ZoneLike = None,
    ) -> "DateTimeUtils":
        """Parse text with a strptime pattern; raises ValueError when the text does not match."""
        date_format = resolve_date_format(date_format)
        return cls(datetime.strptime(date_string, date_format), zone)

    def __repr__(self) -> str:
        return f"DateTimeUtils({self._value.isoformat()}, zone={self._zone})"

    @property
    def current_date_time(self) -> datetime:
        return self._value

    @property
    def zone(self) -> tzinfo:
        return self._zone

    def months_in_current_year(self) -> List[str]:
        return list(MONTHS)

    def format_date(self, date_format: str) -> str:
        if not is_valid_date_format(date_format):
            raise InvalidDateFormatError(date_format)
        return self._value.replace(tzinfo=self._zone).strftime(date_format)

    def parse_to_datetime(self, date_string: str, date_format: Optional[str] = None) -> datetime:
        date_format = resolve_date_format(date_format)
        return _to_wall_clock(datetime.strptime(date_string, date_format), self._zone)

    # Calendar fields

    @property
    def year(self) -> int:
        return self._value.year

    @property
    def month(self) -> int:
        return self._value.month

    @property
    def day(self) -> int:
        return self._value.day

    @property
    def month_name(self) -> str:
        return MONTHS[self._value.month - 1].upper()

    @property
    def day_of_week(self) -> int:
        """ISO day of week, Monday = 1 .. Sunday = 7."""
        return self._value.isoweekday()

    @property
    def day_of_month(self) -> int:
        return self._value.day

    @property
    def day_of_year(self) -> int:
        return self._value.timetuple().tm_yday

    @property
    def week_of_year(self) -> int:
        return week_of_year(self._value)

    @property
    def weekday_name(self) -> str:
        return weekday_name(self._value)

    def is_leap_year(self) -> bool:
        return is_leap_year(self._value)

    def is_weekend(self) -> bool:
        return is_weekend(self._value)

    def is_weekday(self) -> bool:
        return is_weekday(self._value)

    def to_epoch_milli(self) -> int:
        aware = self._value.replace(tzinfo=self._zone)
        epoch = datetime(1970, 1, 1, tzinfo=ZoneInfo("UTC"))
        return (aware - epoch) // timedelta(milliseconds=1)

    # Arithmetic

    def add_days(self, days: int) -> datetime:
        return self._value + timedelta(days=days)

    def subtract_days(self, days: int) -> datetime:
        return self._value - timedelta(days=days)

    def add_hours(self, hours: int) -> datetime:
        return self._value + timedelta(hours=hours)

    def subtract_hours(self, hours: int) -> datetime:
        return self._value - timedelta(hours=hours)

    def add_minutes(self, minutes: int) -> datetime:
        return self._value + timedelta(minutes=minutes)

    def subtract_minutes(self, minutes: int) -> datetime:
        return self._value - timedelta(minutes=minutes)

    def add_seconds(self, seconds: int) -> datetime:
        return self._value + timedelta(seconds=seconds)

    def subtract_seconds(self, seconds: int) -> datetime:
        return self._value - timedelta(seconds=seconds)

    def next_month(self, months: int = 1) -> datetime:
        """Shift by whole months, clamping to the last day of shorter months."""
        return self._value + relativedelta(months=months)

    def next_year(self, years: int = 1) -> datetime:
        return self._value + relativedelta(years=years)

    # Period boundaries keep the time of day

    def start_of_week(self) -> datetime:
        return self._value - timedelta(days=self._value.isoweekday() - 1)

    def start_of_next_week(self) -> datetime:
        return self.start_of_week() + timedelta(weeks=1)

    def start_of_month(self) -> datetime:
        return self._value.replace(day=1)

    def start_of_next_month(self) -> datetime:
        return self.start_of_month() + relativedelta(months=1)

    def start_of_year(self) -> datetime:
        return self._value.replace(month=1, day=1)

    def start_of_next_year(self) -> datetime:
        return self.start_of_year() + relativedelta(years=1)

    # Differences are self - other, truncated toward zero

    def _elapsed_since(self, other: datetime) -> timedelta:
        return self._value - _to_wall_clock(other, self._zone)

    def difference_in_days(self, other: datetime) -> int:
        return _truncated_units(self._elapsed_since(other), timedelta(days=1))

    def difference_in_hours(self, other: datetime) -> int:
        return _truncated_units(self._elapsed_since(other), timedelta(hours=1))

    def difference_in_minutes(self, other: datetime) -> int:
        return _truncated_units(self._elapsed_since(other), timedelta(minutes=1))

    def difference_in_seconds(self, other: datetime) -> int:
        return _truncated_units(self._elapsed_since(other), timedelta(seconds=1))

    def is_before(self, other: datetime) -> bool:
        return self._value < _to_wall_clock(other, self._zone)

    def is_after(self, other: datetime) -> bool:
        return self._value > _to_wall_clock(other, self._zone)

    def is_equal(self, other: datetime) -> bool:
        return self._value == _to_wall_clock(other, self._zone)
