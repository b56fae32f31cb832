from datetime import date, datetime, time, timedelta, timezone

API_DATE_FORMAT = "%Y-%m-%d"
API_DATETIME_FORMAT = "%Y-%m-%dT%H:%M"
DISPLAY_DATE_FORMAT = "%a %d %b"
DISPLAY_DATETIME_FORMAT = "%a %d %b, %H:%M"


def to_api_date(value):
    return value.strftime(API_DATE_FORMAT)


def to_api_datetime(value):
    return value.strftime(API_DATETIME_FORMAT)


def parse_api_date(value):
    return datetime.strptime(value, API_DATE_FORMAT).date()


def format_short_date(value):
    """Label like "Mon 15 Jan", day number without padding."""
    return f"{value.strftime('%a')} {value.day} {value.strftime('%b')}"


def format_short_date_with_comma(value):
    return f"{value.strftime('%a')} {value.day}, {value.strftime('%b')}"


def format_display_date(value):
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_with_pattern(value, pattern):
    return value.strftime(pattern)


def format_travel_date_range(departure_date, return_date=None, is_one_way=True):
    departure = format_short_date(departure_date)
    if is_one_way or return_date is None:
        return departure
    return f"{departure} - {format_short_date(return_date)}"


def format_travel_date(selected_dates, is_one_way=True, today=None):
    if not selected_dates:
        return format_short_date(today or date.today())
    first = selected_dates[0]
    if is_one_way or len(selected_dates) == 1:
        return format_short_date(first)
    return f"{format_short_date(first)} - {format_short_date(selected_dates[-1])}"


def combine_date_and_time(day, clock):
    """Date part of ``day`` with the hour and minute of ``clock``."""
    if isinstance(clock, datetime):
        clock = clock.time()
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time(clock.hour, clock.minute))


def number_of_nights(checkin, checkout):
    return max(1, (checkout - checkin).days)


def minutes_to_time(minutes):
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def seconds_to_time(seconds):
    return f"{seconds // 3600:02d}:{(seconds % 3600) // 60:02d}"


def days_from(start, days):
    return start + timedelta(days=days)


def format_epoch_time(epoch_seconds):
    # Airport-local times arrive as epoch seconds; render without shifting zones
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime("%H:%M")
