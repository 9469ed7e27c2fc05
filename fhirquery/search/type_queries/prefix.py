import re
import math
import calendar
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from fhirquery.errors import InvalidSearchParameter

PREFIXES = "eq|ne|lt|gt|ge|le|sa|eb|ap"

NUMBER_REGEX = re.compile(rf"^({PREFIXES})?([-+]?(0|[1-9][0-9]*)(\.[0-9]+)?([eE][+-]?[0-9]+)?)$")
DATE_REGEX = re.compile(
    rf"^({PREFIXES})?"
    r"(?P<year>[0-9]{4})(-(?P<month>[0-9]{2})(-(?P<day>[0-9]{2})"
    r"(T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})(:(?P<second>[0-9]{2})(?P<fraction>\.[0-9]+)?)?"
    r"(?P<tz>Z|[+-][0-9]{2}:[0-9]{2})?)?)?)?$"
)

# share of the searched value used as a margin by the 'ap' prefix
APPROXIMATION_RATIO = Decimal("0.1")
ONE_MILLISECOND = timedelta(milliseconds=1)


def prefix_range_query(prefix, field, start, end, exact=None):
    """Builds the range query matching `field` against a searched value
    whose implicit range is [start, end].
    When `exact` is given, comparison prefixes (lt, le, gt, ge) use it
    instead of the range boundaries.
    """
    if prefix == "ne":
        return {"bool": {"should": [{"range": {field: {"lt": start}}}, {"range": {field: {"gt": end}}}]}}
    elif prefix == "lt":
        return {"range": {field: {"lt": start if exact is None else exact}}}
    elif prefix == "le":
        return {"range": {field: {"lte": end if exact is None else exact}}}
    elif prefix == "gt":
        return {"range": {field: {"gt": end if exact is None else exact}}}
    elif prefix == "ge":
        return {"range": {field: {"gte": start if exact is None else exact}}}
    elif prefix == "sa":
        return {"range": {field: {"gt": end}}}
    elif prefix == "eb":
        return {"range": {field: {"lt": start}}}
    return {"range": {field: {"gte": start, "lte": end}}}


def parse_number(value):
    """Parses a [prefix]number search value.

    Returns: a tuple (prefix, number, (start, end)) where (start, end)
    is the implicit range given by the precision of the number.
    eg: "100" -> ("eq", 100, (99.5, 100.5))
    """
    match = NUMBER_REGEX.match(value)
    if not match:
        raise InvalidSearchParameter(f"Invalid number search parameter: {value}")
    prefix = match.group(1) or "eq"
    number = Decimal(match.group(2))

    delta = Decimal(5).scaleb(number.as_tuple().exponent - 1)
    start, end = number - delta, number + delta
    if prefix == "ap":
        margin = abs(number) * APPROXIMATION_RATIO
        start, end = min(start, number - margin), max(end, number + margin)
    if not all(math.isfinite(float(bound)) for bound in (start, number, end)):
        raise InvalidSearchParameter(f"Number search parameter out of range: {value}")
    return prefix, number, (start, end)


def number_range_query(prefix, number, implicit_range, field):
    start, end = implicit_range
    return prefix_range_query(prefix, field, float(start), float(end), exact=float(number))


def _upper_bound(start, match):
    if match.group("fraction"):
        return start + ONE_MILLISECOND
    elif match.group("second"):
        return start + timedelta(seconds=1)
    elif match.group("minute"):
        return start + timedelta(minutes=1)
    elif match.group("day"):
        return start + timedelta(days=1)
    elif match.group("month"):
        month_days = calendar.monthrange(start.year, start.month)[1]
        return start + timedelta(days=month_days)
    return start.replace(year=start.year + 1)


def _parse_timezone(tz):
    if tz is None or tz == "Z":
        return timezone.utc
    sign = -1 if tz[0] == "-" else 1
    hours, minutes = tz[1:].split(":")
    return timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))


def parse_date(value):
    """Parses a [prefix]date search value (FHIR date or dateTime, with any precision).

    Returns: a tuple (prefix, start, end) where start and end are the UTC
    datetimes delimiting the period designated by the value (both included).
    eg: "ge1974-12" -> ("ge", 1974-12-01T00:00:00.000, 1974-12-31T23:59:59.999)
    """
    match = DATE_REGEX.match(value)
    if not match:
        raise InvalidSearchParameter(f"Invalid date search parameter: {value}")
    prefix = match.group(1) or "eq"

    fraction = match.group("fraction")
    try:
        start = datetime(
            int(match.group("year")),
            int(match.group("month") or 1),
            int(match.group("day") or 1),
            int(match.group("hour") or 0),
            int(match.group("minute") or 0),
            int(match.group("second") or 0),
            int(fraction[1:4].ljust(3, "0")) * 1000 if fraction else 0,
            tzinfo=_parse_timezone(match.group("tz")),
        )
        end = _upper_bound(start, match) - ONE_MILLISECOND
        # shifting to UTC can leave the datetime range (eg: 0001-01-01T00:30:00+01:00)
        start, end = start.astimezone(timezone.utc), end.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise InvalidSearchParameter(f"Invalid date search parameter: {value}")

    return prefix, start, end


def format_date(date):
    return f"{date.strftime('%Y-%m-%dT%H:%M:%S')}.{date.microsecond // 1000:03d}Z"
