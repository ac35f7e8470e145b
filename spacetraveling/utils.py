import datetime
from dataclasses import dataclass, replace
from typing import Optional
from zoneinfo import ZoneInfo

PRISMIC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

MONTH_NAMES = {
    "pt-BR": (
        "janeiro",
        "fevereiro",
        "março",
        "abril",
        "maio",
        "junho",
        "julho",
        "agosto",
        "setembro",
        "outubro",
        "novembro",
        "dezembro",
    ),
    "en-US": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
}

MONTH_ABBREVIATIONS = {
    "pt-BR": (
        "jan",
        "fev",
        "mar",
        "abr",
        "mai",
        "jun",
        "jul",
        "ago",
        "set",
        "out",
        "nov",
        "dez",
    ),
    "en-US": tuple(name[:3] for name in MONTH_NAMES["en-US"]),
}


@dataclass(frozen=True)
class DateFormat:
    """
    Formatting configuration passed explicitly to every date formatting call.

    ``pattern`` is a strftime pattern; ``%b`` and ``%B`` are rendered with the
    month names of ``locale`` instead of the process locale.
    """

    pattern: str = "%d %b %Y"
    locale: str = "pt-BR"
    timezone: str = "UTC"

    def __post_init__(self):
        if self.locale not in MONTH_NAMES:
            raise ValueError(f"Unsupported date locale: {self.locale}")

    def with_pattern(self, pattern: str) -> "DateFormat":
        return replace(self, pattern=pattern)


def parse_timestamp(value: str) -> datetime.datetime:
    """Parse a Prismic timestamp (``2021-03-25T19:25:28+0000``) or ISO-8601 string."""
    try:
        parsed = datetime.datetime.strptime(value, PRISMIC_TIMESTAMP_FORMAT)
    except ValueError:
        parsed = datetime.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def format_date(value: Optional[str], date_format: DateFormat) -> Optional[str]:
    if not value:
        return None

    moment = parse_timestamp(value).astimezone(ZoneInfo(date_format.timezone))
    month = moment.month - 1
    pattern = date_format.pattern.replace(
        "%b", MONTH_ABBREVIATIONS[date_format.locale][month].replace("%", "%%")
    ).replace("%B", MONTH_NAMES[date_format.locale][month].replace("%", "%%"))
    return moment.strftime(pattern)
