"""
Built-in placeholder catalog.

Each preset binds a token to a generator evaluated against a single
``datetime`` instant, so every date/time token built in one pass agrees.
Identity-derived presets ignore the instant.
"""

import getpass
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Tuple


@dataclass(frozen=True)
class PresetVariable:
    """A built-in placeholder and the function producing its value."""
    token: str
    generator: Callable[[datetime], str]
    description: str = ""

    def evaluate(self, now: datetime) -> str:
        return self.generator(now)


def _username(now: datetime) -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        # No login name available (e.g. stripped container environment)
        return ""


PRESET_VARIABLES: Tuple[PresetVariable, ...] = (
    # Date
    PresetVariable("%year%", lambda now: now.strftime("%Y"), "4-digit year"),
    PresetVariable("%yy%", lambda now: now.strftime("%y"), "2-digit year"),
    PresetVariable("%month%", lambda now: now.strftime("%m"), "month number"),
    PresetVariable("%month_name%", lambda now: now.strftime("%B"), "full month name"),
    PresetVariable("%month_name_short%", lambda now: now.strftime("%b"), "abbreviated month name"),
    PresetVariable("%day%", lambda now: now.strftime("%d"), "day of month"),
    PresetVariable("%day_of_week%", lambda now: now.strftime("%A"), "full weekday name"),
    PresetVariable("%day_of_week_short%", lambda now: now.strftime("%a"), "abbreviated weekday name"),
    PresetVariable("%day_of_year%", lambda now: str(now.timetuple().tm_yday), "day of year"),

    # Common date combinations
    PresetVariable("%date_iso%", lambda now: now.strftime("%Y-%m-%d"), "ISO date"),
    PresetVariable("%date_cn%", lambda now: f"{now:%Y}年{now:%m}月{now:%d}日", "long local date"),
    PresetVariable("%date_compact%", lambda now: now.strftime("%Y%m%d"), "compact date"),

    # Time
    PresetVariable("%hour_24%", lambda now: now.strftime("%H"), "hour (24-hour clock)"),
    PresetVariable("%hour_12%", lambda now: now.strftime("%I"), "hour (12-hour clock)"),
    PresetVariable("%minute%", lambda now: now.strftime("%M"), "minute"),
    PresetVariable("%second%", lambda now: now.strftime("%S"), "second"),
    PresetVariable("%am_pm%", lambda now: now.strftime("%p"), "AM/PM marker"),

    # Date and time
    PresetVariable("%datetime_iso%", lambda now: now.strftime("%Y-%m-%dT%H:%M:%S"), "ISO date-time"),
    PresetVariable("%datetime_compact%", lambda now: now.strftime("%Y%m%d%H%M%S"), "compact date-time"),

    # Other
    PresetVariable("%guid%", lambda now: str(uuid.uuid4()), "freshly generated unique id"),
    PresetVariable("%username%", _username, "current user name"),
)
