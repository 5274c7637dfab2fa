"""Building blocks of the STAYBOOK CLI.

Status messages on stderr, OSC-8 links where the terminal understands them,
and the text formats for URLs, bookings and properties.
"""

from .formatting import format_booking, format_property, sanitize_url
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = [
    "error",
    "format_booking",
    "format_property",
    "hyperlink",
    "sanitize_url",
    "success",
    "warn",
]
