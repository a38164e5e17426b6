"""Built-in visitor message formatter.

Turns a VisitorRecord into Telegram HTML: a fixed header banner, one line
per selected field in the caller's order, and a fixed footer banner.

Rules:
    - Each known key maps to one emoji-prefixed, bold-labeled line.
    - A key whose value is missing renders nothing (no blank line).
    - Unknown keys are ignored.
    - Every value coming from remote data or the visitor is HTML-escaped,
      so the text must be sent with parse_mode "HTML".
    - Pure: the same record and fields always give the same text.

Usage:
    from notigram.application.services.message_formatter import format_message

    text = format_message(record, ["page", "country", "isp"])
"""

import html
from collections.abc import Callable, Iterable
from typing import Any

from notigram.core.constants import DEFAULT_FIELDS, MESSAGE_FOOTER, MESSAGE_HEADER
from notigram.domain.entities import VisitorRecord


def escape_html(value: Any) -> str:
    """Escape &, <, >, " and ' for Telegram HTML. None becomes ""."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def _text(value: Any) -> str | None:
    """Escaped text for a present value, None for None/empty."""
    if value is None:
        return None
    text = str(value).strip()
    return escape_html(text) if text else None


def _line(emoji: str, label: str, value: Any) -> str | None:
    text = _text(value)
    if text is None:
        return None
    return f"{emoji} <b>{label}:</b> {text}"


def _simple(
    emoji: str, label: str, getter: Callable[[VisitorRecord], Any]
) -> Callable[[VisitorRecord], str | None]:
    return lambda record: _line(emoji, label, getter(record))


def _flag(record: VisitorRecord) -> str | None:
    emoji = _text(record.flag.emoji) if record.flag else None
    if emoji is None:
        return None
    return f"{emoji} <b>Flag:</b> {escape_html(record.country)}"


def _coordinates(record: VisitorRecord) -> str | None:
    if record.latitude is None or record.longitude is None:
        return None
    return f"📌 <b>Coordinates:</b> {escape_html(record.latitude)}, {escape_html(record.longitude)}"


def _location(record: VisitorRecord) -> str | None:
    parts = [
        text
        for text in (_text(record.city), _text(record.region), _text(record.country))
        if text
    ]
    if not parts:
        return None
    return f"📍 <b>Location:</b> {', '.join(parts)}"


def _timezone(record: VisitorRecord) -> str | None:
    tz = record.timezone
    if tz is None or not _text(tz.id):
        return None
    utc = _text(tz.utc)
    suffix = f" ({utc})" if utc else ""
    return f"🕐 <b>Timezone:</b> {_text(tz.id)}{suffix}"


def _calling_code(record: VisitorRecord) -> str | None:
    code = _text(record.calling_code)
    if code is None:
        return None
    return f"📞 <b>Calling Code:</b> +{code.lstrip('+')}"


_FIELD_RENDERERS: dict[str, Callable[[VisitorRecord], str | None]] = {
    "page": _simple("🌐", "Page", lambda r: r.page),
    "ip": _simple("💻", "IP", lambda r: r.ip),
    "country": _simple("🌍", "Country", lambda r: r.country),
    "country_code": _simple("🏳️", "Country Code", lambda r: r.country_code),
    "flag": _flag,
    "city": _simple("🏙️", "City", lambda r: r.city),
    "region": _simple("📍", "Region", lambda r: r.region),
    "region_code": _simple("📌", "Region Code", lambda r: r.region_code),
    "continent": _simple("🌎", "Continent", lambda r: r.continent),
    "continent_code": _simple("🗺️", "Continent Code", lambda r: r.continent_code),
    "device": _simple("📱", "Device", lambda r: r.device),
    "browser": _simple("🌐", "Browser", lambda r: r.browser),
    "os": _simple("⚙️", "OS", lambda r: r.os),
    "time": _simple("⏰", "Time", lambda r: r.timestamp),
    "timezone": _timezone,
    "isp": _simple("📡", "ISP", lambda r: r.connection.isp if r.connection else None),
    "org": _simple(
        "🏢", "Organization", lambda r: r.connection.org if r.connection else None
    ),
    "asn": _simple("🔢", "ASN", lambda r: r.connection.asn if r.connection else None),
    "coordinates": _coordinates,
    "postal": _simple("📮", "Postal", lambda r: r.postal),
    "calling_code": _calling_code,
    "location": _location,
}


def render_field(record: VisitorRecord, field: str) -> str | None:
    """Render one field line, None when unknown or empty."""
    renderer = _FIELD_RENDERERS.get(field)
    if renderer is None:
        return None
    return renderer(record)


def format_message(
    record: VisitorRecord,
    fields: Iterable[str] = DEFAULT_FIELDS,
) -> str:
    """Render a VisitorRecord as Telegram HTML.

    Args:
        record: Visitor data.
        fields: Ordered field keys; output keeps this order.

    Returns:
        Header banner, one line per non-empty known field, footer banner.
    """
    body = ""
    for field in fields:
        line = render_field(record, field)
        if line:
            body += line + "\n"
    return MESSAGE_HEADER + body + MESSAGE_FOOTER
