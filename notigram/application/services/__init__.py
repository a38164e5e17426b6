"""Application services.

Services:
    - IdentityResolver: public IP then geolocation, in sequence
    - ContextSnapshotter: local page context (no network)
    - merge_visitor_record: identity + context -> VisitorRecord
    - format_message: VisitorRecord -> Telegram HTML
"""

from notigram.application.services.context_snapshotter import ContextSnapshotter
from notigram.application.services.identity_resolver import IdentityResolver
from notigram.application.services.message_formatter import (
    escape_html,
    format_message,
    render_field,
)
from notigram.application.services.record_merger import merge_visitor_record

__all__ = [
    "ContextSnapshotter",
    "IdentityResolver",
    "escape_html",
    "format_message",
    "merge_visitor_record",
    "render_field",
]
