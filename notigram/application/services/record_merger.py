"""Visitor record merger.

Unions the identity subset and the page-context subset into one immutable
VisitorRecord. The identity subset may be missing when the caller opted
into sending partial records after a failed lookup.
"""

from notigram.domain.entities import VisitorRecord
from notigram.domain.value_objects import GeoProfile, PageContext


def merge_visitor_record(
    profile: GeoProfile | None,
    context: PageContext,
) -> VisitorRecord:
    """Merge identity and context into a VisitorRecord.

    Args:
        profile: Geolocation/network profile, None if unavailable.
        context: Page context (always present).

    Returns:
        VisitorRecord carrying every field of both inputs; geolocation
        fields are None when ``profile`` is None.
    """
    return VisitorRecord.from_parts(profile, context)
