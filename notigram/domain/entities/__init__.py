"""Domain entities package."""

from notigram.domain.entities.visitor_record import VisitorRecord

__all__ = ["VisitorRecord"]
