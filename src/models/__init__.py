"""Data models for support export analysis."""

from .records import CustomField, Ticket, User, Organization
from .analysis import TicketStats, UserStats, OrganizationStats, AnalysisResult

__all__ = [
    "CustomField",
    "Ticket",
    "User",
    "Organization",
    "TicketStats",
    "UserStats",
    "OrganizationStats",
    "AnalysisResult",
]
