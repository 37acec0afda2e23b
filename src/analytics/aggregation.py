"""One-pass aggregation of exported records into an AnalysisResult."""
from collections import Counter
from typing import Iterable

from src.config import DEFAULT_REQUESTS_PER_MINUTE
from src.models.analysis import AnalysisResult, OrganizationStats, TicketStats, UserStats
from src.models.records import Organization, Ticket, User

UNDEFINED_BRAND = "undefined"
NO_ORGANIZATION = "none"


def count_ticket_stats(tickets: Iterable[Ticket]) -> TicketStats:
    """
    Counts tickets, tickets with attachments or CCs, tickets per brand, and
    collects the distinct ids of custom fields that carry a value.

    Args:
        tickets: Ticket records, traversed once.

    Returns:
        Populated TicketStats.
    """
    total = 0
    with_attachments = 0
    with_ccs = 0
    by_brand: Counter = Counter()
    custom_fields: set[str] = set()

    for ticket in tickets:
        total += 1

        if ticket.attachments:
            with_attachments += 1

        if ticket.cc_users:
            with_ccs += 1

        by_brand[ticket.brand_id or UNDEFINED_BRAND] += 1

        for field in ticket.custom_fields:
            if field.id and field.value is not None:
                custom_fields.add(field.id)

    return TicketStats(
        total=total,
        with_attachments=with_attachments,
        with_ccs=with_ccs,
        by_brand=dict(by_brand),
        custom_fields=custom_fields,
    )


def count_user_stats(users: Iterable[User]) -> UserStats:
    """Counts users in total and per organization."""
    total = 0
    by_organization: Counter = Counter()

    for user in users:
        total += 1
        by_organization[user.organization_id or NO_ORGANIZATION] += 1

    return UserStats(total=total, by_organization=dict(by_organization))


def count_organization_stats(organizations: Iterable[Organization]) -> OrganizationStats:
    return OrganizationStats(total=sum(1 for _ in organizations))


def estimate_migration_time(
    ticket_total: int,
    user_total: int,
    org_total: int,
    requests_per_minute: int = DEFAULT_REQUESTS_PER_MINUTE,
) -> int:
    """
    Estimates migration minutes assuming one API request per record.

    Args:
        ticket_total: Number of tickets.
        user_total: Number of users.
        org_total: Number of organizations.
        requests_per_minute: API rate limit.

    Returns:
        ceil(total records / requests_per_minute).

    Raises:
        ValueError: If requests_per_minute is not positive or a total is negative.
    """
    if requests_per_minute <= 0:
        raise ValueError(f"requests_per_minute must be positive, got {requests_per_minute}")
    if min(ticket_total, user_total, org_total) < 0:
        raise ValueError("Record totals cannot be negative")

    total_requests = ticket_total + user_total + org_total
    return -(-total_requests // requests_per_minute)


def analyze_records(
    tickets: Iterable[Ticket],
    users: Iterable[User],
    organizations: Iterable[Organization],
    requests_per_minute: int = DEFAULT_REQUESTS_PER_MINUTE,
) -> AnalysisResult:
    """Builds the full AnalysisResult: tickets, then users, then organizations."""
    ticket_stats = count_ticket_stats(tickets)
    user_stats = count_user_stats(users)
    org_stats = count_organization_stats(organizations)

    return AnalysisResult(
        tickets=ticket_stats,
        users=user_stats,
        organizations=org_stats,
        estimated_time_minutes=estimate_migration_time(
            ticket_stats.total, user_stats.total, org_stats.total, requests_per_minute
        ),
    )
