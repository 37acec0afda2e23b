from .aggregation import (
    analyze_records,
    count_organization_stats,
    count_ticket_stats,
    count_user_stats,
    estimate_migration_time,
)
from .runner import analyze_data, load_analysis_results, write_analysis_results

__all__ = [
    "analyze_records",
    "count_ticket_stats",
    "count_user_stats",
    "count_organization_stats",
    "estimate_migration_time",
    "analyze_data",
    "load_analysis_results",
    "write_analysis_results",
]
