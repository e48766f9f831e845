"""Fetch GitHub profile stats and write them into a marked README region.

Runs once: two GraphQL queries, one aggregation, one README write.
"""

from .aggregate import aggregate
from .cli import main
from .fetch_stats import fetch_stats
from .models import AggregateReport, FetchResult

__all__ = ["main", "aggregate", "fetch_stats", "AggregateReport", "FetchResult"]

if __name__ == "__main__":
    main()
