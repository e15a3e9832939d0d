"""Read-only queries over stored data."""

from homebook.queries.statistics import StatisticsService

__all__ = ["StatisticsService"]
