from riverdb.statistics.service import StatisticsService

__all__ = ["StatisticsService"]
