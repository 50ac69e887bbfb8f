from functools import partial

from riverdb.country import count_countries
from riverdb.factor.categories import CATEGORIES
from riverdb.factor.repository import FactorRepository
from riverdb.parallel import gather_map
from riverdb.project.repository import ProjectRepository


class StatisticsService:
    """Read-only aggregates over factors and projects for the overview pages."""

    def __init__(self):
        self.factors = FactorRepository()
        self.projects = ProjectRepository()

    def filter_options(self) -> dict:
        """All factor names per category plus the distinct case names."""
        calls = {"cases": self.projects.list_case_names}
        calls.update(
            {c.option_key: partial(self.factors.list_names, c.key) for c in CATEGORIES}
        )
        return gather_map(calls)

    def usage_counts(self, category: str) -> list[dict]:
        return self.factors.usage_counts(category)

    def statistics(self) -> dict:
        """Usage counts for every category and the total project count."""
        calls = {c.table: partial(self.factors.usage_counts, c.key) for c in CATEGORIES}
        calls["total_projects"] = self.projects.count
        return gather_map(calls)

    def factors_overview(self) -> dict:
        """Full factor records with usage counts, per category."""
        return gather_map(
            {c.table: partial(self.factors.list_with_usage, c.key) for c in CATEGORIES}
        )

    def footer_stats(self) -> dict:
        results = gather_map(
            {
                "total": self.projects.count,
                "locations": self.projects.locations,
            }
        )
        return {
            "totalProjects": results["total"],
            "totalCountries": count_countries(results["locations"]),
        }
