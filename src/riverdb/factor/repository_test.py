"""
Integration tests for FactorRepository.

Run with: RIVERDB_ENV=test pytest src/riverdb/factor/repository_test.py -v
"""
import pytest

from riverdb.factor import CATEGORIES, FactorRepository
from riverdb.factor.seed import SEED_FACTORS, seed_factors


class TestResolveId:
    """Tests for FactorRepository.resolve_id()"""

    @pytest.mark.parametrize("category,name", [
        ("issue", "Flooding"),
        ("idea", "Daylighting"),
        ("ecology", "Biodiversity"),
        ("socio_cultural", "Recreation"),
        ("economic", "Tourism"),
        ("upgrading", "Resettlement"),
        ("governance", "Top-down"),
    ])
    def test_known_names_resolve_to_seeded_id(self, factor_repo, sample_factors, category, name):
        assert factor_repo.resolve_id(category, name) == sample_factors[category][name]

    @pytest.mark.parametrize("lookup", ["flooding", "FLOODING", "  Flooding  "])
    def test_case_insensitive(self, factor_repo, sample_factors, lookup):
        assert factor_repo.resolve_id("issue", lookup) == sample_factors["issue"]["Flooding"]

    @pytest.mark.parametrize("lookup", ["Unknown Nonexistent Issue", "", "   ", None])
    def test_unknown_returns_none(self, factor_repo, sample_factors, lookup):
        assert factor_repo.resolve_id("issue", lookup) is None

    def test_name_from_other_category_does_not_resolve(self, factor_repo, sample_factors):
        assert factor_repo.resolve_id("issue", "Daylighting") is None

    def test_unknown_category_raises(self, factor_repo):
        with pytest.raises(ValueError, match="Unknown factor category"):
            factor_repo.resolve_id("weather", "Rain")


class TestResolveIds:
    """Tests for FactorRepository.resolve_ids()"""

    def test_drops_unknown_names(self, factor_repo, sample_factors):
        ids = factor_repo.resolve_ids("issue", ["Water Pollution", "Nope", "flooding"])

        assert ids == [sample_factors["issue"]["Water Pollution"], sample_factors["issue"]["Flooding"]]

    @pytest.mark.parametrize("names", [[], None, ["", "  "]])
    def test_empty_input(self, factor_repo, sample_factors, names):
        assert factor_repo.resolve_ids("issue", names) == []

    def test_duplicates_are_kept(self, factor_repo, sample_factors):
        flooding = sample_factors["issue"]["Flooding"]

        assert factor_repo.resolve_ids("issue", ["Flooding", "Flooding"]) == [flooding, flooding]

    def test_resolve_names_reports_unknowns(self, factor_repo, sample_factors):
        pairs = factor_repo.resolve_names("idea", ["Daylighting", "Teleportation"])

        assert pairs == [("Daylighting", sample_factors["idea"]["Daylighting"]), ("Teleportation", None)]


class TestUsage:
    """Tests for usage_counts() and list_with_usage()"""

    def test_usage_counts_sorted_by_usage_then_name(self, factor_repo, sample_projects):
        rows = factor_repo.usage_counts("issue")

        assert [(r["name"], r["project_count"]) for r in rows] == [
            ("Flooding", 2),
            ("Water Pollution", 2),
        ]
        assert rows[0]["description"] == "Recurrent flooding"

    def test_usage_counts_include_unused_factors(self, factor_repo, sample_projects):
        rows = factor_repo.usage_counts("governance")

        assert [(r["name"], r["project_count"]) for r in rows] == [
            ("Top-down", 2),
            ("Bottom-up", 0),
        ]

    def test_list_with_usage_sorted_by_name(self, factor_repo, sample_factors, sample_projects):
        rows = factor_repo.list_with_usage("economic")

        assert rows == [
            {
                "id": sample_factors["economic"]["Property Value"],
                "name": "Property Value",
                "description": "Rising real estate value",
                "project_count": 0,
            },
            {
                "id": sample_factors["economic"]["Tourism"],
                "name": "Tourism",
                "description": "Visitor income",
                "project_count": 1,
            },
        ]

    def test_list_names(self, factor_repo, sample_factors):
        assert factor_repo.list_names("governance") == ["Bottom-up", "Top-down"]


class TestCreate:
    """Tests for FactorRepository.create()"""

    def test_create(self, factor_repo):
        row = factor_repo.create("issue", "Drought", "Low flows")

        assert row["id"] is not None
        assert row["name"] == "Drought"
        assert row["description"] == "Low flows"

    def test_create_existing_name_returns_none(self, factor_repo):
        factor_repo.create("issue", "Drought")

        assert factor_repo.create("issue", "Drought") is None


class TestSeed:
    """Tests for seed_factors()"""

    def test_seed_is_idempotent(self, db_connection):
        repo = FactorRepository()

        first = seed_factors(repo)
        second = seed_factors(repo)

        assert first == {category: len(factors) for category, factors in SEED_FACTORS.items()}
        assert set(second.values()) == {0}

    def test_seed_covers_every_category(self):
        assert set(SEED_FACTORS) == {c.key for c in CATEGORIES}
