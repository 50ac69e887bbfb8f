"""
Shared pytest fixtures for the riverdb package.

Test modules live next to the code they cover (*_test.py). Pure tests
need nothing but the package; database tests need PostgreSQL with
PostGIS at the DATABASE_URL from .env.test and are skipped when the
server or the extension is missing.
"""

import os

# Must be set before riverdb.config is imported
os.environ["RIVERDB_ENV"] = "test"

from pathlib import Path

import psycopg
import pytest
from psycopg.rows import dict_row

from riverdb import db
from riverdb.config import config
from riverdb.factor.categories import CATEGORIES

MIGRATIONS_DIR = Path(__file__).parent.parent.parent / "migrations"

# =============================================================================
# Database Fixtures
# =============================================================================


def _recreate_database(url: str) -> None:
    """Drop and recreate the database named in `url`, kicking out other sessions."""
    server_url, db_name = url.rsplit("/", 1)
    db_name = db_name.split("?")[0]

    with psycopg.connect(f"{server_url}/postgres", autocommit=True, connect_timeout=5) as conn:
        conn.execute(
            """
            SELECT pg_terminate_backend(pid)
            FROM pg_stat_activity
            WHERE datname = %s AND pid <> pg_backend_pid()
            """,
            (db_name,),
        )
        conn.execute(f"DROP DATABASE IF EXISTS {db_name}")
        conn.execute(f"CREATE DATABASE {db_name}")


def _apply_migrations(url: str) -> None:
    migrations = sorted(MIGRATIONS_DIR.glob("*.sql"))
    if not migrations:
        raise FileNotFoundError(f"No migration files found in: {MIGRATIONS_DIR}")

    with psycopg.connect(url) as conn:
        for migration in migrations:
            conn.execute(migration.read_text())


@pytest.fixture(scope="session")
def test_db():
    """Fresh test database with every migration applied, once per session."""
    try:
        _recreate_database(config.database_url)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    try:
        _apply_migrations(config.database_url)
    except (psycopg.errors.FeatureNotSupported, psycopg.errors.UndefinedFile) as e:
        pytest.skip(f"PostGIS extension not available: {e}")

    yield config.database_url


@pytest.fixture
def db_connection(test_db):
    """
    Connection shared by every db helper for the duration of one test.

    Tables start empty; whatever the test writes is rolled back.
    """
    conn = psycopg.connect(test_db)

    tables = ", ".join(["projects", *(c.table for c in CATEGORIES)])
    conn.execute(f"TRUNCATE {tables} RESTART IDENTITY CASCADE")
    conn.commit()

    db.set_connection_override(conn)
    yield conn

    conn.rollback()
    db.clear_connection_override()
    conn.close()


@pytest.fixture
def db_cursor(db_connection):
    """Dict-row cursor for asserting on raw table contents."""
    with db_connection.cursor(row_factory=dict_row) as cur:
        yield cur


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def factor_repo(db_connection):
    """Provide a FactorRepository instance."""
    from riverdb.factor import FactorRepository

    return FactorRepository()


@pytest.fixture
def project_repo(db_connection):
    """Provide a ProjectRepository instance."""
    from riverdb.project import ProjectRepository

    return ProjectRepository()


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def project_service(db_connection):
    """Provide a lenient ProjectService instance."""
    from riverdb.project import ProjectService

    return ProjectService(strict=False)


@pytest.fixture
def strict_project_service(db_connection):
    """Provide a ProjectService that rejects unknown factor names."""
    from riverdb.project import ProjectService

    return ProjectService(strict=True)


@pytest.fixture
def statistics_service(db_connection):
    """Provide a StatisticsService instance."""
    from riverdb.statistics import StatisticsService

    return StatisticsService()


# =============================================================================
# Seed Data Fixtures
# =============================================================================

SAMPLE_FACTORS = {
    "issue": [("Flooding", "Recurrent flooding"), ("Water Pollution", "Degraded water quality")],
    "idea": [("Floodplain Reconnection", "Give the river room"), ("Daylighting", "Uncover a buried stream")],
    "ecology": [("Biodiversity", "Species richness"), ("Fish Migration", "Longitudinal connectivity")],
    "socio_cultural": [("Recreation", "Leisure use"), ("Cultural Heritage", "Historic heritage")],
    "economic": [("Tourism", "Visitor income"), ("Property Value", "Rising real estate value")],
    "upgrading": [("Resettlement", "Relocation from hazard zones")],
    "governance": [("Bottom-up", "Community initiated"), ("Top-down", "Authority led")],
}


@pytest.fixture
def sample_factors(db_connection) -> dict:
    """
    Seed a small set of factors in every category.

    Returns:
        dict of category key -> {name: id}
    """
    from riverdb.factor import FactorRepository

    repo = FactorRepository()
    return {
        category: {name: repo.create(category, name, description)["id"] for name, description in factors}
        for category, factors in SAMPLE_FACTORS.items()
    }


@pytest.fixture
def sample_projects(db_connection, sample_factors) -> dict:
    """
    Create three projects with distinct factors and locations.

    Returns:
        dict of short key -> {"id", "created_at"}
    """
    from riverdb.project import ProjectRepository

    repo = ProjectRepository()
    f = sample_factors
    return {
        "berlin": repo.create(
            "Spree Riverbank Berlin",
            52.5200,
            13.4050,
            {
                "issue": [f["issue"]["Flooding"]],
                "idea": [f["idea"]["Floodplain Reconnection"]],
                "ecology": [f["ecology"]["Biodiversity"]],
                "governance": [f["governance"]["Top-down"]],
            },
        ),
        "potsdam": repo.create(
            "Havel Floodplain Potsdam",
            52.3906,
            13.0645,
            {
                "issue": [f["issue"]["Flooding"], f["issue"]["Water Pollution"]],
                "idea": [f["idea"]["Daylighting"]],
                "economic": [f["economic"]["Tourism"]],
            },
        ),
        "seoul": repo.create(
            "Cheonggyecheon Seoul",
            37.5696,
            126.9780,
            {
                "issue": [f["issue"]["Water Pollution"]],
                "idea": [f["idea"]["Daylighting"]],
                "socio_cultural": [f["socio_cultural"]["Recreation"]],
                "upgrading": [f["upgrading"]["Resettlement"]],
                "governance": [f["governance"]["Top-down"]],
            },
        ),
    }


# =============================================================================
# Flask App Fixtures
# =============================================================================


@pytest.fixture
def app():
    """Create Flask application for testing."""
    from riverdb.app import create_app

    app = create_app()
    app.config["TESTING"] = True

    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
