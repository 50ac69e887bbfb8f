from typing import List, Optional

from riverdb import db
from riverdb.factor.categories import CATEGORIES


def _factor_list(table: str, column: str) -> str:
    """
    Expand one integer[] column into a JSON array of factor objects, [] when
    empty. One object per stored element, so repeated ids repeat.
    """
    return f"""
        COALESCE((
            SELECT json_agg(
                json_build_object('id', f.id, 'name', f.name, 'description', f.description)
                ORDER BY u.ord
            )
            FROM unnest(p.{column}) WITH ORDINALITY AS u(id, ord)
            JOIN {table} f ON f.id = u.id
        ), '[]'::json) AS {table}"""


PROJECT_COLUMNS = ",".join(
    [
        """
        p.id,
        p."case",
        ST_Y(p.location::geometry) AS latitude,
        ST_X(p.location::geometry) AS longitude,
        ST_AsGeoJSON(p.location)::json AS location,
        p.created_at""",
        *(_factor_list(c.table, c.column) for c in CATEGORIES),
    ]
)


class ProjectRepository:
    """
    Repository for river restoration projects.
    Encapsulates all SQL for the projects table, including expansion of
    the factor id arrays into full factor objects.
    """

    def find_ids(self, predicate: str = "TRUE", params: tuple = ()) -> List[int]:
        """Ids of all projects matching a predicate over alias `p`."""
        rows = db.fetch_all(f"SELECT p.id FROM projects p WHERE {predicate}", params)
        return [row["id"] for row in rows]

    def expand(self, ids: List[int]) -> List[dict]:
        """Full project records for the given ids, newest first."""
        if not ids:
            return []
        return db.fetch_all(
            f"""
            SELECT {PROJECT_COLUMNS}
            FROM projects p
            WHERE p.id = ANY(%s)
            ORDER BY p.created_at DESC, p.id DESC
            """,
            (list(ids),),
        )

    def expand_one(self, project_id: int) -> Optional[dict]:
        """Full project record by id."""
        return db.fetch_one(
            f"SELECT {PROJECT_COLUMNS} FROM projects p WHERE p.id = %s",
            (project_id,),
        )

    def find_near(self, latitude: float, longitude: float, radius_km: float) -> List[dict]:
        """
        Full project records within radius_km of a point, nearest first,
        each carrying distance_meters.
        """
        return db.fetch_all(
            f"""
            WITH origin AS (
                SELECT ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography AS point
            )
            SELECT {PROJECT_COLUMNS},
                   ST_Distance(p.location, origin.point) AS distance_meters
            FROM projects p, origin
            WHERE ST_DWithin(p.location, origin.point, %s)
            ORDER BY distance_meters, p.id
            """,
            (longitude, latitude, radius_km * 1000),
        )

    def create(
        self,
        case_name: str,
        latitude: float,
        longitude: float,
        factor_ids: dict[str, List[int]] = None,
    ) -> dict:
        """Insert a project. Returns its id and created_at."""
        factor_ids = factor_ids or {}
        columns = ", ".join(c.column for c in CATEGORIES)
        placeholders = ", ".join("%s::integer[]" for _ in CATEGORIES)
        return db.fetch_one(
            f"""
            INSERT INTO projects ("case", location, {columns})
            VALUES (%s, ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography, {placeholders})
            RETURNING id, created_at
            """,
            (
                case_name,
                longitude,
                latitude,
                *(list(factor_ids.get(c.key, [])) for c in CATEGORIES),
            ),
        )

    def count(self) -> int:
        """Total number of projects."""
        return db.fetch_scalar("SELECT COUNT(*) FROM projects")

    def list_case_names(self) -> List[str]:
        """Distinct case names, sorted."""
        rows = db.fetch_all('SELECT DISTINCT "case" FROM projects ORDER BY "case"')
        return [row["case"] for row in rows]

    def locations(self):
        """Latitude/longitude of every project with a location, as a DataFrame."""
        return db.fetch_dataframe(
            """
            SELECT id,
                   ST_Y(location::geometry) AS latitude,
                   ST_X(location::geometry) AS longitude
            FROM projects
            WHERE location IS NOT NULL
            ORDER BY id
            """
        )

