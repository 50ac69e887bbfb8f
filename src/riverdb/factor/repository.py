from typing import List, Optional

from riverdb import db
from riverdb.factor.categories import get_category


class FactorRepository:
    """
    Repository for the seven factor reference tables.
    Encapsulates all SQL for issues, ideas, ecology_factors, etc.

    Table names come from the fixed category registry, never from input.
    """

    def resolve_id(self, category: str, name: str) -> Optional[int]:
        """
        Get the id of a factor by name, matched case-insensitively.
        Returns None when nothing matches.
        """
        if not name or not name.strip():
            return None
        table = get_category(category).table
        row = db.fetch_one(
            f"SELECT id FROM {table} WHERE LOWER(name) = LOWER(%s) ORDER BY id LIMIT 1",
            (name.strip(),),
        )
        return row["id"] if row else None

    def resolve_names(self, category: str, names: List[str]) -> List[tuple]:
        """
        Resolve a list of names in one query.

        Returns (name, id) pairs in input order, with id None for names
        that matched nothing. Blank names are skipped.
        """
        names = [n.strip() for n in (names or []) if n and n.strip()]
        if not names:
            return []

        table = get_category(category).table
        rows = db.fetch_all(
            f"SELECT id, LOWER(name) AS key FROM {table} WHERE LOWER(name) = ANY(%s) ORDER BY id",
            ([n.lower() for n in names],),
        )
        ids = {}
        for row in rows:
            ids.setdefault(row["key"], row["id"])
        return [(n, ids.get(n.lower())) for n in names]

    def resolve_ids(self, category: str, names: List[str]) -> List[int]:
        """Resolve names to ids, silently dropping names that match nothing."""
        return [factor_id for _, factor_id in self.resolve_names(category, names) if factor_id is not None]

    def list_names(self, category: str) -> List[str]:
        """All factor names in a category, sorted."""
        table = get_category(category).table
        rows = db.fetch_all(f"SELECT name FROM {table} ORDER BY name")
        return [row["name"] for row in rows]

    def usage_counts(self, category: str) -> List[dict]:
        """
        One row per factor with the number of projects referencing it,
        including unused factors, most used first.
        """
        c = get_category(category)
        return db.fetch_all(
            f"""
            SELECT f.name, f.description, COUNT(p.id)::int AS project_count
            FROM {c.table} f
            LEFT JOIN projects p ON f.id = ANY(p.{c.column})
            GROUP BY f.id, f.name, f.description
            ORDER BY project_count DESC, f.name
            """
        )

    def list_with_usage(self, category: str) -> List[dict]:
        """Full factor records with usage counts, sorted by name."""
        c = get_category(category)
        return db.fetch_all(
            f"""
            SELECT f.id, f.name, f.description, COUNT(p.id)::int AS project_count
            FROM {c.table} f
            LEFT JOIN projects p ON f.id = ANY(p.{c.column})
            GROUP BY f.id, f.name, f.description
            ORDER BY f.name
            """
        )

    def create(self, category: str, name: str, description: str = None) -> Optional[dict]:
        """
        Create a factor. Returns None if a factor with this name already
        exists in the category.
        """
        table = get_category(category).table
        return db.fetch_one(
            f"""
            INSERT INTO {table} (name, description)
            VALUES (%s, %s)
            ON CONFLICT (name) DO NOTHING
            RETURNING *
            """,
            (name, description),
        )
