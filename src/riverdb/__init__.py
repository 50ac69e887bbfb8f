"""River restoration project directory backed by PostgreSQL/PostGIS."""
