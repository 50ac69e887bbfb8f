import logging
import math
from functools import partial
from typing import Any, Mapping, Optional

from riverdb.config import config
from riverdb.errors import ValidationError, parse_float
from riverdb.factor.categories import CATEGORIES
from riverdb.factor.repository import FactorRepository
from riverdb.parallel import gather_map
from riverdb.project.filter import ProjectFilter, build_filter
from riverdb.project.repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Search, detail, proximity and creation of projects.

    Factor names are resolved to ids here, one concurrent lookup per
    category. Unknown names are dropped unless strict mode is on.
    """

    def __init__(self, strict: Optional[bool] = None):
        self.projects = ProjectRepository()
        self.factors = FactorRepository()
        self.strict = config.strict_factor_names if strict is None else strict

    def search(self, criteria: ProjectFilter) -> list[dict]:
        """Filter projects, then expand the matching ids into full records."""
        factor_ids = gather_map(
            {
                key: partial(self.factors.resolve_id, key, name)
                for key, name in criteria.factors.items()
            }
        )
        for key, factor_id in factor_ids.items():
            if factor_id is None:
                logger.info("Unknown %s filter %r", key, criteria.factors[key])

        predicate, params = build_filter(criteria, factor_ids, strict=self.strict)
        ids = self.projects.find_ids(predicate, params)
        return self.projects.expand(ids)

    def get(self, project_id: int) -> Optional[dict]:
        return self.projects.expand_one(project_id)

    def near(self, latitude: float, longitude: float, radius_km: float = None) -> list[dict]:
        """Projects within radius_km of a point, nearest first."""
        if radius_km is None:
            radius_km = config.near_default_radius_km
        _check_coordinates(latitude, longitude)
        if not math.isfinite(radius_km) or radius_km < 0:
            raise ValidationError("Invalid radius", "radius must be a non-negative number")
        return self.projects.find_near(latitude, longitude, radius_km)

    def create(
        self,
        case_name: Any,
        latitude: Any,
        longitude: Any,
        factor_names: Mapping[str, Any] = None,
    ) -> dict:
        """
        Create a project from factor names.

        Raises:
            ValidationError: case_name, latitude or longitude missing or
                malformed; in strict mode also for unknown factor names.
        """
        case_name = case_name.strip() if isinstance(case_name, str) else case_name
        missing = [
            field
            for field, value in (
                ("case_name", case_name),
                ("latitude", latitude),
                ("longitude", longitude),
            )
            if value is None or value == ""
        ]
        if missing:
            raise ValidationError(
                "Missing required fields: case_name, latitude, longitude",
                f"Missing: {', '.join(missing)}",
            )
        if not isinstance(case_name, str):
            raise ValidationError("Invalid case_name", "case_name must be a string")
        latitude = parse_float("latitude", latitude)
        longitude = parse_float("longitude", longitude)
        _check_coordinates(latitude, longitude)

        names = {
            c.key: _name_list(c.create_param, (factor_names or {}).get(c.key))
            for c in CATEGORIES
        }
        resolved = gather_map(
            {key: partial(self.factors.resolve_names, key, values) for key, values in names.items()}
        )

        unknown = [
            f"{key}: {name}" for key, pairs in resolved.items() for name, factor_id in pairs if factor_id is None
        ]
        if unknown and self.strict:
            logger.warning("Rejected project %r with unknown factor names: %s", case_name, "; ".join(unknown))
            raise ValidationError("Unknown factor names", "; ".join(unknown))
        if unknown:
            logger.info("Dropping unknown factor names for %r: %s", case_name, "; ".join(unknown))

        factor_ids = {
            key: [factor_id for _, factor_id in pairs if factor_id is not None]
            for key, pairs in resolved.items()
        }
        created = self.projects.create(case_name, latitude, longitude, factor_ids)
        logger.info("Created project %s (%s)", created["id"], case_name)
        return created


def _check_coordinates(latitude: float, longitude: float) -> None:
    if not -90 <= latitude <= 90:
        raise ValidationError("Invalid latitude", "latitude must be between -90 and 90")
    if not -180 <= longitude <= 180:
        raise ValidationError("Invalid longitude", "longitude must be between -180 and 180")


def _name_list(param: str, value: Any) -> list[str]:
    """Normalize a submitted names value to a list of non-blank strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"Invalid {param}", f"{param} must be a list of strings")
    return [v.strip() for v in value if v.strip()]
