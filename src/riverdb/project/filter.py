"""
Filter criteria for project listing and the predicate builder behind it.

FilterBuilder collects (clause, params) pairs in order. Clauses use
psycopg's positional %s placeholders, so the parameter tuple produced by
build() lines up with the clauses without any index bookkeeping.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional

from riverdb.errors import ValidationError, parse_float
from riverdb.factor.categories import CATEGORIES


class FilterBuilder:
    """Conjunctive WHERE-clause builder starting from an always-true base."""

    BASE = "TRUE"

    def __init__(self):
        self._clauses: list[str] = []
        self._params: list = []

    def add(self, clause: str, *params) -> "FilterBuilder":
        placeholders = clause.count("%s")
        if placeholders != len(params):
            raise ValueError(
                f"Clause has {placeholders} placeholders but {len(params)} params: {clause}"
            )
        self._clauses.append(clause)
        self._params.extend(params)
        return self

    def build(self) -> tuple[str, tuple]:
        predicate = " AND ".join([self.BASE, *(f"({c})" for c in self._clauses)])
        return predicate, tuple(self._params)


@dataclass
class ProjectFilter:
    """Sparse, request-scoped filter criteria. Every field is optional."""

    case_name: Optional[str] = None
    factors: dict[str, str] = field(default_factory=dict)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: Optional[float] = None

    @property
    def has_geo(self) -> bool:
        return None not in (self.latitude, self.longitude, self.radius_km)

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> "ProjectFilter":
        """Build criteria from query-string arguments. Blank values count as absent."""
        factors = {}
        for category in CATEGORIES:
            value = _clean(args.get(category.filter_param))
            if value:
                factors[category.key] = value

        radius_km = _parse_float(args, "radius_km")
        if radius_km is not None and radius_km < 0:
            raise ValidationError("Invalid radius_km", "radius_km must not be negative")

        return cls(
            case_name=_clean(args.get("case_name")),
            factors=factors,
            latitude=_parse_float(args, "latitude"),
            longitude=_parse_float(args, "longitude"),
            radius_km=radius_km,
        )


def build_filter(
    criteria: ProjectFilter,
    factor_ids: Mapping[str, Optional[int]],
    strict: bool = False,
) -> tuple[str, tuple]:
    """
    Compose the predicate for a project search.

    `factor_ids` maps category keys to the id their filter name resolved
    to (None when unresolved). An unresolved name adds no constraint,
    unless `strict` is set, in which case it matches nothing.
    """
    builder = FilterBuilder()

    if criteria.case_name:
        builder.add("p.\"case\" ILIKE %s ESCAPE '\\'", f"%{_escape_like(criteria.case_name)}%")

    for category in CATEGORIES:
        if category.key not in criteria.factors:
            continue
        factor_id = factor_ids.get(category.key)
        if factor_id is None:
            if strict:
                builder.add("FALSE")
            continue
        builder.add(f"p.{category.column} @> ARRAY[%s]::integer[]", factor_id)

    if criteria.has_geo:
        builder.add(
            "ST_DWithin(p.location, ST_SetSRID(ST_MakePoint(%s, %s), 4326)::geography, %s)",
            criteria.longitude,
            criteria.latitude,
            criteria.radius_km * 1000,
        )

    return builder.build()


def _escape_like(value: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_float(args: Mapping[str, str], name: str) -> Optional[float]:
    value = _clean(args.get(name))
    return None if value is None else parse_float(name, value)
