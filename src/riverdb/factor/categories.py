"""
The seven factor categories and the names they go by in each layer.

`key` is the internal name, `table` the reference table (also the key of
the expanded list on a project), `column` the integer[] column on
`projects`, `filter_param` the query-string name, `create_param` the POST
body list name and `option_key` the key used by /api/filter-options.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FactorCategory:
    key: str
    table: str
    column: str
    filter_param: str
    create_param: str
    option_key: str


CATEGORIES: tuple[FactorCategory, ...] = (
    FactorCategory(
        key="issue",
        table="issues",
        column="issue_ids",
        filter_param="issue",
        create_param="issue_names",
        option_key="issues",
    ),
    FactorCategory(
        key="idea",
        table="ideas",
        column="idea_ids",
        filter_param="idea",
        create_param="idea_names",
        option_key="ideas",
    ),
    FactorCategory(
        key="ecology",
        table="ecology_factors",
        column="ecology_factor_ids",
        filter_param="ecology",
        create_param="ecology_names",
        option_key="ecology",
    ),
    FactorCategory(
        key="socio_cultural",
        table="socio_cultural_aspects",
        column="socio_cultural_aspect_ids",
        filter_param="socio_cultural",
        create_param="socio_cultural_names",
        option_key="socio_cultural",
    ),
    FactorCategory(
        key="economic",
        table="economic_factors",
        column="economic_factor_ids",
        filter_param="economic",
        create_param="economic_names",
        option_key="economic",
    ),
    FactorCategory(
        key="upgrading",
        table="upgrading_approaches",
        column="upgrading_approach_ids",
        filter_param="upgrading",
        create_param="upgrading_names",
        option_key="upgrading",
    ),
    FactorCategory(
        key="governance",
        table="governance_types",
        column="governance_type_ids",
        filter_param="governance",
        create_param="governance_names",
        option_key="governance",
    ),
)

_BY_KEY = {category.key: category for category in CATEGORIES}


def get_category(key: str) -> FactorCategory:
    """Look up a category by key. Raises ValueError for unknown keys."""
    try:
        return _BY_KEY[key]
    except KeyError:
        raise ValueError(f"Unknown factor category: {key}. Valid: {list(_BY_KEY)}") from None
