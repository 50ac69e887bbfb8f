"""
Factor

Reference data shared by projects: issues, ideas, ecology factors,
socio-cultural aspects, economic factors, upgrading approaches and
governance types.
"""

from riverdb.factor.categories import CATEGORIES, FactorCategory, get_category
from riverdb.factor.repository import FactorRepository

__all__ = ["CATEGORIES", "FactorCategory", "FactorRepository", "get_category"]
