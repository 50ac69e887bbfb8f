"""
Project

River restoration projects: filtered listing, detail, proximity search
and creation.
"""

from riverdb.project.filter import FilterBuilder, ProjectFilter, build_filter
from riverdb.project.repository import ProjectRepository
from riverdb.project.service import ProjectService

__all__ = ["FilterBuilder", "ProjectFilter", "ProjectRepository", "ProjectService", "build_filter"]
