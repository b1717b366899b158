"""
projectdb - Data access layer for a DIY projects database.

Projects, their categories, steps and materials, persisted to SQLite or
MySQL through a small DAO core: a generic row mapper, a typed parameter
binder and a transaction coordinator.
"""

__version__ = "0.1.0"

from projectdb.core.errors import DataAccessError
from projectdb.core.lookup import Found, NotFound
from projectdb.dao.project_dao import ProjectDao
from projectdb.entity import Category, Material, Project, Step

__all__ = [
    "__version__",
    "DataAccessError",
    "Found",
    "NotFound",
    "ProjectDao",
    "Category",
    "Material",
    "Project",
    "Step",
]
