"""Entity definitions for the projects database.

Plain attribute containers.  Field names match their columns, field type
hints are the declared types the row mapper converts to, and field
metadata marks unmapped collections (``mapped=False``) and decimal scale.
"""

from projectdb.entity.category import Category
from projectdb.entity.material import Material
from projectdb.entity.project import Project
from projectdb.entity.step import Step

__all__ = [
    "Category",
    "Material",
    "Project",
    "Step",
]
