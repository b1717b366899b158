"""Data access objects.

    mapping.py        Generic row mapper (rows → entity dataclasses)
    binding.py        Typed parameter binder and Statement
    transaction.py    Transaction coordinator (unit_of_work)
    base.py           DaoBase helpers shared by DAOs
    project_dao.py    ProjectDao CRUD + aggregated fetch by id
"""

from projectdb.dao.base import DaoBase
from projectdb.dao.binding import ParameterBinder, Statement
from projectdb.dao.mapping import extract, extract_all, mapping_for
from projectdb.dao.project_dao import ProjectDao
from projectdb.dao.transaction import (
    UnitOfWork,
    commit_transaction,
    rollback_transaction,
    start_transaction,
    unit_of_work,
)

__all__ = [
    "DaoBase",
    "ParameterBinder",
    "Statement",
    "extract",
    "extract_all",
    "mapping_for",
    "ProjectDao",
    "UnitOfWork",
    "start_transaction",
    "commit_transaction",
    "rollback_transaction",
    "unit_of_work",
]
