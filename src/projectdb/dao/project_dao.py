"""
Project DAO — create, read, update and delete projects.

Every method is one unit of work: a connection is borrowed from the
adapter, a transaction is opened, statements run, and the transaction
commits before the result is returned. Any failure rolls back and
surfaces as :class:`~projectdb.core.errors.DataAccessError`.

Fetch by id reads the project row plus its materials, steps and
categories inside the same transaction, so a returned project always has
all three collections populated from one consistent read, and a failure
partway through returns nothing.

Examples:
    >>> dao = ProjectDao(adapter)
    >>> project = dao.insert_project(Project(project_name="Build shed",
    ...                                      estimated_hours=Decimal("10.5"),
    ...                                      difficulty=3))
    >>> dao.fetch_project_by_id(project.project_id).unwrap().estimated_hours
    Decimal('10.50')
    >>> dao.fetch_project_by_id(9999)
    NotFound()

Tags:
    dao, project, crud, aggregation, projectdb
"""

from __future__ import annotations

from projectdb.core.enums import SqlType
from projectdb.core.errors import DataAccessError
from projectdb.core.logging import get_logger
from projectdb.core.lookup import Found, Lookup, NotFound
from projectdb.dao.base import DaoBase
from projectdb.dao.binding import Statement
from projectdb.dao.transaction import UnitOfWork
from projectdb.entity import Category, Material, Project, Step

logger = get_logger(__name__)

CATEGORY_TABLE = "category"
MATERIAL_TABLE = "material"
PROJECT_TABLE = "project"
PROJECT_CATEGORY_TABLE = "project_category"
STEP_TABLE = "step"


class ProjectDao(DaoBase):
    """Persistence operations for :class:`~projectdb.entity.Project`."""

    def insert_project(self, project: Project) -> Project:
        """
        Insert ``project`` and assign its store-generated id.

        The id is read on the same connection before commit. Exactly one
        row must be affected, otherwise nothing is committed.
        """
        sql = (
            f"INSERT INTO {PROJECT_TABLE} "
            "(project_name, estimated_hours, actual_hours, difficulty, notes) "
            "VALUES (?, ?, ?, ?, ?)"
        )
        with self.unit_of_work("insert_project") as uow:
            stmt = self.statement(sql)
            self._bind_details(stmt, project)
            rows = uow.execute_update(stmt)
            if rows != 1:
                raise DataAccessError(
                    f"Insert into {PROJECT_TABLE} affected {rows} rows, expected 1",
                    operation="insert_project",
                ).with_context(table=PROJECT_TABLE)
            project_id = self.get_last_insert_id(uow.connection, PROJECT_TABLE)

        project.project_id = project_id
        logger.debug("project_inserted", project_id=project_id)
        return project

    def fetch_all_projects(self) -> list[Project]:
        """All projects ordered by name, without child collections."""
        sql = f"SELECT * FROM {PROJECT_TABLE} ORDER BY project_name"
        with self.unit_of_work("fetch_all_projects") as uow:
            projects = self.extract(uow.execute_query(self.statement(sql)), Project)
        return projects

    def fetch_project_by_id(self, project_id: int) -> Lookup[Project]:
        """
        Fetch one project with its materials, steps and categories.

        Returns ``NotFound()`` when no project has ``project_id``.
        """
        sql = f"SELECT * FROM {PROJECT_TABLE} WHERE project_id = ?"
        with self.unit_of_work("fetch_project_by_id") as uow:
            stmt = self.statement(sql)
            self.set_parameter(stmt, 1, project_id, SqlType.INTEGER)
            rows = self.extract(uow.execute_query(stmt), Project)
            if not rows:
                return NotFound()

            project = rows[0]
            project.materials = self._fetch_materials(uow, project_id)
            project.steps = self._fetch_steps(uow, project_id)
            project.categories = self._fetch_categories(uow, project_id)

        return Found(project)

    def modify_project_details(self, project: Project) -> bool:
        """
        Overwrite every attribute of the project with ``project.project_id``.

        Returns True only when exactly one row was updated. False covers
        both "no such project" and "more than one row matched".
        """
        sql = (
            f"UPDATE {PROJECT_TABLE} SET "
            "project_name = ?, estimated_hours = ?, actual_hours = ?, "
            "difficulty = ?, notes = ? "
            "WHERE project_id = ?"
        )
        with self.unit_of_work("modify_project_details") as uow:
            stmt = self.statement(sql)
            self._bind_details(stmt, project)
            self.set_parameter(stmt, 6, project.project_id, SqlType.INTEGER)
            rows = uow.execute_update(stmt)
        return rows == 1

    def delete_project(self, project_id: int) -> bool:
        """
        Delete a project; children go with it through ON DELETE CASCADE.

        Returns True only when exactly one row was deleted.
        """
        sql = f"DELETE FROM {PROJECT_TABLE} WHERE project_id = ?"
        with self.unit_of_work("delete_project") as uow:
            stmt = self.statement(sql)
            self.set_parameter(stmt, 1, project_id, SqlType.INTEGER)
            rows = uow.execute_update(stmt)
        return rows == 1

    # -- helpers -----------------------------------------------------------

    def _bind_details(self, stmt: Statement, project: Project) -> None:
        self.set_parameter(stmt, 1, project.project_name, SqlType.TEXT)
        self.set_parameter(stmt, 2, project.estimated_hours, SqlType.DECIMAL)
        self.set_parameter(stmt, 3, project.actual_hours, SqlType.DECIMAL)
        self.set_parameter(stmt, 4, project.difficulty, SqlType.INTEGER)
        self.set_parameter(stmt, 5, project.notes, SqlType.TEXT)

    def _fetch_materials(self, uow: UnitOfWork, project_id: int) -> list[Material]:
        stmt = self.statement(f"SELECT * FROM {MATERIAL_TABLE} WHERE project_id = ?")
        self.set_parameter(stmt, 1, project_id, SqlType.INTEGER)
        return self.extract(uow.execute_query(stmt), Material)

    def _fetch_steps(self, uow: UnitOfWork, project_id: int) -> list[Step]:
        stmt = self.statement(f"SELECT * FROM {STEP_TABLE} WHERE project_id = ?")
        self.set_parameter(stmt, 1, project_id, SqlType.INTEGER)
        return self.extract(uow.execute_query(stmt), Step)

    def _fetch_categories(self, uow: UnitOfWork, project_id: int) -> list[Category]:
        stmt = self.statement(
            f"SELECT c.* FROM {CATEGORY_TABLE} c "
            f"JOIN {PROJECT_CATEGORY_TABLE} pc USING (category_id) "
            "WHERE pc.project_id = ?"
        )
        self.set_parameter(stmt, 1, project_id, SqlType.INTEGER)
        return self.extract(uow.execute_query(stmt), Category)


__all__ = [
    "CATEGORY_TABLE",
    "MATERIAL_TABLE",
    "PROJECT_TABLE",
    "PROJECT_CATEGORY_TABLE",
    "STEP_TABLE",
    "ProjectDao",
]
