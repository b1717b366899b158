"""Top-level package exports."""

from __future__ import annotations

import importlib

import pytest

import projectdb


class TestPackageExports:
    @pytest.mark.parametrize(
        "name",
        ["DataAccessError", "Found", "NotFound", "ProjectDao", "Project", "Category", "Step", "Material"],
    )
    def test_public_name(self, name):
        assert hasattr(projectdb, name)

    @pytest.mark.parametrize(
        "module",
        ["projectdb.core", "projectdb.core.errors", "projectdb.dao", "projectdb.entity", "projectdb.cli.app"],
    )
    def test_subpackage_imports(self, module):
        assert importlib.import_module(module) is not None
