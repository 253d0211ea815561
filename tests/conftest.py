"""Pytest configuration and fixtures for doc2test tests."""

import pytest
from typing import List, Optional
from doc2test import config
from doc2test.models import Requirement, Dependency


SCENARIO_A_TEXT = (
    "1. The system must allow users to log in.\n\n"
    "2. The system should display an error for invalid credentials."
)

REQUIREMENTS_DOCUMENT = """Title: Inventory Management System
Author: Jane Smith
Date: March 3, 2024
Version: 1.2

# Overview
This document describes the inventory management system used by warehouse staff
to track stock levels across several storage locations.

# Functional Requirements
1. The system must allow users to create new inventory items with a name, quantity and storage location.
2. Users should be able to search inventory items by name or storage location.
3. The system shall export a daily stock report for the warehouse manager.
4. The administrator must be able to delete obsolete inventory items after confirmation.

# Security Requirements
- All passwords must be stored using a salted hash.
- Access to the admin area requires authorization by a manager.

# Performance
The search page will return results with a response time under two seconds.
The import process may accept a maximum of 10000 rows per upload.

# Usability
- The inventory screen should be intuitive for new warehouse staff.
- Error messages will explain how to correct an invalid quantity.

# Reliability
The system must create a backup of the inventory database every night.
"""


@pytest.fixture
def scenario_a_text():
    """Short two-paragraph document handled by the lightweight extractor."""
    return SCENARIO_A_TEXT


@pytest.fixture
def requirements_document():
    """Structured document long enough for the full NLP path."""
    return REQUIREMENTS_DOCUMENT


@pytest.fixture
def make_requirement():
    """Factory for hand-built requirements."""

    def _make(
        number: int,
        title: str,
        description: Optional[str] = None,
        priority: str = "Medium",
        type: str = "Functional",
        dependencies: Optional[List[Dependency]] = None
    ) -> Requirement:
        return Requirement(
            id=f"REQ-{number}",
            title=title,
            description=description or title,
            priority=priority,
            type=type,
            dependencies=dependencies,
        )

    return _make


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at an empty temp directory and clear env overrides."""
    monkeypatch.setattr(config, "USER_CFG", tmp_path / "user" / "config.toml")
    monkeypatch.chdir(tmp_path)
    for var in config.ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    return tmp_path
