# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Pytest Configuration and Fixtures for Skilldex Tests.

Provides a small YAML skill catalog written into tmp_path and stores built on
top of it.
"""

from pathlib import Path
from typing import Any, Dict, List

import pytest
import pytest_asyncio
import yaml

from skilldex.core.skills.store import SkillStore


# Records are written as 01-alpha.yaml, 02-bravo.yaml, ... so load order is
# alpha, bravo, charlie, delta, echo.
CATALOG_RECORDS: List[Dict[str, Any]] = [
    {
        "id": "alpha",
        "name": "Alpha Reconciliation",
        "description": "Simple invoice reconciliation for the finance analyst",
        "category": "automation",
        "industry": "finance",
        "triggers": ["invoice reconciliation", "manual matching"],
        "evolution_level": 2,
        "complexity": "low",
        "status": "active",
        "tags": ["x", "y"],
        "created_date": "2024-11-04",
    },
    {
        "id": "bravo",
        "name": "Bravo Payments",
        "description": "Automate supplier payment runs",
        "category": "automation",
        "industry": "finance",
        "triggers": ["payment runs"],
        "evolution_level": 3,
        "complexity": "medium",
        "status": "active",
        "tags": ["y"],
        "implementation": {"estimated_hours": 12, "technologies": ["python", "sftp"]},
    },
    {
        "id": "charlie",
        "name": "Charlie Stock Monitor",
        "description": "Monitor stock levels across enterprise stores",
        "category": "analysis",
        "industry": "retail",
        "evolution_level": 2,
        "complexity": "high",
        "status": "inactive",
        "tags": ["x"],
    },
    {
        "id": "delta",
        "name": "Delta Intake",
        "description": "Validate patient intake forms",
        "category": "quality",
        "industry": "healthcare",
    },
    {
        "id": "echo",
        "name": "Echo Shelf Planner",
        "description": "Plan shelf layouts automatically",
        "category": "automation",
        "industry": "retail",
        "evolution_level": 4,
        "status": "active",
        "tags": ["z"],
    },
]

CATALOG_INDEX = {
    "version": "1.0",
    "name": "Test catalog",
    "skills": [record["id"] for record in CATALOG_RECORDS],
}


def write_yaml(path: Path, data: Any) -> Path:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def write_catalog(tmp_path):
    """
    Factory writing a catalog directory.

    Usage:
        data_path = write_catalog(records, index={...})
    """
    def _write(records: List[Dict[str, Any]], index: Any = None, name: str = "skills") -> Path:
        data_path = tmp_path / name
        data_path.mkdir()
        write_yaml(data_path / "skill-index.yaml", CATALOG_INDEX if index is None else index)
        for position, record in enumerate(records, start=1):
            write_yaml(data_path / f"{position:02d}-{record.get('id', 'record')}.yaml", record)
        return data_path

    return _write


@pytest.fixture
def catalog_path(write_catalog) -> Path:
    return write_catalog(CATALOG_RECORDS)


@pytest_asyncio.fixture
async def store(catalog_path) -> SkillStore:
    skill_store = SkillStore(catalog_path)
    await skill_store.load()
    return skill_store
