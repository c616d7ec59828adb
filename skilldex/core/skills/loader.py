# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Skill Loader - Parses the YAML skill catalog and validates records.

Responsible for:
- Reading the catalog index (skill-index.yaml)
- Discovering one YAML document per skill in the catalog directory
- Validating required fields and building Skill models
- Rejecting duplicate ids

Catalog Format:
```
<data_path>/
  skill-index.yaml        # free-form summary document (mapping)
  invoice-matching.yaml   # one record per file
  ...
```

Skill record:
```yaml
id: invoice-matching
name: Invoice Matching
description: "Match supplier invoices against purchase orders"
category: automation
industry: finance
triggers:
  - "manual invoice reconciliation"
evolution_level: 2
complexity: medium        # low | medium | high
status: active            # active | inactive | deprecated
tags: [accounts-payable, analyst]
```

Loading is all-or-nothing: any bad file raises SkillLoadError and nothing is
returned.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import ValidationError

from skilldex.core.exceptions import SkillLoadError
from skilldex.models.skill import Skill

logger = logging.getLogger(__name__)


@dataclass
class LoadedCatalog:
    """Everything read from one catalog directory."""
    index: Dict[str, Any]
    skills: List[Skill] = field(default_factory=list)
    sources: Dict[str, str] = field(default_factory=dict)  # skill_id -> file path


class SkillLoader:
    """
    Load and validate skill records from a catalog directory.

    Files are read in file-name order so that load order, and every ordering
    derived from it, is reproducible.
    """

    INDEX_FILENAME = "skill-index.yaml"
    RECORD_SUFFIXES = (".yaml", ".yml")

    def __init__(self, data_path: Union[str, Path]):
        """
        Args:
            data_path: Directory holding skill-index.yaml and the skill records
        """
        self.data_path = Path(data_path)

    @property
    def index_path(self) -> Path:
        return self.data_path / self.INDEX_FILENAME

    def discover_record_files(self) -> List[Path]:
        """List skill record files, sorted by name, excluding the index."""
        try:
            entries = sorted(self.data_path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise SkillLoadError(self.data_path, f"cannot list directory: {e}") from e

        return [
            entry for entry in entries
            if entry.is_file()
            and entry.suffix in self.RECORD_SUFFIXES
            and entry.name != self.INDEX_FILENAME
        ]

    def load(self) -> LoadedCatalog:
        """
        Read the index and every skill record.

        Returns:
            LoadedCatalog with skills in file-name order

        Raises:
            SkillLoadError: directory or index missing, unreadable or malformed
                file, record without id, invalid record, duplicate id
        """
        if not self.data_path.is_dir():
            raise SkillLoadError(self.data_path, "catalog directory does not exist")
        if not self.index_path.is_file():
            raise SkillLoadError(self.index_path, f"missing {self.INDEX_FILENAME}")

        index = self._read_yaml(self.index_path)
        if index is None:
            index = {}
        elif not isinstance(index, dict):
            raise SkillLoadError(self.index_path, "index document must be a mapping")

        catalog = LoadedCatalog(index=index)

        for record_file in self.discover_record_files():
            skill = self.load_record(record_file)

            if skill.id in catalog.sources:
                raise SkillLoadError(
                    record_file,
                    f"duplicate skill id '{skill.id}'",
                    detail={"first_defined_in": catalog.sources[skill.id]}
                )

            catalog.skills.append(skill)
            catalog.sources[skill.id] = str(record_file)
            logger.debug(f"Parsed skill '{skill.id}' from {record_file.name}")

        logger.info(f"Loaded {len(catalog.skills)} skill records from {self.data_path}")
        return catalog

    def load_record(self, record_file: Path) -> Skill:
        """Parse and validate a single skill record file."""
        data = self._read_yaml(record_file)

        if not isinstance(data, dict):
            raise SkillLoadError(record_file, "skill record must be a mapping")
        if not data.get("id"):
            raise SkillLoadError(record_file, "skill record is missing required 'id'")

        try:
            return Skill.model_validate(data)
        except ValidationError as e:
            raise SkillLoadError(
                record_file,
                f"invalid skill record '{data['id']}'",
                detail={"errors": e.errors(include_url=False)}
            ) from e

    def _read_yaml(self, path: Path) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f)
        except OSError as e:
            raise SkillLoadError(path, f"cannot read file: {e}") from e
        except yaml.YAMLError as e:
            raise SkillLoadError(path, f"invalid YAML: {e}") from e
