"""
Model name resolution.

Binary IPLs only store model IDs. Text IPLs carry a model name next to
each ID, which the game ignores but people reading the file rely on.
Names come from a resolver so the writer does not care where they live:

- ModelNameTable: ID -> name lookup, loaded from IDE files or JSON
- PlaceholderModelNames: the same fixed name for every object

IDE format (sections closed by 'end'):
    objs
    # id, modelName, txdName, drawDist, flags
    615, veg_tree3, gta_tree_boak, 150, 0
    end
"""

import json
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from ..constants import PLACEHOLDER_MODEL_NAME, UNKNOWN_MODEL_NAME
from ..utils import log, logDebug, logWarning, read_file_bytes

# IDE sections whose lines start with "id, modelName"
IDE_MODEL_SECTIONS = {'objs', 'tobj', 'anim', 'tanm', 'weap', 'cars', 'peds', 'hier'}


class ModelNameResolver:
    """Strategy interface: model ID -> display name."""

    def lookup(self, model_id: int) -> Optional[str]:
        """Known name for a model, or None."""
        return None

    def get_name(self, model_id: int) -> str:
        """Name to write into a text IPL."""
        raise NotImplementedError


class PlaceholderModelNames(ModelNameResolver):
    """Writes the same name for every model."""

    def __init__(self, name: str = PLACEHOLDER_MODEL_NAME):
        self.name = name

    def get_name(self, model_id: int) -> str:
        return self.name


class ModelNameTable(ModelNameResolver):
    """
    Static ID -> name table.

    Usage:
        names = ModelNameTable.load(["data/default.ide", "data/vehicles.ide"])
        names.get_name(615)   # 'veg_tree3'
        names.get_name(-5)    # 'unknown'
    """

    def __init__(self, names: Optional[Dict[int, str]] = None, fallback: str = UNKNOWN_MODEL_NAME):
        self.names: Dict[int, str] = dict(names or {})
        self.fallback = fallback

    def __len__(self) -> int:
        return len(self.names)

    def __contains__(self, model_id: int) -> bool:
        return model_id in self.names

    def lookup(self, model_id: int) -> Optional[str]:
        return self.names.get(model_id)

    def get_name(self, model_id: int) -> str:
        return self.names.get(model_id, self.fallback)

    def add_ide_text(self, text: str, source: str = "") -> int:
        """
        Add the models defined in IDE file contents.

        Returns:
            Number of models added
        """
        added = 0
        section = None

        for line_number, raw_line in enumerate(text.split("\n"), 1):
            line = raw_line.strip()
            if not line or line.startswith('#'):
                continue

            lowered = line.lower()
            if section is None:
                section = lowered
                continue
            if lowered == 'end':
                section = None
                continue
            if section not in IDE_MODEL_SECTIONS:
                continue

            fields = [f.strip() for f in line.split(',')]
            if len(fields) < 2 or not fields[1]:
                logDebug(f"{source}:{line_number}: no model name in {line!r}")
                continue
            try:
                model_id = int(fields[0])
            except ValueError:
                logDebug(f"{source}:{line_number}: bad model ID in {line!r}")
                continue

            if model_id in self.names and self.names[model_id] != fields[1]:
                logDebug(f"{source}:{line_number}: model {model_id} renamed "
                         f"{self.names[model_id]} -> {fields[1]}")
            self.names[model_id] = fields[1]
            added += 1

        return added

    def add_json_text(self, text: str, source: str = "") -> int:
        """Add models from a JSON object {"<id>": "<name>"}."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"{source}: expected a JSON object of id -> name")

        added = 0
        for key, name in data.items():
            try:
                model_id = int(key)
            except ValueError:
                logWarning(f"{source}: ignoring non-numeric model ID {key!r}")
                continue
            self.names[model_id] = str(name)
            added += 1
        return added

    def add_file(self, path: Union[str, Path]) -> int:
        """
        Add models from an IDE (.ide / anything else) or JSON (.json) file.

        Raises:
            FileAccessError: file could not be read
            ValueError: JSON file is not an id -> name object
        """
        path = Path(path)
        text = read_file_bytes(path).decode('latin-1')
        if path.suffix.lower() == '.json':
            return self.add_json_text(text, source=path.name)
        return self.add_ide_text(text, source=path.name)

    @classmethod
    def load(cls, paths: Iterable[Union[str, Path]], fallback: str = UNKNOWN_MODEL_NAME) -> 'ModelNameTable':
        """Build a table from several files. Later files override earlier ones."""
        table = cls(fallback=fallback)
        for path in paths:
            added = table.add_file(path)
            log(f"  Model names: {added} from {path}")
        return table
