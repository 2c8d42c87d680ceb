# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""YAML/JSON document parser with source locations and optional caching."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

import yaml

from ..config import validator_config
from ..exceptions import RecordLoadError
from ..file_io.source_location import SourceMap

logger = logging.getLogger(__name__)


def _pointer_token(key: Any) -> str:
    return str(key).replace("~", "~0").replace("/", "~1")


def _iter_marks(node: yaml.Node, pointer: str = "") -> Iterator[Tuple[str, yaml.Mark]]:
    """Yield ``(json_pointer, start_mark)`` for *node* and every node below it."""
    yield pointer, node.start_mark
    if isinstance(node, yaml.MappingNode):
        for key_node, value_node in node.value:
            if getattr(key_node, "value", None) is not None:
                yield from _iter_marks(value_node, f"{pointer}/{_pointer_token(key_node.value)}")
    elif isinstance(node, yaml.SequenceNode):
        for idx, item_node in enumerate(node.value):
            yield from _iter_marks(item_node, f"{pointer}/{idx}")


class YamlParser:
    """Loads YAML documents together with a source map.

    JSON is a subset of YAML, so ``.json`` record files go through the same path.
    Caching is keyed by file path and never invalidated automatically.
    """

    def __init__(self, cache_enabled: Optional[bool] = None):
        self.cache_enabled = validator_config.cache_enabled if cache_enabled is None else cache_enabled
        self._cache: Dict[Path, Tuple[Any, SourceMap]] = {}

    @staticmethod
    def build_source_map(content: str) -> SourceMap:
        """Map JSON pointers (``/projects/0/projectName``) to 1-based line/column.

        Unparseable content yields an empty map; :meth:`load_string_with_source`
        reports the parse error itself.
        """
        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            return {}
        if root is None:
            return {}
        return {
            pointer: {"line": mark.line + 1, "column": mark.column + 1}
            for pointer, mark in _iter_marks(root)
        }

    def load_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a YAML/JSON file and return ``(data, source_map)``.

        Raises:
            RecordLoadError: If the file cannot be read or parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise RecordLoadError(f"File not found: {path}")
        if not path.is_file():
            raise RecordLoadError(f"Path is not a file: {path}")

        cached = self._cache.get(path) if self.cache_enabled else None
        if cached is not None:
            logger.debug(f"Using cached document: {path}")
            return cached

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RecordLoadError(f"Failed to read file {path}: {exc}") from exc

        logger.debug(f"Loading document: {path}")
        loaded = self.load_string_with_source(content, origin=str(path))
        if self.cache_enabled:
            self._cache[path] = loaded
        return loaded

    def load_string_with_source(self, content: str, origin: str = "<string>") -> Tuple[Any, SourceMap]:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise RecordLoadError(f"Failed to parse {origin}: {exc}") from exc
        return data, self.build_source_map(content)

    def load(self, file_path: Union[str, Path]) -> Any:
        return self.load_with_source(file_path)[0]

    def clear_cache(self) -> None:
        self._cache.clear()


yaml_parser = YamlParser()
