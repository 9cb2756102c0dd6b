# In-memory config tree shared by the loader, merger and writer
import copy
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from clix_skills.errors import ConfigShapeError
from clix_skills.models import ConfigFormat

# ABOUTME: A key path is a sequence of opaque keys; dots inside a key are literal
KeyPath = Sequence[str]


@dataclass
class ConfigDocument:
    """Parsed config file, format-tagged, with unknown keys kept as-is.

    ABOUTME: data is a plain dict tree; dict insertion order is the file order
    ABOUTME: Nothing here interprets keys, so unrelated content round-trips
    """

    format: ConfigFormat
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls, config_format: ConfigFormat) -> "ConfigDocument":
        return cls(format=config_format, data={})

    def get(self, key_path: KeyPath) -> Any | None:
        """Return the node at key_path, or None if any step is missing.

        Examples:
            >>> doc = ConfigDocument(ConfigFormat.JSON, {"amp.mcpServers": {}})
            >>> doc.get(["amp.mcpServers"])
            {}
            >>> doc.get(["amp", "mcpServers"]) is None
            True
        """
        node: Any = self.data
        for key in key_path:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node

    def ensure_mapping(self, key_path: KeyPath) -> dict[str, Any]:
        """Return the mapping at key_path, creating missing levels.

        ABOUTME: New keys are appended after existing siblings
        ABOUTME: A null node counts as missing and becomes an empty mapping
        ABOUTME: Other existing non-mapping nodes are never replaced

        Raises:
            ConfigShapeError: If a node on the path exists but is not a mapping
        """
        node = self.data
        walked: list[str] = []
        for key in key_path:
            walked.append(key)
            if node.get(key) is None:
                node[key] = {}
            child = node[key]
            if not isinstance(child, dict):
                raise ConfigShapeError(
                    f"Expected a table/object at {_describe(walked)}, "
                    f"found {type(child).__name__}"
                )
            node = child
        return node

    def set(self, key_path: KeyPath, value: Any) -> None:
        """Set the leaf at key_path, creating intermediate mappings."""
        if not key_path:
            raise ValueError("key_path must not be empty")
        parent = self.ensure_mapping(key_path[:-1])
        parent[key_path[-1]] = value

    def copy(self) -> "ConfigDocument":
        """Deep copy; mutations of the copy never reach this document."""
        return ConfigDocument(format=self.format, data=copy.deepcopy(self.data))


def _describe(key_path: KeyPath) -> str:
    # Quote each key so "amp.mcpServers" reads as one key
    return " -> ".join(f'"{key}"' for key in key_path)
