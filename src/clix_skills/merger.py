# Idempotent merge of one server registration into a client config
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from clix_skills.document import ConfigDocument
from clix_skills.models import (
    CLIX_SERVER_ENTRY,
    REGISTRATION_KEY,
    ConfigFormat,
    SchemaVariant,
    ServerEntry,
)

OPENCODE_SCHEMA_URL = "https://opencode.ai/config.json"


@dataclass(frozen=True)
class VariantSpec:
    """Key path, on-disk entry shape and new-file template for one variant."""

    collection_key_path: tuple[str, ...]
    format: ConfigFormat
    project: Callable[[ServerEntry], dict[str, Any]]
    empty_template: Callable[[], dict[str, Any]]


@dataclass
class MergeResult:
    """Outcome of merge(): whether the key was there, and the resulting document."""

    already_present: bool
    document: ConfigDocument


def _command_args_entry(entry: ServerEntry) -> dict[str, Any]:
    result: dict[str, Any] = {
        "command": entry.command,
        "args": list(entry.args),
    }
    if entry.env:
        result["env"] = dict(entry.env)
    return result


def _opencode_entry(entry: ServerEntry) -> dict[str, Any]:
    # OpenCode runs a single argv list and calls env vars "environment"
    result: dict[str, Any] = {
        "type": "local",
        "command": [entry.command, *entry.args],
        "enabled": True,
    }
    if entry.env:
        result["environment"] = dict(entry.env)
    return result


# ABOUTME: Collection key path, on-disk entry shape and new-file template per variant
VARIANTS: dict[SchemaVariant, VariantSpec] = {
    SchemaVariant.STANDARD_MCP_SERVERS: VariantSpec(
        collection_key_path=("mcpServers",),
        format=ConfigFormat.JSON,
        project=_command_args_entry,
        empty_template=lambda: {"mcpServers": {}},
    ),
    SchemaVariant.AMP_NAMESPACED: VariantSpec(
        # One literal key containing a dot, not amp -> mcpServers
        collection_key_path=("amp.mcpServers",),
        format=ConfigFormat.JSON,
        project=_command_args_entry,
        empty_template=lambda: {"amp.mcpServers": {}},
    ),
    SchemaVariant.CODEX_TABLE: VariantSpec(
        collection_key_path=("mcp_servers",),
        format=ConfigFormat.TOML,
        project=_command_args_entry,
        empty_template=lambda: {"mcp_servers": {}},
    ),
    SchemaVariant.OPENCODE_MAP: VariantSpec(
        collection_key_path=("mcp",),
        format=ConfigFormat.JSON,
        project=_opencode_entry,
        empty_template=lambda: {"$schema": OPENCODE_SCHEMA_URL, "mcp": {}},
    ),
}


def project_entry(variant: SchemaVariant, entry: ServerEntry = CLIX_SERVER_ENTRY) -> dict[str, Any]:
    """Lay out a canonical entry the way the variant's client expects it.

    Examples:
        >>> project_entry(SchemaVariant.OPENCODE_MAP)["command"]
        ['npx', '-y', '@clix-so/clix-mcp-server@latest']
    """
    return VARIANTS[variant].project(entry)


def empty_document(variant: SchemaVariant) -> ConfigDocument:
    """Fresh document for a client whose config file doesn't exist yet."""
    shape = VARIANTS[variant]
    return ConfigDocument(format=shape.format, data=shape.empty_template())


def is_registered(
    document: ConfigDocument,
    variant: SchemaVariant,
    key: str = REGISTRATION_KEY,
) -> bool:
    """True if key is present in the variant's server collection."""
    collection = document.get(VARIANTS[variant].collection_key_path)
    return isinstance(collection, dict) and key in collection


def merge(
    document: ConfigDocument,
    variant: SchemaVariant,
    entry: ServerEntry = CLIX_SERVER_ENTRY,
    key: str = REGISTRATION_KEY,
) -> MergeResult:
    """Stage the registration of entry under key, unless key is already there.

    ABOUTME: Works on a deep copy, the caller's document is never mutated
    ABOUTME: Presence of key is the only idempotency signal; the value is not compared
    ABOUTME: New collection and entry keys are appended after existing ones

    Args:
        document: Loaded or freshly templated config
        variant: Schema variant of the target client
        entry: Canonical server entry to register
        key: Registration key inside the collection

    Returns:
        MergeResult; document is unchanged when already_present is True

    Raises:
        ConfigShapeError: If the collection path holds something other than a mapping
    """
    if is_registered(document, variant, key):
        return MergeResult(already_present=True, document=document)

    updated = document.copy()
    collection = updated.ensure_mapping(VARIANTS[variant].collection_key_path)
    collection[key] = project_entry(variant, entry)

    return MergeResult(already_present=False, document=updated)
