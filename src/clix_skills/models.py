# Core data models for clix_skills
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable

# ABOUTME: Map key under which the Clix server is registered in every client
REGISTRATION_KEY = "clix-mcp-server"


class ConfigFormat(str, Enum):
    """Serialization format of a client config file."""

    JSON = "json"
    TOML = "toml"


class SchemaVariant(str, Enum):
    """Where a client keeps its server registrations and what an entry looks like.

    ABOUTME: Each variant fixes both the collection key path and the entry shape
    ABOUTME: Projections and empty templates live in clix_skills.merger
    """

    STANDARD_MCP_SERVERS = "mcpServers"
    AMP_NAMESPACED = "amp.mcpServers"
    CODEX_TABLE = "mcp_servers"
    OPENCODE_MAP = "mcp"


@dataclass(frozen=True)
class ServerEntry:
    """Canonical, format-independent description of a server launch.

    ABOUTME: Uses frozen dataclass to prevent accidental mutation
    ABOUTME: Empty env means no overrides and is omitted on disk
    """

    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the stored value immutable
        object.__setattr__(self, "args", tuple(self.args))


# ABOUTME: The one server this tool registers, launched through npx
CLIX_SERVER_ENTRY = ServerEntry(
    command="npx",
    args=("-y", "@clix-so/clix-mcp-server@latest"),
)


@dataclass(frozen=True)
class ClientDescriptor:
    """Resolved location and schema of one client's config file.

    ABOUTME: Recomputed on every run, never cached
    ABOUTME: collection_key_path holds opaque keys ("amp.mcpServers" is ONE key)
    """

    client_id: str
    config_path: Path
    format: ConfigFormat
    schema_variant: SchemaVariant
    collection_key_path: tuple[str, ...]


class SyncStatus(str, Enum):
    """Terminal state of one client's synchronization run."""

    UNSUPPORTED = "unsupported"
    SKIPPED = "skipped"
    ALREADY_CONFIGURED = "already_configured"
    INJECTED = "injected"
    FAILED = "failed"


@dataclass
class SyncOutcome:
    """Per-client result reported back to the installer.

    ABOUTME: Only FAILED is treated as a hard failure by callers
    """

    client_id: str
    status: SyncStatus
    message: str
    config_path: Path | None = None

    @property
    def is_fatal(self) -> bool:
        return self.status is SyncStatus.FAILED


@runtime_checkable
class ConfirmFn(Protocol):
    """Blocking yes/no question put to the user."""

    def __call__(self, prompt: str) -> bool:
        ...


@runtime_checkable
class ReportFn(Protocol):
    """Sink for human-readable progress messages."""

    def __call__(self, message: str) -> None:
        ...
