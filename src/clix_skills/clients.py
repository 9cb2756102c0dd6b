# Client registry: AI client ids to MCP config file locations
# ABOUTME: Resolution depends only on the client id and a HostEnvironment
# ABOUTME: Cursor's project-local existence check is the only filesystem access
from collections.abc import Callable
from pathlib import Path

from clix_skills.errors import PathResolutionError, UnsupportedClientError
from clix_skills.host import HostEnvironment
from clix_skills.merger import VARIANTS
from clix_skills.models import ClientDescriptor, ConfigFormat, SchemaVariant
from clix_skills.utils.fs import FileSystem, LocalFileSystem

CLIENT_LABELS: dict[str, str] = {
    "cursor": "Cursor",
    "claude": "Claude Desktop",
    "vscode": "VS Code",
    "amp": "Amp",
    "kiro": "Kiro",
    "amazonq": "Amazon Q",
    "codex": "Codex",
    "opencode": "OpenCode",
}

SUPPORTED_CLIENTS: tuple[str, ...] = tuple(CLIENT_LABELS)

_JSON_STANDARD = (ConfigFormat.JSON, SchemaVariant.STANDARD_MCP_SERVERS)


def _cursor_config(host: HostEnvironment, fs: FileSystem) -> Path:
    # Project-level definition wins when present
    project = host.cwd / ".cursor" / "mcp.json"
    if fs.exists(project):
        return project
    return host.home / ".cursor" / "mcp.json"


def _claude_desktop_config(host: HostEnvironment, fs: FileSystem) -> Path | None:
    match host.platform:
        case "darwin":
            return (
                host.home
                / "Library"
                / "Application Support"
                / "Claude"
                / "claude_desktop_config.json"
            )
        case "win32":
            appdata = host.environ.get("APPDATA") or str(host.home / "AppData" / "Roaming")
            return Path(appdata) / "Claude" / "claude_desktop_config.json"
        case "linux":
            return host.home / ".config" / "Claude" / "claude_desktop_config.json"
    return None


def _vscode_config(host: HostEnvironment, fs: FileSystem) -> Path:
    return host.home / ".vscode" / "mcp.json"


def _amp_config(host: HostEnvironment, fs: FileSystem) -> Path:
    if host.platform == "win32":
        profile = host.environ.get("USERPROFILE") or str(host.home)
        return Path(profile) / ".config" / "amp" / "settings.json"
    return host.home / ".config" / "amp" / "settings.json"


def _kiro_config(host: HostEnvironment, fs: FileSystem) -> Path:
    return host.cwd / ".kiro" / "settings" / "mcp.json"


def _amazonq_config(host: HostEnvironment, fs: FileSystem) -> Path:
    return host.home / ".aws" / "amazonq" / "agents" / "default.json"


def _codex_config(host: HostEnvironment, fs: FileSystem) -> Path:
    return host.home / ".codex" / "config.toml"


def _opencode_config(host: HostEnvironment, fs: FileSystem) -> Path:
    return host.cwd / "opencode.json"


PathFn = Callable[[HostEnvironment, FileSystem], Path | None]

_CLIENTS: dict[str, tuple[PathFn, ConfigFormat, SchemaVariant]] = {
    "cursor": (_cursor_config, *_JSON_STANDARD),
    "claude": (_claude_desktop_config, *_JSON_STANDARD),
    "vscode": (_vscode_config, *_JSON_STANDARD),
    "amp": (_amp_config, ConfigFormat.JSON, SchemaVariant.AMP_NAMESPACED),
    "kiro": (_kiro_config, *_JSON_STANDARD),
    "amazonq": (_amazonq_config, *_JSON_STANDARD),
    "codex": (_codex_config, ConfigFormat.TOML, SchemaVariant.CODEX_TABLE),
    "opencode": (_opencode_config, ConfigFormat.JSON, SchemaVariant.OPENCODE_MAP),
}


def normalize_client_id(client_id: str) -> str:
    """Lower-case and strip a user-supplied client name."""
    return client_id.strip().lower()


def resolve_client(
    client_id: str,
    host: HostEnvironment,
    fs: FileSystem | None = None,
) -> ClientDescriptor:
    """Resolve the config file location and schema for a client.

    Args:
        client_id: Client name, matched case-insensitively.
        host: Platform, home, cwd and environment to resolve against.
        fs: Filesystem used for existence checks (defaults to local disk).

    Returns:
        ClientDescriptor, even if the file doesn't exist yet.

    Raises:
        UnsupportedClientError: Unknown client id.
        PathResolutionError: Known client with no location on host.platform.
    """
    fs = fs or LocalFileSystem()
    key = normalize_client_id(client_id)

    entry = _CLIENTS.get(key)
    if entry is None:
        raise UnsupportedClientError(f"Unknown MCP client: {client_id}")

    path_fn, config_format, variant = entry
    path = path_fn(host, fs)
    if path is None:
        raise PathResolutionError(f"{CLIENT_LABELS[key]} is not supported on {host.platform}")

    return ClientDescriptor(
        client_id=key,
        config_path=path,
        format=config_format,
        schema_variant=variant,
        collection_key_path=VARIANTS[variant].collection_key_path,
    )


def client_label(client_id: str) -> str:
    """Display name for a client id, falling back to the id itself."""
    return CLIENT_LABELS.get(normalize_client_id(client_id), client_id)
