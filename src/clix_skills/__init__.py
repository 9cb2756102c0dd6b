# clix_skills - Clix agent skills installer and MCP config synchronizer
# ABOUTME: Version information
__version__ = "0.1.0"

# ABOUTME: Export core data models
from clix_skills.models import (
    CLIX_SERVER_ENTRY,
    REGISTRATION_KEY,
    ClientDescriptor,
    ConfigFormat,
    SchemaVariant,
    ServerEntry,
    SyncOutcome,
    SyncStatus,
)

# ABOUTME: Export the synchronizer pipeline
from clix_skills.clients import SUPPORTED_CLIENTS, resolve_client
from clix_skills.document import ConfigDocument
from clix_skills.errors import ClixSkillsError
from clix_skills.host import HostEnvironment
from clix_skills.loader import load_document
from clix_skills.merger import MergeResult, empty_document, merge
from clix_skills.sync import SyncOrchestrator, SyncReport, sync_clients
from clix_skills.writer import serialize_document, write_document

__all__ = [
    "__version__",
    "CLIX_SERVER_ENTRY",
    "REGISTRATION_KEY",
    "ClientDescriptor",
    "ConfigFormat",
    "SchemaVariant",
    "ServerEntry",
    "SyncOutcome",
    "SyncStatus",
    "SUPPORTED_CLIENTS",
    "resolve_client",
    "ConfigDocument",
    "ClixSkillsError",
    "HostEnvironment",
    "load_document",
    "MergeResult",
    "empty_document",
    "merge",
    "SyncOrchestrator",
    "SyncReport",
    "sync_clients",
    "serialize_document",
    "write_document",
]
