# Serialize ConfigDocuments back to disk
import json
import logging
from pathlib import Path

import tomli_w

from clix_skills.document import ConfigDocument
from clix_skills.errors import ConfigWriteError
from clix_skills.models import ConfigFormat
from clix_skills.utils.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

# ABOUTME: 2-space indentation matches what the supported clients write themselves
JSON_INDENT = 2


def serialize_document(document: ConfigDocument) -> str:
    """Render a document in its own format.

    ABOUTME: JSON keeps tree order and non-ASCII text, ends with a newline
    ABOUTME: TOML uses tomli_w's canonical table/array layout

    Raises:
        ConfigWriteError: If the tree holds values the format can't represent
    """
    try:
        if document.format is ConfigFormat.TOML:
            return tomli_w.dumps(document.data)
        return json.dumps(document.data, indent=JSON_INDENT, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        raise ConfigWriteError(
            f"Could not serialize config as {document.format.value.upper()}: {e}"
        ) from e


def write_document(path: Path, document: ConfigDocument, fs: FileSystem | None = None) -> None:
    """Persist a document at path, replacing any existing file.

    ABOUTME: Serialization completes in memory before the file is touched
    ABOUTME: Creates the parent directory if needed (new-file path)
    ABOUTME: The document itself is never modified, so callers may retry

    Args:
        path: Destination config file
        document: Document to write
        fs: Filesystem to write through (defaults to local disk)

    Raises:
        ConfigWriteError: On serialization or I/O failure
    """
    fs = fs or LocalFileSystem()
    content = serialize_document(document)

    try:
        fs.make_dirs(path.parent)
        fs.write_text(path, content)
    except PermissionError as e:
        raise ConfigWriteError(f"Permission denied writing to {path}: {e}") from e
    except OSError as e:
        raise ConfigWriteError(f"Failed to write {path}: {e}") from e

    logger.info(f"Saved {document.format.value.upper()} configuration to {path}")
