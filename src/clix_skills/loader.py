# Config loading and parsing for client config files
import json
import logging
from pathlib import Path
from typing import Any

import tomli

from clix_skills.document import ConfigDocument
from clix_skills.errors import ConfigParseError, ConfigReadError
from clix_skills.models import ConfigFormat
from clix_skills.utils.fs import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


def load_document(
    path: Path,
    config_format: ConfigFormat,
    fs: FileSystem | None = None,
) -> ConfigDocument | None:
    """Load a client config file into a ConfigDocument.

    ABOUTME: Returns None if the file doesn't exist (first-time setup)
    ABOUTME: Whitespace-only files (BOM aside) load as an empty document
    ABOUTME: Fail-fast on parse errors so a file we can't interpret is never replaced

    Args:
        path: Config file location
        config_format: Format the client uses for this file
        fs: Filesystem to read through (defaults to local disk)

    Returns:
        Parsed document, or None if absent

    Raises:
        ConfigReadError: If the file exists but can't be read
        ConfigParseError: If the content isn't valid for config_format
    """
    fs = fs or LocalFileSystem()

    if not fs.exists(path):
        logger.debug(f"Config file not found: {path}")
        return None

    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Could not read {path}: {e}") from e

    if not text.removeprefix("\ufeff").strip():
        logger.debug(f"Config file is empty: {path}")
        return ConfigDocument.empty(config_format)

    data = parse_text(text, config_format, path)
    logger.debug(f"Loaded {config_format.value} config from {path}")
    return ConfigDocument(format=config_format, data=data)


def parse_text(text: str, config_format: ConfigFormat, path: Path | str = "<string>") -> dict[str, Any]:
    """Parse config text in the given format.

    ABOUTME: A leading UTF-8 BOM is ignored

    Raises:
        ConfigParseError: On syntax errors or a non-object JSON top level
    """
    text = text.removeprefix("\ufeff")

    if config_format is ConfigFormat.TOML:
        try:
            return tomli.loads(text)
        except tomli.TOMLDecodeError as e:
            raise ConfigParseError(f"Invalid TOML in {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigParseError(
            f"Invalid JSON in {path}: expected an object at the top level, "
            f"found {type(data).__name__}"
        )
    return data
