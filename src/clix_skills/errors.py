# Exception hierarchy for clix_skills
# ABOUTME: All errors inherit from ClixSkillsError so callers have one catch point
# ABOUTME: Messages are user-facing: they name the file and the cause


class ClixSkillsError(Exception):
    """Base exception for all clix_skills errors."""


class UnsupportedClientError(ClixSkillsError):
    """Client identifier has no known config location."""


class PathResolutionError(ClixSkillsError):
    """Client is known but has no config path on this platform."""


class ConfigReadError(ClixSkillsError):
    """Config file exists but could not be read from disk."""


class ConfigParseError(ClixSkillsError):
    """Config file content is not valid for its declared format."""


class ConfigShapeError(ClixSkillsError):
    """Config parses, but a node on the server collection path is not a mapping."""


class ConfigWriteError(ClixSkillsError):
    """Config could not be serialized or persisted."""


class SkillNotFoundError(ClixSkillsError):
    """Requested skill bundle does not exist in the skills directory."""


class SkillInstallError(ClixSkillsError):
    """Copying a skill bundle into the project failed."""
