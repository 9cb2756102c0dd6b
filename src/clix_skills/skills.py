# ABOUTME: Skill bundle installation: copy a skill directory into the project.
# ABOUTME: Destination follows the conventions of the client the skill is meant for.
import logging
import shutil
from pathlib import Path

from clix_skills.clients import normalize_client_id
from clix_skills.errors import SkillInstallError, SkillNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_SKILL_DIR = ".clix/skills"

# ABOUTME: Project-relative skills directory per client
SKILL_DESTINATIONS: dict[str, str] = {
    "claude": ".claude/skills",
    "cursor": ".cursor/skills",
    "vscode": ".vscode/skills",
    "codex": ".codex/skills",
    "opencode": ".opencode/skill",
    "letta": ".skills",
    "goose": ".goose/skills",
    "github": ".github/skills",
    "copilot": ".github/skills",
    "amp": ".amp/skills",
}


def skill_destination(client: str | None = None, custom_path: str | None = None) -> str:
    """Return the project-relative directory that skills are copied into.

    Examples:
        >>> skill_destination("opencode")
        '.opencode/skill'
        >>> skill_destination(".windsurf")
        '.windsurf/skills'
        >>> skill_destination()
        '.clix/skills'
    """
    if custom_path:
        return custom_path
    if not client:
        return DEFAULT_SKILL_DIR

    destination = SKILL_DESTINATIONS.get(normalize_client_id(client))
    if destination is not None:
        return destination
    if client.startswith("."):
        return f"{client}/skills"
    return DEFAULT_SKILL_DIR


def available_skills(skills_root: Path) -> list[str]:
    """List skill bundle names (sub-directories) under skills_root."""
    if not skills_root.is_dir():
        return []
    return sorted(p.name for p in skills_root.iterdir() if p.is_dir())


def install_skill(
    name: str,
    skills_root: Path,
    cwd: Path,
    client: str | None = None,
    custom_path: str | None = None,
) -> Path:
    """Copy one skill bundle into the project.

    ABOUTME: Existing files at the destination are overwritten, others kept

    Args:
        name: Skill directory name
        skills_root: Directory holding all skill bundles
        cwd: Project directory the destination is relative to
        client: Target client, decides the destination convention
        custom_path: Explicit destination, overrides client

    Returns:
        Directory the skill was installed into

    Raises:
        SkillNotFoundError: If skills_root has no such skill
        SkillInstallError: If copying fails
    """
    source = skills_root / name
    if not source.is_dir():
        available = available_skills(skills_root)
        hint = f"Available skills: {', '.join(available)}" if available else (
            f"Skills directory not found at: {skills_root}"
        )
        raise SkillNotFoundError(f"Skill '{name}' not found in {skills_root}. {hint}")

    destination = (cwd / skill_destination(client, custom_path) / name).resolve()

    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except OSError as e:
        raise SkillInstallError(f"Failed to copy skill files to {destination}: {e}") from e

    logger.info(f"Installed skill {name} to {destination}")
    return destination
