# Tests for skill bundle installation
from pathlib import Path

import pytest

from clix_skills.errors import SkillNotFoundError
from clix_skills.skills import available_skills, install_skill, skill_destination


@pytest.fixture
def skills_root(tmp_path: Path) -> Path:
    root = tmp_path / "skills"
    for name in ("integration", "event-tracking"):
        (root / name / "scripts").mkdir(parents=True)
        (root / name / "SKILL.md").write_text(f"# {name}\n")
        (root / name / "scripts" / "validate.sh").write_text("#!/bin/sh\n")
    (root / "README.md").write_text("not a skill")
    return root


@pytest.mark.parametrize(
    ("client", "expected"),
    [
        ("claude", ".claude/skills"),
        ("Cursor", ".cursor/skills"),
        ("opencode", ".opencode/skill"),
        ("letta", ".skills"),
        ("copilot", ".github/skills"),
        ("github", ".github/skills"),
        (".windsurf", ".windsurf/skills"),
        ("kiro", ".clix/skills"),
        (None, ".clix/skills"),
    ],
)
def test_skill_destination(client, expected):
    """Test destination conventions per client."""
    assert skill_destination(client) == expected


def test_custom_path_wins():
    """Test an explicit path overrides the client convention."""
    assert skill_destination("claude", "docs/skills") == "docs/skills"


def test_available_skills(skills_root: Path):
    """Test only directories are listed, sorted."""
    assert available_skills(skills_root) == ["event-tracking", "integration"]


def test_available_skills_missing_root(tmp_path: Path):
    """Test a missing skills directory lists nothing."""
    assert available_skills(tmp_path / "nope") == []


def test_install_copies_tree(skills_root: Path, tmp_path: Path):
    """Test the whole bundle is copied under the client's directory."""
    project = tmp_path / "project"
    project.mkdir()

    destination = install_skill("integration", skills_root, project, client="claude")

    assert destination == (project / ".claude" / "skills" / "integration").resolve()
    assert (destination / "SKILL.md").read_text() == "# integration\n"
    assert (destination / "scripts" / "validate.sh").exists()


def test_install_over_existing(skills_root: Path, tmp_path: Path):
    """Test reinstalling refreshes files and keeps extra local ones."""
    project = tmp_path / "project"
    target = project / ".clix" / "skills" / "integration"
    target.mkdir(parents=True)
    (target / "SKILL.md").write_text("stale")
    (target / "notes.md").write_text("mine")

    install_skill("integration", skills_root, project)

    assert (target / "SKILL.md").read_text() == "# integration\n"
    assert (target / "notes.md").read_text() == "mine"


def test_install_missing_skill(skills_root: Path, tmp_path: Path):
    """Test a missing skill lists what is available."""
    with pytest.raises(SkillNotFoundError, match="Available skills: event-tracking, integration"):
        install_skill("nope", skills_root, tmp_path)
