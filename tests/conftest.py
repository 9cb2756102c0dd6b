# ABOUTME: Shared fixtures for clix_skills tests
# ABOUTME: Every test gets its own fake home and project directory under tmp_path
from pathlib import Path

import pytest

from clix_skills.host import HostEnvironment


@pytest.fixture
def host(tmp_path: Path) -> HostEnvironment:
    """Linux host whose home and cwd live under tmp_path."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    return HostEnvironment(platform="linux", home=home, cwd=project, environ={})


class ScriptedConfirm:
    """Confirm capability that replays fixed answers and records the prompts."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt}")
        return self.answers.pop(0)
