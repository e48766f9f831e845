"""E2E test fixtures: real API, isolated temp directories."""

import os

import pytest


@pytest.fixture
def credentials():
    """Real credentials from the environment."""
    return {"GH_USER": os.environ["GH_USER"], "GH_TOKEN": os.environ["GH_TOKEN"]}


@pytest.fixture
def e2e_readme(tmp_path):
    """Isolated README with an empty stats region."""
    p = tmp_path / "README.md"
    p.write_text("# E2E\n<!--GITHUB_STATS_START-->\n<!--GITHUB_STATS_END-->\n", encoding="utf-8")
    return p
