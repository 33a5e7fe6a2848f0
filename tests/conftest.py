"""Shared test fixtures and configuration."""

import logging
import tempfile
from pathlib import Path

import pytest

from commitsmith.git import StagedChange
from commitsmith.global_config import AppConfig, ProviderConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_config(mocker, temp_dir, monkeypatch):
    """Point the global config at a temporary directory."""
    config_dir = temp_dir / ".commitsmith"
    mocker.patch("commitsmith.global_config._CONFIG_DIR", config_dir)
    monkeypatch.delenv("COMMITSMITH_CONFIG", raising=False)
    return config_dir


@pytest.fixture
def clean_provider_env(monkeypatch):
    """Remove provider credentials from the environment."""
    for var in (
        "OPENAI_API_KEY",
        "ANTHROPIC_API_KEY",
        "OLLAMA_API_KEY",
        "OLLAMA_URI",
        "GOOGLE_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def sample_diff():
    """A short unified diff (5 lines plus trailing newline)."""
    return (
        "diff --git a/README.md b/README.md\n"
        "--- a/README.md\n"
        "+++ b/README.md\n"
        "@@ -1 +1 @@\n"
        "+Add installation section\n"
    )


@pytest.fixture
def sample_changes(sample_diff):
    """Staged changes for two files."""
    return [
        StagedChange(path="README.md", status="M", diff=sample_diff),
        StagedChange(
            path="src/app.py",
            status="A",
            diff=(
                "diff --git a/src/app.py b/src/app.py\n"
                "new file mode 100644\n"
                "--- /dev/null\n"
                "+++ b/src/app.py\n"
                "@@ -0,0 +1,2 @@\n"
                "+def main():\n"
                "+    return 0\n"
            ),
        ),
    ]


@pytest.fixture
def openai_config():
    """Provider settings for OpenAI."""
    return ProviderConfig(api_key="sk-test-key", model="gpt-4o-mini", temperature=0.7)


@pytest.fixture
def app_config(openai_config):
    """A full configuration with a single OpenAI provider."""
    return AppConfig(
        default_provider="openai",
        providers={"openai": openai_config},
        commit_style="simple",
        truncate_lines=3,
        max_line_width=60,
    )


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo handler changes made by configure_logging during CLI tests."""
    yield
    logger = logging.getLogger("commitsmith")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
