"""Tests for commitsmith.pipeline module."""

import logging
from types import SimpleNamespace

import pytest

from commitsmith.config import CommitStyle
from commitsmith.exceptions import (
    ConfigurationError,
    FileAccessError,
    GenerationError,
)
from commitsmith.git import NoStagedChangesError, StagedChange
from commitsmith.global_config import AppConfig, ProviderConfig
from commitsmith.llm.shaper import ELLIPSIS, TRUNCATION_MARKER
from commitsmith.pipeline import generate_commit_message, resolve_style


def _chat_response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def mock_openai(mocker):
    """Patch the OpenAI client and return the create() mock."""
    client_cls = mocker.patch("commitsmith.llm.openai_provider.OpenAI")
    create = client_cls.return_value.chat.completions.create
    create.return_value = _chat_response("  Add installation section to README \n")
    return create


class TestResolveStyle:
    """Tests for resolve_style."""

    def test_global_style(self):
        config = AppConfig(commit_style="detailed")
        assert resolve_style(config, ProviderConfig()) == CommitStyle.DETAILED

    def test_provider_style_wins(self):
        config = AppConfig(commit_style="detailed")
        assert resolve_style(config, ProviderConfig(commit_style="simple")) == CommitStyle.SIMPLE

    def test_unknown_style(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_style(AppConfig(commit_style="haiku"), ProviderConfig())

        assert "haiku" in str(exc_info.value)


class TestGenerateCommitMessage:
    """Tests for generate_commit_message."""

    def test_single_file_simple_style(self, mock_openai, app_config, openai_config, sample_diff):
        changes = [StagedChange(path="README.md", status="M", diff=sample_diff)]

        message = generate_commit_message(app_config, changes, "openai", openai_config)

        assert message == "Add installation section to README"
        kwargs = mock_openai.call_args.kwargs
        system, user = kwargs["messages"][0]["content"], kwargs["messages"][1]["content"]
        assert system.endswith("under 100 characters.")
        assert "using 'simple' as commit style" in user
        # A 5-line diff is under the 2 * 3 + 1 threshold and stays intact
        assert f"File: README.md (Status: M)\nDiff:\n{sample_diff}\n\n" in user
        assert TRUNCATION_MARKER not in user

    def test_missing_api_key_makes_no_network_call(self, mocker, app_config, sample_changes):
        client_cls = mocker.patch("commitsmith.llm.openai_provider.OpenAI")

        with pytest.raises(ConfigurationError) as exc_info:
            generate_commit_message(app_config, sample_changes, "openai", ProviderConfig(model="gpt-4o"))

        assert "api_key" in str(exc_info.value)
        assert "openai" in str(exc_info.value)
        assert exc_info.value.stage == "dispatch"
        client_cls.assert_not_called()

    def test_long_diff_is_truncated_and_capped(self, mock_openai, openai_config):
        long_lines = [f"+{i:03d} " + "x" * 75 for i in range(50)]
        diff = "\n".join(long_lines)
        assert len(diff) >= 4000
        config = AppConfig(truncate_lines=3, max_line_width=60)

        generate_commit_message(
            config,
            [StagedChange(path="big.txt", status="M", diff=diff)],
            "openai",
            openai_config,
        )

        user = mock_openai.call_args.kwargs["messages"][1]["content"]
        assert user.count(TRUNCATION_MARKER) == 1
        shaped = user.split("Diff:\n", 1)[1]
        for line in shaped.splitlines():
            assert len(line) <= 60 + len(ELLIPSIS)
        assert "+000 " in shaped
        assert "+049 " in shaped
        assert "+025 " not in shaped

    def test_no_changes_raises(self, app_config, openai_config):
        with pytest.raises(NoStagedChangesError):
            generate_commit_message(app_config, [], "openai", openai_config)

    def test_style_error_tagged_config(self, openai_config, sample_changes):
        config = AppConfig(commit_style="haiku")

        with pytest.raises(ConfigurationError) as exc_info:
            generate_commit_message(config, sample_changes, "openai", openai_config)

        assert exc_info.value.stage == "config"

    def test_generation_error_tagged_dispatch(self, mock_openai, app_config, openai_config, sample_changes):
        mock_openai.side_effect = RuntimeError("timeout")

        with pytest.raises(GenerationError) as exc_info:
            generate_commit_message(app_config, sample_changes, "openai", openai_config)

        assert exc_info.value.stage == "dispatch"
        assert exc_info.value.provider == "openai"

    def test_custom_rules_used(self, mock_openai, app_config, openai_config, sample_changes, temp_dir):
        rules = "Always write commit subjects in the past tense and reference the ticket id. " * 2
        rules_path = temp_dir / ".commitsmithrules"
        rules_path.write_text(rules)

        generate_commit_message(
            app_config, sample_changes, "openai", openai_config, custom_rules_path=rules_path
        )

        system = mock_openai.call_args.kwargs["messages"][0]["content"]
        assert system.startswith("Always write commit subjects in the past tense")
        assert "imperative mood" not in system

    def test_missing_rules_file_uses_default(self, mock_openai, app_config, openai_config, sample_changes, temp_dir):
        generate_commit_message(
            app_config,
            sample_changes,
            "openai",
            openai_config,
            custom_rules_path=temp_dir / ".commitsmithrules",
        )

        system = mock_openai.call_args.kwargs["messages"][0]["content"]
        assert "imperative mood" in system

    def test_unreadable_rules_tagged_rules(self, mock_openai, app_config, openai_config, sample_changes, temp_dir):
        rules_dir = temp_dir / ".commitsmithrules"
        rules_dir.mkdir()

        with pytest.raises(FileAccessError) as exc_info:
            generate_commit_message(
                app_config, sample_changes, "openai", openai_config, custom_rules_path=rules_dir
            )

        assert exc_info.value.stage == "rules"
        mock_openai.assert_not_called()

    def test_uses_config_limits(self, mocker, openai_config, sample_changes):
        client_cls = mocker.patch("commitsmith.llm.openai_provider.OpenAI")
        create = client_cls.return_value.chat.completions.create
        create.return_value = _chat_response("fix: limits")
        config = AppConfig(max_tokens=321, request_timeout=9.0)

        generate_commit_message(config, sample_changes, "openai", openai_config)

        assert create.call_args.kwargs["max_tokens"] == 321
        assert client_cls.call_args.kwargs["timeout"] == 9.0

    def test_over_budget_message_logged_not_truncated(self, mock_openai, app_config, openai_config, sample_changes, caplog):
        long_message = "Refactor " + "everything " * 20
        mock_openai.return_value = _chat_response(long_message)

        with caplog.at_level(logging.WARNING, logger="commitsmith"):
            message = generate_commit_message(app_config, sample_changes, "openai", openai_config)

        assert message == long_message.strip()
        assert "over the 100 character budget" in caplog.text
