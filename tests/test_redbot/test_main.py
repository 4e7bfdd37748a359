"""
Tests for the command line entry point.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from redbot.__main__ import COMMANDS, main, parse_args, run
from redbot.exceptions import ApiError
from redbot.models import Post, Subreddit, User


class TestParseArgs:
    """Test argument parsing."""

    def test_top_defaults(self):
        args = parse_args(["top", "python"])

        assert args.command == "top"
        assert args.subreddit == "python"
        assert args.count == 25
        assert args.config is None

    def test_config_option(self):
        args = parse_args(["--config", "config.json", "search", "pyth"])

        assert args.config == "config.json"
        assert args.name == "pyth"

    @pytest.mark.parametrize("argv", [["me"], ["top", "python"], ["search", "pyth"]])
    def test_every_command_dispatches(self, argv):
        assert parse_args(argv).command in COMMANDS

    def test_unknown_command_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["frontpage"])


class TestRun:
    """Test command execution against a mocked client."""

    def test_me(self):
        api = MagicMock()
        api.whoami = {"name": "bot"}

        assert run(api, parse_args(["me"])) == {"name": "bot"}

    def test_search(self):
        api = MagicMock()
        api.search_for_subreddit.return_value = [
            Subreddit(api=api, name="python"),
            Subreddit(api=api, name="pythontips"),
        ]

        assert run(api, parse_args(["search", "pyth"])) == ["python", "pythontips"]
        api.search_for_subreddit.assert_called_once_with("pyth")

    def test_top(self):
        api = MagicMock()
        subreddit = MagicMock()
        subreddit.get_top_posts.return_value = [
            Post(api=api, user=User(api=api, name="alice"), title="Hi", fullname="t3_a"),
        ]
        api.get_subreddit.return_value = subreddit

        result = run(api, parse_args(["top", "python", "--count", "1"]))

        assert result == [{"fullname": "t3_a", "title": "Hi", "author": "alice"}]
        subreddit.get_top_posts.assert_called_once_with(1)


class TestMain:
    """Test the main() wrapper."""

    @patch("redbot.__main__.RedditClient")
    def test_main_success(self, mock_client_cls, tmp_path, capsys, config):
        path = tmp_path / "config.json"
        path.write_text(config.dumps())
        api = mock_client_cls.return_value.__enter__.return_value
        api.search_for_subreddit.return_value = [Subreddit(api=api, name="rust")]

        exit_code = main(["--config", str(path), "search", "rust"])

        assert exit_code == 0
        api.login.assert_called_once()
        assert json.loads(capsys.readouterr().out) == ["rust"]

    @patch("redbot.__main__.RedditClient")
    def test_main_api_error(self, mock_client_cls, tmp_path, capsys, config):
        path = tmp_path / "config.json"
        path.write_text(config.dumps())
        api = mock_client_cls.return_value.__enter__.return_value
        api.login.side_effect = ApiError("Login failed, code 401", status_code=401)

        exit_code = main(["--config", str(path), "me"])

        assert exit_code == 1
        assert "Login failed, code 401" in capsys.readouterr().err

    def test_main_missing_config_file(self, tmp_path, capsys):
        exit_code = main(["--config", str(tmp_path / "missing.json"), "me"])

        assert exit_code == 1
        assert "API error from 'io'" in capsys.readouterr().err
