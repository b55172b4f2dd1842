import unittest
from unittest.mock import AsyncMock, patch

import aiohttp
from click.testing import CliRunner

from repo_cloner.domain.exceptions import GitHubAPIError
from repo_cloner.domain.models import RunSummary
from repo_cloner.main import cli

LOAD_DOTENV = "repo_cloner.main.load_dotenv"
RUN = "repo_cloner.main.run"


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()

    def test_missing_token_exits_before_any_request(self) -> None:
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock) as mock_run, \
                patch("repo_cloner.main.GitHubRESTClient") as mock_client:
            result = self.runner.invoke(cli, ["--user", "octocat", "--clone"], env={"GITHUB_TOKEN": None})

        self.assertEqual(result.exit_code, 1)
        self.assertIn("'GITHUB_TOKEN' environment variable missing", result.output)
        mock_run.assert_not_called()
        mock_client.assert_not_called()

    def test_missing_user_is_a_usage_error(self) -> None:
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock) as mock_run:
            result = self.runner.invoke(cli, [], env={"GITHUB_TOKEN": "secret"})

        self.assertEqual(result.exit_code, 2)
        mock_run.assert_not_called()

    def test_dry_run_by_default(self) -> None:
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock, return_value=RunSummary()) as mock_run:
            result = self.runner.invoke(cli, ["--user", "octocat"], env={"GITHUB_TOKEN": "secret"})

        self.assertEqual(result.exit_code, 0, result.output)
        settings, user, clone = mock_run.call_args.args
        self.assertEqual(settings.token, "secret")
        self.assertEqual(user, "octocat")
        self.assertFalse(clone)
        self.assertEqual(mock_run.call_args.kwargs, {"protocol": "ssh", "dest": "."})

    def test_clone_over_https_into_dest(self) -> None:
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock, return_value=RunSummary()) as mock_run:
            result = self.runner.invoke(
                cli,
                ["-u", "octocat", "-c", "--https", "--dest", "repos"],
                env={"GITHUB_TOKEN": "secret"},
            )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(mock_run.call_args.args[2])
        self.assertEqual(mock_run.call_args.kwargs, {"protocol": "https", "dest": "repos"})

    def test_fatal_error_exits_non_zero(self) -> None:
        error = GitHubAPIError(status=404, body='{"message": "Not Found"}')
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock, side_effect=error):
            result = self.runner.invoke(cli, ["--user", "nobody"], env={"GITHUB_TOKEN": "secret"})

        self.assertEqual(result.exit_code, 1)

    def test_token_from_dotenv_in_working_directory(self) -> None:
        with self.runner.isolated_filesystem():
            with open(".env", "w") as env_file:
                env_file.write("GITHUB_TOKEN=from-dotenv\n")

            with patch(RUN, new_callable=AsyncMock, return_value=RunSummary()) as mock_run:
                result = self.runner.invoke(cli, ["--user", "octocat"], env={"GITHUB_TOKEN": None})

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(mock_run.call_args.args[0].token, "from-dotenv")

    def test_connection_drop_exits_non_zero(self) -> None:
        # Not an OSError subclass, unlike ClientOSError
        error = aiohttp.ServerDisconnectedError()
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock, side_effect=error):
            result = self.runner.invoke(cli, ["--user", "octocat"], env={"GITHUB_TOKEN": "secret"})

        self.assertEqual(result.exit_code, 1)

    def test_filesystem_error_exits_non_zero(self) -> None:
        error = PermissionError("go: permission denied")
        with patch(LOAD_DOTENV), patch(RUN, new_callable=AsyncMock, side_effect=error):
            result = self.runner.invoke(cli, ["--user", "octocat", "--clone"], env={"GITHUB_TOKEN": "secret"})

        self.assertEqual(result.exit_code, 1)
