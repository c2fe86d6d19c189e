"""Tests for the evoting CLI."""

from unittest.mock import AsyncMock, patch

import pytest

from click.testing import CliRunner

from evoting.application.dtos.election_dto import FinishElapsedOutputDto
from evoting.application.dtos.user_dto import UserOutputDto, UserOutputItem
from evoting.interfaces.cli.cli import cli
from evoting.interfaces.cli.commands.admin_commands import (
    CreateAdminCommand,
    FinishElapsedCommand,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _admin_created() -> UserOutputDto:
    return UserOutputDto(
        user=UserOutputItem(
            id=1,
            name="Root",
            email="root@example.com",
            role="ADMIN",
            is_email_verified=True,
            is_terminated=False,
            has_identity_document=False,
        )
    )


class TestCreateAdmin:
    def test_success(self, runner: CliRunner) -> None:
        run = AsyncMock(return_value=_admin_created())
        with patch.object(CreateAdminCommand, "_run", new=run):
            result = runner.invoke(
                cli,
                [
                    "create-admin",
                    "--name",
                    "Root",
                    "--email",
                    "root@example.com",
                    "--password",
                    "Long enough 1",
                ],
            )

        assert result.exit_code == 0
        assert "Admin root@example.com created (id=1)" in result.output
        input_dto = run.await_args.args[0]
        assert input_dto.password == "Long enough 1"

    def test_password_is_prompted(self, runner: CliRunner) -> None:
        run = AsyncMock(return_value=_admin_created())
        with patch.object(CreateAdminCommand, "_run", new=run):
            result = runner.invoke(
                cli,
                ["create-admin", "--name", "Root", "--email", "root@example.com"],
                input="Long enough 1\nLong enough 1\n",
            )

        assert result.exit_code == 0
        assert run.await_args.args[0].password == "Long enough 1"

    def test_use_case_failure_exits_with_error(self, runner: CliRunner) -> None:
        failed = UserOutputDto(
            success=False,
            error_code="DuplicateEmail",
            error_message="E-mail is already registered",
        )
        with patch.object(
            CreateAdminCommand, "_run", new=AsyncMock(return_value=failed)
        ):
            result = runner.invoke(
                cli,
                [
                    "create-admin",
                    "--name",
                    "Root",
                    "--email",
                    "root@example.com",
                    "--password",
                    "Long enough 1",
                ],
            )

        assert result.exit_code == 1
        assert "DuplicateEmail" in result.output


class TestFinishElapsed:
    def test_reports_count(self, runner: CliRunner) -> None:
        with patch.object(
            FinishElapsedCommand,
            "_run",
            new=AsyncMock(return_value=FinishElapsedOutputDto(finished=2)),
        ):
            result = runner.invoke(cli, ["finish-elapsed"])

        assert result.exit_code == 0
        assert "2 election(s) finished" in result.output

    def test_unexpected_error_exits_with_error(self, runner: CliRunner) -> None:
        with patch.object(
            FinishElapsedCommand,
            "_run",
            new=AsyncMock(side_effect=RuntimeError("database unreachable")),
        ):
            result = runner.invoke(cli, ["finish-elapsed"])

        assert result.exit_code == 1
        assert "database unreachable" in result.output


def test_version(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "evoting" in result.output
