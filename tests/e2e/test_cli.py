"""End-to-end CLI coverage for the public commands exposed by lib-env-tags.

These tests exercise the documented CLI workflows (tokenize, resolve, show,
metadata lookups) through ``click.testing.CliRunner`` with an explicit
environment so results never depend on the host shell.
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

import lib_cli_exit_tools

from lib_env_tags import cli

MODULE_NAME = "lib_env_tags_cli_settings"


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


@pytest.fixture()
def settings_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable module holding a tagged settings dataclass."""

    source = textwrap.dedent(
        """
        from dataclasses import dataclass, field

        from lib_env_tags import env_field


        @dataclass
        class Settings:
            host: str = field(default="", metadata={"tag": 'env:"CLI_HOST" fallback:"localhost"'})
            port: int = env_field("CLI_PORT", fallback=8080, default=0)
            debug: bool = env_field("CLI_DEBUG", fallback="false", default=False)


        NOT_A_DATACLASS = object()
        """
    )
    (tmp_path / f"{MODULE_NAME}.py").write_text(source, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return MODULE_NAME


def test_cli_tokenize_keeps_quotes() -> None:
    result = _runner().invoke(cli.cli, ["tokenize", 'env:"X" fallback:"5"'])
    assert result.exit_code == 0
    assert json.loads(result.output) == {"env": '"X"', "fallback": '"5"'}


@pytest.mark.parametrize(
    ("args", "env", "expected"),
    [
        (["PORT", "--type", "int", "--fallback", "5"], {"PORT": "42"}, 42),
        (["PORT", "--type", "int", "--fallback", "5"], {"PORT": "abc"}, 5),
        (["PORT", "--type", "int", "--fallback", "five"], {}, -1),
        (["FLAG", "--type", "bool", "--fallback", "maybe"], {}, False),
        (["FLAG", "--type", "BOOL", "--fallback", "true"], {"FLAG": "0"}, False),
        (["NAME", "--fallback", "anon"], {}, "anon"),
        (["NAME"], {"NAME": "alice"}, "alice"),
    ],
)
def test_cli_resolve(args: list[str], env: dict[str, str], expected: object) -> None:
    """`cli resolve` applies the same parsing and fallback rules as a tagged field."""

    environment: dict[str, str | None] = {"PORT": None, "FLAG": None, "NAME": None}
    environment.update(env)
    result = _runner().invoke(cli.cli, ["resolve", *args], env=environment)
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == expected


def test_cli_show_populates_dataclass(settings_module: str) -> None:
    env = {"CLI_HOST": "db.internal", "CLI_PORT": "6543", "CLI_DEBUG": None}
    result = _runner().invoke(cli.cli, ["show", f"{settings_module}:Settings", "--indent", "2"], env=env)
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"host": "db.internal", "port": 6543, "debug": False}


@pytest.mark.parametrize("target", ["no-colon", ":Settings", "module:"])
def test_cli_show_rejects_malformed_target(target: str) -> None:
    result = _runner().invoke(cli.cli, ["show", target], standalone_mode=False)
    assert isinstance(result.exception, click.BadParameter)
    assert "module:ClassName" in result.exception.message


def test_cli_show_rejects_non_dataclass(settings_module: str) -> None:
    result = _runner().invoke(cli.cli, ["show", f"{settings_module}:NOT_A_DATACLASS"], standalone_mode=False)
    assert isinstance(result.exception, click.BadParameter)
    assert "is not a dataclass" in result.exception.message


def test_cli_info_handles_missing_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    monkeypatch.setenv("LIB_ENV_TAGS_CLI_PROBE", "7")
    exit_code = cli.main(
        ["--traceback", "resolve", "LIB_ENV_TAGS_CLI_PROBE", "--type", "int"],
        restore_traceback=True,
    )
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
