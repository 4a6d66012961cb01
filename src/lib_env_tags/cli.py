"""CLI adapter for ``lib_env_tags`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators check how tags are read and what a settings dataclass resolves
to in the current environment without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_tokenize` – prints :func:`lib_env_tags.tokenize_tag` output.
* :func:`cli_resolve` – resolves one variable with the populator's rules.
* :func:`cli_show` – populates a dataclass given as ``module:Class``.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It only calls the composition root
(:func:`lib_env_tags.core.populate`) and the tokenizer.
"""

from __future__ import annotations

import dataclasses
import json
import sys
from importlib import import_module, metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import env_field, populate, tokenize_tag

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

TYPE_CHOICES: Final[dict[str, type]] = {"str": str, "bool": bool, "int": int}


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_env_tags")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Populate dataclass fields from environment variables",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_env_tags",
    message="lib_env_tags version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_env_tags")
    except metadata.PackageNotFoundError:
        click.echo("lib_env_tags (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_env_tags')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("tokenize", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("tag")
def cli_tokenize(tag: str) -> None:
    """Print the keyword mapping parsed from *tag* as JSON (values unstripped).

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["tokenize", 'env:PORT fallback:80'])
    >>> result.output.strip()
    '{"env": "PORT", "fallback": "80"}'
    """

    click.echo(json.dumps(tokenize_tag(tag)))


@cli.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name")
@click.option(
    "--type",
    "type_name",
    type=click.Choice(tuple(TYPE_CHOICES), case_sensitive=False),
    default="str",
    show_default=True,
    help="Declared type used to parse the value and the fallback",
)
@click.option("--fallback", default=None, help="Literal used when NAME is unset or unparsable")
def cli_resolve(name: str, type_name: str, fallback: Optional[str]) -> None:
    """Resolve environment variable NAME and print the value as JSON.

    The value goes through the same path as a tagged dataclass field, so an
    unparsable integer fallback becomes ``-1`` and a boolean one ``false``.
    """

    declared = TYPE_CHOICES[type_name.lower()]
    probe_cls = dataclasses.make_dataclass(
        "Probe",
        [("value", declared, env_field(name, fallback, default=None))],
    )
    probe = probe_cls()
    populate(probe)
    click.echo(json.dumps(probe.value))


@cli.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("target")
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_show(target: str, indent: Optional[int]) -> None:
    """Instantiate the dataclass TARGET (``module:Class``), populate it and print it as JSON."""

    cls = _import_target(target)
    record = cls()
    populate(record)
    click.echo(json.dumps(dataclasses.asdict(record), indent=indent, default=str))


def _import_target(target: str) -> type:
    """Return the dataclass referenced by ``module:Class``."""

    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise click.BadParameter("Target must look like 'package.module:ClassName'.", param_hint="TARGET")
    obj: object = import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    if not (isinstance(obj, type) and dataclasses.is_dataclass(obj)):
        raise click.BadParameter(f"{target} is not a dataclass.", param_hint="TARGET")
    return obj


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_env_tags",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
