"""CliApp — Typer アプリケーション定義。

run: 子プロセスをシグナルトラップ配下で起動・監視する。
config: 解決済み設定の表示。
--version: バージョン表示。
"""

from __future__ import annotations

import asyncio
import importlib.metadata
import sys
import tomllib
from typing import Annotated

import typer
from pydantic import ValidationError

from sigtrap.cli._logging import configure_logging
from sigtrap.cli._reporter import create_status_reporter
from sigtrap.cli._supervisor import CommandError, start_child, supervise
from sigtrap.config import resolve_config
from sigtrap.models.config import LogLevel, SigtrapConfig
from sigtrap.models.exit_code import ExitCode
from sigtrap.trap import TrapInstallError

app = typer.Typer(
    name="sigtrap",
    help=(
        "Run a command under a SIGINT/SIGTERM trap.\n\n"
        "The first signal stops the command and exits 0; "
        "repeated signals force an immediate exit."
    ),
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version("sigtrap"))
        raise typer.Exit()


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


@app.callback()
def _root_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Run a command under a SIGINT/SIGTERM trap."""


def _load_config(cli_overrides: dict[str, object]) -> SigtrapConfig:
    """設定を解決する。失敗時はエラーを表示して INPUT_ERROR で終了する。"""
    try:
        return resolve_config(cli_overrides=cli_overrides)
    except (ValidationError, tomllib.TOMLDecodeError) as e:
        print(
            f"Error: Invalid configuration: {e}\n"
            "Check .sigtrap/config.toml or [tool.sigtrap] in pyproject.toml.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except PermissionError as e:
        print(
            f"Error: Cannot read configuration file: {e}\n"
            "Check file permissions for .sigtrap/config.toml.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def run(
    command: Annotated[
        list[str],
        typer.Argument(help="Command to run, given after '--'.", show_default=False),
    ],
    force_threshold: Annotated[
        int | None,
        typer.Option(
            "--force-threshold",
            help="Signals counted before the next one forces an exit.",
            min=1,
        ),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option("--log-level", help="Log level.", case_sensitive=False),
    ] = None,
) -> None:
    """Run COMMAND and stop it cleanly on SIGINT/SIGTERM."""
    config = _load_config(
        {"force_threshold": force_threshold, "log_level": log_level}
    )
    configure_logging(config.log_level)
    reporter = create_status_reporter()

    try:
        child = start_child(command)
    except CommandError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=e.exit_code) from None

    reporter.on_child_started(child.pid, command)
    try:
        exit_code = asyncio.run(supervise(child, config))
    except TrapInstallError as e:
        child.kill()
        child.wait()
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    reporter.on_child_exited(exit_code)
    raise typer.Exit(code=exit_code)


@app.command()
def config(
    force_threshold: Annotated[
        int | None,
        typer.Option("--force-threshold", help="Override force_threshold.", min=1),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option("--log-level", help="Override log_level.", case_sensitive=False),
    ] = None,
) -> None:
    """Show the resolved configuration as JSON."""
    resolved = _load_config(
        {"force_threshold": force_threshold, "log_level": log_level}
    )
    print(resolved.model_dump_json(indent=2))
