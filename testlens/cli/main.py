"""Main CLI entry point for testlens."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from ..adapters.io.enhanced_logging import LoggerManager, setup_enhanced_logging
from ..adapters.io.file_discovery import FileDiscoveryError, FileDiscoveryService
from ..adapters.parsing.glimmer_extractor import strip_template_markup
from ..application.extract_usecase import ExtractUseCase, ExtractUseCaseError
from ..application.run_targets import (
    build_runner_url,
    target_for_module,
    target_for_test,
)
from ..config.loader import ConfigLoader, ConfigurationError
from ..config.models import TestLensConfig
from .display_helpers import display_file_table, display_scan_table, result_rows

logger = logging.getLogger(__name__)


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.config: TestLensConfig = TestLensConfig()
        self.console: Console = Console()
        self.verbose: bool = False
        self.quiet: bool = False

    def extractor(self) -> ExtractUseCase:
        return ExtractUseCase(self.config)


def _fail(ctx: click.Context, message: str, title: str = "Error") -> None:
    ctx.obj.console.print(f"[bold red]{title}:[/] {escape(message)}", soft_wrap=True)
    sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose (debug) output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING and hide INFO",
)
@click.version_option(package_name="testlens")
@click.pass_context
def app(ctx: click.Context, config: Path | None, verbose: bool, quiet: bool) -> None:
    """testlens - map the modules and tests declared in JavaScript/TypeScript test files."""
    ctx.ensure_object(ClickContext)
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet

    setup_enhanced_logging(Console(stderr=True))

    # init-config runs without a valid configuration
    if ctx.invoked_subcommand == "init-config":
        LoggerManager.set_log_mode(verbose=verbose, quiet=quiet)
        return

    try:
        ctx.obj.config = ConfigLoader(config).load_config()
    except ConfigurationError as e:
        LoggerManager.set_log_mode(verbose=verbose, quiet=quiet)
        _fail(ctx, str(e), "Configuration error")

    LoggerManager.set_log_mode(
        verbose=verbose or ctx.obj.config.logging.debug,
        quiet=quiet,
        suppress_modules=ctx.obj.config.logging.suppress_modules,
    )
    logger.debug("Debug logging enabled")


@app.command(name="list")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def list_command(ctx: click.Context, files: tuple[Path, ...], as_json: bool) -> None:
    """List the modules and tests declared in FILES."""
    extractor = ctx.obj.extractor()
    payload = []

    for file_path in files:
        try:
            text = file_path.read_text(encoding="utf-8")
            result = extractor.extract_file(file_path)
        except (OSError, UnicodeDecodeError, ExtractUseCaseError) as e:
            _fail(ctx, f"Could not read {file_path}: {e}")

        rows = result_rows(text, result)
        if as_json:
            payload.append(
                {
                    "file": str(file_path),
                    "variant": result.variant.value,
                    "parse_error": result.parse_error,
                    "entries": rows,
                    "module_tests": result.module_tests(),
                }
            )
            continue

        if result.parse_error:
            ctx.obj.console.print(
                f"[yellow]{escape(str(file_path))}: could not parse "
                f"({escape(result.parse_error)})[/]",
                soft_wrap=True,
            )
            continue
        display_file_table(ctx.obj.console, file_path, rows)

    if as_json:
        click.echo(json.dumps(payload, indent=2))


@app.command()
@click.argument(
    "project_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.pass_context
def scan(ctx: click.Context, project_path: Path, as_json: bool) -> None:
    """Discover test files under PROJECT_PATH and count their modules and tests."""
    try:
        files = FileDiscoveryService(ctx.obj.config.discovery).discover_test_files(
            project_path
        )
    except FileDiscoveryError as e:
        _fail(ctx, str(e), "Discovery error")

    extractor = ctx.obj.extractor()
    summaries = []
    for file_name in files:
        file_path = Path(file_name)
        try:
            result = extractor.extract_file(file_path)
        except ExtractUseCaseError as e:
            logger.warning(f"Skipping {file_path}: {e}")
            continue
        summaries.append(
            {
                "file": str(file_path.relative_to(project_path.resolve())),
                "variant": result.variant.value,
                "modules": len(result.modules),
                "tests": len(result.tests),
                "error": result.parse_error,
            }
        )

    if as_json:
        click.echo(json.dumps(summaries, indent=2))
        return

    if not summaries:
        ctx.obj.console.print("[yellow]No test files found[/]")
        return
    display_scan_table(ctx.obj.console, summaries)


@app.command()
@click.argument(
    "file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option("--module", "-m", "module_path", required=True, help="Full module path, e.g. 'A > B'")
@click.option("--test", "-t", "test_name", help="Test name inside the module")
@click.pass_context
def url(
    ctx: click.Context, file_path: Path, module_path: str, test_name: str | None
) -> None:
    """Print the test-runner URL for a module or a single test in FILE_PATH."""
    try:
        result = ctx.obj.extractor().extract_file(file_path)
    except ExtractUseCaseError as e:
        _fail(ctx, str(e))

    module_tests = result.module_tests()
    if module_path not in module_tests:
        _fail(ctx, f"Module '{module_path}' not found in {file_path}")

    if test_name is None:
        target = target_for_module(module_path, str(file_path))
    else:
        if test_name not in module_tests[module_path]:
            _fail(ctx, f"Test '{test_name}' not found in module '{module_path}'")
        target = target_for_test(module_path, test_name, str(file_path))

    click.echo(build_runner_url(target, ctx.obj.config.runner))


@app.command()
@click.argument(
    "file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def strip(ctx: click.Context, file_path: Path) -> None:
    """Print FILE_PATH with embedded <template> markup removed."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(ctx, f"Could not read {file_path}: {e}")
    click.echo(strip_template_markup(text))


@app.command(name="init-config")
@click.argument("path", type=click.Path(path_type=Path), default=".testlens.toml")
@click.pass_context
def init_config(ctx: click.Context, path: Path) -> None:
    """Write a sample configuration file to PATH."""
    try:
        created = ConfigLoader().create_sample_config(path)
    except ConfigurationError as e:
        _fail(ctx, str(e), "Configuration error")
    ctx.obj.console.print(f"[green]Created[/] {escape(str(created))}")


def main() -> None:
    """Console script entry point."""
    app(obj=ClickContext())


if __name__ == "__main__":
    main()
