"""Main CLI entry point for kbdiag."""

import json
from pathlib import Path

import click

from kbdiag import __version__
from kbdiag.cli.display import (
    console,
    show_error,
    show_report_table,
    show_signature_table,
    show_verdict,
)
from kbdiag.core.config.settings import Settings, get_settings
from kbdiag.core.exceptions.errors import ConfigurationError, LogNotFoundError
from kbdiag.core.logger.logger import setup_logging
from kbdiag.diagnostic.engine import DiagnosticEngine, analyze_build_errors
from kbdiag.diagnostic.report import ConsoleSink, MemorySink, ReportSink
from kbdiag.diagnostic.signatures import DEFAULT_SIGNATURES


def _settings(ctx: click.Context) -> Settings:
    """Return the settings attached to the command context."""
    if ctx.obj and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return get_settings()


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file",
)
@click.pass_context
def main(ctx: click.Context, version: bool, config_path: str | None) -> None:
    """kbdiag - diagnose failed Android kernel builds."""
    if version:
        click.echo(f"kbdiag version {__version__}")
        ctx.exit(0)

    ctx.ensure_object(dict)
    if config_path:
        try:
            settings = Settings.load(Path(config_path))
        except ConfigurationError as e:
            show_error("Configuration Error", str(e))
            ctx.exit(2)
        setup_logging(settings.logging)
        ctx.obj["settings"] = settings

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.option(
    "--log",
    "-l",
    "log_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="Build log to analyze",
)
@click.option("--marker", "-m", type=click.Path(dir_okay=False), help="Failure marker path")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option("--output", "-o", "output_path", type=click.Path(dir_okay=False), help="Export report to file")
@click.option("--detailed", "-d", is_flag=True, help="Show an incident table after the report")
@click.option("--fail-on-error", is_flag=True, help="Exit with status 1 when errors are found")
@click.pass_context
def analyze(
    ctx: click.Context,
    log_path: str,
    marker: str | None,
    output_format: str,
    output_path: str | None,
    detailed: bool,
    fail_on_error: bool,
) -> None:
    """Analyze a kernel build log.

    Splits the log into error incidents, classifies each one and prints
    suggestions. A zero-byte marker file is written when errors are found.

    Examples:
        kbdiag analyze --log kernel/out/build.log
        kbdiag analyze -l build.log -f json -o report.json
        kbdiag analyze -l build.log --marker have_error --fail-on-error
    """
    settings = _settings(ctx)
    to_console = output_format == "text" and not output_path

    sink: ReportSink = ConsoleSink(console) if to_console else MemorySink()
    engine = DiagnosticEngine(sink=sink, marker_path=marker, settings=settings.diagnostic)

    try:
        content = engine.read_log(log_path)
    except LogNotFoundError as e:
        show_error("Log Not Found", e.message)
        return

    report = engine.diagnose(content, source=log_path)
    total = engine.publish(report)
    marker_written = str(engine.marker_path) if total and engine.marker_path.is_file() else None

    if output_format == "json":
        payload = report.to_dict()
        payload["marker"] = marker_written
        rendered = json.dumps(payload, indent=2)
    else:
        rendered = sink.text() if isinstance(sink, MemorySink) else ""

    if output_path:
        Path(output_path).write_text(rendered + "\n", encoding="utf-8")
        console.print(f"\n[green]Report exported to: {output_path}[/]")
        console.print(f"  Total errors: {total}")
    elif output_format == "json":
        click.echo(rendered)

    if output_format == "text":
        if detailed:
            show_report_table(report)
        show_verdict(total, marker_written)

    if fail_on_error and total:
        ctx.exit(1)


@main.command()
@click.option(
    "--kernel-dir",
    "-k",
    default="kernel",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Kernel source directory the build ran in",
)
@click.option(
    "--build-failed/--no-build-failed",
    default=False,
    envvar="STATE_BUILD_FAILED",
    help="Whether the build step failed (read from STATE_BUILD_FAILED)",
)
@click.option("--marker", "-m", type=click.Path(dir_okay=False), help="Failure marker path")
@click.pass_context
def post(ctx: click.Context, kernel_dir: str, build_failed: bool, marker: str | None) -> None:
    """Post-build hook: analyze the build log if the build failed."""
    if not build_failed:
        console.print("[dim]Build did not fail, skipping error analysis.[/]")
        return

    settings = _settings(ctx)
    console.rule("[bold]Analyzing build errors[/]")
    total = analyze_build_errors(
        kernel_dir,
        sink=ConsoleSink(console),
        marker_path=marker,
        settings=settings.diagnostic,
    )
    marker_path = marker or str(settings.diagnostic.marker_path)
    show_verdict(total, marker_path if total else None)


@main.command()
@click.option("--verbose", "-V", is_flag=True, help="Show suggestions as well")
def signatures(verbose: bool) -> None:
    """List known failure signatures in match priority order."""
    show_signature_table(DEFAULT_SIGNATURES, verbose=verbose)


if __name__ == "__main__":
    main()
