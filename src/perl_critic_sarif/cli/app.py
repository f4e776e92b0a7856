import logging
import os
import sys
import tempfile
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from perl_critic_sarif.core.convert import convert_report
from perl_critic_sarif.core.io import read_report, write_sarif
from perl_critic_sarif.errors import ConversionError, IoError
from perl_critic_sarif.sarif import SarifLog

err_console = Console(stderr=True)

app = typer.Typer(
    name="perl-critic-sarif",
    help="Convert Perl::Critic JSON violations to SARIF.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _package_version() -> str:
    try:
        return version("perl-critic-sarif")
    except PackageNotFoundError:
        return "unknown"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"perl-critic-sarif {_package_version()}")
        raise typer.Exit()


def _write_output(sarif: SarifLog, output: Path, indent: int | None) -> None:
    # Written beside the target and renamed over it, so a failed write
    # leaves any existing output file untouched.
    try:
        with tempfile.NamedTemporaryFile(dir=output.parent, prefix=f".{output.name}.", delete=False) as stream:
            tmp_path = Path(stream.name)
    except OSError as exc:
        raise IoError(f"Could not create output {output}: {exc}") from exc
    try:
        with tmp_path.open("wb") as stream:
            write_sarif(sarif, stream, indent)
        tmp_path.chmod(_output_mode(output))
        os.replace(tmp_path, output)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise IoError(f"Could not create output {output}: {exc}") from exc
    except ConversionError:
        tmp_path.unlink(missing_ok=True)
        raise


def _output_mode(output: Path) -> int:
    try:
        return output.stat().st_mode & 0o777
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _run(input: Path | None, output: Path | None, pretty: bool) -> None:
    indent = 2 if pretty else None
    if input is None:
        report = read_report(sys.stdin.buffer)
    else:
        try:
            with input.open("rb") as stream:
                report = read_report(stream)
        except OSError as exc:
            raise IoError(f"Could not open input {input}: {exc}") from exc

    sarif = convert_report(report)

    if output is None:
        write_sarif(sarif, sys.stdout.buffer, indent)
    else:
        _write_output(sarif, output, indent)


@app.command()
def convert(
    input: Annotated[
        Path | None, typer.Option("--input", "-i", help="Input file; reads from stdin if not provided.")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file; writes to stdout if not provided.")
    ] = None,
    pretty: Annotated[bool, typer.Option(help="Indent the SARIF output.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress to stderr.")] = False,
    show_version: Annotated[
        bool | None,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    """Convert Perl::Critic JSON violations to SARIF.

    Perl::Critic does not ship with a JSON output format, but one is a simple
    map over the list of violations:

    \b
        say encode_json({
            perl_critic_version => $Perl::Critic::VERSION,
            violations => [ map { violation_to_json($_) } @violations ],
        });
        sub violation_to_json {
            my ($violation) = @_;
            return { map { $_ => $violation->$_ } qw(
                filename line_number column_number severity source
                policy description explanation diagnostics
            ) };
        }

    Run it inside the git work tree the report was produced from; the SARIF
    run records the origin remote, branch and commit.
    """
    _configure_logging(verbose)
    try:
        _run(input, output, pretty)
    except ConversionError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(1) from exc


def main() -> None:
    app()
