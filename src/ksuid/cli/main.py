import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ksuid.errors import KsuidError
from ksuid.ksuid import Ksuid
from ksuid.prefixed import PrefixedKsuid

app = typer.Typer(help="KSUID generator and inspector")
console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger("cli")


class OutputFormat(str, Enum):
    STRING = "string"
    RAW = "raw"
    TIME = "time"
    TIMESTAMP = "timestamp"
    PAYLOAD = "payload"
    INSPECT = "inspect"


def parse_ksuid(value: str, prefix: Optional[str] = None) -> Ksuid | PrefixedKsuid:
    if prefix:
        return PrefixedKsuid.from_base62(value, prefix=prefix, strict=True)
    return Ksuid.from_base62(value)


def render(ksuid: Ksuid | PrefixedKsuid, fmt: OutputFormat) -> None:
    if fmt is OutputFormat.INSPECT:
        console.print(inspect_table(ksuid))
    elif fmt is OutputFormat.RAW:
        console.print(ksuid.raw_hex())
    elif fmt is OutputFormat.TIME:
        console.print(ksuid.to_time().isoformat())
    elif fmt is OutputFormat.TIMESTAMP:
        console.print(str(ksuid.to_int()))
    elif fmt is OutputFormat.PAYLOAD:
        console.print(ksuid.payload_hex())
    else:
        console.print(ksuid.to_text())


def inspect_table(ksuid: Ksuid | PrefixedKsuid) -> Table:
    """Tabulate the representations and components of a KSUID."""
    table = Table(title="KSUID")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("String", ksuid.to_text())
    table.add_row("Raw", ksuid.raw_hex())
    if isinstance(ksuid, PrefixedKsuid):
        table.add_row("Prefix", ksuid.prefix)
    table.add_row("Time", ksuid.to_time().isoformat())
    table.add_row("Timestamp", str(ksuid.to_int()))
    table.add_row("Payload", ksuid.payload_hex())
    return table


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


@app.command()
def new(
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of KSUIDs to generate"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Prefix to prepend"),
    fmt: OutputFormat = typer.Option(OutputFormat.STRING, "--format", "-f", help="Output format"),
    at: Optional[datetime] = typer.Option(None, "--time", "-t", help="Generate for this time instead of now"),
):
    """Generate new KSUIDs."""
    if at is not None and at.tzinfo is None:
        at = at.replace(tzinfo=timezone.utc)

    try:
        for _ in range(count):
            if prefix:
                ksuid = PrefixedKsuid.generate(prefix, time=at)
            else:
                ksuid = Ksuid.generate(time=at)
            render(ksuid, fmt)
    except KsuidError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    logger.debug("Generated %d KSUIDs", count)


@app.command()
def inspect(
    values: list[str] = typer.Argument(..., help="KSUIDs to inspect"),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Prefix carried by the KSUIDs"),
    fmt: OutputFormat = typer.Option(OutputFormat.INSPECT, "--format", "-f", help="Output format"),
):
    """Show the components of existing KSUIDs."""
    for value in values:
        try:
            ksuid = parse_ksuid(value, prefix)
        except KsuidError as e:
            err_console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(code=1)
        render(ksuid, fmt)


@app.command(name="max")
def max_command(
    fmt: OutputFormat = typer.Option(OutputFormat.STRING, "--format", "-f", help="Output format"),
):
    """Print the largest possible KSUID."""
    render(Ksuid.max(), fmt)


def main():
    app()


if __name__ == "__main__":
    main()
