"""Command-line interface for canview."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from canview import __version__
from canview.core.frame import hex_to_bytes
from canview.decoder.frame_decoder import FrameDecoder, decode_message
from canview.errors import SchemaError
from canview.model.loader import load_model
from canview.model.tree import TreeModel
from canview.viewer.frame_store import FrameStore
from canview.viewer.replay import FrameReplayer
from canview.visualization.console import ConsoleVisualizer


console = Console()


def _load(dbc_file: str) -> TreeModel:
    try:
        return load_model(dbc_file)
    except SchemaError as e:
        console.print(f"[red]DBC Load error:[/red] {escape(str(e))}")
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """canview - decode CAN traffic with a DBC schema."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@main.command()
@click.argument("dbc_file", type=click.Path(exists=True, dir_okay=False))
def tree(dbc_file: str) -> None:
    """Show the ECUs, messages and signals of a DBC file."""
    model = _load(dbc_file)
    ConsoleVisualizer(console).print_model_tree(model, title=Path(dbc_file).name)


@main.command()
@click.argument("dbc_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("frame_id")
@click.argument("hex_data")
def decode(dbc_file: str, frame_id: str, hex_data: str) -> None:
    """Decode one payload against the message with FRAME_ID."""
    model = _load(dbc_file)

    try:
        message_id = int(frame_id, 0)
        payload = hex_to_bytes(hex_data)
    except ValueError as e:
        raise click.BadParameter(str(e))

    messages = model.find_messages(message_id)
    if not messages:
        console.print(f"[yellow]No message with ID {message_id:#x} in {escape(dbc_file)}[/yellow]")
        raise SystemExit(1)

    visualizer = ConsoleVisualizer(console)
    for message in messages:
        visualizer.print_decoded(decode_message(message, payload))


@main.command()
@click.argument("dbc_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("log_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--limit", "-l", type=int, default=None, help="Stop after this many frames")
def replay(dbc_file: str, log_file: str, limit: int) -> None:
    """Replay a JSONL frame log and show the latest decoded frames."""
    model = _load(dbc_file)
    decoder = FrameDecoder(model)
    store = FrameStore()

    count = FrameReplayer(Path(log_file)).run(store.update, limit=limit)
    console.print(f"Replayed {count} frames, {len(store.unique_ids)} unique IDs")

    visualizer = ConsoleVisualizer(console)
    visualizer.print_frame_table(store)

    for frame in store.snapshot():
        decoded = decoder.decode_frame(frame)
        if decoded is not None:
            visualizer.print_decoded(decoded)

    unknown = decoder.unknown_ids
    if unknown:
        console.print(
            "[dim]No message for IDs: "
            + ", ".join(f"{i:#x}" for i in sorted(unknown))
            + "[/dim]"
        )


if __name__ == "__main__":
    main()
