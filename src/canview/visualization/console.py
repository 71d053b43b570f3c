"""Console-based visualization using Rich."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from canview.decoder.frame_decoder import DecodedMessage
from canview.model.tree import Message, TreeModel
from canview.viewer.frame_store import ByteChange, FrameStore, ascii_preview

BYTE_COLUMNS = 8

_CHANGE_STYLES = {
    ByteChange.INCREASED: "blue",
    ByteChange.DECREASED: "red",
}


def message_label(message: Message) -> str:
    return f"Msg {message.name} (0x{message.frame_id:04X})"


class ConsoleVisualizer:
    """Renders schema models and decoded frames to the console using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def build_model_tree(self, model: TreeModel, title: str = "DBC") -> Tree:
        """Build a Rich tree of ECUs, their messages and signals."""
        root = Tree(f"[bold]{escape(title)}[/bold]")

        for ecu in model.ecus:
            ecu_node = root.add(f"[bold cyan]ECU {escape(ecu.name)}[/bold cyan]")
            for message in ecu.messages:
                label = escape(message_label(message))
                if message.comment:
                    label += f" [dim]{escape(message.comment)}[/dim]"
                msg_node = ecu_node.add(label)
                for signal in message.signals:
                    text = Text(signal.name)
                    if signal.comment:
                        text.append(f"  {signal.comment}", style="dim")
                    msg_node.add(text)

        return root

    def print_model_tree(self, model: TreeModel, title: str = "DBC") -> None:
        """Print the model as a tree."""
        self.console.print(self.build_model_tree(model, title))

    def build_decoded_table(self, decoded: DecodedMessage) -> Table:
        """Build a table of signal names and decoded values."""
        message = decoded.message
        table = Table(title=escape(f"Frame {message.name} (ID 0x{message.frame_id:04X})"))

        table.add_column("Signal name", style="cyan")
        table.add_column("Value")

        for reading in decoded.readings:
            if reading.ok:
                value = Text(reading.display)
            else:
                value = Text(reading.display, style="red")
            table.add_row(Text(reading.signal.name), value)

        return table

    def print_decoded(self, decoded: DecodedMessage) -> None:
        """Print the payload and decoded signals of one message."""
        self.console.print(f"[green]{' '.join(f'{b:02X}' for b in decoded.payload)}[/green]")
        self.console.print(self.build_decoded_table(decoded))

    def build_frame_table(self, store: FrameStore) -> Table:
        """Build a table of the latest frame per ID, colouring changed bytes."""
        table = Table(title="Frame viewer")

        table.add_column("CAN ID", style="cyan")
        for _ in range(BYTE_COLUMNS):
            table.add_column("", justify="right")
        table.add_column("ASCII")

        for frame in store.snapshot():
            changes = store.byte_changes(frame)
            cells = []
            for idx in range(BYTE_COLUMNS):
                if idx < len(frame.data):
                    style = _CHANGE_STYLES.get(changes[idx], "")
                    cells.append(Text(f"{frame.data[idx]:02X}", style=style))
                else:
                    cells.append(Text(""))
            table.add_row(
                f"0x{frame.schema_id:04X}",
                *cells,
                Text(ascii_preview(frame.data[:BYTE_COLUMNS])),
            )

        return table

    def print_frame_table(self, store: FrameStore) -> None:
        """Print the frame table and remember it as the new baseline."""
        self.console.print(self.build_frame_table(store))
        store.commit_snapshot()
