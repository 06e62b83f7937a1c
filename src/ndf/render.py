"""Terminal layouts for reconciled volumes."""

import json
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .models import VolumeRecord
from .usage import DEFAULT_BAR_WIDTH, DEFAULT_HIGH_USAGE_RATIO, UsageBar, usage_bar

EMPTY_MESSAGE = "No volumes found."


def make_console() -> Console:
    if sys.stdout.isatty():
        return Console()
    # Redirected output: wide and without styling so all columns survive
    return Console(width=200, force_terminal=False, no_color=True, highlight=False, soft_wrap=False)


def humanize_size(num_bytes: int) -> str:
    """Format a byte count with binary units, e.g. 1.5G."""
    size = float(num_bytes)
    for unit in ("B", "K", "M", "G", "T"):
        if abs(size) < 1024.0:
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024.0
    return f"{size:.1f}P"


def _bar_style(record: VolumeRecord, bar: UsageBar) -> str:
    if record.anomalous:
        return "yellow"
    return "red" if bar.high_usage else "green"


def _bar_text(record: VolumeRecord, bar: UsageBar, brackets: bool = True) -> Text:
    text = Text()
    if brackets:
        text.append("[")
    text.append("#" * bar.filled, style=_bar_style(record, bar))
    text.append("-" * bar.remaining, style="dim")
    if brackets:
        text.append("]")
    if record.anomalous:
        text.append(" ?", style="yellow")
    return text


class Renderer:
    """Prints volume records in one of the supported layouts."""

    def __init__(
        self,
        console: Optional[Console] = None,
        bar_width: int = DEFAULT_BAR_WIDTH,
        high_usage_ratio: float = DEFAULT_HIGH_USAGE_RATIO,
    ):
        self.console = console or make_console()
        self.bar_width = bar_width
        self.high_usage_ratio = high_usage_ratio

    def bar(self, record: VolumeRecord) -> UsageBar:
        return usage_bar(record.usage_fraction, self.bar_width, self.high_usage_ratio)

    def render(self, records: List[VolumeRecord], mode: str = "normal") -> None:
        handlers = {
            "normal": self.render_normal,
            "compact": self.render_compact,
            "table": self.render_table,
            "json": self.render_json,
        }
        if mode not in handlers:
            raise ValueError(f"Unknown layout: {mode}")
        handlers[mode](records)

    def render_normal(self, records: List[VolumeRecord]) -> None:
        if not records:
            self.console.print(EMPTY_MESSAGE)
            return

        for i, record in enumerate(records):
            if i:
                self.console.print()
            bar = self.bar(record)
            header = Text(record.name, style="bold")
            header.append(f"  {record.mount_path}")
            if record.filesystem_type:
                header.append(f"  ({record.filesystem_type})", style="dim")
            self.console.print(header)
            self.console.print(_bar_text(record, bar))
            self.console.print(
                f"{humanize_size(record.used_bytes)} / {humanize_size(record.total_bytes)} "
                f"({record.usage_fraction:.1%} used, {humanize_size(record.available_bytes)} free)",
                markup=False,
            )

    def render_compact(self, records: List[VolumeRecord]) -> None:
        if not records:
            self.console.print(EMPTY_MESSAGE)
            return

        width = max(len(r.mount_path) for r in records)
        for record in records:
            line = Text(record.mount_path.ljust(width) + " ")
            line.append_text(_bar_text(record, self.bar(record)))
            line.append(f" {record.usage_fraction:6.1%}")
            self.console.print(line)

    def render_table(self, records: List[VolumeRecord]) -> None:
        if not records:
            self.console.print(EMPTY_MESSAGE)
            return

        table = Table(box=box.SIMPLE_HEAVY)
        table.add_column("Name", overflow="fold")
        table.add_column("Mount", overflow="fold")
        table.add_column("Type")
        table.add_column("Size", justify="right")
        table.add_column("Used", justify="right")
        table.add_column("Avail", justify="right")
        table.add_column("Use%", justify="right")
        table.add_column("Bar", no_wrap=True)

        for record in records:
            table.add_row(
                escape(record.name),
                escape(record.mount_path),
                escape(record.filesystem_type),
                humanize_size(record.total_bytes),
                humanize_size(record.used_bytes),
                humanize_size(record.available_bytes),
                f"{record.usage_fraction:.1%}",
                _bar_text(record, self.bar(record), brackets=False),
            )

        self.console.print(table)

    def render_json(self, records: List[VolumeRecord]) -> None:
        rows = []
        for record in records:
            row = record.to_dict()
            row["high_usage"] = self.bar(record).high_usage
            rows.append(row)
        self.console.print(json.dumps(rows, indent=2), markup=False, highlight=False, soft_wrap=True)


def render(
    records: List[VolumeRecord],
    mode: str = "normal",
    console: Optional[Console] = None,
    bar_width: int = DEFAULT_BAR_WIDTH,
    high_usage_ratio: float = DEFAULT_HIGH_USAGE_RATIO,
) -> None:
    Renderer(console, bar_width, high_usage_ratio).render(records, mode)
