"""Tooltip rows describing one tree node under the pointer."""

from __future__ import annotations

from datetime import datetime, timezone

from repotreemap.app.output.treemap_parts.colors import parse_timestamp
from repotreemap.app.output.treemap_parts.labels import aggregate_measure
from repotreemap.core.config import ColorMode, SizeMode
from repotreemap.core.output import format_bytes, format_measure, format_number
from repotreemap.engine.tree import TreeNode, aggregate_metric, count_files


def format_relative_time(value: str | datetime, *, now: datetime | None = None) -> str:
    stamp = parse_timestamp(value)
    if stamp is None:
        return str(value)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    seconds = int((now - stamp).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    for amount, unit in ((days // 365, "year"), (days // 30, "month"), (days, "day"),
                         (hours, "hour"), (minutes, "minute")):
        if amount > 0:
            return f"{amount} {unit}{'s' if amount > 1 else ''} ago"
    return "just now"


def tooltip_rows(
    node: TreeNode,
    *,
    size_mode: SizeMode | str = "loc",
    color_mode: ColorMode | str = "language",
    now: datetime | None = None,
) -> list[tuple[str, str]]:
    """(label, value) pairs; metrics tied to the active modes are always included."""
    lines = aggregate_metric(node, "lines")
    size = aggregate_metric(node, "bytes")
    comments = aggregate_metric(node, "comment_lines")
    blanks = aggregate_metric(node, "blank_lines")
    files = count_files(node)

    rows: list[tuple[str, str]] = [("Path", node.path or "/")]
    if node.is_file and node.language:
        rows.append(("Language", node.language))

    rows.append(("Size", format_measure(aggregate_measure(node, size_mode), size_mode)))
    if size_mode != "loc" and lines > 0:
        rows.append(("Lines", format_number(lines)))
    if size_mode != "bytes" and size > 0:
        rows.append(("Bytes", format_bytes(size)))

    if (color_mode == "complexity" or size_mode == "complexity") and (
        node.is_directory or node.complexity is not None
    ):
        rows.append(("Complexity", format_number(aggregate_metric(node, "complexity"))))

    total = lines + comments + blanks
    if color_mode == "density" and total > 0:
        rows.append(("Code density", f"{lines / total * 100:.1f}%"))
        rows.append(("Comment ratio", f"{comments / total * 100:.1f}%"))

    if node.is_directory:
        rows.append(("Files", format_number(files)))

    if node.last_modified:
        rows.append(("Modified", format_relative_time(node.last_modified, now=now)))
    return rows


__all__ = ["format_relative_time", "tooltip_rows"]
