"""Input file tree: the TreeNode model, payload loading, and read-only queries."""

from __future__ import annotations

import json
import math
from collections import Counter
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

NodeKind = Literal["file", "directory"]

_METRIC_FIELDS = ("lines", "bytes", "complexity", "comment_lines", "blank_lines")

_PAYLOAD_ALIASES = {
    "commentLines": "comment_lines",
    "blankLines": "blank_lines",
    "lastModified": "last_modified",
}


class TreePayloadError(ValueError):
    """Raised when a file-tree payload does not have the expected shape."""


@dataclass(frozen=True)
class TreeNode:
    """One file or directory of the analyzed repository.

    Directories carry no size of their own; their area is always derived from
    their descendants. Metric fields are ``None`` when the collector did not
    report them.
    """

    name: str
    path: str
    kind: NodeKind = "file"
    lines: float | None = None
    bytes: float | None = None
    complexity: float | None = None
    comment_lines: float | None = None
    blank_lines: float | None = None
    language: str | None = None
    last_modified: str | datetime | None = None
    children: tuple[TreeNode, ...] = ()

    @property
    def is_file(self) -> bool:
        return self.kind == "file"

    @property
    def is_directory(self) -> bool:
        return self.kind == "directory"


def file_node(name: str, path: str | None = None, **metrics: Any) -> TreeNode:
    """Shorthand for building a file TreeNode (path defaults to the name)."""
    return TreeNode(name=name, path=name if path is None else path, kind="file", **metrics)


def dir_node(
    name: str,
    children: Sequence[TreeNode] = (),
    path: str | None = None,
) -> TreeNode:
    """Shorthand for building a directory TreeNode."""
    return TreeNode(
        name=name,
        path=name if path is None else path,
        kind="directory",
        children=tuple(children),
    )


# ---------------------------------------------------------------------------
# Payload loading
# ---------------------------------------------------------------------------


def _join_path(parent_path: str, name: str) -> str:
    if not parent_path:
        return name
    return f"{parent_path}/{name}"


def _coerce_metric(value: object, *, field_name: str, path: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TreePayloadError(f"{path or '<root>'}: {field_name} must be a number, got {value!r}")
    return value


def _node_from_payload(payload: object, *, parent_path: str | None) -> TreeNode:
    if not isinstance(payload, Mapping):
        raise TreePayloadError(f"tree node must be an object, got {type(payload).__name__}")
    data = {_PAYLOAD_ALIASES.get(key, key): value for key, value in payload.items()}

    name = data.get("name")
    if not isinstance(name, str):
        raise TreePayloadError(f"tree node is missing a string 'name': {dict(payload)!r:.80}")

    raw_path = data.get("path")
    if isinstance(raw_path, str):
        path = raw_path.replace("\\", "/").strip("/")
    elif parent_path is None:
        path = ""
    else:
        path = _join_path(parent_path, name)

    kind = data.get("kind", data.get("type"))
    if kind is None:
        kind = "directory" if "children" in data else "file"
    if kind not in ("file", "directory"):
        raise TreePayloadError(f"{path or '<root>'}: unknown node kind {kind!r}")

    metrics = {
        field_name: _coerce_metric(data.get(field_name), field_name=field_name, path=path)
        for field_name in _METRIC_FIELDS
    }

    language = data.get("language")
    last_modified = data.get("last_modified")

    children: tuple[TreeNode, ...] = ()
    if kind == "directory":
        raw_children = data.get("children") or []
        if not isinstance(raw_children, list):
            raise TreePayloadError(f"{path or '<root>'}: children must be a list")
        children = tuple(_node_from_payload(child, parent_path=path) for child in raw_children)

    return TreeNode(
        name=name,
        path=path,
        kind=kind,
        language=str(language) if language else None,
        last_modified=str(last_modified) if last_modified else None,
        children=children,
        **metrics,
    )


def tree_from_dict(payload: object) -> TreeNode:
    """Convert a JSON-shaped tree payload into TreeNode objects.

    Accepts ``type`` or ``kind`` for the node kind and the camelCase metric
    names of the webview payload. The root path is always ``""`` unless the
    payload states one explicitly.
    """
    return _node_from_payload(payload, parent_path=None)


def load_tree(path: str | Path) -> TreeNode:
    """Read a JSON tree file. Raises OSError or TreePayloadError."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TreePayloadError(f"{path} is not valid JSON: {exc}") from exc
    # Analysis results wrap the tree in a "fileTree" key.
    if isinstance(payload, dict) and "fileTree" in payload:
        payload = payload["fileTree"]
    return tree_from_dict(payload)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def iter_nodes(node: TreeNode) -> Iterator[TreeNode]:
    """Yield ``node`` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def iter_files(node: TreeNode) -> Iterator[TreeNode]:
    return (n for n in iter_nodes(node) if n.is_file)


def find_node(root: TreeNode, path: str) -> TreeNode | None:
    """Locate a node by its forward-slash path ("" is the root)."""
    target = path.strip("/")
    for node in iter_nodes(root):
        if node.path == target:
            return node
    return None


def navigate(root: TreeNode, segments: Sequence[str]) -> TreeNode:
    """Follow directory names from ``root``; stop at the deepest segment that exists.

    Used for drill-down views where the caller keeps the current position as a
    list of names. Unknown names and files end the walk at the last directory
    reached.
    """
    current = root
    for segment in segments:
        nxt = next(
            (c for c in current.children if c.name == segment and c.is_directory),
            None,
        )
        if nxt is None:
            break
        current = nxt
    return current


def max_depth(node: TreeNode) -> int:
    """Depth of the deepest chain, counting ``node`` itself as 1."""
    if not node.children:
        return 1
    return 1 + max(max_depth(child) for child in node.children)


def count_files(node: TreeNode) -> int:
    if node.is_file:
        return 1
    return sum(count_files(child) for child in node.children)


def _metric(value: float | None) -> float:
    if value is None or not math.isfinite(value) or value < 0:
        return 0
    return value


def aggregate_metric(node: TreeNode, field_name: str) -> float:
    """Sum one raw metric over every file of a subtree."""
    if node.is_file:
        return _metric(getattr(node, field_name))
    return sum(aggregate_metric(child, field_name) for child in node.children)


def language_counts(node: TreeNode) -> dict[str, float]:
    """Total lines per language, largest first."""
    counts: Counter[str] = Counter()
    for f in iter_files(node):
        if f.language:
            counts[f.language] += _metric(f.lines)
    return dict(counts.most_common())


__all__ = [
    "NodeKind",
    "TreeNode",
    "TreePayloadError",
    "aggregate_metric",
    "count_files",
    "dir_node",
    "file_node",
    "find_node",
    "iter_files",
    "iter_nodes",
    "language_counts",
    "load_tree",
    "max_depth",
    "navigate",
    "tree_from_dict",
]
