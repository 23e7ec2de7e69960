from typing import List, Optional

from .registry import SingletonRegistry


def _node_id(name: str) -> str:
    return f"n_{abs(hash(name))}"


def _escape(text: str) -> str:
    return str(text).replace("\\", "\\\\").replace('"', '\\"')


def _node_label(entry, include_origin: bool) -> str:
    type_name = getattr(entry.declared_type, "__name__", "?")
    parts = [_escape(entry.name), f"({_escape(type_name)})"]
    if include_origin:
        parts.append(f"[{entry.origin}]")
    return "\\n".join(parts)


def export_graph(
    registry: SingletonRegistry,
    path: str,
    *,
    include_origin: bool = True,
    rankdir: str = "LR",
    title: Optional[str] = None,
) -> None:
    lines: List[str] = []
    lines.append("digraph Wirebox {")
    lines.append(f'  rankdir="{rankdir}";')
    lines.append("  node [shape=box, fontsize=10];")
    if title:
        lines.append('  labelloc="t";')
        lines.append(f'  label="{_escape(title)}";')

    for entry in registry:
        lines.append(f'  {_node_id(entry.name)} [label="{_node_label(entry, include_origin)}"];')

    for entry in registry:
        pid = _node_id(entry.name)
        for dep in entry.dependencies:
            lines.append(f"  {pid} -> {_node_id(dep)};")

    lines.append("}")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
