"""Mermaid flowchart exporter for dependency graphs."""

import re
from typing import Dict, List, Set, Tuple

from amdgraph.model import DependencyGraph
from amdtrace.module_id import parse_module_id


# Words Mermaid parses as syntax when used as a bare node ID
MERMAID_KEYWORDS = {
    "end", "subgraph", "graph", "flowchart", "style", "class", "classdef",
    "click", "linkstyle", "direction", "default", "call", "href",
}


def to_mermaid(
    graph: DependencyGraph,
    orientation: str = "LR",
    group_by_prefix: bool = False,
) -> str:
    """
    Convert a dependency graph to Mermaid flowchart syntax.
    
    Args:
        graph: The dependency graph to export.
        orientation: Flowchart orientation (LR, TD, TB, RL, BT).
        group_by_prefix: If True, group modules by the first segment of
            their id (``Magento_Ui/js/core/app`` goes in ``Magento_Ui``).
    
    Returns:
        Mermaid flowchart string.
    """
    lines = [f"flowchart {orientation}"]
    
    node_ids = _assign_ids(graph)
    
    if group_by_prefix:
        lines.extend(_generate_grouped_nodes(graph, node_ids))
    else:
        for module_id in graph.nodes:
            lines.append(_node_line(module_id, node_ids, "    "))
    
    # Plugin modules are drawn dashed
    plugin_nodes = [m for m in graph.nodes if parse_module_id(m).plugin]
    if plugin_nodes:
        lines.append("")
        for module_id in plugin_nodes:
            lines.append(f"    style {node_ids[module_id]} stroke-dasharray: 5 5")
    
    lines.append("")
    drawn: Set[Tuple[str, str]] = set()
    for source, target in graph.iter_edges():
        if (source, target) in drawn:
            continue
        drawn.add((source, target))
        lines.append(f"    {node_ids[source]} --> {node_ids[target]}")
    
    return "\n".join(lines)


def _generate_grouped_nodes(graph: DependencyGraph, node_ids: Dict[str, str]) -> List[str]:
    """Generate node definitions inside one subgraph per id prefix."""
    lines = []
    
    groups: Dict[str, List[str]] = {}
    for module_id in graph.nodes:
        bare_id = parse_module_id(module_id).id or module_id
        top = bare_id.split("/")[0] if "/" in bare_id else "root"
        groups.setdefault(top, []).append(module_id)
    
    for group_name in sorted(groups):
        subgraph_id = _sanitize_id_simple(f"group_{group_name}")
        lines.append(f"    subgraph {subgraph_id}[{group_name}]")
        for module_id in groups[group_name]:
            lines.append(_node_line(module_id, node_ids, "        "))
        lines.append("    end")
    
    return lines


def _assign_ids(graph: DependencyGraph) -> Dict[str, str]:
    """Give every module (and every dangling edge target) a unique Mermaid ID."""
    node_ids: Dict[str, str] = {}
    used: Set[str] = set()
    
    modules = graph.nodes + sorted(graph.get_dangling())
    for module_id in modules:
        candidate = _sanitize_id_simple(module_id)
        unique = candidate
        suffix = 2
        while unique in used:
            unique = f"{candidate}_{suffix}"
            suffix += 1
        used.add(unique)
        node_ids[module_id] = unique
    
    return node_ids


def _node_line(module_id: str, node_ids: Dict[str, str], indent: str) -> str:
    label = module_id.replace('"', "#quot;")
    return f'{indent}{node_ids[module_id]}["{label}"]'


def _sanitize_id_simple(value: str) -> str:
    """Sanitize a string to be a valid Mermaid ID."""
    # Replace path separators, dots and plugin separators with underscores
    sanitized = re.sub(r"[/\\.\-!]", "_", value)
    # Remove any remaining invalid characters
    sanitized = re.sub(r"[^a-zA-Z0-9_]", "", sanitized)
    # Ensure it starts with a letter
    if sanitized and not sanitized[0].isalpha():
        sanitized = "n_" + sanitized
    if sanitized.lower() in MERMAID_KEYWORDS:
        sanitized = "n_" + sanitized
    return sanitized or "unknown"
