"""JSON exporter for dependency graphs (machine-friendly format)."""

import json
from typing import Any, Dict, List, Optional

from amdgraph.model import DependencyGraph


def to_json(
    graph: DependencyGraph,
    entry: Optional[str] = None,
    indent: int = 2,
) -> str:
    """
    Convert a dependency graph to JSON format.
    
    Args:
        graph: The dependency graph to export.
        entry: Resolved id of the entry module, if known.
        indent: JSON indentation level.
    
    Returns:
        JSON string with ``entry``, ``modules``, ``graph`` (the adjacency
        mapping, declaration order kept) and ``edges``.
    """
    edges: List[Dict[str, Any]] = []
    for source, target in graph.iter_edges():
        edges.append({"source": source, "target": target})
    
    data: Dict[str, Any] = {
        "entry": entry,
        "modules": graph.nodes,
        "graph": graph.to_dict(),
        "edges": edges,
    }
    
    return json.dumps(data, indent=indent)
