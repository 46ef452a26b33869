"""ASCII tree-style exporter for dependency graphs."""

from typing import List, Optional, Set, Tuple

from amdgraph.model import DependencyGraph


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "
UNICODE_VERTICAL = "│   "
UNICODE_SPACE = "    "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "
ASCII_VERTICAL = "|   "
ASCII_SPACE = "    "

CYCLE_MARKER = " [*]"
REPEAT_MARKER = " [^]"


def to_ascii(
    graph: DependencyGraph,
    entry: Optional[str] = None,
    style: str = "tree",
) -> str:
    """
    Convert a dependency graph to ASCII tree representation.
    
    A module's dependencies are expanded only the first time it is printed.
    Later occurrences are marked ``[^]``, and a module that requests one of
    its own ancestors is marked ``[*]``.
    
    Args:
        graph: The dependency graph to export.
        entry: Module to start from. Defaults to the graph's roots.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
    
    Returns:
        ASCII tree string.
    """
    # Select character set based on style
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST, ASCII_VERTICAL, ASCII_SPACE)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST, UNICODE_VERTICAL, UNICODE_SPACE)
    
    if entry is not None:
        root_nodes = [entry]
    else:
        root_nodes = graph.get_roots()
        # Everything sits on a cycle; start from the first traced module
        if not root_nodes and len(graph):
            root_nodes = graph.nodes[:1]
    
    lines: List[str] = []
    expanded: Set[str] = set()
    
    for i, root_node in enumerate(root_nodes):
        _render_node(
            graph=graph,
            node=root_node,
            prefix="",
            is_last=True,
            chars=chars,
            ancestors=set(),
            expanded=expanded,
            lines=lines,
            is_root=True,
        )
        
        # Add blank line between root trees (except after last)
        if i < len(root_nodes) - 1:
            lines.append("")
    
    return "\n".join(lines)


def _render_node(
    graph: DependencyGraph,
    node: str,
    prefix: str,
    is_last: bool,
    chars: Tuple[str, str, str, str],
    ancestors: Set[str],
    expanded: Set[str],
    lines: List[str],
    is_root: bool = False,
) -> None:
    """
    Recursively render a module and its dependencies.
    
    Args:
        graph: The dependency graph.
        node: Current module to render.
        prefix: Current line prefix for indentation.
        is_last: Whether this is the last child of its parent.
        chars: Character set (branch, last, vertical, space).
        ancestors: Modules on the path from the root to this one.
        expanded: Modules whose dependencies were already printed.
        lines: Output lines list (modified in place).
        is_root: Whether this is a root-level node.
    """
    branch, last, vertical, space = chars
    
    if node in ancestors:
        marker = CYCLE_MARKER
    elif node in expanded and graph.get_dependencies(node):
        marker = REPEAT_MARKER
    else:
        marker = ""
    
    if is_root:
        lines.append(f"{node}{marker}")
    else:
        connector = last if is_last else branch
        lines.append(f"{prefix}{connector}{node}{marker}")
    
    if marker:
        return
    
    expanded.add(node)
    ancestors.add(node)
    
    children = graph.get_dependencies(node)
    if is_root:
        new_prefix = ""
    else:
        new_prefix = prefix + (space if is_last else vertical)
    
    for index, child in enumerate(children):
        _render_node(
            graph=graph,
            node=child,
            prefix=new_prefix,
            is_last=(index == len(children) - 1),
            chars=chars,
            ancestors=ancestors,
            expanded=expanded,
            lines=lines,
        )
    
    ancestors.discard(node)
