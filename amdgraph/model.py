"""Graph data model for storing AMD module dependency relationships."""

from typing import Dict, Iterator, List, Set, Tuple


class DependencyGraph:
    """
    A directed graph of resolved AMD module identifiers.
    
    Keys are modules whose own dependencies have been traced. Each key maps
    to the resolved ids it requested, in declaration order. Repeated requests
    are kept, so edges form a multiset while nodes stay unique.
    """
    
    def __init__(self):
        self._edges: Dict[str, List[str]] = {}
    
    @property
    def nodes(self) -> List[str]:
        """Return all traced modules in the order they were added."""
        return list(self._edges)
    
    @property
    def edges(self) -> Dict[str, List[str]]:
        """Return adjacency list representation of edges."""
        return {k: list(v) for k, v in self._edges.items()}
    
    def add_node(self, module_id: str) -> None:
        """Add a module with an empty dependency list if it is not present."""
        self._edges.setdefault(module_id, [])
    
    def add_edge(self, source: str, target: str) -> None:
        """
        Record that source requested target.
        
        The source is added as a node when missing. The target is not:
        it becomes a node only once its own dependencies are traced.
        """
        self._edges.setdefault(source, []).append(target)
    
    def get_dependencies(self, module_id: str) -> List[str]:
        """Get the dependencies requested by a module, in declaration order."""
        return list(self._edges.get(module_id, []))
    
    def get_dependents(self, module_id: str) -> List[str]:
        """Get all modules that request the given module."""
        return [source for source, targets in self._edges.items() if module_id in targets]
    
    def get_roots(self) -> List[str]:
        """
        Get modules that are never requested by another module.
        
        For a traced graph this is normally just the entry module, unless
        something depends back on it.
        """
        all_targets: Set[str] = set()
        for targets in self._edges.values():
            all_targets.update(targets)
        return [node for node in self._edges if node not in all_targets]
    
    def get_dangling(self) -> Set[str]:
        """Get edge targets that never became nodes. Empty for a finished trace."""
        dangling: Set[str] = set()
        for targets in self._edges.values():
            dangling.update(t for t in targets if t not in self._edges)
        return dangling
    
    def iter_edges(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all edges as (source, target) tuples, duplicates included."""
        for source, targets in self._edges.items():
            for target in targets:
                yield source, target
    
    def to_dict(self) -> Dict[str, List[str]]:
        """Return the graph as a plain ``{module: [dependencies]}`` mapping."""
        return self.edges
    
    def __len__(self) -> int:
        """Return the number of traced modules."""
        return len(self._edges)
    
    def __contains__(self, module_id: object) -> bool:
        """Check if a module has been traced."""
        return module_id in self._edges
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._edges)
    
    def __eq__(self, other: object) -> bool:
        if isinstance(other, DependencyGraph):
            return self._edges == other._edges
        return NotImplemented
    
    def __repr__(self) -> str:
        edge_count = sum(len(t) for t in self._edges.values())
        return f"DependencyGraph(nodes={len(self._edges)}, edges={edge_count})"
