"""Tests for graph data model."""

import pytest

from amdgraph.model import DependencyGraph


class TestDependencyGraph:
    """Tests for DependencyGraph class."""
    
    def test_empty_graph(self):
        """Test empty graph initialization."""
        graph = DependencyGraph()
        assert len(graph) == 0
        assert graph.nodes == []
        assert graph.edges == {}
    
    def test_add_node(self):
        """Test adding nodes."""
        graph = DependencyGraph()
        
        graph.add_node("app/main")
        graph.add_node("app/main")
        
        assert len(graph) == 1
        assert "app/main" in graph
        assert graph.get_dependencies("app/main") == []
    
    def test_add_edge_does_not_add_target(self):
        """Test that an edge target only becomes a node once traced."""
        graph = DependencyGraph()
        
        graph.add_edge("app/main", "app/util")
        
        assert "app/main" in graph
        assert "app/util" not in graph
        assert graph.get_dangling() == {"app/util"}
    
    def test_edges_keep_order_and_duplicates(self):
        """Test that dependencies keep declaration order and repeats."""
        graph = DependencyGraph()
        
        graph.add_edge("app/main", "b")
        graph.add_edge("app/main", "a")
        graph.add_edge("app/main", "b")
        
        assert graph.get_dependencies("app/main") == ["b", "a", "b"]
        assert list(graph.iter_edges()) == [
            ("app/main", "b"),
            ("app/main", "a"),
            ("app/main", "b"),
        ]
    
    def test_get_roots(self):
        """Test getting root nodes (nodes that are never requested)."""
        graph = DependencyGraph()
        for module_id in ["app/main", "app/a", "app/b", "app/shared"]:
            graph.add_node(module_id)
        graph.add_edge("app/main", "app/a")
        graph.add_edge("app/main", "app/b")
        graph.add_edge("app/a", "app/shared")
        graph.add_edge("app/b", "app/shared")
        
        assert graph.get_roots() == ["app/main"]
        assert graph.get_dangling() == set()
    
    def test_get_dependents(self):
        """Test getting modules that request a target."""
        graph = DependencyGraph()
        graph.add_edge("app/a", "app/shared")
        graph.add_edge("app/b", "app/shared")
        graph.add_edge("app/b", "app/shared")
        
        assert graph.get_dependents("app/shared") == ["app/a", "app/b"]
    
    def test_returned_collections_are_copies(self):
        """Test that callers cannot mutate the graph through accessors."""
        graph = DependencyGraph()
        graph.add_edge("app/main", "app/util")
        
        graph.get_dependencies("app/main").append("other")
        graph.edges["app/main"].append("other")
        graph.to_dict()["app/main"].append("other")
        
        assert graph.get_dependencies("app/main") == ["app/util"]
    
    def test_equality(self):
        """Test comparing graphs."""
        first = DependencyGraph()
        second = DependencyGraph()
        first.add_edge("a", "b")
        second.add_edge("a", "b")
        
        assert first == second
        second.add_edge("a", "c")
        assert first != second
    
    def test_iteration_order(self):
        """Test that iteration follows insertion order."""
        graph = DependencyGraph()
        for module_id in ["c", "a", "b"]:
            graph.add_node(module_id)
        
        assert list(graph) == ["c", "a", "b"]
    
    def test_repr(self):
        """Test string representation."""
        graph = DependencyGraph()
        graph.add_edge("a", "b")
        graph.add_edge("a", "b")
        
        assert repr(graph) == "DependencyGraph(nodes=1, edges=2)"
