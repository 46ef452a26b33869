"""Tests for exporters."""

import json
import pytest

from amdgraph.model import DependencyGraph
from exporters.mermaid_exporter import to_mermaid
from exporters.ascii_exporter import to_ascii
from exporters.json_exporter import to_json


def make_graph(edges):
    """Build a graph where every module in the mapping is traced."""
    graph = DependencyGraph()
    for source, targets in edges.items():
        graph.add_node(source)
        for target in targets:
            graph.add_edge(source, target)
    return graph


class TestMermaidExporter:
    """Tests for Mermaid exporter."""
    
    def test_empty_graph(self):
        """Test exporting empty graph."""
        output = to_mermaid(DependencyGraph())
        
        assert output.startswith("flowchart LR")
    
    def test_simple_graph(self):
        """Test exporting simple graph."""
        graph = make_graph({"app/main": ["app/util"], "app/util": []})
        
        output = to_mermaid(graph)
        
        assert 'app_main["app/main"]' in output
        assert 'app_util["app/util"]' in output
        assert "app_main --> app_util" in output
    
    def test_orientation(self):
        """Test different orientations."""
        graph = make_graph({"app/main": []})
        
        for orientation in ["LR", "TD", "TB", "RL", "BT"]:
            output = to_mermaid(graph, orientation=orientation)
            assert output.startswith(f"flowchart {orientation}")
    
    def test_duplicate_edges_drawn_once(self):
        """Test that repeated requests produce one arrow."""
        graph = make_graph({"a": ["b", "b"], "b": []})
        
        output = to_mermaid(graph)
        
        assert output.count("a --> b") == 1
    
    def test_plugin_nodes_distinct_and_dashed(self):
        """Test that plugin ids get their own styled node."""
        graph = make_graph({
            "app/main": ["text!app/view.html", "app/view.html"],
            "text!app/view.html": [],
            "app/view.html": [],
        })
        
        output = to_mermaid(graph)
        
        assert 'text_app_view_html["text!app/view.html"]' in output
        assert 'app_view_html["app/view.html"]' in output
        assert "style text_app_view_html stroke-dasharray: 5 5" in output
    
    def test_colliding_ids_made_unique(self):
        """Test that ids sanitizing to the same string stay distinct."""
        graph = make_graph({"a/b": ["a.b"], "a.b": []})
        
        output = to_mermaid(graph)
        
        assert "a_b --> a_b_2" in output
    
    @pytest.mark.parametrize("module_id", ["end", "subgraph", "style"])
    def test_reserved_word_ids(self, module_id):
        """Test that modules named like Mermaid keywords get a safe ID."""
        graph = make_graph({"app/main": [module_id], module_id: []})
        
        output = to_mermaid(graph)
        
        assert f'n_{module_id}["{module_id}"]' in output
        assert f"app_main --> n_{module_id}" in output
    
    def test_grouped_output(self):
        """Test grouped output by id prefix."""
        graph = make_graph({
            "Magento_Ui/js/core/app": ["Magento_Ui/js/lib/view", "jquery"],
            "Magento_Ui/js/lib/view": [],
            "jquery": [],
        })
        
        output = to_mermaid(graph, group_by_prefix=True)
        
        assert "subgraph group_Magento_Ui[Magento_Ui]" in output
        assert "subgraph group_root[root]" in output


class TestASCIIExporter:
    """Tests for ASCII exporter."""
    
    def test_empty_graph(self):
        """Test exporting empty graph."""
        assert to_ascii(DependencyGraph()) == ""
    
    def test_simple_tree(self):
        """Test simple tree structure."""
        graph = make_graph({"app/main": ["app/a", "app/b"], "app/a": [], "app/b": []})
        
        output = to_ascii(graph, entry="app/main")
        
        assert output.splitlines() == [
            "app/main",
            "├── app/a",
            "└── app/b",
        ]
    
    def test_nested_prefixes(self):
        """Test indentation of deeper levels."""
        graph = make_graph({"main": ["a", "b"], "a": ["c"], "b": [], "c": []})
        
        output = to_ascii(graph, style="ascii")
        
        assert output.splitlines() == [
            "main",
            "|-- a",
            "|   \\-- c",
            "\\-- b",
        ]
    
    def test_ascii_style(self):
        """Test pure ASCII tree style."""
        graph = make_graph({"app/main": ["app/util"], "app/util": []})
        
        output = to_ascii(graph, style="ascii")
        
        assert "├" not in output
        assert "└" not in output
        assert "│" not in output
    
    def test_cycle_detection(self):
        """Test that cycles are marked with [*]."""
        graph = make_graph({"a": ["b"], "b": ["a"]})
        
        output = to_ascii(graph, entry="a")
        
        assert output.splitlines() == ["a", "└── b", "    └── a [*]"]
    
    def test_cycle_without_entry(self):
        """Test that a graph with no roots still renders."""
        graph = make_graph({"a": ["b"], "b": ["a"]})
        
        assert to_ascii(graph).startswith("a")
    
    def test_shared_nodes_expanded_once(self):
        """Test that a repeated subtree is marked instead of reprinted."""
        graph = make_graph({
            "main": ["a", "b"],
            "a": ["shared"],
            "b": ["shared"],
            "shared": ["leaf"],
            "leaf": [],
        })
        
        output = to_ascii(graph, entry="main")
        
        assert output.count("leaf") == 1
        assert "shared [^]" in output


class TestJSONExporter:
    """Tests for JSON exporter."""
    
    def test_empty_graph(self):
        """Test exporting empty graph."""
        data = json.loads(to_json(DependencyGraph()))
        
        assert data["modules"] == []
        assert data["graph"] == {}
        assert data["edges"] == []
    
    def test_simple_graph(self):
        """Test exporting simple graph."""
        graph = make_graph({"app/main": ["app/util"], "app/util": []})
        
        data = json.loads(to_json(graph, entry="app/main"))
        
        assert data["entry"] == "app/main"
        assert data["modules"] == ["app/main", "app/util"]
        assert data["graph"] == {"app/main": ["app/util"], "app/util": []}
        assert {"source": "app/main", "target": "app/util"} in data["edges"]
    
    def test_edge_order_and_duplicates(self):
        """Test that edges are exported as declared."""
        graph = make_graph({"a": ["c", "b", "c"], "b": [], "c": []})
        
        data = json.loads(to_json(graph))
        
        assert data["graph"]["a"] == ["c", "b", "c"]
        assert len(data["edges"]) == 3
    
    def test_indent(self):
        """Test compact output."""
        graph = make_graph({"a": []})
        
        assert "\n" not in to_json(graph, indent=None)
