"""Exporters for rendering a traced dependency graph in various output formats."""

from .mermaid_exporter import to_mermaid
from .ascii_exporter import to_ascii
from .json_exporter import to_json

__all__ = ["to_mermaid", "to_ascii", "to_json"]
