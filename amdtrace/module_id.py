"""Splitting resolved module identifiers into module id and loader plugin."""

from typing import NamedTuple


PLUGIN_SEPARATOR = "!"


class ModuleRef(NamedTuple):
    """A resolved identifier split into its bare id and loader plugin name."""
    
    id: str
    plugin: str = ""


def parse_module_id(resolved_id: str) -> ModuleRef:
    """
    Split a resolved module identifier on its first ``!``.
    
    ``"text!app/template.html"`` becomes ``ModuleRef("app/template.html", "text")``
    and ``"app/main"`` becomes ``ModuleRef("app/main", "")``.
    """
    plugin, sep, resource = resolved_id.partition(PLUGIN_SEPARATOR)
    if not sep:
        return ModuleRef(id=resolved_id, plugin="")
    return ModuleRef(id=resource, plugin=plugin)


def format_module_id(ref: ModuleRef) -> str:
    """Join a ModuleRef back into a resolved identifier."""
    if ref.plugin:
        return f"{ref.plugin}{PLUGIN_SEPARATOR}{ref.id}"
    return ref.id
