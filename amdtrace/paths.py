"""Mapping module references to file paths relative to the base directory."""

from typing import Dict, List, Mapping, Optional, Union

from .module_id import ModuleRef


# Plugins whose resource is a plain file name rather than a module id
VERBATIM_PLUGINS = {"text"}


def module_id_to_path(
    ref: ModuleRef,
    paths: Optional[Mapping[str, Union[str, List[str]]]] = None,
    packages: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Get the file path of a module, relative to the base directory.
    
    - ``text!app/view.html`` reads ``app/view.html`` as-is.
    - ``domReady!`` has no resource, so the plugin module itself is read.
    - Everything else is a JavaScript module: ``app/main`` -> ``app/main.js``.
    
    Args:
        ref: The module reference to map.
        paths: RequireJS ``paths`` config, applied by longest prefix.
        packages: Package name to location, applied like ``paths``.
    
    Returns:
        Relative path using forward slashes.
    """
    if ref.plugin in VERBATIM_PLUGINS and ref.id:
        return _apply_paths(ref.id, paths, packages)
    
    module = ref.id if ref.id else ref.plugin
    mapped = _apply_paths(module, paths, packages)
    if not mapped.endswith(".js"):
        mapped += ".js"
    return mapped


def _apply_paths(
    module: str,
    paths: Optional[Mapping[str, Union[str, List[str]]]],
    packages: Optional[Mapping[str, str]],
) -> str:
    """Substitute the longest configured prefix, on segment boundaries."""
    prefixes: Dict[str, str] = {}
    if packages:
        prefixes.update(packages)
    if paths:
        for prefix, target in paths.items():
            # Fallback lists are for browsers; the first entry is the local copy
            if isinstance(target, list):
                if not target:
                    continue
                target = target[0]
            prefixes[prefix] = target
    
    parts = module.split("/")
    for i in range(len(parts), 0, -1):
        prefix = "/".join(parts[:i])
        if prefix in prefixes:
            mapped = "/".join([prefixes[prefix].rstrip("/")] + parts[i:])
            return mapped.lstrip("/")
    return module.lstrip("/")
