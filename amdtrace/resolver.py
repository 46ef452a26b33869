"""
Module id resolution following RequireJS normalization rules.

A resolver turns a raw dependency request, plus the resolved id of the
module that made it, into the canonical id used as a graph key.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .config import RequireConfig, coerce_require_config
from .module_id import PLUGIN_SEPARATOR, parse_module_id


Resolver = Callable[..., str]


def create_require_resolver(
    config: Union[RequireConfig, Mapping[str, Any], None] = None,
) -> Resolver:
    """
    Build a resolver for the given loader configuration.
    
    The returned callable has the signature ``resolve(request, context=None)``.
    ``context`` is the resolved id of the requesting module; it is omitted
    for the entry module. Resolution applies, in order:
    
    1. Relative ids (``./``, ``../``) against the context's directory.
    2. ``map`` config: the most specific context entry, then ``*``.
    3. Package names to their main module.
    
    Plugin requests (``plugin!resource``) resolve both halves separately.
    
    Args:
        config: Loader configuration, as a model or a plain mapping.
    
    Returns:
        The resolver function.
    """
    config = coerce_require_config(config)
    map_config = config.map
    star_map = map_config.get("*", {})
    package_mains = {
        name: f"{name}/{main}" for name, main in config.package_mains().items()
    }
    
    def normalize(name: str, context: Optional[str]) -> str:
        if not name:
            return name
        
        name_parts = name.split("/")
        base_parts = context.split("/") if context else []
        
        if name_parts[0].startswith(".") and base_parts:
            name_parts = base_parts[:-1] + name_parts
        name_parts = _trim_dots(name_parts)
        
        mapped = _apply_map(name_parts, base_parts, map_config, star_map)
        normalized = "/".join(mapped)
        
        return package_mains.get(normalized, normalized)
    
    def resolve(request: str, context: Optional[str] = None) -> str:
        if context:
            context = parse_module_id(context).id
        
        plugin, sep, resource = request.partition(PLUGIN_SEPARATOR)
        if not sep:
            return normalize(request, context)
        
        plugin = normalize(plugin, context)
        if PLUGIN_SEPARATOR not in resource:
            resource = normalize(resource, context)
        return f"{plugin}{PLUGIN_SEPARATOR}{resource}"
    
    return resolve


def _trim_dots(parts: List[str]) -> List[str]:
    """
    Collapse ``.`` and ``..`` segments.
    
    A leading ``..`` that has nothing to consume is kept, as RequireJS does.
    """
    result: List[str] = []
    for part in parts:
        if part == ".":
            continue
        if part == ".." and result and result[-1] != "..":
            result.pop()
            continue
        result.append(part)
    return result


def _apply_map(
    name_parts: List[str],
    base_parts: List[str],
    map_config: Dict[str, Dict[str, str]],
    star_map: Dict[str, str],
) -> List[str]:
    """
    Replace the longest mapped prefix of a module id.
    
    Context-specific maps win over the ``*`` map regardless of prefix
    length. Within the context maps, the longest module prefix is tried
    first, then the most specific context.
    """
    if not map_config:
        return name_parts
    
    found_map: Optional[str] = None
    found_index = 0
    star_found: Optional[str] = None
    star_index = 0
    
    for i in range(len(name_parts), 0, -1):
        segment = "/".join(name_parts[:i])
        
        for j in range(len(base_parts), 0, -1):
            context_map = map_config.get("/".join(base_parts[:j]))
            if context_map and segment in context_map:
                found_map = context_map[segment]
                found_index = i
                break
        if found_map is not None:
            break
        
        if star_found is None and segment in star_map:
            star_found = star_map[segment]
            star_index = i
    
    if found_map is None and star_found is not None:
        found_map = star_found
        found_index = star_index
    
    if found_map is None:
        return name_parts
    return [found_map] + name_parts[found_index:]
