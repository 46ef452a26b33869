"""Tracing the dependency graph of AMD modules from a single entry module."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, NamedTuple, Optional, Union

from amdgraph.model import DependencyGraph
from .config import RequireConfig, coerce_require_config
from .deps_parser import parse_javascript_deps
from .errors import ModuleReadError
from .module_id import parse_module_id
from .paths import module_id_to_path
from .reader import ReadFile, read_text, start_read
from .resolver import create_require_resolver

logger = logging.getLogger(__name__)


class PendingRead(NamedTuple):
    """A discovered module whose source is being read."""
    
    read: "asyncio.Task[str]"
    path: Path
    id: str
    plugin: str


async def trace_amd_dependencies(
    entry_module_id: str,
    require_config: Union[RequireConfig, Mapping[str, Any], None],
    base_dir: Union[str, Path],
    read_file: ReadFile = read_text,
    encoding: str = "utf-8",
) -> DependencyGraph:
    """
    Build a dependency graph of AMD modules, starting from one entry module.
    
    Modules are processed one at a time in breadth-first order, but every
    module's file read starts as soon as the module is discovered, so its
    source is usually ready by the time it is processed.
    
    Loader plugin ids are separate nodes: ``text!a/b.html`` and ``a/b.html``
    are never merged. Mixins are not applied.
    
    Args:
        entry_module_id: Raw module id of the entry point.
        require_config: Loader configuration used for id resolution and paths.
        base_dir: Directory module paths are relative to.
        read_file: Async ``(path, encoding) -> text`` reader.
        encoding: Text encoding of module sources.
    
    Returns:
        The graph of every module reachable from the entry module.
    
    Raises:
        ValueError: If the entry module id is empty.
        ModuleReadError: If any reachable module cannot be read.
    """
    if not entry_module_id:
        raise ValueError("entry module id must not be empty")
    
    config = coerce_require_config(require_config)
    resolver = create_require_resolver(config)
    base_dir = Path(base_dir)
    paths = config.paths
    packages = config.package_locations()
    
    # Insertion-ordered set: dict keys keep order with O(1) membership and removal
    to_visit: Dict[str, None] = {}
    module_cache: Dict[str, PendingRead] = {}
    graph = DependencyGraph()
    
    def add_dep(dep: str) -> None:
        to_visit[dep] = None
        if dep in module_cache:
            return
        ref = parse_module_id(dep)
        path = base_dir / module_id_to_path(ref, paths, packages)
        # the loop below processes modules serially, but reads start
        # right away so the source is ready when its turn comes
        module_cache[dep] = PendingRead(start_read(path, read_file, encoding), path, ref.id, ref.plugin)
    
    logger.debug("Begin tracing AMD dependencies")
    try:
        add_dep(resolver(entry_module_id))
        
        while to_visit:
            resolved_id = next(iter(to_visit))
            del to_visit[resolved_id]
            logger.debug(f'Tracing dependencies for "{resolved_id}"')
            
            pending = module_cache.pop(resolved_id)
            try:
                source = await pending.read
            except (OSError, UnicodeDecodeError) as e:
                raise ModuleReadError.from_error(resolved_id, pending.path, e) from e
            
            deps, incomplete = parse_javascript_deps(source)
            if deps:
                logger.debug(f"Found dependency request for: {', '.join(deps)}")
            if incomplete:
                logger.warning(
                    f'Could not statically read every dependency of "{resolved_id}"; '
                    "the graph may be missing modules it loads at runtime"
                )
            graph.add_node(resolved_id)
            
            for dep in deps:
                resolved_dep_id = resolver(dep, resolved_id)
                graph.add_edge(resolved_id, resolved_dep_id)
                if resolved_dep_id not in graph:
                    add_dep(resolved_dep_id)
    finally:
        # reads never reached when the trace stops early
        for other in module_cache.values():
            other.read.cancel()
    
    logger.info(f"Traced {len(graph)} AMD modules from \"{entry_module_id}\"")
    return graph


def trace(
    entry_module_id: str,
    require_config: Union[RequireConfig, Mapping[str, Any], None],
    base_dir: Union[str, Path],
    read_file: Optional[ReadFile] = None,
    encoding: str = "utf-8",
) -> DependencyGraph:
    """Synchronous wrapper around :func:`trace_amd_dependencies`."""
    return asyncio.run(
        trace_amd_dependencies(
            entry_module_id,
            require_config,
            base_dir,
            read_file=read_file or read_text,
            encoding=encoding,
        )
    )
