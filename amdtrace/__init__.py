"""Tracing AMD module dependency graphs from an entry module."""

from .config import RequireConfig, load_require_config
from .deps_parser import parse_javascript_deps
from .errors import AMDTraceError, ConfigError, ModuleReadError
from .module_id import ModuleRef, parse_module_id
from .paths import module_id_to_path
from .resolver import create_require_resolver
from .tracer import trace, trace_amd_dependencies

__all__ = [
    "RequireConfig",
    "load_require_config",
    "parse_javascript_deps",
    "AMDTraceError",
    "ConfigError",
    "ModuleReadError",
    "ModuleRef",
    "parse_module_id",
    "module_id_to_path",
    "create_require_resolver",
    "trace",
    "trace_amd_dependencies",
]
