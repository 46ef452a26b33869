"""Loading and validating RequireJS-style loader configuration."""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError


class PackageConfig(BaseModel):
    """A RequireJS package entry."""
    
    model_config = ConfigDict(extra="ignore")
    
    name: str
    location: Optional[str] = None
    main: str = "main"


class RequireConfig(BaseModel):
    """
    The subset of a RequireJS configuration that affects module identity
    and file locations.
    
    Field names accept both the RequireJS spelling (``baseUrl``) and the
    Python one (``base_url``). Keys the tracer does not use are ignored.
    """
    
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    
    base_url: str = Field(default="", alias="baseUrl")
    paths: Dict[str, Union[str, List[str]]] = Field(default_factory=dict)
    map: Dict[str, Dict[str, str]] = Field(default_factory=dict)
    packages: List[PackageConfig] = Field(default_factory=list)
    shim: Dict[str, Any] = Field(default_factory=dict)
    config: Dict[str, Any] = Field(default_factory=dict)
    
    @field_validator("packages", mode="before")
    @classmethod
    def _expand_package_names(cls, value: Any) -> Any:
        # RequireJS allows a bare string as shorthand for {"name": ...}
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value
    
    def package_mains(self) -> Dict[str, str]:
        """Map each package name to its main module id, relative to the package."""
        mains = {}
        for package in self.packages:
            main = package.main
            if main.startswith("./"):
                main = main[2:]
            if main.endswith(".js"):
                main = main[:-3]
            mains[package.name] = main
        return mains
    
    def package_locations(self) -> Dict[str, str]:
        """Map package names to their locations, for packages that declare one."""
        return {p.name: p.location for p in self.packages if p.location}


def coerce_require_config(
    config: Union[RequireConfig, Mapping[str, Any], None],
) -> RequireConfig:
    """
    Accept a RequireConfig, a plain mapping, or None.
    
    Raises:
        ConfigError: If a mapping does not validate.
    """
    if config is None:
        return RequireConfig()
    if isinstance(config, RequireConfig):
        return config
    try:
        return RequireConfig.model_validate(dict(config))
    except ValidationError as e:
        raise ConfigError(f"Invalid loader configuration: {e}") from e


def load_require_config(file_path: Path) -> RequireConfig:
    """
    Read a loader configuration file.
    
    ``.yaml``/``.yml`` files are read as YAML, anything else as JSON.
    
    Args:
        file_path: Path to the configuration file.
    
    Returns:
        The validated configuration.
    
    Raises:
        ConfigError: If the file cannot be read, parsed, or validated.
    """
    suffix = file_path.suffix.lower()
    
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read loader configuration '{file_path}': {e}") from e
    
    try:
        if suffix in {".yaml", ".yml"}:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse loader configuration '{file_path}': {e}") from e
    
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Loader configuration '{file_path}' must be a mapping")
    
    return coerce_require_config(data)
