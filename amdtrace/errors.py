"""
Exception hierarchy for AMD dependency tracing.

Everything raised on purpose by this package inherits from AMDTraceError,
so callers such as the CLI can report it uniformly.
"""

import errno
from pathlib import Path
from typing import Optional, Union


class AMDTraceError(Exception):
    """Base exception for all tracing errors."""


class ConfigError(AMDTraceError):
    """The loader configuration could not be read or is invalid."""


class ModuleReadError(AMDTraceError, OSError):
    """
    A discovered module's source file could not be read.
    
    Aborts the whole trace. This is an ``OSError`` carrying the ``errno``,
    ``strerror`` and ``filename`` of the failed read, so handlers written
    for the read error still catch it. The read error itself is kept as
    ``__cause__``.
    """
    
    def __init__(
        self,
        module_id: str,
        path: Union[str, Path],
        code: str,
        errno_value: Optional[int] = None,
        strerror: Optional[str] = None,
    ):
        self.module_id = module_id
        self.path = str(path)
        self.code = code
        self.message = (
            "Failed reading an AMD module from disk.\n"
            f'  ID: "{module_id}"\n'
            f'  Path: "{self.path}"\n'
            f'  Code: "{code}"'
        )
        super().__init__(self.message)
        self.errno = errno_value
        self.strerror = strerror
        self.filename = self.path
    
    def __str__(self) -> str:
        return self.message
    
    @classmethod
    def from_error(cls, module_id: str, path: Union[str, Path], err: Exception) -> "ModuleReadError":
        """Build the error from the exception raised by the file read."""
        if isinstance(err, OSError):
            code = errno.errorcode.get(err.errno, str(err.errno)) if err.errno else type(err).__name__
            if err.filename:
                path = err.filename
            return cls(module_id, path, code, err.errno, err.strerror)
        return cls(module_id, path, type(err).__name__, strerror=str(err))
