"""
envbind - Env File Loading and Record Mapping
=============================================

Loads ``KEY=VALUE`` files into the process environment and maps environment
variables onto dataclass records.

Modules:
- config: Value normalizer, file collector and record mapper
- utils: Logging setup
- auto: Import-time loading of the default env files
- cli: Command line interface
"""

__version__ = "1.0.0"

from .config import collector
from .config.collector import FILENAMES, collect, parse
from .config.errors import CoercionError, EnvBindError, InvalidTargetError, UnsupportedTypeError
from .config.mapper import decode, encode, env_field
from .config.values import normalize


def init() -> None:
    """Load the files listed in ``FILENAMES`` into ``os.environ``."""
    collector.collect()


__all__ = [
    "FILENAMES",
    "collect",
    "parse",
    "normalize",
    "decode",
    "encode",
    "env_field",
    "init",
    "EnvBindError",
    "InvalidTargetError",
    "UnsupportedTypeError",
    "CoercionError",
]
