"""Configuration package.

Provides the env file collector plus the dataclass record mapper.
"""
from .collector import FILENAMES, collect, parse  # noqa: F401
from .errors import CoercionError, EnvBindError, InvalidTargetError, UnsupportedTypeError  # noqa: F401
from .mapper import decode, encode, env_field  # noqa: F401
from .values import normalize  # noqa: F401
