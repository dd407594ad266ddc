"""
Import-time loading of the default env files.

Usage::

    import envbind.auto  # noqa: F401

Importing this module loads ``envbind.FILENAMES`` into ``os.environ`` before
any other application code runs. Prefer calling ``envbind.init()`` explicitly.
"""

from . import init

init()
