"""
File Collector
==============

Loads ``KEY=VALUE`` files into the process environment.

Collection is best-effort: missing or unreadable files, empty files and
malformed lines are skipped and never reported to the caller.
"""

import logging
import os
from typing import Dict, Iterable, MutableMapping, Optional

from .values import normalize

logger = logging.getLogger(__name__)

# Read in order; later files override earlier ones for the same key
FILENAMES = [".env", ".env.local"]

EXPORT_KEYWORD = "export"


def _strip_export(line: str) -> str:
    if line == EXPORT_KEYWORD:
        return ""
    if line.startswith(EXPORT_KEYWORD) and line[len(EXPORT_KEYWORD):][:1].isspace():
        return line[len(EXPORT_KEYWORD):].strip()
    return line


def parse(content: str) -> Dict[str, str]:
    """
    Parse the text of an env file.

    Args:
        content: File content

    Returns:
        Mapping of keys to normalized values, later lines winning
    """
    values: Dict[str, str] = {}

    for lineno, line in enumerate(content.split("\n"), start=1):
        line = _strip_export(line.strip())

        if not line or line.startswith("#"):
            continue

        key, sep, raw_value = line.partition("=")
        if not sep:
            logger.debug(f"Skipping line {lineno}: no '=' separator")
            continue

        key = key.strip()
        if not key:
            logger.debug(f"Skipping line {lineno}: empty key")
            continue

        value = normalize(raw_value)
        if "\x00" in key or "\x00" in value:
            logger.debug(f"Skipping line {lineno}: NUL character")
            continue

        values[key] = value

    return values


def read_file(filename: str) -> Optional[str]:
    """
    Read an env file, returning None when it is absent, unreadable or empty.

    Args:
        filename: Path of the file

    Returns:
        Decoded file content, or None if the file should be skipped
    """
    try:
        with open(filename, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.debug(f"Skipping {filename}: {e}")
        return None

    if len(data) <= 1:
        logger.debug(f"Skipping {filename}: empty")
        return None

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.debug(f"Skipping {filename}: not valid UTF-8 ({e})")
        return None


def collect(
    filenames: Optional[Iterable[str]] = None,
    environ: Optional[MutableMapping[str, str]] = None,
) -> None:
    """
    Load env files into the environment store.

    Args:
        filenames: Files to read in order (defaults to ``FILENAMES``)
        environ: Store to write to (defaults to ``os.environ``)
    """
    if filenames is None:
        filenames = list(FILENAMES)
    if environ is None:
        environ = os.environ

    for filename in filenames:
        content = read_file(filename)
        if content is None:
            continue

        loaded = 0
        for key, value in parse(content).items():
            try:
                environ[key] = value
            except ValueError as e:
                # Host store rejected the key
                logger.debug(f"Skipping {key} from {filename}: {e}")
                continue
            loaded += 1

        logger.debug(f"Loaded {loaded} variables from {filename}")
