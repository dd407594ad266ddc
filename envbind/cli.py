"""
Command Line Interface
======================

``envbind parse``  - print the variables an env file set would load
``envbind report`` - write a YAML report of found/skipped files and keys
``envbind run``    - run a command with env files loaded into its environment
"""

import os
import subprocess
import sys
from typing import Dict, List, Optional, Sequence, Tuple

import click
import yaml

from .config import collector
from .config.mapper import format_line
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _load_files(filenames: Sequence[str]) -> Tuple[Dict[str, str], List[str], List[str]]:
    """Parse ``filenames`` in order, returning merged values plus found and skipped files."""
    values: Dict[str, str] = {}
    found: List[str] = []
    skipped: List[str] = []

    for filename in filenames:
        content = collector.read_file(filename)
        if content is None:
            skipped.append(filename)
            continue
        found.append(filename)
        values.update(collector.parse(content))

    return values, found, skipped


def _resolve(files: Sequence[str]) -> List[str]:
    return list(files) if files else list(collector.FILENAMES)


@click.group()
@click.option('--log-level', default='WARNING', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level')
@click.option('--log-file', type=click.Path(dir_okay=False), default=None,
              help='Also write logs to this file')
def main(log_level: str, log_file: Optional[str]):
    """Load env files and inspect what they define."""
    setup_logging(log_level=log_level, log_file=log_file)


@main.command()
@click.argument('files', nargs=-1)
def parse(files):
    """Print the variables FILES would load (defaults to .env, .env.local)."""
    values, _, _ = _load_files(_resolve(files))
    for key, value in values.items():
        click.echo(format_line(key, value), nl=False)


@main.command()
@click.argument('files', nargs=-1)
@click.option('--output', '-o', type=click.Path(dir_okay=False), default=None,
              help='Write the report to this file instead of stdout')
def report(files, output):
    """Write a YAML report of the files found and the keys they define."""
    values, found, skipped = _load_files(_resolve(files))

    data = {
        'files_found': found,
        'files_skipped': skipped,
        'variables': values,
    }

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        click.echo(f"Report saved to {output}")
    else:
        click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), nl=False)


@main.command(context_settings={'ignore_unknown_options': True,
                                'allow_interspersed_args': False})
@click.option('--file', '-f', 'files', multiple=True,
              help='Env file to load (repeatable, later files win)')
@click.argument('command', nargs=-1, required=True, type=click.UNPROCESSED)
def run(files, command):
    """Run COMMAND with the env files loaded into its environment."""
    env = dict(os.environ)
    collector.collect(_resolve(files), environ=env)

    logger.info(f"Running {command[0]}")
    try:
        result = subprocess.run(list(command), env=env)
    except OSError as e:
        raise click.ClickException(f"Failed to run {command[0]}: {e}")

    sys.exit(result.returncode)


if __name__ == '__main__':
    main()
