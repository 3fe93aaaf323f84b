"""
Testnet generator CLI entry point.

Generates one manifest per option combination and writes them as YAML files.

Usage::

    python -m testnet_gen --dir networks/generated
    python -m testnet_gen --dir networks/generated --groups 4
    python -m testnet_gen --dir networks/generated --multi-version "local:2,latest:1"
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from testnet_gen import config
from testnet_gen.generator import (
    DEFAULT_BASE_VERSION,
    DEFAULT_SEED,
    GenerateConfig,
    generate,
    write_manifests,
)
from testnet_gen.types import GeneratorError

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging for the generator with optional colors."""
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL)

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


@click.command()
@click.option(
    "--dir",
    "-d",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for manifests, also searched for release tags",
)
@click.option(
    "--groups",
    "-g",
    default=0,
    show_default=True,
    type=click.IntRange(min=0),
    help="Number of groups to split the manifests into (0 disables grouping)",
)
@click.option(
    "--multi-version",
    "-m",
    default=None,
    help="Weighted node versions, e.g. 'v0.34.21:1,local:2,latest:1'",
)
@click.option(
    "--seed",
    default=DEFAULT_SEED,
    show_default=True,
    type=int,
    help="Seed of the random stream",
)
@click.option(
    "--base-version",
    default=DEFAULT_BASE_VERSION,
    show_default=True,
    help="Version of the software under test, used to resolve 'latest'",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--no-color", is_flag=True, help="Disable colored logging output")
def main(
    output_dir: Path,
    groups: int,
    multi_version: str | None,
    seed: int,
    base_version: str,
    verbose: bool,
    no_color: bool,
) -> None:
    """
    Generate randomized testnet manifests.

    One manifest is written per combination of topology, initial height,
    initial state and validator setup. The same seed always produces the same
    manifests.
    """
    setup_logging(verbose, no_color)

    cfg = GenerateConfig(
        seed=seed,
        output_dir=output_dir,
        multi_version=multi_version,
        base_version=base_version,
        groups=groups,
    )
    try:
        manifests = generate(cfg)
    except GeneratorError as e:
        logger.error("%s", e)
        sys.exit(1)

    write_manifests(manifests, cfg.output_dir, cfg.groups)


if __name__ == "__main__":
    main()
