"""Command-line startup: load the service configuration and print it.

Useful to check what a deployment will actually run with, since the result
depends on files, the active profile and the environment.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from loguru import logger

from config.service import ConfigurationServiceFactory
from core.exceptions import ConfigLoaderError


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru sinks with a single stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve dictup service configuration")
    parser.add_argument(
        "--config-dir",
        default="",
        help="Directory containing config_base.yaml and profile files (defaults to .)"
    )
    parser.add_argument(
        "--output",
        choices=["json", "yaml"],
        default="yaml",
        help="Output format of the resolved configuration"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level used while loading"
    )
    return parser.parse_args(argv)


def run_application(argv: Optional[List[str]] = None) -> int:
    """Load configuration and print it to stdout.

    Startup sequence:
    1. Read ``.env`` from the working directory so DICTUP_* variables can be kept there
    2. Load configuration from files and environment
    3. Reconfigure logging from the loaded ``logger.level``
    4. Print the resolved configuration

    Returns:
        Process exit code, 1 when configuration cannot be loaded
    """
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging(args.log_level)

    try:
        config_service = ConfigurationServiceFactory.create_from_dir(args.config_dir)
    except ConfigLoaderError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    configure_logging(config_service.log_level)
    logger.info(f"Resolved configuration for profile '{config_service.profile or 'default'}'")

    data = config_service.to_dict()
    if args.output == "json":
        print(json.dumps(data, indent=2))
    else:
        print(yaml.safe_dump(data, sort_keys=False), end="")
    return 0
