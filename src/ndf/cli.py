"""Command-line interface for ndf."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import MODES, ConfigManager, NdfConfig
from .errors import ConfigError, NdfError, SourceUnavailable
from .reconcile import reconcile
from .render import render
from .rules import MountFilters, split_paths

logger = logging.getLogger("ndf")


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr so they never mix with the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config(args: argparse.Namespace) -> NdfConfig:
    """Load configuration and apply command-line overrides."""
    config_mgr = ConfigManager(args.config)
    if args.config:
        # An explicitly requested file must exist
        config = config_mgr.load()
    else:
        config = config_mgr.load_or_default()

    if args.mode:
        config.mode = args.mode
    if args.bar_width is not None:
        if args.bar_width <= 0:
            raise ConfigError(f"--bar-width must be positive, got {args.bar_width}")
        config.bar_width = args.bar_width
    return config


def cmd_show(args: argparse.Namespace) -> int:
    """Reconcile mounted volumes and print them."""
    try:
        config = load_config(args)
        filters = MountFilters(
            include=split_paths(args.only_mp),
            exclude=split_paths(args.exclude_mp),
        )

        logger.debug("Reconciling mounted volumes...")
        records = reconcile(filters, config)
        logger.debug(f"Reconciled {len(records)} volumes")

        render(
            records,
            mode=config.mode,
            bar_width=config.bar_width,
            high_usage_ratio=config.high_usage_ratio,
        )
        return 0

    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except SourceUnavailable as e:
        logger.error(f"Cannot read volume information: {e}")
        return 1
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except NdfError as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ndf",
        description="ndf - show free and used space of mounted volumes",
    )

    parser.add_argument("--version", action="version", version=f"ndf {__version__}")
    parser.add_argument(
        "-m", "--mode",
        choices=MODES,
        default=None,
        help="Output layout (default: from config, else normal)",
    )
    parser.add_argument(
        "--only-mp",
        metavar="PATHS",
        default=None,
        help="Comma-separated mount paths to show exclusively",
    )
    parser.add_argument(
        "--exclude-mp",
        metavar="PATHS",
        default=None,
        help="Comma-separated mount paths to hide",
    )
    parser.add_argument(
        "--bar-width",
        type=int,
        default=None,
        help="Usage bar width in cells (default: from config, else 50)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="Path to a JSON config file (default: ~/.config/ndf/config.json)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log skipped mounts and other diagnostics to stderr",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)
    return cmd_show(args)


if __name__ == "__main__":
    sys.exit(main())
