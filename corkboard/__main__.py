"""
Corkboard Entry Point

Usage:
    python -m corkboard hash SECRET          # Print an encoded hash
    python -m corkboard verify HASH SECRET   # Exit 0 if the secret matches
    python -m corkboard config --show        # Show current config
    python -m corkboard --help               # Show help
"""

import argparse
import sys
import logging
from pathlib import Path

from . import __version__


def setup_logging(level: str, log_file: str | None = None):
    """Configure logging for the application."""
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=handlers
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corkboard",
        description="Corkboard - Anonymous, password-gated bulletin boards"
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"Corkboard {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=Path("config.toml"),
        help="Path to configuration file (default: config.toml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from config, else INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    hash_parser = subparsers.add_parser("hash", help="Hash an item secret")
    hash_parser.add_argument("secret", help="Secret to hash")

    verify_parser = subparsers.add_parser("verify", help="Check a secret against a hash")
    verify_parser.add_argument("hash", help="Encoded hash")
    verify_parser.add_argument("secret", help="Secret to check")

    config_parser = subparsers.add_parser("config", help="Configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--validate", action="store_true", help="Validate config")
    config_parser.add_argument("--init", action="store_true", help="Write a default config file")

    return parser


def run_config(args, config) -> int:
    """Handle the config subcommand."""
    from .config import create_default_config

    if args.init:
        if args.config.exists():
            print(f"{args.config} already exists")
            return 1
        create_default_config(args.config)
        print(f"Wrote {args.config}")
        return 0

    if args.validate:
        errors = config.validate()
        for error in errors:
            print(f"error: {error}")
        if not errors:
            print("Configuration OK")
        return 1 if errors else 0

    # --show is the default
    import toml
    print(toml.dumps(config._to_dict()), end="")
    return 0


def main(argv=None):
    """Main entry point for Corkboard."""
    from .config import load_config
    from .core.crypto import SecretHasher

    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(args.log_level or config.logging.level, config.logging.file or None)
    logger = logging.getLogger("corkboard")

    if args.command == "config":
        sys.exit(run_config(args, config))

    if args.command == "hash":
        hasher = SecretHasher.from_config(config.security)
        print(hasher.hash(args.secret))
        sys.exit(0)

    if args.command == "verify":
        hasher = SecretHasher.from_config(config.security)
        if not SecretHasher.looks_like_hash(args.hash):
            logger.error("Not an encoded hash")
            sys.exit(2)
        matched = hasher.verify(args.secret, args.hash)
        print("match" if matched else "no match")
        sys.exit(0 if matched else 1)

    parser.print_help()
    sys.exit(1)


if __name__ == "__main__":
    main()
