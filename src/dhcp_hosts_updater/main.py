from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from dhcp_hosts_updater import __version__
from dhcp_hosts_updater.app import build_hosts_file_store, build_provider_catalog, update_hosts
from dhcp_hosts_updater.config import (
    ConfigurationError,
    configure_logging,
    provider_env_var,
    resolve_provider_options,
)
from dhcp_hosts_updater.config.flags import VERIFY_TLS_FLAG, parse_bool_flag
from dhcp_hosts_updater.domain.naming import parse_mac_overrides

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from dhcp_hosts_updater.domain.ports import ProviderCatalog, ServerProvider

log = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _flag_dest(flag: str) -> str:
    return "flag_" + flag.replace("-", "_")


def _add_provider_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    provider: ServerProvider,
) -> None:
    parser = subparsers.add_parser(provider.id, help=f"Update the hosts file from {provider.id}")
    for flag, description in provider.required_flags.items():
        parser.add_argument(
            f"--{flag}",
            dest=_flag_dest(flag),
            help=f"{description} (required, env: {provider_env_var(provider.id, flag)})",
        )
    for flag, description in provider.optional_flags.items():
        parser.add_argument(
            f"--{flag}",
            dest=_flag_dest(flag),
            help=f"{description} (env: {provider_env_var(provider.id, flag)})",
        )
    parser.add_argument(
        "--hosts-file",
        type=str,
        help="Hosts file to update (default: $HOSTS_FILE or the system hosts file)",
    )
    parser.add_argument(
        "--mac-override",
        action="append",
        default=[],
        metavar="MAC=HOSTNAME",
        help="Publish the client with this MAC under HOSTNAME. Can be given multiple times.",
    )
    parser.add_argument(
        "--keep-spaces",
        action="store_true",
        help=(
            "Do not replace spaces in reported hostnames; "
            "clients whose name keeps a space are skipped"
        ),
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the changes without writing the hosts file",
    )


def _parse_args(argv: Sequence[str], catalog: ProviderCatalog) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="dhcp-hosts-updater",
        description="Update a hosts file from the clients known to a DHCP server",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="INFO",
        help="Log level (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="provider", required=True)
    for provider in catalog.values():
        _add_provider_parser(subparsers, provider)
    return parser.parse_args(list(argv))


def _provider_options(args: argparse.Namespace, provider: ServerProvider) -> dict[str, str]:
    flags = [*provider.required_flags, *provider.optional_flags]
    given = {flag: getattr(args, _flag_dest(flag), None) for flag in flags}
    return resolve_provider_options(provider.id, flags, given)


def main(argv: Sequence[str] | None = None, *, catalog: ProviderCatalog | None = None) -> None:
    """Main application entry point."""
    effective_catalog = catalog if catalog is not None else build_provider_catalog()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list, effective_catalog)
    configure_logging(level=parsed_args.log_level)

    try:
        provider = effective_catalog[parsed_args.provider]
        options = _provider_options(parsed_args, provider)
        missing = provider.missing_flags(options)
        if missing:
            flags = ", ".join(f"--{flag}" for flag in missing)
            raise ConfigurationError(f"Missing required flags for {provider.id}: {flags}")  # noqa: TRY301
        parse_bool_flag(options.get(VERIFY_TLS_FLAG), flag=VERIFY_TLS_FLAG)
        mac_overrides = parse_mac_overrides(parsed_args.mac_override)
        store = build_hosts_file_store(parsed_args.hosts_file)
    except (ConfigurationError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        update_hosts(
            provider,
            options,
            store=store,
            mac_overrides=mac_overrides,
            replace_spaces=not parsed_args.keep_spaces,
            dry_run=parsed_args.dry_run,
        )
    except Exception:
        log.exception("Failed to update hosts file")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
