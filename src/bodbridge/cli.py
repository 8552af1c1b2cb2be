"""Command line entry point: validate arguments and credentials, then serve the bridge."""

from __future__ import annotations

import logging
import sys
from typing import Sequence

import uvicorn

from .api.dependencies import build_services
from .config import Settings, load_api_credentials, settings as default_settings
from .errors import CredentialsError
from .main import create_app

logger = logging.getLogger("bodbridge")

LOG_FORMAT = "%(asctime)s %(levelname).1s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class UsageError(Exception):
    pass


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def usage(prog: str, config: Settings) -> str:
    return "\n".join(
        [
            config.banner,
            f"Usage: {prog} [http_port_num]",
            f"    http_port_num: Default {config.default_port}. "
            "HTTP port number to listen for beverage-on-demand POST requests.",
        ]
    )


def credentials_help(config: Settings) -> str:
    return "\n".join(
        [
            f"Error parsing Kai credentials file at {config.credentials_file}",
            "API credentials file format: sitename, username and password each on separate line, e.g.",
            "kaisite",
            "someuser",
            "somepassword123",
        ]
    )


def parse_port(argv: Sequence[str], default: int) -> int:
    if len(argv) > 1:
        raise UsageError("Too many arguments")
    if not argv:
        return default
    port_arg = argv[0]
    if not port_arg.isdigit():
        raise UsageError("http_port_num must be integer")
    port = int(port_arg)
    if port <= 0:
        raise UsageError("http_port_num must be positive")
    if port >= 65536:
        raise UsageError("http_port_num must be less than 65536")
    return port


def main(argv: Sequence[str] | None = None, config: Settings | None = None) -> int:
    config = config or default_settings
    args = list(sys.argv[1:] if argv is None else argv)
    prog = "bodbridge"

    try:
        port = parse_port(args, config.default_port)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        print(usage(prog, config))
        return 1

    try:
        credentials = load_api_credentials(config.credentials_file)
    except CredentialsError as exc:
        print(exc, file=sys.stderr)
        print(credentials_help(config))
        return 1

    configure_logging(config.log_level)
    logger.info(config.banner)
    logger.info(f"Listening for Beverage-on-Demand HTTP POSTs on TCP port: {port}")

    app = create_app(config, services=build_services(config, credentials))
    uvicorn.run(app, host=config.bind_host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
