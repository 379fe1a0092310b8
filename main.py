"""Translation service entry point.

Loads ``translation_service.ini``, configures logging, and serves the HTTP interface until
interrupted. Command-line options override the server and debug settings of the file.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Final, NoReturn

from aiohttp import web

from config.loader import Config, ConfigLoader, ConfigLoaderError
from core.shared_data import SharedData
from core.version import VERSION
from handlers.web_api import TranslationWebApi
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

CFG_FILE: Final[str] = "translation_service.ini"


def check_python_version() -> None:
    """Check if Python version is 3.12 or later.

    Raises:
        RuntimeError: If Python version is below 3.12.
    """
    if sys.version_info < (3, 12):
        msg = "Python 3.12 or later is required"
        raise RuntimeError(msg)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        print(f"\n{message}\n", file=sys.stderr)
        self.print_help(sys.stderr)
        raise SystemExit(2)


def parse_arguments() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = _ArgumentParser(
        description="LLM translation service with Redis caching and BLEU evaluation",
        epilog="Example: python main.py --config translation_service.ini --port 8080",
    )
    parser.add_argument("--config", dest="config_file", metavar="FILE", default=CFG_FILE, help="Configuration file")
    parser.add_argument("--host", dest="host", metavar="HOST", help="Override bind address")
    parser.add_argument("--port", dest="port", metavar="PORT", type=int, help="Override bind port")
    parser.add_argument("--debug", dest="debug", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def load_config(args: argparse.Namespace) -> Config:
    """Load the configuration file and apply CLI overrides.

    Raises:
        ConfigLoaderError: If the configuration file cannot be loaded.
    """
    script_name: str = Path(sys.argv[0]).stem
    config: Config = ConfigLoader(
        config_filename=args.config_file,
        script_name=script_name,
        host=args.host,
        port=args.port,
        debug=args.debug,
    ).config
    config.GENERAL.VERSION = VERSION
    return config


def main() -> None:
    check_python_version()
    args: argparse.Namespace = parse_arguments()
    try:
        config: Config = load_config(args)
    except ConfigLoaderError as err:
        print("\nError: Failed to load configuration file.", file=sys.stderr)
        print(f"Details: {err}", file=sys.stderr)
        raise SystemExit(1) from err

    LoggerUtils(config.GENERAL.LOG_FILE, debug=config.GENERAL.DEBUG)
    logger: logging.Logger = LoggerUtils.get_logger(__name__)
    logger.info("%s ver.%s starting", config.GENERAL.SCRIPT_NAME, config.GENERAL.VERSION)

    api = TranslationWebApi(SharedData(config))
    print(f"Serving translation service on http://{config.SERVER.HOST}:{config.SERVER.PORT}")
    web.run_app(api.create_app(), host=config.SERVER.HOST, port=config.SERVER.PORT, print=None)
    logger.info("%s stopped", config.GENERAL.SCRIPT_NAME)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nStopped by user.", file=sys.stderr)
    except (OSError, RuntimeError) as err:
        print(f"\nFatal error: {err}", file=sys.stderr)
        sys.exit(1)
