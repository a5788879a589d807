"""Command-line entry point: ``python -m motd_server`` or ``motd-server``."""

import argparse
import asyncio
import logging
import signal
import sys

from motd_server import __version__
from motd_server.app import MotdApplication
from motd_server.config import Settings
from motd_server.exceptions import MotdError
from motd_server.logging_config import setup_logging

logger = logging.getLogger("motd_server")


async def serve(settings: Settings) -> None:
    """Build the application and run it until SIGINT or SIGTERM."""
    app = MotdApplication.create(settings)
    loop = asyncio.get_running_loop()
    pending: set[asyncio.Task] = set()

    def request_stop(signame: str) -> None:
        logger.info("received %s, shutting down", signame)
        task = loop.create_task(app.stop())
        pending.add(task)
        task.add_done_callback(pending.discard)

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, request_stop, sig.name)
        except NotImplementedError:
            # Windows event loops; Ctrl+C still raises KeyboardInterrupt
            logger.debug("signal handlers unavailable on this platform")

    await app.run()
    if pending:
        await asyncio.gather(*pending)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="motd-server",
        description="Serve random cached images and comics over TCP.",
    )
    parser.add_argument("--version", action="store_true", help="show version information and exit")
    args = parser.parse_args(argv)

    if args.version:
        print(f"motd-server version {__version__}")
        return 0

    try:
        settings = Settings.from_env()
    except MotdError as e:
        setup_logging()
        logger.error("failed to load configuration: %s", e)
        return 1

    setup_logging(settings.log_level)
    logger.info(
        "configuration loaded: cache_dir=%s listen=%s:%d download_interval=%ss cleanup_interval=%ss max_files=%d",
        settings.cache_dir,
        settings.listen_host,
        settings.listen_port,
        settings.download_interval,
        settings.cleanup_interval,
        settings.cache_max_files,
    )

    try:
        asyncio.run(serve(settings))
    except MotdError as e:
        logger.error("motd-server failed: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("interrupted")

    return 0


if __name__ == "__main__":
    sys.exit(main())
