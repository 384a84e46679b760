"""Entry point for the logger dashboard."""

import logging
import signal
import sys

from logger_dashboard.config import load_config
from logger_dashboard.console import TerminalConsole
from logger_dashboard.controller import LogSessionController
from logger_dashboard.dashboard import create_dashboard_app, run_dashboard

MODES = ("web", "terminal")


def _parse_mode(argv: list[str]) -> str:
    """Pick --mode web|terminal out of argv; everything else goes to load_config."""
    mode = "web"
    for i, arg in enumerate(argv):
        if arg.startswith("--mode="):
            mode = arg.split("=", 1)[1]
        elif arg == "--mode" and i + 1 < len(argv):
            mode = argv[i + 1]
    if mode not in MODES:
        print(f"Error: --mode must be one of {', '.join(MODES)}", file=sys.stderr)
        sys.exit(2)
    return mode


def main(argv: list[str] | None = None):
    if argv is None:
        argv = sys.argv[1:]

    mode = _parse_mode(argv)
    config = load_config(argv)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)
    logger.info(
        "Starting logger dashboard: mode=%s, ingest=%s, interval=%.1fs",
        mode, config.ingest_url, config.auto_generate_interval,
    )

    controller = LogSessionController.from_config(config)

    if mode == "terminal":
        TerminalConsole(controller).run()
        return

    def signal_handler(signum, frame):
        logger.info("Received signal %d, shutting down...", signum)
        controller.close()
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)

    app = create_dashboard_app(controller)
    try:
        run_dashboard(app, config.dashboard_host, config.dashboard_port)
    finally:
        controller.close()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
