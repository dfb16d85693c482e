# =============================================================================
# Daybook Main Application
# =============================================================================
# This is the main Textual application class and the command-line entry point.
#
# The app manages:
#   - Configuration loading
#   - Logging (to a file, since Textual owns the terminal)
#   - Pushing the main journal screen
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from daybook import __version__, __app_name__
from daybook.config import Config, ConfigError, print_paths
from daybook.ui.screens.main import MainScreen


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DaybookApp(App):
    """
    The main Daybook application.

    Attributes:
        config: The loaded application configuration.
        TITLE: Window title shown in terminal.
        SUB_TITLE: Subtitle shown in header.
        BINDINGS: Global keyboard shortcuts.
    """

    TITLE = "Daybook"
    SUB_TITLE = "A mood journal"

    BINDINGS = [
        Binding("q", "quit", "Quit", priority=True),
        Binding("?", "show_help", "Help"),
    ]

    def __init__(self, config: Config | None = None, config_error: str | None = None) -> None:
        """
        Initialize the Daybook application.

        Args:
            config: Optional pre-loaded configuration. If not provided,
                    configuration will be loaded from the default location.
            config_error: Error from an earlier config load, shown on start.
        """
        super().__init__()

        self._config_error = config_error

        if config is None:
            try:
                self.config = Config.load()
            except ConfigError as e:
                self.config = Config()
                self._config_error = str(e)
        else:
            self.config = config

    async def on_mount(self) -> None:
        """Called when the application is mounted and ready."""
        self.theme = "textual-light" if self.config.ui.theme == "light" else "textual-dark"

        if self._config_error:
            self.notify(
                f"Config error: {self._config_error}",
                severity="error",
                timeout=10,
            )

        await self.push_screen(MainScreen(self.config))

    def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def action_show_help(self) -> None:
        """Show the key bindings."""
        self.notify(
            "Keybindings: a=add, d=delete, e=see more/less, j/k=navigate, q=quit",
            timeout=10,
        )


# =============================================================================
# Logging
# =============================================================================

def setup_logging(debug: bool = False, log_file: Path | None = None) -> Path:
    """
    Send log records to a file.

    Args:
        debug: Log at DEBUG level instead of WARNING.
        log_file: Destination. Defaults to the XDG state directory.

    Returns:
        Path of the log file.
    """
    log_file = log_file or Config.log_file_path()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger(__app_name__)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.addHandler(handler)
    return log_file


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Daybook: a terminal mood journal",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--db",
        type=Path,
        help="Path to the journal database (overrides the config file)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for Daybook.

    This function:
        1. Parses command-line arguments
        2. Loads configuration
        3. Handles --paths
        4. Starts the Textual application

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)

    config_error = None
    try:
        config = Config.load(args.config)
    except ConfigError as e:
        config = Config()
        config_error = str(e)

    if args.db:
        config.storage.database_path = str(args.db)

    if args.paths:
        print_paths(config)
        return 0

    setup_logging(debug=args.debug)

    app = DaybookApp(config=config, config_error=config_error)
    app.run()

    return 0


if __name__ == "__main__":
    sys.exit(main())
