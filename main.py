"""
Echo Chamber - Entry Point
==========================

This is the main entry point of the application.
It initializes logging, parses command-line arguments and starts either
the FastAPI server or the interactive console menu.

Usage:
    python main.py                    # Start the web server with defaults
    python main.py --port 8080        # Custom port
    python main.py --debug            # Debug mode with auto-reload
    python main.py console            # Interactive text menu
"""

import argparse
import os
import sys
from typing import List, Optional

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import DEMO_SEQUENCE, SELF_TEST_CASES, Settings, load_settings
from echo_chamber.utils import ConfigurationError, setup_logging, get_logger


def parse_arguments(settings: Settings, argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the application.

    Args:
        settings: Loaded settings, used as defaults.
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        argparse.Namespace: Parsed arguments with command, host, port, debug
        and log level.
    """
    parser = argparse.ArgumentParser(
        description="Echo Chamber - predict the next number of arithmetic progressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
    python main.py                    Start server with defaults ({settings.host}:{settings.port})
    python main.py --port 8080        Start on port 8080
    python main.py --debug            Enable debug mode with auto-reload
    python main.py console            Run the interactive menu
        """
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=["serve", "console"],
        default="serve",
        help="What to run (default: serve)"
    )

    parser.add_argument(
        "--host",
        type=str,
        default=settings.host,
        help=f"Host to bind the server to (default: {settings.host})"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind the server to (default: {settings.port})"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with auto-reload"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help=f"Logging level (default: {settings.log_level} for serve, WARNING for console)"
    )

    return parser.parse_args(argv)


def run_console() -> None:
    """Run the interactive menu on a fresh predictor."""
    from echo_chamber.core import SequencePredictor
    from echo_chamber.interface import ConsoleInterface

    ConsoleInterface(
        SequencePredictor(),
        demo_sequence=DEMO_SEQUENCE,
        test_cases=SELF_TEST_CASES,
    ).start()


def run_server(args: argparse.Namespace) -> None:
    """Display the startup banner and start uvicorn."""
    print("=" * 60)
    print("  [*] Echo Chamber Web Server")
    print("=" * 60)
    print(f"  [>] Web interface: http://{args.host}:{args.port}")
    print("  [>] API endpoints:")
    print("        POST   /api/predict   - Predict next number")
    print("        GET    /api/memories  - Get all stored echoes")
    print("        DELETE /api/memories  - Clear all memories")
    print("        POST   /api/validate  - Validate sequence")
    print("        GET    /api/test      - Test server connection")
    print(f"  [>] Log level: {args.log_level}")
    print(f"  [>] Debug mode: {'ON' if args.debug else 'OFF'}")
    print("=" * 60)

    import uvicorn
    uvicorn.run(
        "app:app",
        host=args.host,
        port=args.port,
        reload=args.debug,
        log_level=args.log_level.lower()
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.

    Returns:
        Process exit code.
    """
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"[!] Configuration error: {e}", file=sys.stderr)
        return 2

    args = parse_arguments(settings, argv)

    # Keep the menu readable unless a level is asked for explicitly
    if args.log_level is None:
        args.log_level = "WARNING" if args.command == "console" else settings.log_level

    setup_logging(level=args.log_level, log_file=settings.log_file)
    logger = get_logger(__name__)

    if args.command == "console":
        logger.debug("Starting console interface")
        run_console()
    else:
        logger.info(f"Starting server on {args.host}:{args.port}")
        run_server(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
