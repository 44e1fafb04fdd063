"""Command-line entry point for the AI Code Reviewer.

Reads a source file (or stdin), infers its language from the extension,
runs a single review and prints the report to stdout. Logs go to stderr.
"""

import argparse
import asyncio
import sys
from pathlib import Path

import structlog

from ai_code_reviewer._version import __version__
from ai_code_reviewer.models.language import Language
from ai_code_reviewer.models.state import Success

log = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_READ_ERROR = 2


def setup_logging(debug: bool = False, log_format: str = "console") -> None:
    """Configure structured logging with secret sanitization.

    Args:
        debug: Enable debug logging if True, otherwise only warnings
        log_format: Output format ("json" or "console")
    """
    from ai_code_reviewer.utils.logging import LogLevel, configure_logging

    configure_logging(
        level=LogLevel.DEBUG if debug else LogLevel.WARNING,
        log_format=log_format,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="ai-code-reviewer",
        description="AI Code Reviewer - score, issues and an optimized rewrite for a snippet",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Source file to review, or '-' to read from stdin (default: -)",
    )

    parser.add_argument(
        "-l",
        "--language",
        choices=[language.value for language in Language],
        help="Language of the code (default: inferred from the file extension)",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=Path("config/config.yaml"),
        help="Path to configuration file (default: config/config.yaml)",
    )

    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration and exit without calling the model",
    )

    return parser.parse_args(argv)


def read_source(file: str) -> str:
    """Read the code to review from a path or stdin.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    if file == "-":
        return sys.stdin.read()
    return Path(file).read_text(encoding="utf-8")


async def run_review(args: argparse.Namespace) -> int:
    """Run a single review.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 on success, 1 on failed review or bad config, 2 on read error)
    """
    from ai_code_reviewer.adapters import create_model_client
    from ai_code_reviewer.config.loader import load_config
    from ai_code_reviewer.core.controller import AnalysisController
    from ai_code_reviewer.core.report import render_state
    from ai_code_reviewer.core.session import ReviewSession

    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        log.error("configuration_file_not_found", path=str(args.config), error=str(e))
        return EXIT_FAILED
    except ValueError as e:
        log.error("configuration_invalid", error=str(e))
        return EXIT_FAILED

    if not args.debug:
        from ai_code_reviewer.utils.logging import configure_logging

        configure_logging(
            level=config.logging.level,
            log_format=config.logging.format,
            file_path=config.logging.file.path if config.logging.file.enabled else None,
            file_enabled=config.logging.file.enabled,
        )

    if args.dry_run:
        log.info("dry_run_mode_config_valid", provider=config.llm.provider)
        return EXIT_OK

    try:
        content = read_source(args.file)
    except (OSError, UnicodeDecodeError) as e:
        log.error("source_read_failed", file=args.file, error=str(e))
        print("Error: Failed to read the uploaded file.", file=sys.stderr)
        return EXIT_READ_ERROR

    try:
        client = create_model_client(config.llm)
    except ValueError as e:
        log.error("configuration_invalid", error=str(e))
        return EXIT_FAILED

    session = ReviewSession(AnalysisController(client), language=config.review.default_language)
    if args.file == "-":
        session.set_code(content)
    else:
        session.upload(args.file, content)
    if args.language:
        session.select_language(args.language)

    state = await session.analyze()
    print(render_state(state, session.language, args.format))
    return EXIT_OK if isinstance(state, Success) else EXIT_FAILED


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_format=args.log_format)

    try:
        return asyncio.run(run_review(args))
    except KeyboardInterrupt:
        log.info("interrupted")
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
