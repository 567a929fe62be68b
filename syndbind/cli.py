"""Command line entry point: convert a feed document to another feed type."""

import argparse
import sys
from datetime import UTC, datetime

from .config import Config
from .exceptions import FeedException
from .feed_input import SyndFeedInput
from .feed_output import SyndFeedOutput
from .logging_config import create_execution_logger, setup_structured_logging
from .wire_feed import FEED_TYPES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="syndbind-convert",
        description="Convert an RSS or Atom feed document to another feed type.",
    )
    parser.add_argument("input", help="Feed document to read")
    parser.add_argument(
        "--to",
        dest="feed_type",
        choices=FEED_TYPES,
        help="Target feed type (defaults to SYNDBIND_DEFAULT_FEED_TYPE)",
    )
    parser.add_argument("-o", "--output", help="File to write, defaults to stdout")
    parser.add_argument(
        "--pretty", action="store_true", default=None, help="Indent the output document"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the converter.

    Args:
        argv: Command line arguments, defaults to ``sys.argv[1:]``

    Returns:
        Process exit code: 0 on success, 1 when the feed cannot be converted
    """
    args = build_parser().parse_args(argv)

    config = Config()
    setup_structured_logging(config.log_level)

    execution_id = f"cli_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    logger = create_execution_logger("cli", execution_id)
    logger.log_execution_start(input=args.input, target_type=args.feed_type)

    try:
        feed = SyndFeedInput(config, execution_id).build_file(args.input)
        output = SyndFeedOutput(config, execution_id)
        target_type = args.feed_type or config.get_output_config().default_feed_type
        if args.output:
            output.output_file(feed, args.output, target_type, args.pretty)
        else:
            sys.stdout.write(output.output_string(feed, target_type, args.pretty))
            sys.stdout.write("\n")
    except (FeedException, ValueError, OSError) as e:
        logger.error(f"Conversion failed: {e}", error=str(e))
        logger.log_execution_end(success=False)
        print(f"syndbind-convert: {e}", file=sys.stderr)
        return 1

    logger.log_execution_end(success=True, entries_count=len(feed.entries))
    return 0


if __name__ == "__main__":
    sys.exit(main())
