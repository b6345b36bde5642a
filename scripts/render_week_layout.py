"""Lay out a week of tutoring sessions as JSON or a table.

Reads a weekly-compliance payload from a file, or fetches it from the
dashboard API, runs the layout engine and prints the result.

Run with: python scripts/render_week_layout.py --input data/week.json
Table:    python scripts/render_week_layout.py --input data/week.json --table
Expand:   python scripts/render_week_layout.py --input data/week.json --table \
              --expand 2026-10-18@10:00
Fetch:    python scripts/render_week_layout.py --org-id ORG --week-start 2026-10-18
Output:   python scripts/render_week_layout.py --input data/week.json --output data/layout.json

API settings (API_BASE_URL, API_TOKEN), grid fallbacks (GRID_INTERVAL_MINUTES,
DEFAULT_SESSION_DURATION_MINUTES) and logging (LOG_LEVEL, LOG_JSON) come from
the environment or .env.

Exit codes:
  0 = success (JSON or table on stdout, or file written for --output)
  1 = error (message on stderr)
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from session_layout.config import get_config  # noqa: E402
from session_layout.errors import LayoutError  # noqa: E402
from session_layout.logging import get_logger, setup_logging  # noqa: E402
from session_layout.payload import read_payload_file  # noqa: E402
from session_layout.report import format_week_table  # noqa: E402
from session_layout.service import WeeklyLayoutService  # noqa: E402
from session_layout.view_state import ViewState  # noqa: E402

log = get_logger("render_week_layout")


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Lay out a week of tutoring sessions as JSON or a table.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=str,
        help="Weekly-compliance payload saved as JSON.",
    )
    source.add_argument(
        "--org-id",
        type=str,
        help="Fetch the week for this organization from the dashboard API.",
    )

    parser.add_argument(
        "--week-start",
        type=str,
        default=None,
        help="Any date (YYYY-MM-DD) of the week to fetch (default: current week).",
    )
    parser.add_argument(
        "--instructor-id",
        type=str,
        default=None,
        help="Restrict a fetched week to one instructor.",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Output a human-readable table instead of JSON.",
    )
    parser.add_argument(
        "--expand",
        action="append",
        default=[],
        metavar="BADGE_KEY",
        help="Expand an overflow badge in the table (e.g. 2026-10-18@10:00).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the layout JSON to this path instead of stdout.",
    )
    return parser.parse_args()


def main(args: argparse.Namespace) -> None:
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    service = WeeklyLayoutService.from_config(config)
    if args.input:
        payload = read_payload_file(args.input)
        layout = service.layout_week(payload)
    else:
        layout = service.fetch_and_layout(
            args.org_id, args.week_start, args.instructor_id
        )

    if args.table:
        view_state = ViewState(expanded_badges=frozenset(args.expand))
        print(format_week_table(layout, view_state))
        return

    document = json.dumps(
        layout.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
    )
    if args.output:
        output_file = Path(args.output)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(document, encoding="utf-8")
        log.info("layout_written", path=str(output_file), days=len(layout.days))
    else:
        print(document)


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except (LayoutError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
