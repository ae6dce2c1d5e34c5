from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .activity.cards import build_summary_cards
from .api_models import ChartResponse, CombinedRowResponse, SummaryCardsResponse
from .config import load_config
from .json_utils import load_json_file, safe_json_dumps
from .rows import CHANNELS, CombinedDataRow, parse_combined_rows
from .timeline.chart import build_chart_payload
from .timeline.formatting import InvalidInstant, parse_instant

LOGGER = logging.getLogger(__name__)


class InputError(Exception):
    """An input file is missing or does not hold valid JSON."""


def _read_json(path: Path | None) -> Any:
    if path is None:
        return None
    if not path.exists():
        raise InputError(f"input file not found: {path}")
    if not path.is_file():
        raise InputError(f"input path is not a file: {path}")
    try:
        data = load_json_file(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"cannot read input file {path}: {exc}") from None
    if data is None:
        raise InputError(f"input file contains no valid JSON: {path}")
    return data


def _write(models: BaseModel | list[BaseModel], output: Path | None) -> None:
    if isinstance(models, list):
        text = safe_json_dumps([item.model_dump() for item in models], indent=2)
    else:
        text = safe_json_dumps(models.model_dump(), indent=2)
    if output is None:
        print(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"wrote {output}", file=sys.stderr)


def _cmd_chart(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    payload = _read_json(args.payload)
    row_aux_count: int | None = None
    if args.row is not None:
        row_data = _read_json(args.row)
        if not isinstance(row_data, dict):
            raise InputError(f"row file must hold a JSON object: {args.row}")
        row = CombinedDataRow.from_dict(row_data)
        channel = args.channel or row.default_channel()
        row_aux_count = row.uwb_count_for(channel)
        LOGGER.info("Charting %s for %s (%s)", channel, row.date or "unknown date", row.patient)
    chart = build_chart_payload(payload, row_aux_count=row_aux_count, config=config)
    _write(ChartResponse.from_payload(chart), args.output)
    return 0


def _cmd_cards(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    now = None
    if args.now:
        try:
            now = parse_instant(args.now)
        except InvalidInstant as exc:
            raise InputError(str(exc)) from None
    cards = build_summary_cards(
        sensor_records=_read_json(args.device_map),
        activity_listing=_read_json(args.activity),
        file_listing=_read_json(args.metadata),
        patients=_read_json(args.patients),
        now=now,
        config=config,
    )
    _write(SummaryCardsResponse.from_cards(cards), args.output)
    return 0


def _cmd_rows(args: argparse.Namespace) -> int:
    rows = parse_combined_rows(_read_json(args.listing))
    _write([CombinedRowResponse.from_row(row) for row in rows], args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shimmerview", description="Reconstruct dashboard timelines and summary counters"
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    chart = sub.add_parser("chart", help="Build chart labels, ticks and stats for one data file")
    chart.add_argument("payload", type=Path, help="Per-file payload (.json)")
    chart.add_argument("--row", type=Path, default=None, help="Combined grid row (.json)")
    chart.add_argument("--channel", choices=CHANNELS, default=None, help="Sensor channel of the row")
    chart.add_argument("--output", type=Path, default=None, help="Output path (default: stdout)")
    chart.set_defaults(handler=_cmd_chart)

    cards = sub.add_parser("cards", help="Compute the summary-card counters")
    cards.add_argument("--device-map", type=Path, required=True, help="Device/sensor map (.json)")
    cards.add_argument("--activity", type=Path, required=True, help="File activity listing (.json)")
    cards.add_argument("--metadata", type=Path, required=True, help="File metadata listing (.json)")
    cards.add_argument("--patients", type=Path, default=None, help="Patient listing (.json)")
    cards.add_argument("--now", default=None, help="Reference instant (ISO-8601, default: now)")
    cards.add_argument("--output", type=Path, default=None, help="Output path (default: stdout)")
    cards.set_defaults(handler=_cmd_cards)

    rows = sub.add_parser("rows", help="Normalise the combined data listing")
    rows.add_argument("listing", type=Path, help="Combined data listing (.json)")
    rows.add_argument("--output", type=Path, default=None, help="Output path (default: stdout)")
    rows.set_defaults(handler=_cmd_rows)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s: %(message)s")
    try:
        return int(args.handler(args))
    except (InputError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
