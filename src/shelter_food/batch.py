from __future__ import annotations

import argparse
import csv
import json
from collections import Counter
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import structlog

from .errors import OrderValidationError
from .log import configure_logging
from .models import CONFIG_ALIASES, OrderConfig
from .order import compute_order
from .settings import parse_number

logger = structlog.get_logger(__name__)

_COUNT_KEYS = {
    "small": ("small", "small_count", "nSmallDogs"),
    "medium": ("medium", "medium_count", "nMediumDogs"),
    "large": ("large", "large_count", "nLargeDogs"),
    "leftover": ("leftover_lbs", "leftover", "lbsLeftover"),
}
_CONFIG_KEYS = (*(f.name for f in fields(OrderConfig)), *CONFIG_ALIASES)
_JSON_ROW_LIST_KEYS = ("shelters", "rows", "items")
INPUT_SUFFIXES = {".json", ".csv"}


@dataclass(frozen=True)
class BatchRow:
    source: str
    shelter: str
    order_lbs: float | None
    error_code: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_code is None


@dataclass(frozen=True)
class BatchReport:
    rows: list[BatchRow]

    @property
    def computed(self) -> int:
        return sum(1 for row in self.rows if row.ok)

    @property
    def rejected(self) -> int:
        return len(self.rows) - self.computed

    @property
    def total_lbs(self) -> float:
        return round(sum(row.order_lbs for row in self.rows if row.order_lbs is not None), 1)

    def top_errors(self, n: int = 8) -> list[tuple[str, int]]:
        return Counter(row.error_code for row in self.rows if row.error_code).most_common(n)


def _rejected(source: str, shelter: str, code: str, message: str) -> BatchRow:
    logger.warning("batch_row_rejected", source=source, shelter=shelter, code=code, message=message)
    return BatchRow(source=source, shelter=shelter, order_lbs=None, error_code=code, error_message=message)


def _first_present(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record:
            return parse_number(record[key])
    return None


def compute_row(record: dict[str, Any], *, source: str, index: int) -> BatchRow:
    shelter = str(record.get("shelter") or record.get("name") or f"row-{index}").strip()
    overrides = {key: parse_number(record[key]) for key in _CONFIG_KEYS if key in record}
    try:
        lbs = compute_order(
            _first_present(record, _COUNT_KEYS["small"]),
            _first_present(record, _COUNT_KEYS["medium"]),
            _first_present(record, _COUNT_KEYS["large"]),
            _first_present(record, _COUNT_KEYS["leftover"]),
            overrides,
        )
    except OrderValidationError as exc:
        return _rejected(source, shelter, exc.code, exc.message)
    return BatchRow(source=source, shelter=shelter, order_lbs=lbs)


def _json_records(data: Any) -> list[Any] | None:
    """Rows of a shelter file: a bare list, or a list under one of the known keys."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in _JSON_ROW_LIST_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
    return None


def orders_from_json(json_path: Path) -> list[BatchRow]:
    source = json_path.name
    records = _json_records(json.loads(json_path.read_text(encoding="utf-8")))
    if records is None:
        keys = ", ".join(_JSON_ROW_LIST_KEYS)
        return [_rejected(source, source, "no_rows", f"Expected a list of shelters or one of: {keys}")]

    rows: list[BatchRow] = []
    for i, record in enumerate(records, start=1):
        if isinstance(record, dict):
            rows.append(compute_row(record, source=source, index=i))
        else:
            rows.append(_rejected(source, f"row-{i}", "invalid_row", f"Row {i} is not an object"))
    return rows


def orders_from_csv(csv_path: Path) -> list[BatchRow]:
    with csv_path.open("r", encoding="utf-8", newline="") as fh:
        reader = csv.DictReader(fh)
        return [compute_row(record, source=csv_path.name, index=i) for i, record in enumerate(reader, start=1)]


def _input_files(input_path: Path) -> list[Path]:
    """Shelter files under a path; directories are searched recursively, dotfiles skipped."""
    if input_path.is_file():
        return [input_path]
    if not input_path.is_dir():
        return []
    return sorted(
        p
        for p in input_path.rglob("*")
        if p.is_file() and p.suffix.lower() in INPUT_SUFFIXES and not p.name.startswith(".")
    )


def run_batch(*, input_paths: list[Path]) -> BatchReport:
    rows: list[BatchRow] = []
    for root in input_paths:
        for file_path in _input_files(root):
            suffix = file_path.suffix.lower()
            if suffix == ".json":
                rows.extend(orders_from_json(file_path))
            elif suffix == ".csv":
                rows.extend(orders_from_csv(file_path))
    report = BatchReport(rows=rows)
    logger.info("batch_done", computed=report.computed, rejected=report.rejected, total_lbs=report.total_lbs)
    return report


def write_report(report: BatchReport, output_path: Path) -> None:
    with output_path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(["source", "shelter", "order_lbs", "error_code", "error_message"])
        for row in report.rows:
            writer.writerow([row.source, row.shelter, row.order_lbs, row.error_code or "", row.error_message or ""])


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute food orders for a batch of shelters")
    parser.add_argument("--input", action="append", required=True, help="Input JSON/CSV file or directory. Can be used multiple times")
    parser.add_argument("--output", help="Write per-shelter results to this CSV file")
    parser.add_argument("--log-level", default=None, help="Log level (default: SHELTER_FOOD_LOG_LEVEL or WARNING)")
    args = parser.parse_args()

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))
    input_paths = [Path(p) for p in args.input]
    for path in input_paths:
        if not path.exists():
            raise SystemExit(f"Input path not found: {path}")

    report = run_batch(input_paths=input_paths)
    if args.output:
        write_report(report, Path(args.output))
    print(f"Batch done. computed={report.computed} rejected={report.rejected} total_lbs={report.total_lbs}")
    print(f"Error codes top: {report.top_errors()}")


if __name__ == "__main__":
    main()
