"""
Historical Draw Store for Mark Six

Keeps the full ordered list of historical draws in memory, backed by a JSON
snapshot on disk. The data set is always handled whole: ``replace`` swaps
everything, ``append`` re-persists everything.

Record schema (plain dicts):
    draw_date, numbers (6 ints ascending), extra_number, draw_no
"""
import json
import logging
import os
import tempfile
from numbers import Integral

import pandas as pd

from marksix.config import MAX_NUMBER, MIN_NUMBER, NUMBERS_PER_DRAW, SNAPSHOT_PATH

logger = logging.getLogger(__name__)

# Older snapshot files use camelCase keys
_KEY_ALIASES = {
    "draw_date": ("draw_date", "drawDate", "date"),
    "numbers": ("numbers",),
    "extra_number": ("extra_number", "extraNumber", "additional_number"),
    "draw_no": ("draw_no", "drawNo", "draw_number"),
}


def _pick(raw, field):
    for key in _KEY_ALIASES[field]:
        if key in raw:
            return raw[key]
    return None


def normalize_record(raw):
    """
    Return a clean copy of one draw record.

    Numbers are cast to int and sorted ascending; the date is kept as an
    ISO ``YYYY-MM-DD`` string. Completeness is *not* checked here.

    Raises
    ------
    ValueError
        If the record is not a mapping or its fields cannot be converted.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Draw record must be a dict, got {type(raw).__name__}")

    draw_date = _pick(raw, "draw_date")
    if draw_date is None:
        raise ValueError(f"Draw record has no date: {raw!r}")
    try:
        draw_date = pd.Timestamp(draw_date).strftime("%Y-%m-%d")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid draw date {draw_date!r}: {e}") from e

    numbers = _pick(raw, "numbers")
    if numbers is None:
        numbers = []
    try:
        numbers = sorted(int(n) for n in numbers)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid numbers for draw {draw_date}: {numbers!r}") from e

    extra = _pick(raw, "extra_number")
    if extra is not None:
        try:
            extra = int(extra)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid extra number for draw {draw_date}: {extra!r}") from e

    draw_no = _pick(raw, "draw_no")
    return {
        "draw_date": draw_date,
        "numbers": numbers,
        "extra_number": extra,
        "draw_no": str(draw_no) if draw_no is not None else None,
    }


def is_draw_number(value):
    """Any integer type (numpy included, bool excluded) within 1-49."""
    return isinstance(value, Integral) and not isinstance(value, bool) and MIN_NUMBER <= value <= MAX_NUMBER


def is_complete(record):
    """A draw is usable when it has 6 distinct numbers and an extra, all in 1-49."""
    numbers = record.get("numbers")
    if numbers is None:
        numbers = []
    if len(numbers) != NUMBERS_PER_DRAW or len(set(numbers)) != NUMBERS_PER_DRAW:
        return False
    if not all(is_draw_number(n) for n in numbers):
        return False
    return is_draw_number(record.get("extra_number"))



def sort_chronologically(records):
    """Oldest first. Draws sharing a date keep their relative order."""
    return sorted(records, key=lambda r: str(r.get("draw_date") or ""))


def complete_records(records):
    """Drop incomplete draws and return the rest oldest first."""
    usable = [r for r in records if is_complete(r)]
    dropped = len(records) - len(usable)
    if dropped:
        logger.warning("[Store] Ignoring %d incomplete draw records", dropped)
    return sort_chronologically(usable)


def records_to_frame(records):
    """
    Tabular view of draw records (one row per draw, newest first).

    Columns: draw_no, date, num1-num6, additional_number.
    """
    rows = []
    for r in records:
        row = {"draw_no": r.get("draw_no"), "date": r.get("draw_date")}
        nums = list(r.get("numbers") or [])
        for i in range(NUMBERS_PER_DRAW):
            row[f"num{i + 1}"] = nums[i] if i < len(nums) else None
        row["additional_number"] = r.get("extra_number")
        rows.append(row)

    columns = ["draw_no", "date"] + [f"num{i}" for i in range(1, 7)] + ["additional_number"]
    df = pd.DataFrame(rows, columns=columns)
    if len(df):
        df["date"] = pd.to_datetime(df["date"])
        df = df.sort_values("date", ascending=False).reset_index(drop=True)
    return df


class DrawStore:
    """
    In-memory historical draws plus their JSON snapshot.

    One instance lives as long as the serving process and is handed to
    whoever needs the data. There is no locking: two concurrent ``replace``
    calls race and the last writer wins.
    """

    def __init__(self, path=SNAPSHOT_PATH):
        self.path = path
        self._records = []

    def __len__(self):
        return len(self._records)

    @property
    def records(self):
        return [dict(r, numbers=list(r["numbers"])) for r in self._records]

    def load(self):
        """
        Read the snapshot into memory.

        A missing or corrupt snapshot means "no data": a warning is logged
        and an empty list returned.
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, list):
                raise ValueError("snapshot must contain a JSON list of draws")
            records = [normalize_record(r) for r in raw]
        except FileNotFoundError:
            logger.warning("[Store] No snapshot at %s. Starting with no data.", self.path)
            records = []
        except (OSError, ValueError) as e:
            logger.warning("[Store] Could not read snapshot %s: %s. Starting with no data.",
                           self.path, e)
            records = []

        self._records = records
        if records:
            logger.info("[Store] Loaded %d historical draws from %s", len(records), self.path)
        return self.records

    def replace(self, records):
        """
        Swap the whole data set and persist it.

        Every record is normalized before anything is touched, and the
        snapshot is written through a temporary file, so a failure leaves
        both memory and disk as they were.
        """
        normalized = [normalize_record(r) for r in records]
        self._write_snapshot(normalized)
        self._records = normalized
        logger.info("[Store] Saved %d records to %s", len(normalized), self.path)
        return len(normalized)

    def append(self, record):
        """Add one draw (e.g. a manual entry) and persist the full data set."""
        return self.replace(self._records + [record])

    def _write_snapshot(self, records):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".snapshot-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
