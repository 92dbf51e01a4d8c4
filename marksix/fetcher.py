"""
HKJC Mark Six Results Client

Pulls the full draw history from the HKJC GraphQL API. The API only
returns a limited span per call, so history is requested in consecutive
3-month windows from 1993 onwards.
"""
import logging
import re
import time

import pandas as pd
import requests

from marksix.config import (
    FETCH_DELAY,
    HKJC_FIRST_DRAW_DATE,
    HKJC_GRAPHQL_URL,
    REQUEST_TIMEOUT,
)
from marksix.errors import FetchError
from marksix.store import is_complete

logger = logging.getLogger(__name__)

GRAPHQL_QUERY = """fragment lotteryDrawsFragment on LotteryDraw {
  id
  year
  no
  openDate
  closeDate
  drawDate
  status
  snowballCode
  snowballName_en
  snowballName_ch
  lotteryPool {
    sell
    status
    totalInvestment
    jackpot
    unitBet
    estimatedPrize
    derivedFirstPrizeDiv
    lotteryPrizes {
      type
      winningUnit
      dividend
    }
  }
  drawResult {
    drawnNo
    xDrawnNo
  }
}

query marksixResult($lastNDraw: Int, $startDate: String, $endDate: String, $drawType: LotteryDrawType) {
  lotteryDraws(
    lastNDraw: $lastNDraw
    startDate: $startDate
    endDate: $endDate
    drawType: $drawType
  ) {
    ...lotteryDrawsFragment
  }
}"""

HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "en-GB,en-US;q=0.9,en;q=0.8",
    "Content-Type": "application/json",
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
    "Origin": "https://bet.hkjc.com",
    "Referer": "https://bet.hkjc.com/",
}

_TZ_SUFFIX = re.compile(r"[+-]\d{2}:\d{2}$")


def generate_date_ranges(start=HKJC_FIRST_DRAW_DATE, end=None):
    """
    Consecutive 3-month windows from ``start`` to ``end`` (default: today).

    Returns a list of dicts with ``start``/``end`` in YYYYMMDD (API format)
    and ``start_display``/``end_display`` in DD/MM/YYYY.
    """
    current = pd.Timestamp(start).normalize()
    end = pd.Timestamp(end).normalize() if end is not None else pd.Timestamp.now().normalize()

    ranges = []
    while current < end:
        window_end = min(current + pd.DateOffset(months=3) - pd.Timedelta(days=1), end)
        ranges.append({
            "start": current.strftime("%Y%m%d"),
            "end": window_end.strftime("%Y%m%d"),
            "start_display": current.strftime("%d/%m/%Y"),
            "end_display": window_end.strftime("%d/%m/%Y"),
        })
        current = current + pd.DateOffset(months=3)
    return ranges


def _parse_draw_date(value):
    if not value:
        return None
    try:
        return pd.Timestamp(_TZ_SUFFIX.sub("", str(value))).strftime("%Y-%m-%d")
    except (TypeError, ValueError):
        return None


def _format_draw_no(year, no):
    """Label like 2024/001, or None when the API left the year or number out."""
    if year is None:
        return None
    try:
        return f"{year}/{int(no):03d}"
    except (TypeError, ValueError):
        return None


def format_draws(raw_draws):
    """
    Convert GraphQL ``lotteryDraws`` entries to draw records.

    Draws with an unparseable date or incomplete results are skipped.
    """
    records = []
    for draw in raw_draws or []:
        result = draw.get("drawResult") or {}
        draw_date = _parse_draw_date(draw.get("drawDate"))
        if draw_date is None:
            logger.warning("[HKJC] Skipping draw %s/%s due to invalid date %r",
                           draw.get("year"), draw.get("no"), draw.get("drawDate"))
            continue

        try:
            numbers = sorted(int(n) for n in (result.get("drawnNo") or []))
            extra = result.get("xDrawnNo")
            extra = int(extra) if extra is not None else None
        except (TypeError, ValueError):
            logger.warning("[HKJC] Skipping malformed draw on %s", draw_date)
            continue

        record = {
            "draw_date": draw_date,
            "numbers": numbers,
            "extra_number": extra,
            "draw_no": _format_draw_no(draw.get("year"), draw.get("no")),
        }
        if is_complete(record):
            records.append(record)
    return records


def remove_duplicate_results(records):
    """Drop repeats of the same (date, numbers, extra) keeping the first."""
    seen = set()
    unique = []
    for r in records:
        key = (r["draw_date"], tuple(r["numbers"]), r["extra_number"])
        if key in seen:
            logger.debug("[HKJC] Removing duplicate: %s %s", r["draw_date"], r.get("draw_no"))
            continue
        seen.add(key)
        unique.append(r)
    return unique


def fetch_date_range(session, start, end, url=HKJC_GRAPHQL_URL, timeout=REQUEST_TIMEOUT):
    """Fetch and format the draws between two YYYYMMDD dates."""
    payload = {
        "operationName": "marksixResult",
        "query": GRAPHQL_QUERY,
        "variables": {
            "lastNDraw": None,
            "startDate": start,
            "endDate": end,
            "drawType": "All",
        },
    }
    try:
        resp = session.post(url, json=payload, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
        body = resp.json()
    except (requests.RequestException, ValueError) as e:
        raise FetchError(f"GraphQL fetch failed for {start}-{end}: {e}") from e

    draws = ((body or {}).get("data") or {}).get("lotteryDraws") or []
    return format_draws(draws)


def fetch_hkjc_data(session=None, start=HKJC_FIRST_DRAW_DATE, end=None, delay=FETCH_DELAY):
    """
    Fetch every draw from ``start`` to ``end``.

    Windows that fail are logged and skipped. Returns unique records,
    newest first.

    Raises
    ------
    FetchError
        If no draws at all could be fetched.
    """
    session = session if session is not None else requests.Session()
    ranges = generate_date_ranges(start, end)
    logger.info("[HKJC] Fetching history in %d three-month windows...", len(ranges))

    all_results = []
    for i, window in enumerate(ranges):
        try:
            results = fetch_date_range(session, window["start"], window["end"])
        except FetchError as e:
            logger.warning("[HKJC] %s-%s failed: %s",
                           window["start_display"], window["end_display"], e)
            continue
        if results:
            all_results.extend(results)
            logger.info("[HKJC] %s-%s: %d draws (total: %d)",
                        window["start_display"], window["end_display"],
                        len(results), len(all_results))
        if delay and i < len(ranges) - 1:
            time.sleep(delay)

    if not all_results:
        raise FetchError("No data could be fetched from HKJC GraphQL API")

    unique = remove_duplicate_results(all_results)
    unique.sort(key=lambda r: r["draw_date"], reverse=True)
    logger.info("[HKJC] Fetched %d unique draws", len(unique))
    return unique
