"""
Runtime configuration for the Mark Six predictor.

Paths default to a ``data`` directory next to the package; set
``MARKSIX_DATA_DIR`` to keep the snapshot somewhere else.
"""
import logging
import os

DATA_DIR = os.environ.get(
    "MARKSIX_DATA_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data"),
)
SNAPSHOT_PATH = os.path.join(DATA_DIR, "marksix-historical-data.json")
BACKTEST_CSV_PATH = os.path.join(DATA_DIR, "backtest_results.csv")

# Draw format: 6 main numbers + 1 extra number, all drawn from 1-49
MIN_NUMBER = 1
MAX_NUMBER = 49
NUMBERS_PER_DRAW = 6

# HKJC GraphQL endpoint
HKJC_GRAPHQL_URL = "https://info.cld.hkjc.com/graphql/base/"
HKJC_FIRST_DRAW_DATE = "1993-01-01"
REQUEST_TIMEOUT = 15
FETCH_DELAY = 0.5

# Case analysis paging
DEFAULT_CASE_LIMIT = 50
MAX_CASE_LIMIT = 500

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(level=logging.INFO):
    """Send package logs to the console."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
