"""
AI & The Future of Work - Job Impact Dashboard
Dataset: AI-Powered Job Market Insights (Kaggle)

Run:
    python main.py
    python main.py --data path/to/ai_job_market_insights.csv --port 8050
"""

import argparse
import logging
import os
import sys

from dashboard import create_app
from data_loader import DatasetError, load_dataset, resolve_dataset_path
from palette import validate_vocabulary

logger = logging.getLogger(__name__)


# ============================================
# CONFIGURATION
# ============================================

DEFAULT_HOST = os.environ.get("DASH_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.environ.get("DASH_PORT", "8050"))
DEFAULT_DEBUG = os.environ.get("DASH_DEBUG", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="AI job impact dashboard")
    parser.add_argument("--data", help="Path or URL of ai_job_market_insights.csv (default: $AI_JOBS_CSV, "
                                       "./ai_job_market_insights.csv, then a Kaggle download)")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--debug", action="store_true", default=DEFAULT_DEBUG)
    return parser.parse_args(argv)


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


# ============================================
# DATA LOADING
# ============================================

def load_records(source=None):
    """Load and validate the record set; exits the process on failure."""
    try:
        records = load_dataset(resolve_dataset_path(source))
        validate_vocabulary(records)
    except DatasetError as e:
        logger.error("ERROR loading dataset: %s", e)
        sys.exit(1)
    return records


# ============================================
# RUN
# ============================================

def main(argv=None):
    args = parse_args(argv)
    configure_logging()

    records = load_records(args.data)
    app = create_app(records)

    print("\n" + "=" * 80)
    print("AI & THE FUTURE OF WORK - JOB IMPACT DASHBOARD")
    print("=" * 80)
    print(f"✅ {len(records):,} JOBS LOADED")
    print(f"\n🌐 Dashboard: http://{args.host}:{args.port}")
    print("=" * 80 + "\n")

    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
