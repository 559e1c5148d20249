"""
Dataset loading for the AI job impact dashboard.

Dataset: AI-Powered Job Market Insights (Kaggle) - ai_job_market_insights.csv
"""

import glob
import logging
import os

import pandas as pd

logger = logging.getLogger(__name__)

KAGGLE_DATASET = "uom190346a/ai-powered-job-market-insights"
DATASET_FILENAME = "ai_job_market_insights.csv"

# CSV header -> record field
COLUMN_MAP = {
    'Job_Title': 'job_title',
    'Industry': 'industry',
    'Company_Size': 'company_size',
    'Location': 'location',
    'AI_Adoption_Level': 'ai_adoption',
    'Automation_Risk': 'automation_risk',
    'Required_Skills': 'skills',
    'Salary_USD': 'salary',
    'Remote_Friendly': 'remote_friendly',
    'Job_Growth_Projection': 'growth_projection',
}

RECORD_FIELDS = list(COLUMN_MAP.values())


class DatasetError(Exception):
    """The dataset could not be located, read or mapped onto the record schema."""


def _is_url(source):
    return str(source).startswith(('http://', 'https://'))


def download_dataset():
    """Fetch the dataset through kagglehub and return the CSV path."""
    import kagglehub

    logger.info("Downloading %s from Kaggle...", KAGGLE_DATASET)
    # Caches locally for repeat runs
    try:
        dataset_path = kagglehub.dataset_download(KAGGLE_DATASET)
    except Exception as e:
        raise DatasetError(f"Could not download {KAGGLE_DATASET}: {e}") from e
    logger.info("✓ Dataset downloaded to: %s", dataset_path)

    candidate = os.path.join(dataset_path, DATASET_FILENAME)
    if os.path.exists(candidate):
        return candidate

    # Sometimes the file sits in a subfolder
    matches = glob.glob(os.path.join(dataset_path, "**", DATASET_FILENAME), recursive=True)
    if not matches:
        raise DatasetError(f"{DATASET_FILENAME} not found under {dataset_path}")
    return matches[0]


def resolve_dataset_path(source=None):
    """
    Pick the dataset location: explicit source, then $AI_JOBS_CSV, then the
    CSV in the working directory, then a Kaggle download.
    """
    if source:
        return source

    env_source = os.environ.get("AI_JOBS_CSV")
    if env_source:
        return env_source

    if os.path.exists(DATASET_FILENAME):
        return DATASET_FILENAME

    return download_dataset()


def load_dataset(source):
    """
    Read the CSV at `source` (path or URL) into the record set.

    Every column is kept as text except salary, which is coerced to a number;
    values that do not parse become NaN.
    """
    try:
        raw = pd.read_csv(source, dtype=str, keep_default_na=False)
    except (OSError, ValueError) as e:
        raise DatasetError(f"Could not read dataset {source}: {e}") from e

    missing = [col for col in COLUMN_MAP if col not in raw.columns]
    if missing:
        raise DatasetError(f"Dataset {source} is missing columns: {', '.join(missing)}")

    records = raw[list(COLUMN_MAP)].rename(columns=COLUMN_MAP)
    records['salary'] = pd.to_numeric(records['salary'], errors='coerce')

    bad_salaries = int(records['salary'].isna().sum())
    if bad_salaries:
        logger.warning("%d rows have a non-numeric salary", bad_salaries)

    label = source if _is_url(source) else os.path.basename(str(source))
    logger.info("✓ Loaded: %s jobs from %s", f"{len(records):,}", label)
    return records.reset_index(drop=True)
