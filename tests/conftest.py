"""Shared fixtures: a small dataset written to disk and read through the real loader."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from data_loader import load_dataset

HEADER = ("Job_Title,Industry,Company_Size,Location,AI_Adoption_Level,Automation_Risk,"
          "Required_Skills,Salary_USD,Remote_Friendly,Job_Growth_Projection")

ROWS = [
    "Data Scientist,Technology,Large,San Francisco,High,Low,Python,100000,Yes,Growth",
    "Nurse,Healthcare,Medium,Berlin,Low,Medium,Communication,60000,No,Stable",
    "Data Scientist,Technology,Large,San Francisco,High,Low,Python,120000,Yes,Growth",
    "Software Engineer,Technology,Small,Tokyo,Medium,High,SQL,90000,Yes,Growth",
    "Data Scientist,Finance,Medium,Berlin,Medium,High,SQL,140000,No,Stable",
    "Nurse,Healthcare,Small,Tokyo,Low,Medium,Communication,70000,No,Decline",
    "Software Engineer,Technology,Large,Berlin,High,Low,Python,110000,Yes,Growth",
]


def write_csv(path, rows, header=HEADER):
    path.write_text("\n".join([header] + rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def csv_path(tmp_path):
    return write_csv(tmp_path / "ai_job_market_insights.csv", ROWS)


@pytest.fixture
def records(csv_path):
    return load_dataset(csv_path)
