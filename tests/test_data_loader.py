"""
Unit tests for data_loader.py

Covers CSV-to-record mapping, salary coercion, schema errors and dataset
location resolution.
"""

import os
import sys
import types

import pytest

from conftest import HEADER, ROWS, write_csv
from data_loader import (
    DATASET_FILENAME,
    RECORD_FIELDS,
    DatasetError,
    download_dataset,
    load_dataset,
    resolve_dataset_path,
)


class TestLoadDataset:
    """Test load_dataset() mapping and coercion"""

    def test_one_record_per_row(self, records):
        """Every data row becomes one record"""
        assert len(records) == len(ROWS)

    def test_fields_renamed(self, records):
        """Header names map onto record fields"""
        assert list(records.columns) == RECORD_FIELDS

    def test_text_fields_verbatim(self, records):
        """Text fields are kept as-is"""
        first = records.iloc[0]
        assert first['job_title'] == "Data Scientist"
        assert first['ai_adoption'] == "High"
        assert first['remote_friendly'] == "Yes"
        assert first['growth_projection'] == "Growth"

    def test_salary_is_numeric(self, records):
        """Salary is parsed to a number"""
        assert records['salary'].tolist()[:3] == [100000.0, 60000.0, 120000.0]

    def test_row_order_preserved(self, records):
        """Records keep file order"""
        assert records['location'].tolist()[:2] == ["San Francisco", "Berlin"]

    def test_non_numeric_salary_becomes_nan(self, tmp_path):
        """A salary that does not parse becomes NaN instead of failing the row"""
        rows = ROWS[:1] + ["Nurse,Healthcare,Medium,Berlin,Low,Medium,Communication,unknown,No,Stable"]
        records = load_dataset(write_csv(tmp_path / "bad.csv", rows))

        assert len(records) == 2
        assert records['salary'].isna().tolist() == [False, True]

    def test_empty_text_stays_empty_string(self, tmp_path):
        """Empty text cells are not turned into NaN"""
        rows = ["Nurse,Healthcare,Medium,,Low,Medium,Communication,60000,No,Stable"]
        records = load_dataset(write_csv(tmp_path / "blank.csv", rows))

        assert records.iloc[0]['location'] == ""

    def test_missing_column_raises(self, tmp_path):
        """A header without a required column is rejected"""
        header = HEADER.replace(",Salary_USD", "")
        rows = ["Nurse,Healthcare,Medium,Berlin,Low,Medium,Communication,No,Stable"]
        path = write_csv(tmp_path / "short.csv", rows, header=header)

        with pytest.raises(DatasetError, match="Salary_USD"):
            load_dataset(path)

    def test_missing_file_raises(self, tmp_path):
        """An unreadable source raises DatasetError"""
        with pytest.raises(DatasetError):
            load_dataset(tmp_path / "nope.csv")


class TestResolveDatasetPath:
    """Test resolve_dataset_path() precedence"""

    def test_explicit_source_wins(self, monkeypatch):
        """An explicit source is used as-is"""
        monkeypatch.setenv("AI_JOBS_CSV", "/from/env.csv")
        assert resolve_dataset_path("/explicit.csv") == "/explicit.csv"

    def test_env_var(self, monkeypatch):
        """$AI_JOBS_CSV is used when no source is given"""
        monkeypatch.setenv("AI_JOBS_CSV", "/from/env.csv")
        assert resolve_dataset_path() == "/from/env.csv"

    def test_local_file(self, monkeypatch, tmp_path):
        """The CSV in the working directory is picked up"""
        monkeypatch.delenv("AI_JOBS_CSV", raising=False)
        monkeypatch.chdir(tmp_path)
        write_csv(tmp_path / DATASET_FILENAME, ROWS)

        assert resolve_dataset_path() == DATASET_FILENAME

    def test_falls_back_to_kaggle(self, monkeypatch, tmp_path):
        """Without any local source the dataset is downloaded"""
        monkeypatch.delenv("AI_JOBS_CSV", raising=False)
        monkeypatch.chdir(tmp_path)
        download_dir = tmp_path / "download"
        download_dir.mkdir()
        write_csv(download_dir / DATASET_FILENAME, ROWS)
        fake = types.SimpleNamespace(dataset_download=lambda slug: str(download_dir))
        monkeypatch.setitem(sys.modules, "kagglehub", fake)

        assert resolve_dataset_path() == os.path.join(str(download_dir), DATASET_FILENAME)


class TestDownloadDataset:
    """Test download_dataset() locating the CSV"""

    def test_finds_csv_in_subfolder(self, monkeypatch, tmp_path):
        """The CSV is found even when nested one level down"""
        nested = tmp_path / "versions" / "1"
        nested.mkdir(parents=True)
        write_csv(nested / DATASET_FILENAME, ROWS)
        monkeypatch.setitem(sys.modules, "kagglehub",
                            types.SimpleNamespace(dataset_download=lambda slug: str(tmp_path)))

        assert download_dataset() == str(nested / DATASET_FILENAME)

    def test_missing_csv_raises(self, monkeypatch, tmp_path):
        """A download without the CSV raises DatasetError"""
        monkeypatch.setitem(sys.modules, "kagglehub",
                            types.SimpleNamespace(dataset_download=lambda slug: str(tmp_path)))

        with pytest.raises(DatasetError):
            download_dataset()

    def test_download_failure_raises_dataset_error(self, monkeypatch):
        """Network or credential errors from kagglehub surface as DatasetError"""
        def fail(slug):
            raise ConnectionError("Name or service not known")
        monkeypatch.setitem(sys.modules, "kagglehub", types.SimpleNamespace(dataset_download=fail))

        with pytest.raises(DatasetError, match="Could not download"):
            download_dataset()
