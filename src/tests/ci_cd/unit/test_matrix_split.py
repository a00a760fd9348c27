"""Unit tests for matrix splitting and JSON output."""

import pytest
from _test_helpers import create_matrix_item as make_item

from crossver.errors import MatrixTooLargeError
from crossver.matrix.filters import filter_by_flavors_and_versions, parse_csv
from crossver.matrix.items import MatrixItem
from crossver.matrix.split import MAX_MATRIX_SIZE, split_matrix, to_matrix_json


def make_items(count: int) -> list[MatrixItem]:
    return [make_item(version=f"1.{i}.0") for i in range(count)]


class TestSplitMatrix:
    """Test split_matrix."""

    def test_small_matrix_fits_in_first(self):
        """Verify up to the limit everything goes to the first matrix."""
        matrix1, matrix2 = split_matrix(make_items(MAX_MATRIX_SIZE))

        assert len(matrix1) == MAX_MATRIX_SIZE
        assert matrix2 == []

    def test_empty(self):
        """Verify an empty input gives two empty matrices."""
        assert split_matrix([]) == ([], [])

    def test_large_matrix_split_evenly(self):
        """Verify overflowing jobs are split in halves."""
        matrix1, matrix2 = split_matrix(make_items(MAX_MATRIX_SIZE + 1))

        assert len(matrix1) == 129
        assert len(matrix2) == 128

    def test_too_large_raises(self):
        """Verify jobs beyond two matrices raise."""
        with pytest.raises(MatrixTooLargeError, match="513 jobs"):
            split_matrix(make_items(2 * MAX_MATRIX_SIZE + 1))

    def test_custom_max_size(self):
        """Verify the limit is configurable."""
        matrix1, matrix2 = split_matrix(make_items(5), max_size=3)

        assert (len(matrix1), len(matrix2)) == (3, 2)

    def test_items_sorted(self):
        """Verify ordering by flavor, category, then version with dev last."""
        items = [
            make_item("xgboost", "models", "2.0.0"),
            make_item("sklearn", "models", "dev"),
            make_item("sklearn", "models", "1.10.0"),
            make_item("sklearn", "autologging", "1.2.0"),
            make_item("sklearn", "models", "1.9.0"),
        ]

        matrix1, _ = split_matrix(items)

        assert [item.job_name for item in matrix1] == [
            "sklearn / autologging / 1.2.0",
            "sklearn / models / 1.9.0",
            "sklearn / models / 1.10.0",
            "sklearn / models / dev",
            "xgboost / models / 2.0.0",
        ]


class TestToMatrixJson:
    """Test the JSON form of a matrix."""

    def test_include_list(self):
        """Verify items are wrapped in an include list."""
        result = to_matrix_json([make_item()])

        assert list(result) == ["include"]
        assert result["include"][0]["job_name"] == "sklearn / models / 1.0.0"

    def test_none_fields_omitted(self):
        """Verify unset optional fields are dropped."""
        entry = to_matrix_json([make_item()])["include"][0]

        assert "pre_test" not in entry
        assert entry["free_disk_space"] is False

    def test_pre_test_kept_when_set(self):
        """Verify set optional fields are kept."""
        entry = to_matrix_json([make_item(pre_test="echo hi")])["include"][0]

        assert entry["pre_test"] == "echo hi"

    def test_empty(self):
        """Verify an empty matrix serializes to an empty include list."""
        assert to_matrix_json([]) == {"include": []}


class TestFilterByFlavorsAndVersions:
    """Test manual flavor and version filters."""

    ITEMS = [
        make_item("sklearn", version="1.0.0"),
        make_item("sklearn", version="dev"),
        make_item("xgboost", version="2.0.0"),
        make_item("lightgbm", version="4.0.0"),
    ]

    def test_no_filters(self):
        """Verify empty filters keep everything."""
        assert filter_by_flavors_and_versions(self.ITEMS, "", None) == set(self.ITEMS)

    def test_flavor_filter_ignores_whitespace(self):
        """Verify flavors are matched after stripping."""
        result = filter_by_flavors_and_versions(self.ITEMS, " sklearn, xgboost ")

        assert {item.flavor for item in result} == {"sklearn", "xgboost"}

    def test_version_filter(self):
        """Verify versions, including dev, are matched exactly."""
        result = filter_by_flavors_and_versions(self.ITEMS, versions="dev, 2.0.0")

        assert {item.job_name for item in result} == {
            "sklearn / models / dev",
            "xgboost / models / 2.0.0",
        }

    def test_combined_filters(self):
        """Verify both filters must match."""
        result = filter_by_flavors_and_versions(self.ITEMS, "sklearn", "2.0.0")

        assert result == set()

    def test_parse_csv(self):
        """Verify blanks are dropped."""
        assert parse_csv("a, ,b,") == {"a", "b"}
        assert parse_csv(None) == set()
