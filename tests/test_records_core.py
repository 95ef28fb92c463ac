"""Unit tests for records_core: filtering, selection, delete and import."""

import pandas as pd
import pytest

from records_core import (
    ALL_LEVELS,
    LEVELS,
    all_selected,
    decode_upload,
    delete_records,
    filter_records,
    insert_preview,
    prune_selection,
    read_workbook,
    record_ids,
    remove_records,
    sheet_rows,
    toggle_select,
    toggle_select_all,
)
from tests.conftest import FakeClient, employee_rows, upload_contents, workbook_bytes


# =============================================================================
# FILTERING
# =============================================================================


class TestFilterRecords:
    def test_search_is_case_insensitive_on_name(self):
        records = [
            {"id": 1, "name": "Ann", "position": "Dev", "level": "Junior"},
            {"id": 2, "name": "Bo", "position": "QA", "level": "Senior"},
        ]
        assert filter_records(records, "an", "All") == [records[0]]

    def test_search_matches_position(self, sample_records):
        out = filter_records(sample_records, "DEV", ALL_LEVELS)
        assert [r["id"] for r in out] == ["1", "4"]

    def test_every_result_matches_query_and_is_a_subset(self, sample_records):
        for q in ["", "a", "an", "dev", "zzz", "Senior"]:
            out = filter_records(sample_records, q, ALL_LEVELS)
            assert all(r in sample_records for r in out)
            for r in out:
                assert q.lower() in r["name"].lower() or q.lower() in r["position"].lower()

    @pytest.mark.parametrize("level", LEVELS)
    def test_level_filter_keeps_only_that_level(self, sample_records, level):
        out = filter_records(sample_records, "", level)
        assert out
        assert all(r["level"] == level for r in out)

    def test_query_and_level_combine(self, sample_records):
        out = filter_records(sample_records, "dev", "Senior")
        assert [r["id"] for r in out] == ["4"]

    def test_order_is_preserved(self, sample_records):
        reversed_records = list(reversed(sample_records))
        out = filter_records(reversed_records, "", ALL_LEVELS)
        assert out == reversed_records

    def test_empty_list(self):
        assert filter_records([], "x", "Senior") == []

    def test_missing_fields_count_as_empty(self):
        records = [{"name": "Eve", "level": "Junior"}, {"position": "Ops"}]
        assert filter_records(records, "ops", ALL_LEVELS) == [records[1]]
        assert filter_records(records, "", "Junior") == [records[0]]


# =============================================================================
# SELECTION
# =============================================================================


class TestSelection:
    def test_toggle_adds_then_removes(self):
        assert toggle_select([], "1") == ["1"]
        assert toggle_select(["1", "2"], "1") == ["2"]

    def test_double_toggle_is_identity(self):
        for start in ([], ["2"], ["1", "3"]):
            assert sorted(toggle_select(toggle_select(start, "1"), "1")) == sorted(start)

    def test_select_all_on_full_selection_clears(self, sample_records):
        full = record_ids(sample_records)
        assert toggle_select_all(full, sample_records) == []

    def test_select_all_on_partial_selection_selects_every_record(self, sample_records):
        assert toggle_select_all(["2"], sample_records) == ["1", "2", "3", "4"]
        assert toggle_select_all([], sample_records) == ["1", "2", "3", "4"]

    def test_select_all_ignores_active_filter(self, sample_records):
        visible = filter_records(sample_records, "", "Senior")
        assert len(visible) == 2
        assert len(toggle_select_all([], sample_records)) == len(sample_records)

    def test_prune_drops_ids_not_in_records(self, sample_records):
        assert prune_selection(["1", "9", "3"], sample_records) == ["1", "3"]
        assert prune_selection(["1"], []) == []

    def test_all_selected(self, sample_records):
        assert all_selected(record_ids(sample_records), sample_records)
        assert not all_selected(["1"], sample_records)
        assert all_selected([], [])


# =============================================================================
# DELETE
# =============================================================================


class TestDeleteRecords:
    def test_deletes_sequentially_in_given_order(self, sample_records):
        client = FakeClient()
        remaining, failed = delete_records(client, ["3", "1"], sample_records)
        assert client.deleted == ["3", "1"]
        assert record_ids(remaining) == ["2", "4"]
        assert failed == []

    def test_failed_deletes_are_still_pruned(self, sample_records, caplog):
        client = FakeClient(failing_ids={"1", "2"})
        remaining, failed = delete_records(client, ["1", "2"], sample_records)
        assert record_ids(remaining) == ["3", "4"]
        assert failed == ["1", "2"]
        assert "Delete failed for 2 of 2" in caplog.text

    def test_remove_records_leaves_others_untouched(self, sample_records):
        assert remove_records(sample_records, ["4"]) == sample_records[:3]


# =============================================================================
# IMPORT
# =============================================================================


class TestSpreadsheetImport:
    def test_fifteen_rows_yield_ten_preview_rows(self):
        rows = read_workbook(workbook_bytes(employee_rows(15)))
        assert len(rows) == 10
        assert rows[0] == {"name": "Person 0", "position": "Role 0", "level": "Intern"}
        assert rows[-1]["name"] == "Person 9"

    def test_decode_upload_yields_the_workbook(self):
        data = decode_upload(upload_contents(employee_rows(2)))
        assert data[:2] == b"PK"  # xlsx is a zip container
        assert read_workbook(data) == employee_rows(2)

    def test_blank_rows_skipped_and_empty_cells_omitted(self):
        df = pd.DataFrame([
            {"name": "Ann", "position": None, "level": "Junior"},
            {"name": None, "position": None, "level": None},
            {"name": "Bo", "position": "QA", "level": "Senior"},
        ])
        assert sheet_rows(df) == [
            {"name": "Ann", "level": "Junior"},
            {"name": "Bo", "position": "QA", "level": "Senior"},
        ]

    def test_integer_cells_in_a_gappy_column_stay_integers(self):
        df = pd.DataFrame({"name": ["A", "B"], "emp_no": [7, None]})
        rows = sheet_rows(df)
        assert rows == [{"name": "A", "emp_no": 7}, {"name": "B"}]
        assert isinstance(rows[0]["emp_no"], int)

    def test_workbook_integers_survive_blank_cells(self):
        rows = read_workbook(workbook_bytes([{"name": "A", "emp_no": 7, "score": 2.5}, {"name": "B"}]))
        assert rows == [{"name": "A", "emp_no": 7, "score": 2.5}, {"name": "B"}]
        assert isinstance(rows[0]["emp_no"], int)

    def test_not_a_workbook_raises(self):
        with pytest.raises(Exception):
            read_workbook(b"definitely not a spreadsheet")

    def test_insert_appends_exactly_the_preview(self, sample_records):
        client = FakeClient()
        preview = employee_rows(10)
        updated = insert_preview(client, preview, sample_records)
        assert client.inserted == [preview]
        assert updated == sample_records + preview

    def test_insert_failure_returns_none_and_logs(self, sample_records, caplog):
        client = FakeClient(insert_ok=False)
        assert insert_preview(client, employee_rows(3), sample_records) is None
        assert "Error inserting data" in caplog.text

    def test_empty_preview_is_a_no_op(self, sample_records):
        client = FakeClient()
        assert insert_preview(client, [], sample_records) is None
        assert client.inserted == []
