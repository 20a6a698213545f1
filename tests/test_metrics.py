# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.01.13
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_metrics.py

"""Unit tests for derived metrics and rendering."""

import pytest

from rsync_analyzer import (
    ChangeType,
    Statistics,
    changes_by_type,
    describe_statistics,
    efficiency_percentage,
    filter_changes,
    format_bytes,
    render_summary,
)
from tests.fixtures.rsync_output_fixture import DRY_RUN_OUTPUT, LIVE_RUN_OUTPUT


@pytest.fixture
def dry_run(analyzer):
    return analyzer.analyze(DRY_RUN_OUTPUT)


class TestFormatBytes:

    @pytest.mark.parametrize("value,expected", [
        (0, "0 bytes"),
        (1, "1 byte"),
        (999, "999 bytes"),
        (1000, "1 KB"),
        (1_500_000, "1.5 MB"),
        (3_045_821_112, "3.05 GB"),
        (-2048, "-2 KB"),
    ])
    def test_decimal(self, value, expected):
        assert format_bytes(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (1023, "1023 bytes"),
        (1024, "1 KiB"),
        (1_572_864, "1.5 MiB"),
        (5 * 1024 ** 4, "5.00 TiB"),
    ])
    def test_binary(self, value, expected):
        assert format_bytes(value, binary=True) == expected


class TestEfficiency:

    def test_zero_total_size(self):
        stats = Statistics(total_file_size=0, total_transferred_size=500)
        assert efficiency_percentage(stats) == 0

    def test_ratio(self, dry_run):
        expected = 1632044 / 3045821112 * 100
        assert efficiency_percentage(dry_run.statistics) == pytest.approx(expected)


class TestGrouping:

    def test_changes_by_type(self, dry_run):
        assert changes_by_type(dry_run) == {
            ChangeType.DIRECTORY: 2,
            ChangeType.FILE: 2,
            ChangeType.SYMLINK: 1,
            ChangeType.DELETION: 1,
        }

    def test_filter_by_search_text(self, dry_run):
        found = filter_changes(dry_run.itemized_changes, "NEWDIR")
        assert [c.path for c in found] == ["newdir/", "newdir/new file.txt"]

    def test_filter_by_type(self, dry_run):
        found = filter_changes(dry_run.itemized_changes,
                               change_types={ChangeType.DELETION, ChangeType.SYMLINK})
        assert [c.path for c in found] == ["latest", "old/obsolete.log"]

    def test_filter_combined(self, dry_run):
        found = filter_changes(dry_run.itemized_changes, "docs", [ChangeType.FILE])
        assert [c.path for c in found] == ["docs/report.txt"]

    def test_no_filters_keeps_everything(self, dry_run):
        assert filter_changes(dry_run.itemized_changes) == list(dry_run.itemized_changes)


class TestRendering:

    def test_summary_dry_run(self, dry_run):
        text = render_summary(dry_run)
        assert "Run Type: DRY RUN (simulation)" in text
        assert "No actual changes were made" in text
        assert "Total items: 6" in text
        assert "Files created: 3" in text
        assert "Transfer speedup: 1787.9x" in text
        assert "  Deletion: 1" in text

    def test_summary_live_run(self, analyzer):
        text = render_summary(analyzer.analyze(LIVE_RUN_OUTPUT))
        assert "Run Type: LIVE RUN" in text
        assert "No actual changes" not in text
        assert "Data efficiency: 20.0%" in text

    def test_summary_counts_errors(self, analyzer):
        result = analyzer.analyze("rsync error: boom\n" + LIVE_RUN_OUTPUT)
        assert "Found 1 error(s)" in render_summary(result)

    def test_describe_statistics(self, dry_run):
        text = describe_statistics(dry_run.statistics)
        assert "Total files: 16087 total (reg: 14321, dir: 1721, link: 45)" in text
        assert "Total size: 3.05 GB" in text
        assert "Efficiency: 0.05%" in text
        assert "Errors:" not in text
