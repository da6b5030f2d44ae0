"""Tests for the peak list data model and workspace."""

import numpy as np
import pytest

from alphadeiso.peaks import (
    IsotopePattern,
    IsotopePatternStatus,
    Peak,
    PeakList,
    PeakListRow,
    Workspace,
    copy_row_properties,
)


class TestPeak:
    """Test immutable peaks and the annotation builder."""

    def test_with_isotope_pattern(self):
        peak = Peak(mz=500.0, rt=10.0, height=100.0, area=250.0, peak_id=7)
        pattern = IsotopePattern(np.array([500.0, 501.0033]), np.array([100.0, 80.0]))

        annotated = peak.with_isotope_pattern(pattern, 1)

        assert annotated is not peak
        assert (annotated.mz, annotated.rt, annotated.height, annotated.area) == (
            500.0, 10.0, 100.0, 250.0
        )
        assert annotated.peak_id == 7
        assert annotated.isotope_pattern is pattern
        assert annotated.charge == 1
        assert peak.isotope_pattern is None

    def test_peaks_are_frozen(self):
        peak = Peak(mz=500.0, rt=10.0, height=100.0)
        with pytest.raises(AttributeError):
            peak.mz = 501.0

    def test_identity_semantics(self):
        """Equal coordinates do not make two peaks the same peak."""
        a = Peak(mz=500.0, rt=10.0, height=100.0)
        b = Peak(mz=500.0, rt=10.0, height=100.0)
        assert a != b
        assert len({a, b}) == 2


class TestIsotopePattern:
    """Test isotope pattern container."""

    def test_data_points(self):
        pattern = IsotopePattern(
            np.array([500.0, 501.0]), np.array([10.0, 30.0]), description="#1"
        )
        assert len(pattern) == 2
        assert pattern.status == IsotopePatternStatus.DETECTED
        assert pattern.data_points == [(500.0, 10.0), (501.0, 30.0)]
        assert pattern.highest_isotope == (501.0, 30.0)

    def test_grouped_patterns_are_detected(self):
        assert [s.name for s in IsotopePatternStatus] == ["DETECTED"]

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="as many intensities"):
            IsotopePattern(np.array([500.0, 501.0]), np.array([10.0]))


class TestPeakList:
    """Test row lookup and applied-method history."""

    def test_get_peaks_in_row_order(self, make_peak_list, raw_file):
        peak_list = make_peak_list([(300.0, 1.0, 5.0), (200.0, 2.0, 10.0)])
        assert [p.mz for p in peak_list.get_peaks(raw_file)] == [300.0, 200.0]

    def test_get_peak_row(self, make_peak_list, raw_file):
        peak_list = make_peak_list([(300.0, 1.0, 5.0), (200.0, 2.0, 10.0)])
        for row in peak_list.rows:
            assert peak_list.get_peak_row(row.get_peak(raw_file)) is row

    def test_get_peak_row_added_after_row(self, raw_file):
        peak_list = PeakList("late", [raw_file])
        row = PeakListRow(1)
        peak_list.add_row(row)
        peak = Peak(mz=300.0, rt=1.0, height=5.0)
        row.add_peak(raw_file, peak)

        assert peak_list.get_peak_row(peak) is row

    def test_get_peak_row_unknown_peak(self, make_peak_list):
        peak_list = make_peak_list([(300.0, 1.0, 5.0)])
        with pytest.raises(KeyError):
            peak_list.get_peak_row(Peak(mz=300.0, rt=1.0, height=5.0))

    def test_str_is_name(self, make_peak_list):
        assert str(make_peak_list([], name="run 7")) == "run 7"

    def test_copy_row_properties(self, raw_file):
        source = PeakListRow(3, comment="check")
        source.properties["identity"] = "caffeine"
        source.add_peak(raw_file, Peak(mz=195.0877, rt=3.1, height=1e5))
        target = PeakListRow(3)

        copy_row_properties(source, target)

        assert target.comment == "check"
        assert target.properties == {"identity": "caffeine"}
        assert target.peaks == []


class TestWorkspace:
    """Test peak list registration."""

    def test_add_and_remove(self, make_peak_list):
        first = make_peak_list([], name="first")
        second = make_peak_list([], name="second")
        workspace = Workspace([first])

        workspace.add_peak_list(second)
        assert workspace.get_peak_list("second") is second
        assert len(workspace) == 2

        workspace.remove_peak_list(first)
        assert first not in workspace
        assert workspace.get_peak_list("first") is None

    def test_remove_unknown(self, make_peak_list):
        with pytest.raises(ValueError, match="not part of this workspace"):
            Workspace().remove_peak_list(make_peak_list([]))
