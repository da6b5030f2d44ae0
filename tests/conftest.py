"""Pytest configuration for alphadeiso tests.

Provides peak list builders shared by the unit tests. Peaks are given as
(mz, rt, height) tuples; the n-th tuple becomes peak and row ID n (1-based).
"""

import numpy as np
import pytest

from alphadeiso.constants import ISOTOPE_DISTANCE
from alphadeiso.peaks import Peak, PeakList, PeakListRow, RawDataFile


@pytest.fixture
def raw_file():
    """Single raw data file most peak lists are bound to."""
    return RawDataFile("sample_01.mzML")


@pytest.fixture
def make_peak_list(raw_file):
    """Factory building a single-file peak list from (mz, rt, height) tuples."""
    def _make(peak_specs, name="sample_01 peaks"):
        peak_list = PeakList(name, [raw_file])
        for i, (mz, rt, height) in enumerate(peak_specs, start=1):
            peak = Peak(mz=mz, rt=rt, height=height, peak_id=i)
            row = PeakListRow(i, comment=f"feature {i}")
            row.add_peak(raw_file, peak)
            peak_list.add_row(row)
        return peak_list
    return _make


@pytest.fixture
def make_envelope():
    """Factory for synthetic isotope envelopes with decaying intensity."""
    def _make(mono_mz, charge, n_isotopes=3, rt=10.0, height=1e6, decay=0.6):
        spacing = ISOTOPE_DISTANCE / charge
        return [
            (mono_mz + k * spacing, rt, height * decay ** k)
            for k in range(n_isotopes)
        ]
    return _make


@pytest.fixture
def three_peak_chain():
    """Charge 1 chain at 500 Da with heights 100, 80, 50."""
    return [
        (500.0000, 10.0, 100.0),
        (501.0033, 10.0, 80.0),
        (502.0066, 10.0, 50.0),
    ]


# Random seed for reproducibility
@pytest.fixture(scope="session", autouse=True)
def set_random_seed():
    """Set random seed for reproducible tests."""
    np.random.seed(42)
