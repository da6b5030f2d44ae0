"""Peak list data model.

Chromatographic peaks, the rows that hold them and the peak lists that hold
the rows. A peak list is bound to one or more data files; every row carries
at most one peak per data file and a persistent integer ID.

Peaks are immutable. Annotating a peak with an isotope pattern and charge
produces a new peak (see :meth:`Peak.with_isotope_pattern`).

Examples
--------
>>> raw = RawDataFile("sample_01.mzML")
>>> peak_list = PeakList("sample_01 peaks", [raw])
>>> peak = Peak(mz=500.0, rt=12.3, height=1e5, peak_id=1)
>>> row = PeakListRow(1)
>>> row.add_peak(raw, peak)
>>> peak_list.add_row(row)
>>> peak_list.get_peak_row(peak) is row
True
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np


class IsotopePatternStatus(Enum):
    """Provenance of an isotope pattern."""
    DETECTED = "detected"  # Observed peaks grouped from the data


@dataclass(frozen=True, eq=False)
class IsotopePattern:
    """Ordered (m/z, intensity) pairs of one isotope envelope.

    The first entry is the peak the pattern was built around; the order of
    the remaining entries is defined by whoever builds the pattern.
    """

    mz: np.ndarray
    intensity: np.ndarray
    status: IsotopePatternStatus = IsotopePatternStatus.DETECTED
    description: str = ""

    def __post_init__(self):
        if len(self.mz) != len(self.intensity):
            raise ValueError(
                f"Isotope pattern needs as many intensities as m/z values, "
                f"got {len(self.mz)} m/z and {len(self.intensity)} intensities"
            )

    def __len__(self) -> int:
        return len(self.mz)

    @property
    def data_points(self) -> List[Tuple[float, float]]:
        return [(float(mz), float(i)) for mz, i in zip(self.mz, self.intensity)]

    @property
    def highest_isotope(self) -> Tuple[float, float]:
        """(m/z, intensity) of the most intense isotope."""
        idx = int(np.argmax(self.intensity))
        return float(self.mz[idx]), float(self.intensity[idx])


@dataclass(frozen=True)
class RawDataFile:
    """Reference to the raw data file a peak was detected in."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class Peak:
    """Chromatographic peak.

    Peaks compare and hash by identity: two peaks with equal coordinates
    detected separately are still two peaks.
    """

    mz: float
    rt: float
    height: float
    area: float = 0.0
    peak_id: int = -1
    isotope_pattern: Optional[IsotopePattern] = None
    charge: int = 0  # 0 if unknown

    def with_isotope_pattern(self, pattern: IsotopePattern, charge: int) -> 'Peak':
        """Return a copy of this peak annotated with an isotope pattern and charge."""
        return dataclasses.replace(self, isotope_pattern=pattern, charge=charge)

    def __str__(self) -> str:
        return f"#{self.peak_id} m/z {self.mz:.4f} RT {self.rt:.2f}"


class PeakListRow:
    """One row of a peak list: a persistent ID plus one peak per data file."""

    def __init__(self, row_id: int, comment: str = ""):
        self.row_id = row_id
        self.comment = comment
        self.properties: Dict[str, Any] = {}
        self._peaks: Dict[RawDataFile, Peak] = {}

    def add_peak(self, data_file: RawDataFile, peak: Peak) -> None:
        self._peaks[data_file] = peak

    def get_peak(self, data_file: RawDataFile) -> Optional[Peak]:
        return self._peaks.get(data_file)

    @property
    def peaks(self) -> List[Peak]:
        return list(self._peaks.values())

    @property
    def data_files(self) -> List[RawDataFile]:
        return list(self._peaks.keys())

    def __repr__(self) -> str:
        return f"PeakListRow(row_id={self.row_id}, n_peaks={len(self._peaks)})"


def copy_row_properties(source: PeakListRow, target: PeakListRow) -> None:
    """Copy comment and free-form properties (not peaks) between rows."""
    target.comment = source.comment
    target.properties.update(source.properties)


@dataclass(frozen=True)
class AppliedMethod:
    """Record of one processing step applied to a peak list."""
    description: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.description


class PeakList:
    """Named collection of peak list rows over a fixed set of data files."""

    def __init__(self, name: str, data_files: Iterable[RawDataFile]):
        self.name = name
        self.data_files: Tuple[RawDataFile, ...] = tuple(data_files)
        self.rows: List[PeakListRow] = []
        self.applied_methods: List[AppliedMethod] = []
        self._row_by_peak: Dict[Peak, PeakListRow] = {}

    def add_row(self, row: PeakListRow) -> None:
        self.rows.append(row)
        for peak in row.peaks:
            self._row_by_peak[peak] = row

    def get_peaks(self, data_file: RawDataFile) -> List[Peak]:
        """All peaks detected in one data file, in row order."""
        peaks = []
        for row in self.rows:
            peak = row.get_peak(data_file)
            if peak is not None:
                peaks.append(peak)
        return peaks

    def get_peak_row(self, peak: Peak) -> PeakListRow:
        """Row holding this peak.

        Raises
        ------
        KeyError
            If no row of this peak list holds the peak
        """
        row = self._row_by_peak.get(peak)
        if row is None:
            # Peaks may have been added to rows after add_row()
            self._row_by_peak = {p: r for r in self.rows for p in r.peaks}
            row = self._row_by_peak.get(peak)
        if row is None:
            raise KeyError(f"Peak {peak} is not part of peak list {self.name}")
        return row

    def add_description_of_applied_task(self, method: AppliedMethod) -> None:
        self.applied_methods.append(method)

    def __len__(self) -> int:
        return len(self.rows)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"PeakList(name={self.name!r}, n_rows={len(self.rows)})"
