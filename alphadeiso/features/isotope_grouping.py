"""
Greedy isotope pattern grouping with automatic charge detection.

Peaks are visited in order of descending height. Around each seed peak the
isotope envelope is fitted for every allowed charge state by walking away
from the seed in steps of ``ISOTOPE_DISTANCE / charge`` and taking the
strongest co-eluting peak at each step. The charge explaining the most peaks
wins (ties go to the lower charge). Multi-peak groups are collapsed into the
seed and their peaks are removed from the candidate pool.

Examples
--------
>>> pool = CandidatePool(peaks)
>>> params = IsotopeGrouperParams(mz_tolerance=0.01, rt_tolerance=0.1)
>>> charge, fitted = select_best_charge(pool, 0, params)
>>> pattern = build_isotope_pattern(pool, fitted, str(pool.peaks[0]))
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple

import numpy as np
from numba import njit

from alphadeiso.constants import (
    DEFAULT_MAXIMUM_CHARGE,
    DEFAULT_MZ_TOLERANCE,
    DEFAULT_RT_TOLERANCE,
    DEFAULT_SUFFIX,
)
from alphadeiso.peaks import (
    IsotopePattern,
    IsotopePatternStatus,
    Peak,
    PeakListRow,
    RawDataFile,
    copy_row_properties,
)
from .tolerance import expected_isotope_mz, matches_isotope_position


@dataclass
class IsotopeGrouperParams:
    """Parameters for isotope pattern grouping.

    Tolerances are absolute (Da for m/z, peak list units for RT).
    """

    # Appended to the source peak list name
    suffix: str = DEFAULT_SUFFIX

    # Allowed deviation from the expected isotope m/z (Da)
    mz_tolerance: float = DEFAULT_MZ_TOLERANCE

    # Allowed RT difference to the seed peak
    rt_tolerance: float = DEFAULT_RT_TOLERANCE

    # Only search above the seed m/z (seed is assumed to be the monoisotopic peak)
    monotonic_shape: bool = False

    # Charges 1..maximum_charge are tried
    maximum_charge: int = DEFAULT_MAXIMUM_CHARGE

    # Remove the source peak list from the workspace after grouping
    auto_remove: bool = False

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'IsotopeGrouperParams':
        """Create parameters from a mapping, e.g. a host's parameter set.

        Args:
            values: Parameter names and values; missing names keep defaults

        Returns:
            IsotopeGrouperParams

        Raises:
            ValueError: If the mapping contains an unknown parameter name
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(
                f"Unknown isotope grouper parameter(s): {', '.join(unknown)}. "
                f"Known parameters: {', '.join(sorted(known))}"
            )
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


class CandidatePool:
    """Peaks still available for seeding or matching.

    Peaks are sorted once by descending height (stable, so equal heights keep
    their input order). Pool indices refer to that order. Consumed peaks stay
    in the arrays but are masked out of every later search.
    """

    def __init__(self, peaks: Sequence[Peak]):
        heights = np.array([p.height for p in peaks], dtype=np.float64)
        order = np.argsort(-heights, kind='stable')

        self.peaks = [peaks[i] for i in order]
        self.mz = np.array([p.mz for p in self.peaks], dtype=np.float64)
        self.rt = np.array([p.rt for p in self.peaks], dtype=np.float64)
        self.height = heights[order]
        self.consumed = np.zeros(len(self.peaks), dtype=np.bool_)

    def __len__(self) -> int:
        return len(self.peaks)

    def is_consumed(self, idx: int) -> bool:
        return bool(self.consumed[idx])

    def consume(self, indices: np.ndarray) -> None:
        self.consumed[indices] = True

    @property
    def n_available(self) -> int:
        return int(len(self.consumed) - self.consumed.sum())


@njit
def find_best_candidate(
    expected_mz: float,
    seed_rt: float,
    mz_array: np.ndarray,
    rt_array: np.ndarray,
    height_array: np.ndarray,
    consumed: np.ndarray,
    fitted: np.ndarray,
    mz_tolerance: float,
    rt_tolerance: float
) -> int:
    """Find the strongest available peak at an expected isotope position.

    Full linear scan in pool order. On equal heights the first peak seen
    wins (strict comparison).

    Args:
        expected_mz: Expected isotope m/z
        seed_rt: RT of the seed peak
        mz_array: Pool m/z values
        rt_array: Pool RT values
        height_array: Pool heights
        consumed: Pool consumption mask
        fitted: Peaks already in the pattern being fitted
        mz_tolerance: m/z tolerance (Da)
        rt_tolerance: RT tolerance

    Returns:
        Pool index of the best candidate, or -1 if none qualifies
    """
    best_idx = -1
    best_height = 0.0

    for i in range(len(mz_array)):
        if consumed[i] or fitted[i]:
            continue

        if not matches_isotope_position(
            mz_array[i], rt_array[i], expected_mz, seed_rt, mz_tolerance, rt_tolerance
        ):
            continue

        if best_idx < 0 or height_array[i] > best_height:
            best_idx = i
            best_height = height_array[i]

    return best_idx


@njit
def fit_half_pattern(
    seed_idx: int,
    charge: int,
    direction: int,
    mz_array: np.ndarray,
    rt_array: np.ndarray,
    height_array: np.ndarray,
    consumed: np.ndarray,
    fitted: np.ndarray,
    fitted_order: np.ndarray,
    n_fitted: int,
    mz_tolerance: float,
    rt_tolerance: float
) -> int:
    """Extend a pattern on one side of the seed.

    Walks n = 1, 2, ... until no candidate is found at the n-th expected
    position. Found peaks are flagged in ``fitted`` and appended to
    ``fitted_order``.

    Returns:
        New number of entries in fitted_order
    """
    seed_mz = mz_array[seed_idx]
    seed_rt = rt_array[seed_idx]

    n = 1
    while True:
        expected_mz = expected_isotope_mz(seed_mz, direction, n, charge)
        best_idx = find_best_candidate(
            expected_mz, seed_rt,
            mz_array, rt_array, height_array,
            consumed, fitted,
            mz_tolerance, rt_tolerance
        )
        if best_idx < 0:
            break

        fitted[best_idx] = True
        fitted_order[n_fitted] = best_idx
        n_fitted += 1
        n += 1

    return n_fitted


@njit
def fit_pattern(
    seed_idx: int,
    charge: int,
    mz_array: np.ndarray,
    rt_array: np.ndarray,
    height_array: np.ndarray,
    consumed: np.ndarray,
    mz_tolerance: float,
    rt_tolerance: float,
    monotonic_shape: bool
) -> np.ndarray:
    """Fit an isotope pattern of one charge state around a seed peak.

    Returns:
        Pool indices of the pattern: seed first, then peaks below the seed
        (unless monotonic_shape) by increasing distance, then peaks above
        the seed by increasing distance
    """
    n_peaks = len(mz_array)
    fitted = np.zeros(n_peaks, dtype=np.bool_)
    fitted_order = np.empty(n_peaks, dtype=np.int64)

    fitted[seed_idx] = True
    fitted_order[0] = seed_idx
    n_fitted = 1

    if not monotonic_shape:
        n_fitted = fit_half_pattern(
            seed_idx, charge, -1,
            mz_array, rt_array, height_array,
            consumed, fitted, fitted_order, n_fitted,
            mz_tolerance, rt_tolerance
        )

    n_fitted = fit_half_pattern(
        seed_idx, charge, 1,
        mz_array, rt_array, height_array,
        consumed, fitted, fitted_order, n_fitted,
        mz_tolerance, rt_tolerance
    )

    return fitted_order[:n_fitted]


def select_best_charge(
    pool: CandidatePool,
    seed_idx: int,
    params: IsotopeGrouperParams
) -> Tuple[int, np.ndarray]:
    """Find the charge state that explains the most peaks around a seed.

    Every charge in 1..maximum_charge is fitted. The score is the number of
    peaks in the pattern; on equal scores the lower charge wins.

    Args:
        pool: Candidate pool
        seed_idx: Pool index of the seed peak
        params: Grouping parameters

    Returns:
        (charge, fitted pool indices)

    Raises:
        ValueError: If maximum_charge is below 1
    """
    if params.maximum_charge < 1:
        raise ValueError(
            f"maximum_charge must be at least 1, got {params.maximum_charge}"
        )

    best_charge = 0
    best_fitted = None

    for charge in range(1, params.maximum_charge + 1):
        fitted = fit_pattern(
            seed_idx, charge,
            pool.mz, pool.rt, pool.height, pool.consumed,
            params.mz_tolerance, params.rt_tolerance,
            params.monotonic_shape
        )
        if best_fitted is None or len(fitted) > len(best_fitted):
            best_charge = charge
            best_fitted = fitted

    return best_charge, best_fitted


def build_isotope_pattern(
    pool: CandidatePool,
    fitted: np.ndarray,
    description: str
) -> IsotopePattern:
    """Build a detected isotope pattern from fitted pool indices (order kept)."""
    return IsotopePattern(
        mz=pool.mz[fitted],
        intensity=pool.height[fitted],
        status=IsotopePatternStatus.DETECTED,
        description=description,
    )


def collapse_group(
    seed: Peak,
    old_row: PeakListRow,
    data_file: RawDataFile,
    pattern: IsotopePattern,
    charge: int
) -> PeakListRow:
    """Replace a seed's row by a row holding the annotated seed.

    The new row keeps the old row's ID and properties.
    """
    new_peak = seed.with_isotope_pattern(pattern, charge)
    new_row = PeakListRow(old_row.row_id)
    copy_row_properties(old_row, new_row)
    new_row.add_peak(data_file, new_peak)
    return new_row
