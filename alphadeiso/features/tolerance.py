"""Tolerance model for isotope peak matching.

An isotope peak ``n`` steps away from the seed in direction ``d`` (-1 for
lighter, +1 for heavier) of an ion with charge ``z`` is expected at::

    expected_mz = seed_mz + d * n * ISOTOPE_DISTANCE / z

A candidate matches that position when its m/z is within ``mz_tolerance``
(inclusive) and its RT within ``rt_tolerance`` (exclusive) of the seed.

All functions are Numba-compiled so they can be called from the pattern
fitting kernels.
"""

from numba import njit

from alphadeiso.constants import ISOTOPE_DISTANCE


@njit
def expected_isotope_mz(seed_mz: float, direction: int, n: int, charge: int) -> float:
    """Expected m/z of the n-th isotope peak next to the seed.

    Args:
        seed_mz: m/z of the seed peak
        direction: -1 for peaks below the seed, +1 for peaks above
        n: Isotope step (1 = adjacent peak)
        charge: Charge state (>= 1)

    Returns:
        Expected m/z in Da
    """
    return seed_mz + direction * n * ISOTOPE_DISTANCE / charge


@njit
def within_mz_tolerance(mz: float, expected_mz: float, mz_tolerance: float) -> bool:
    return abs(mz - expected_mz) <= mz_tolerance


@njit
def within_rt_tolerance(rt: float, seed_rt: float, rt_tolerance: float) -> bool:
    # Strict: a zero RT tolerance matches nothing
    return abs(rt - seed_rt) < rt_tolerance


@njit
def matches_isotope_position(
    mz: float,
    rt: float,
    expected_mz: float,
    seed_rt: float,
    mz_tolerance: float,
    rt_tolerance: float
) -> bool:
    """Check whether a peak sits at an expected isotope position.

    Args:
        mz: Candidate m/z
        rt: Candidate RT
        expected_mz: Expected isotope m/z (see expected_isotope_mz)
        seed_rt: RT of the seed peak
        mz_tolerance: Absolute m/z tolerance (Da)
        rt_tolerance: Absolute RT tolerance

    Returns:
        True if the candidate is within both tolerances
    """
    return (
        within_mz_tolerance(mz, expected_mz, mz_tolerance)
        and within_rt_tolerance(rt, seed_rt, rt_tolerance)
    )
