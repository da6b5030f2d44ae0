"""Isotope pattern grouping for LC-MS peak lists.

This module provides:
- Tolerance model for expected isotope positions
- Greedy isotope pattern fitting with automatic charge state selection
- Collapsing of isotope groups into annotated seed peaks
- The isotopic peaks grouper task (driver loop and output assembly)
"""

from .tolerance import (
    expected_isotope_mz,
    matches_isotope_position,
    within_mz_tolerance,
    within_rt_tolerance,
)

from .isotope_grouping import (
    CandidatePool,
    IsotopeGrouperParams,
    build_isotope_pattern,
    collapse_group,
    find_best_candidate,
    fit_half_pattern,
    fit_pattern,
    select_best_charge,
)

from .grouper_task import (
    IsotopeGrouperTask,
    group_isotopes,
)

__all__ = [
    # Tolerance model
    'expected_isotope_mz',
    'matches_isotope_position',
    'within_mz_tolerance',
    'within_rt_tolerance',

    # Pattern fitting and charge selection
    'CandidatePool',
    'IsotopeGrouperParams',
    'find_best_candidate',
    'fit_half_pattern',
    'fit_pattern',
    'select_best_charge',

    # Group aggregation
    'build_isotope_pattern',
    'collapse_group',

    # Driver
    'IsotopeGrouperTask',
    'group_isotopes',
]
