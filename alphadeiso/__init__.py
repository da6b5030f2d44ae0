"""alphadeiso - Isotope pattern grouping for LC-MS peak lists.

Collapses isotope envelopes in a detected peak list into single peaks
annotated with their isotope pattern and charge state. Pattern fitting runs
in Numba-compiled kernels over NumPy arrays.
"""

__version__ = "0.1.0"

from alphadeiso import peaks
from alphadeiso import taskcontrol
from alphadeiso import features

from alphadeiso.features import (
    IsotopeGrouperParams,
    IsotopeGrouperTask,
    group_isotopes,
)

__all__ = [
    "peaks",
    "taskcontrol",
    "features",
    "IsotopeGrouperParams",
    "IsotopeGrouperTask",
    "group_isotopes",
]
