"""Physical constants for isotope pattern grouping.

Key Features
------------
- Empirical average isotope spacing used by the deisotoper (1.0033 Da)
- Exact 13C spacing and neutron mass for reference
- Default grouping tolerances

Sources
-------
- NIST physical constants: https://physics.nist.gov/cgi-bin/cuu/Value
"""

# =============================================================================
# Isotope Spacing
# =============================================================================

# Neutron mass
# Source: NIST 2018 CODATA
NEUTRON_MASS = 1.00866491595  # Da

# 13C - 12C mass difference
C13_MASS_DIFF = 1.0033548  # Da

# Expected distance between neighbouring isotope peaks.
# Part of the neutron mass is lost as binding energy, and the real increase
# depends on the (unknown) elemental formula. ~1.0033 Da is a good average,
# the rest is absorbed by the user's m/z tolerance.
ISOTOPE_DISTANCE = 1.0033  # Da

# =============================================================================
# Default Grouping Settings
# =============================================================================

DEFAULT_SUFFIX = "deisotoped"
DEFAULT_MZ_TOLERANCE = 0.001  # Da
DEFAULT_RT_TOLERANCE = 0.1    # RT units of the peak list
DEFAULT_MAXIMUM_CHARGE = 1
