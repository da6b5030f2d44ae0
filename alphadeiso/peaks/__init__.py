"""Peak list data model and workspace.

This module provides:
- Immutable chromatographic peaks and isotope patterns
- Peak list rows with persistent IDs
- Peak lists with applied-method history
- A workspace that processing steps publish peak lists into
"""

from .peak_list import (
    AppliedMethod,
    IsotopePattern,
    IsotopePatternStatus,
    Peak,
    PeakList,
    PeakListRow,
    RawDataFile,
    copy_row_properties,
)

from .workspace import Workspace

__all__ = [
    # Data model
    'AppliedMethod',
    'IsotopePattern',
    'IsotopePatternStatus',
    'Peak',
    'PeakList',
    'PeakListRow',
    'RawDataFile',
    'copy_row_properties',

    # Workspace
    'Workspace',
]
