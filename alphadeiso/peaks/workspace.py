"""Workspace holding the peak lists of one analysis session."""

import logging
from typing import List, Optional

from .peak_list import PeakList

logger = logging.getLogger(__name__)


class Workspace:
    """Registry of peak lists that processing steps publish into."""

    def __init__(self, peak_lists: Optional[List[PeakList]] = None):
        self.peak_lists: List[PeakList] = list(peak_lists or [])

    def add_peak_list(self, peak_list: PeakList) -> None:
        logger.debug(f"Adding peak list {peak_list} to workspace")
        self.peak_lists.append(peak_list)

    def remove_peak_list(self, peak_list: PeakList) -> None:
        """Remove a peak list.

        Raises
        ------
        ValueError
            If the peak list is not registered
        """
        if not any(pl is peak_list for pl in self.peak_lists):
            raise ValueError(f"Peak list {peak_list} is not part of this workspace")
        logger.debug(f"Removing peak list {peak_list} from workspace")
        self.peak_lists = [pl for pl in self.peak_lists if pl is not peak_list]

    def get_peak_list(self, name: str) -> Optional[PeakList]:
        for peak_list in self.peak_lists:
            if peak_list.name == name:
                return peak_list
        return None

    def __contains__(self, peak_list: PeakList) -> bool:
        return any(pl is peak_list for pl in self.peak_lists)

    def __len__(self) -> int:
        return len(self.peak_lists)
