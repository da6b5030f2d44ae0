"""Isotopic peaks grouper: driver loop, output assembly and task wrapper.

:func:`group_isotopes` runs the grouping over one peak list and returns the
deisotoped peak list. :class:`IsotopeGrouperTask` wraps it in the task status
protocol and publishes the result into a workspace.

Examples
--------
>>> params = IsotopeGrouperParams(mz_tolerance=0.005, rt_tolerance=0.2,
...                               maximum_charge=3)
>>> task = IsotopeGrouperTask(peak_list, params, workspace)
>>> task.run()
>>> task.status
<TaskStatus.FINISHED: 'finished'>
>>> deisotoped = task.created_objects[0]
"""

import logging
from typing import Callable, List, Optional

from alphadeiso.peaks import AppliedMethod, PeakList, Workspace
from alphadeiso.taskcontrol import CancellationHandle, Task
from .isotope_grouping import (
    CandidatePool,
    IsotopeGrouperParams,
    build_isotope_pattern,
    collapse_group,
    select_best_charge,
)

logger = logging.getLogger(__name__)

METHOD_DESCRIPTION = "Isotopic peaks grouper"


def group_isotopes(
    peak_list: PeakList,
    params: IsotopeGrouperParams,
    handle: Optional[CancellationHandle] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None
) -> Optional[PeakList]:
    """Group isotope peaks of a single-file peak list.

    Seeds are visited once each in order of descending height. A seed
    without isotope partners is passed through with its original row. A seed
    with partners is replaced by a new row (same ID) holding the seed
    annotated with the isotope pattern and charge, and all peaks of the
    pattern are consumed.

    Args:
        peak_list: Source peak list, bound to exactly one data file
        params: Grouping parameters
        handle: Checked before every seed; when cancelled, grouping stops
            and nothing is returned
        progress_callback: Called as progress_callback(processed, total)
            after every seed

    Returns:
        New peak list named "<source> <suffix>" carrying the source's
        applied-method history plus this step, or None if cancelled

    Raises:
        ValueError: If the peak list is not bound to exactly one data file
    """
    if len(peak_list.data_files) != 1:
        raise ValueError(
            f"Isotope grouping needs a peak list with exactly one data file, "
            f"{peak_list} has {len(peak_list.data_files)}"
        )
    data_file = peak_list.data_files[0]

    deisotoped = PeakList(f"{peak_list} {params.suffix}", peak_list.data_files)

    pool = CandidatePool(peak_list.get_peaks(data_file))
    total_peaks = len(pool)
    if total_peaks == 0:
        logger.warning(f"Peak list {peak_list} has no peaks in {data_file}")

    n_groups = 0
    n_grouped_peaks = 0

    for seed_idx in range(total_peaks):
        if handle is not None and handle.cancelled:
            return None

        if not pool.is_consumed(seed_idx):
            seed = pool.peaks[seed_idx]
            charge, fitted = select_best_charge(pool, seed_idx, params)
            old_row = peak_list.get_peak_row(seed)

            if len(fitted) == 1:
                deisotoped.add_row(old_row)
            else:
                pattern = build_isotope_pattern(pool, fitted, str(seed))
                deisotoped.add_row(
                    collapse_group(seed, old_row, data_file, pattern, charge)
                )
                pool.consume(fitted)

                n_groups += 1
                n_grouped_peaks += len(fitted)
                logger.debug(
                    f"Row {old_row.row_id}: {len(fitted)} isotopes, charge {charge}"
                )

        if progress_callback is not None:
            progress_callback(seed_idx + 1, total_peaks)

    for method in peak_list.applied_methods:
        deisotoped.add_description_of_applied_task(method)
    deisotoped.add_description_of_applied_task(
        AppliedMethod(METHOD_DESCRIPTION, params.to_dict())
    )

    logger.info(
        f"Grouped {n_grouped_peaks:,} of {total_peaks:,} peaks into "
        f"{n_groups:,} isotope patterns ({len(deisotoped):,} rows)"
    )

    return deisotoped


class IsotopeGrouperTask(Task):
    """Run isotope grouping on one peak list and publish the result.

    The new peak list is added to the workspace only when the run finishes;
    with auto_remove the source peak list is removed afterwards.
    """

    def __init__(
        self,
        peak_list: PeakList,
        params: IsotopeGrouperParams,
        workspace: Workspace
    ):
        super().__init__()
        self.peak_list = peak_list
        self.params = params
        self.workspace = workspace

        self.processed_peaks = 0
        self.total_peaks = 0
        self._deisotoped: Optional[PeakList] = None

    @property
    def description(self) -> str:
        return f"{METHOD_DESCRIPTION} on {self.peak_list}"

    @property
    def finished_percentage(self) -> float:
        if self.total_peaks == 0:
            return 0.0
        return self.processed_peaks / self.total_peaks

    @property
    def created_objects(self) -> List[PeakList]:
        if self._deisotoped is None:
            return []
        return [self._deisotoped]

    def _update_progress(self, processed: int, total: int) -> None:
        self.processed_peaks = processed
        self.total_peaks = total

    def process(self) -> bool:
        logger.info(f"Running isotopic peak grouper on {self.peak_list}")

        # Nothing may be published if the source cannot be removed afterwards
        if self.params.auto_remove and self.peak_list not in self.workspace:
            raise ValueError(
                f"Cannot auto-remove peak list {self.peak_list}: "
                f"it is not part of the workspace"
            )

        deisotoped = group_isotopes(
            self.peak_list, self.params,
            handle=self.handle,
            progress_callback=self._update_progress,
        )
        if deisotoped is None:
            return False

        self.workspace.add_peak_list(deisotoped)
        if self.params.auto_remove:
            self.workspace.remove_peak_list(self.peak_list)

        self._deisotoped = deisotoped
        logger.info(f"Finished isotopic peak grouper on {self.peak_list}")
        return True
