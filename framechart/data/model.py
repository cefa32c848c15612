"""
XyModel: the set of datasets plotted on one xy chart.

Each dataset is stored under an integer index that the plot uses to look up
its render style and range axis. The model can also unify all datasets into
a single domain-aligned table.
"""
import logging
from typing import Callable, Dict, Hashable, Iterator, List, Optional, Tuple, Union

import pandas as pd

from ..errors import ChartError
from ..logging_utils import log_data_preparation, is_debug_mode
from ..types import DomainType, is_categorical
from .dataset import FrameSupplier, Observable, XyDataset

logger = logging.getLogger(__name__)

FrameSource = Union[pd.DataFrame, FrameSupplier, None]


def _as_dataset(source: FrameSource, domain_key: Optional[Hashable]) -> XyDataset:
    supplier = source if callable(source) else (lambda: source)
    return XyDataset(supplier, domain_key)


def unify_datasets(datasets: List[XyDataset]) -> XyDataset:
    """
    Combine datasets into one, aligned on the union of their domain values.

    Args:
        datasets: Datasets to combine, in plot order

    Returns:
        The only dataset when there is one, an empty dataset when there are
        none, otherwise a new dataset over the combined frame

    Raises:
        ChartError: If domain types differ, naive and tz-aware datetimes are mixed,
            or a series key appears twice
    """
    if not datasets:
        return XyDataset.empty()
    if len(datasets) == 1:
        return datasets[0]

    non_empty = [dataset for dataset in datasets if not dataset.is_empty]
    if not non_empty:
        return XyDataset.empty()

    domain_types = {dataset.domain_type for dataset in non_empty}
    if len(domain_types) > 1:
        names = sorted(t.value for t in domain_types)
        raise ChartError(f"Non-homogeneous key types for domain dimension: {names}")
    domain_type: DomainType = domain_types.pop()
    if domain_type in (DomainType.DATE, DomainType.DATETIME):
        aware = {getattr(dataset.domain_values, "tz", None) is not None for dataset in non_empty}
        if len(aware) > 1:
            raise ChartError("Non-homogeneous key types for domain dimension: tz-naive and tz-aware datetimes")

    with log_data_preparation(f"Unifying {len(non_empty)} datasets"):
        seen = set()
        parts = []
        for dataset in non_empty:
            for key in dataset.series_keys:
                if key in seen:
                    raise ChartError(f"Duplicate series key '{key}' across datasets")
                seen.add(key)

            part = pd.DataFrame(
                {key: dataset.series_values(key) for key in dataset.series_keys},
                index=dataset.domain_values,
                columns=dataset.series_keys,
            )
            part.index.name = None
            part = part[part.index.notna()]
            if not part.index.is_unique:
                logger.warning(f"⚠️  Dropping duplicate domain values in {dataset!r}")
                part = part[~part.index.duplicated(keep="first")]
            parts.append(part)

        combined = pd.concat(parts, axis=1, join="outer", sort=False)
        if not is_categorical(domain_type):
            combined = combined.sort_index()

        if is_debug_mode():
            logger.debug(f"  → Unified frame: {combined.shape[0]} rows, {combined.shape[1]} series")

    return XyDataset.of(combined)


class XyModel(Observable):
    """
    Indexed collection of datasets for an xy plot.

    Listeners registered on the model are told about structural changes and
    about changes fired by any contained dataset.
    """

    def __init__(self):
        super().__init__()
        self._datasets: Dict[int, XyDataset] = {}
        self._range_axes: Dict[int, int] = {}
        self._unified: Optional[XyDataset] = None

    def _on_dataset_changed(self, dataset: XyDataset) -> None:
        self._unified = None
        self.fire_changed()

    def _changed(self) -> None:
        self._unified = None
        self.fire_changed()

    def __len__(self) -> int:
        return len(self._datasets)

    def __iter__(self) -> Iterator[Tuple[int, XyDataset]]:
        return iter(sorted(self._datasets.items()))

    @property
    def is_empty(self) -> bool:
        return all(dataset.is_empty for dataset in self._datasets.values())

    @property
    def indexes(self) -> List[int]:
        return sorted(self._datasets)

    def add(self, source: FrameSource, domain_key: Optional[Hashable] = None) -> int:
        """
        Add a dataset built from a frame (or frame supplier).

        Args:
            source: DataFrame, or zero-argument callable returning one
            domain_key: Column holding domain values; the row index when None

        Returns:
            Index of the new dataset (the first dataset gets 0)
        """
        return self.add_dataset(_as_dataset(source, domain_key))

    def add_dataset(self, dataset: XyDataset) -> int:
        index = max(self._datasets, default=-1) + 1
        self._datasets[index] = dataset
        dataset.add_listener(self._on_dataset_changed)
        self._changed()
        return index

    def at(self, index: int) -> XyDataset:
        dataset = self._datasets.get(index)
        if dataset is None:
            raise ChartError(f"No dataset exists for index: {index}")
        return dataset

    def update(self, index: int, source: FrameSource, domain_key: Optional[Hashable] = None) -> XyDataset:
        """Replace the dataset at ``index``, keeping its range axis assignment."""
        previous = self.at(index)
        previous.remove_listener(self._on_dataset_changed)
        dataset = _as_dataset(source, domain_key)
        dataset.add_listener(self._on_dataset_changed)
        self._datasets[index] = dataset
        self._changed()
        return dataset

    def remove(self, index: int) -> None:
        dataset = self.at(index)
        dataset.remove_listener(self._on_dataset_changed)
        del self._datasets[index]
        self._range_axes.pop(index, None)
        self._changed()

    def remove_all(self) -> None:
        for dataset in self._datasets.values():
            dataset.remove_listener(self._on_dataset_changed)
        self._datasets.clear()
        self._range_axes.clear()
        self._changed()

    def refresh(self) -> None:
        """Refresh every dataset from its supplier."""
        for _, dataset in self:
            dataset.refresh()

    def set_range_axis(self, dataset_index: int, axis_index: int) -> None:
        self.at(dataset_index)
        if axis_index < 0:
            raise ValueError(f"Range axis index must be >= 0, got {axis_index}")
        self._range_axes[dataset_index] = axis_index
        self._changed()

    def range_axis_of(self, dataset_index: int) -> int:
        return self._range_axes.get(dataset_index, 0)

    def range_axis_index(self, series_key: Hashable) -> int:
        """Range axis of the first dataset holding ``series_key``, 0 when none does."""
        for index, dataset in self:
            if dataset.contains(series_key):
                return self.range_axis_of(index)
        return 0

    def dataset_index(self, series_key: Hashable) -> int:
        if not self._datasets:
            raise ChartError("No datasets in model")
        for index, dataset in self:
            if dataset.contains(series_key):
                return index
        raise ChartError(f"No dataset contains a series with key: {series_key}")

    def series_keys(self) -> List[Hashable]:
        return [key for _, dataset in self for key in dataset.series_keys]

    @property
    def domain_type(self) -> Optional[DomainType]:
        for _, dataset in self:
            if not dataset.is_empty:
                return dataset.domain_type
        return None

    def unified(self) -> XyDataset:
        """All datasets combined on one domain; cached until the model changes."""
        if self._unified is None:
            self._unified = unify_datasets([dataset for _, dataset in self])
        return self._unified

    def on_change(self, listener: Callable[["XyModel"], None]) -> "XyModel":
        self.add_listener(listener)
        return self
