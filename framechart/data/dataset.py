"""
XyDataset: binds a DataFrame to the domain/series view an xy plot renders.

The domain is either the row index of the frame or one of its columns; every
other column is a series. A dataset pulls its frame from a supplier so that
``refresh()`` can rebind to the latest data, and tells registered listeners
whenever its binding changes.
"""
import logging
from typing import Any, Callable, Hashable, List, Optional, Tuple

import numpy as np
import pandas as pd

from ..errors import ChartError
from ..logging_utils import log_data_info
from ..types import DomainType, infer_domain_type, is_categorical, to_numeric_values

logger = logging.getLogger(__name__)

FrameSupplier = Callable[[], Optional[pd.DataFrame]]
IntervalFunction = Callable[[Any], Any]


class Observable:
    """Minimal listener registry shared by the data models."""

    def __init__(self):
        self._listeners: List[Callable[[Any], None]] = []

    def add_listener(self, listener: Callable[[Any], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[Any], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def fire_changed(self) -> None:
        """Notify every listener; a failing listener does not stop the others."""
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception(f"❌ Change listener failed for {type(self).__name__}")


def _constant(frame: Optional[pd.DataFrame]) -> FrameSupplier:
    return lambda: frame


class XyDataset(Observable):
    """
    Domain/series view over a DataFrame.

    Args:
        supplier: Zero-argument callable returning the frame to bind (or None)
        domain_key: Column holding domain values; the row index when None

    Examples:
        >>> frame = pd.DataFrame({"A": [1.0, 2.0]}, index=[10, 20])
        >>> dataset = XyDataset.of(frame)
        >>> dataset.series_keys, dataset.domain_type
        (['A'], <DomainType.INTEGER: 'integer'>)
    """

    def __init__(self, supplier: FrameSupplier, domain_key: Optional[Hashable] = None):
        super().__init__()
        self._supplier = supplier
        self._domain_key = domain_key
        self._frame: Optional[pd.DataFrame] = None
        self._domain = pd.Index([])
        self._series_keys: List[Hashable] = []
        self._domain_type: Optional[DomainType] = None
        self._numeric_domain: Optional[np.ndarray] = None
        self._lower_interval: Optional[IntervalFunction] = None
        self._upper_interval: Optional[IntervalFunction] = None
        self.refresh()

    @classmethod
    def of(cls, frame: Optional[pd.DataFrame]) -> "XyDataset":
        """Dataset whose domain is the row index of ``frame``."""
        return cls(_constant(frame))

    @classmethod
    def of_column(cls, frame: Optional[pd.DataFrame], domain_key: Hashable) -> "XyDataset":
        """Dataset whose domain is column ``domain_key``; other columns are series."""
        return cls(_constant(frame), domain_key)

    @classmethod
    def empty(cls) -> "XyDataset":
        return cls(_constant(None))

    def refresh(self) -> None:
        """Pull the frame from the supplier again and rebind."""
        frame = self._supplier()
        if frame is None:
            self.clear(notify=True)
            return

        if not isinstance(frame, pd.DataFrame):
            raise ChartError(f"Dataset supplier must return a DataFrame, got {type(frame).__name__}")

        if self._domain_key is None:
            domain = frame.index
            series_keys = list(frame.columns)
        else:
            if self._domain_key not in frame.columns:
                raise ChartError(
                    f"Domain column '{self._domain_key}' not found in frame columns {list(frame.columns)}"
                )
            domain = pd.Index(frame[self._domain_key])
            series_keys = [key for key in frame.columns if key != self._domain_key]

        try:
            self._frame = frame
            self._domain = domain
            self._series_keys = series_keys
            self._domain_type = infer_domain_type(domain)
            self._numeric_domain = None
            log_data_info(frame, f"XyDataset(domain={'index' if self._domain_key is None else self._domain_key})")
        finally:
            self.fire_changed()

    @property
    def is_empty(self) -> bool:
        return self._frame is None or len(self._frame) == 0 or not self._series_keys

    def clear(self, notify: bool = False) -> None:
        """Drop the current binding, notifying listeners when asked to."""
        self._frame = None
        self._domain = pd.Index([])
        self._series_keys = []
        self._domain_type = None
        self._numeric_domain = None
        if notify:
            self.fire_changed()

    @property
    def frame(self) -> Optional[pd.DataFrame]:
        return self._frame

    @property
    def domain_key(self) -> Optional[Hashable]:
        return self._domain_key

    @property
    def domain_type(self) -> Optional[DomainType]:
        return None if self.is_empty else self._domain_type

    @property
    def domain_values(self) -> pd.Index:
        return self._domain

    @property
    def series_keys(self) -> List[Hashable]:
        return list(self._series_keys)

    @property
    def series_count(self) -> int:
        return 0 if self.is_empty else len(self._series_keys)

    @property
    def domain_size(self) -> int:
        return 0 if self.is_empty else len(self._domain)

    def contains(self, series_key: Hashable) -> bool:
        return not self.is_empty and series_key in self._series_keys

    def domain_value(self, item: int) -> Any:
        return self._domain[item]

    def series_values(self, series_key: Hashable) -> np.ndarray:
        """Float values of one series; non-numeric entries become NaN."""
        if not self.contains(series_key):
            raise ChartError(f"Series '{series_key}' not found in dataset")
        column = self._frame[series_key]
        if isinstance(column, pd.DataFrame):
            raise ChartError(f"Series key '{series_key}' is not unique in dataset")
        return pd.to_numeric(column, errors="coerce").to_numpy(dtype=float)

    def range_value(self, item: int, series: int) -> float:
        if self.is_empty:
            return float("nan")
        return float(self.series_values(self._series_keys[series])[item])

    def numeric_domain(self) -> np.ndarray:
        """Domain values as floats (epoch millis for dates); cached per binding."""
        if self.is_empty:
            return np.array([], dtype=float)
        if self._numeric_domain is None:
            self._numeric_domain = to_numeric_values(self._domain, self._domain_type)
        return self._numeric_domain

    def domain_bounds(self) -> Optional[Tuple[Any, Any]]:
        """Smallest and largest non-null domain value, None when unordered or empty."""
        if self.is_empty or is_categorical(self._domain_type):
            return None
        values = self._domain.dropna()
        if len(values) == 0:
            return None
        return values.min(), values.max()

    def range_bounds(self, series_key: Optional[Hashable] = None) -> Optional[Tuple[float, float]]:
        """Smallest and largest finite value of one series, or of all series."""
        if self.is_empty:
            return None
        keys = self._series_keys if series_key is None else [series_key]
        values = np.concatenate([self.series_values(key) for key in keys])
        values = values[np.isfinite(values)]
        if values.size == 0:
            return None
        return float(values.min()), float(values.max())

    def with_lower_domain_interval(self, function: IntervalFunction) -> "XyDataset":
        """Set the function mapping a domain value to the start of its interval."""
        self._lower_interval = function
        self.fire_changed()
        return self

    def with_upper_domain_interval(self, function: IntervalFunction) -> "XyDataset":
        """Set the function mapping a domain value to the end of its interval."""
        self._upper_interval = function
        self.fire_changed()
        return self

    @property
    def has_intervals(self) -> bool:
        return self._lower_interval is not None or self._upper_interval is not None

    def lower_domain_value(self, item: int) -> Any:
        value = self._domain[item]
        return self._lower_interval(value) if self._lower_interval else value

    def upper_domain_value(self, item: int) -> Any:
        value = self._domain[item]
        return self._upper_interval(value) if self._upper_interval else value

    def __repr__(self) -> str:
        return (
            f"XyDataset(domain={'index' if self._domain_key is None else self._domain_key}, type={self.domain_type}, "
            f"items={self.domain_size}, series={self._series_keys})"
        )
