"""
PieModel: binds item keys and values from a DataFrame to a pie plot.
"""
import logging
from typing import Any, Hashable, List, Optional, Tuple

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from ..errors import ChartError
from ..logging_utils import log_data_info
from .dataset import Observable

logger = logging.getLogger(__name__)


class PieModel(Observable):
    """
    Items and values of a pie plot.

    Items come from the row index or from an item column; values come from a
    value column, or the first numeric column when none is named.
    """

    def __init__(self):
        super().__init__()
        self._frame: Optional[pd.DataFrame] = None
        self._items: List[Any] = []
        self._values = np.array([], dtype=float)
        self._value_key: Optional[Hashable] = None

    def apply(
        self,
        frame: Optional[pd.DataFrame],
        value_key: Optional[Hashable] = None,
        item_key: Optional[Hashable] = None,
    ) -> "PieModel":
        """
        Bind a frame.

        Args:
            frame: Source frame; None clears the model
            value_key: Column holding section values; first numeric column when None
            item_key: Column holding item keys; the row index when None

        Raises:
            ChartError: If a named column does not exist
        """
        if frame is None:
            self.clear(notify=True)
            return self

        for key in (value_key, item_key):
            if key is not None and key not in frame.columns:
                raise ChartError(f"Column '{key}' not found in frame columns {list(frame.columns)}")

        if value_key is None:
            numeric = [key for key in frame.columns if key != item_key and ptypes.is_numeric_dtype(frame[key])]
            if not numeric:
                logger.warning("⚠️  Pie frame has no numeric column, clearing pie model")
                self.clear(notify=True)
                return self
            value_key = numeric[0]

        items = frame.index if item_key is None else frame[item_key]
        self._frame = frame
        self._items = list(items)
        self._values = pd.to_numeric(frame[value_key], errors="coerce").to_numpy(dtype=float)
        self._value_key = value_key
        log_data_info(frame, f"PieModel(values={value_key})")
        self.fire_changed()
        return self

    @property
    def is_empty(self) -> bool:
        return self._frame is None or not self._items

    def clear(self, notify: bool = False) -> None:
        self._frame = None
        self._items = []
        self._values = np.array([], dtype=float)
        self._value_key = None
        if notify:
            self.fire_changed()

    @property
    def frame(self) -> Optional[pd.DataFrame]:
        return self._frame

    @property
    def value_key(self) -> Optional[Hashable]:
        return self._value_key

    def keys(self) -> List[Any]:
        return list(self._items)

    def values(self) -> np.ndarray:
        return self._values.copy()

    def items(self) -> List[Tuple[Any, float]]:
        return list(zip(self._items, self._values.tolist()))

    def visible_items(self) -> List[Tuple[Any, float]]:
        """Items with a finite, non-zero value; these are the ones drawn."""
        return [(key, value) for key, value in self.items() if np.isfinite(value) and value != 0]

    def total(self) -> float:
        return float(np.nansum(self._values))
