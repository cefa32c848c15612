"""
Domain type inference and conversions between domain values and numbers.

The domain of an xy chart is either the row index of a frame or one of its
columns. Its type decides which axis an engine builds (numeric, date or
category) and how values are mapped for regression.
"""
import datetime as dt
import math
import numbers
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from .errors import ChartError

_EPOCH = pd.Timestamp(0, tz="UTC")
_MILLISECOND = pd.Timedelta(milliseconds=1)


class DomainType(str, Enum):
    """Kind of values found on a domain axis."""
    NUMBER = "number"
    INTEGER = "integer"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    STRING = "string"
    BOOLEAN = "boolean"


def is_time_based(domain_type: Optional[DomainType]) -> bool:
    return domain_type in (DomainType.DATE, DomainType.DATETIME, DomainType.TIME)


def is_numeric(domain_type: Optional[DomainType]) -> bool:
    return domain_type in (DomainType.NUMBER, DomainType.INTEGER)


def is_categorical(domain_type: Optional[DomainType]) -> bool:
    return domain_type in (DomainType.STRING, DomainType.BOOLEAN)


def is_null(value: Any) -> bool:
    """Scalar null check that never returns an array."""
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    return isinstance(value, float) and math.isnan(value)


def _scalar_type(value: Any) -> DomainType:
    if isinstance(value, (bool, np.bool_)):
        return DomainType.BOOLEAN
    if isinstance(value, (dt.datetime, np.datetime64)):
        return DomainType.DATETIME
    if isinstance(value, dt.date):
        return DomainType.DATE
    if isinstance(value, dt.time):
        return DomainType.TIME
    if isinstance(value, numbers.Integral):
        return DomainType.INTEGER
    if isinstance(value, (numbers.Real, Decimal)):
        return DomainType.NUMBER
    return DomainType.STRING


def infer_domain_type(values: Iterable) -> DomainType:
    """
    Infer the domain type of a sequence of values.

    Typed pandas containers are resolved from their dtype; object containers
    from the type of their first non-null value. Empty input is numeric.

    Args:
        values: pandas Index, Series, numpy array or any iterable

    Returns:
        DomainType of the values

    Examples:
        >>> infer_domain_type(pd.date_range("2024-01-01", periods=3))
        <DomainType.DATETIME: 'datetime'>
        >>> infer_domain_type(["a", "b"])
        <DomainType.STRING: 'string'>
    """
    if not isinstance(values, (pd.Index, pd.Series)):
        values = pd.Index(list(values))

    dtype = values.dtype
    if isinstance(dtype, pd.CategoricalDtype):
        return DomainType.STRING
    if isinstance(dtype, pd.PeriodDtype):
        return DomainType.DATE
    if ptypes.is_bool_dtype(dtype):
        return DomainType.BOOLEAN
    if ptypes.is_integer_dtype(dtype):
        return DomainType.INTEGER
    if ptypes.is_float_dtype(dtype) or ptypes.is_timedelta64_dtype(dtype):
        return DomainType.NUMBER
    if ptypes.is_datetime64_any_dtype(dtype):
        return DomainType.DATETIME
    if ptypes.is_string_dtype(dtype) and not ptypes.is_object_dtype(dtype):
        return DomainType.STRING

    for value in values:
        if not is_null(value):
            return _scalar_type(value)
    return DomainType.NUMBER


def to_numeric_values(values: Iterable, domain_type: DomainType) -> np.ndarray:
    """
    Map domain values onto floats.

    Dates and datetimes become epoch milliseconds (UTC), times become
    milliseconds since midnight. Nulls become NaN.

    Raises:
        ChartError: For category domains, which have no numeric form
    """
    if is_categorical(domain_type) and domain_type != DomainType.BOOLEAN:
        raise ChartError(f"Domain values of type {domain_type.value} cannot be mapped to numbers")

    if isinstance(values, pd.PeriodIndex):
        values = values.to_timestamp()
    series = pd.Series(list(values) if not isinstance(values, (pd.Index, pd.Series)) else values.to_numpy())

    if domain_type in (DomainType.DATE, DomainType.DATETIME):
        stamps = pd.to_datetime(series, utc=True, errors="coerce")
        return ((stamps - _EPOCH) / _MILLISECOND).to_numpy(dtype=float)

    if domain_type == DomainType.TIME:
        return np.array([
            np.nan if is_null(t) else
            (t.hour * 3600 + t.minute * 60 + t.second) * 1000.0 + t.microsecond / 1000.0
            for t in series
        ], dtype=float)

    if ptypes.is_timedelta64_dtype(series.dtype):
        return (series / _MILLISECOND).to_numpy(dtype=float)

    return pd.to_numeric(series, errors="coerce").to_numpy(dtype=float)


def from_numeric_values(values: Iterable[float], domain_type: DomainType, tz: Any = None):
    """
    Inverse of :func:`to_numeric_values` for time based domains.

    Numeric domains are returned as a float array unchanged.

    Args:
        values: Numbers produced by to_numeric_values (or derived from them)
        domain_type: Domain type the numbers should be mapped back to
        tz: Timezone to convert datetimes into; naive when None

    Returns:
        DatetimeIndex for date domains, object array of times for time
        domains, float array otherwise
    """
    array = np.asarray(list(values), dtype=float)
    if domain_type in (DomainType.DATE, DomainType.DATETIME):
        stamps = pd.to_datetime(array, unit="ms", utc=True)
        return stamps.tz_convert(tz) if tz is not None else stamps.tz_localize(None)
    if domain_type == DomainType.TIME:
        return np.array([
            (pd.Timestamp(0) + pd.Timedelta(milliseconds=float(v) % 86_400_000)).time()
            for v in array
        ], dtype=object)
    return array


def domain_timezone(values: Any) -> Any:
    """Timezone of a datetime container, or None."""
    return getattr(getattr(values, "dtype", None), "tz", None)
