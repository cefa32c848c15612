"""
Logging utilities for the charting layer with debug mode support.

Provides decorators and context managers for timing figure builds, data
binding steps and reporting failures with a consistent format.
"""
import logging
import functools
import time
from typing import Callable, Any, List, Optional, Tuple, TypeVar
from contextlib import contextmanager

from .settings import get_settings

# Module logger
logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "framechart"

# Type variable for decorators
F = TypeVar('F', bound=Callable[..., Any])

# Debug mode set at runtime; None follows FRAMECHART_DEBUG from settings (.env included)
_DEBUG_MODE: Optional[bool] = None


def set_debug_mode(enabled: bool) -> None:
    """
    Enable or disable debug mode at runtime for all framechart loggers.

    Args:
        enabled: True to enable debug logging, False for normal logging

    Examples:
        >>> from framechart.logging_utils import set_debug_mode
        >>> set_debug_mode(True)
        🔧 Chart debug mode: ON
    """
    global _DEBUG_MODE
    _DEBUG_MODE = enabled

    level = logging.DEBUG if enabled else logging.INFO
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    logger.info(f"🔧 Chart debug mode: {'ON ✓' if enabled else 'OFF'}")


def is_debug_mode() -> bool:
    """Check if debug mode is currently enabled."""
    if _DEBUG_MODE is None:
        return get_settings().debug
    return _DEBUG_MODE


def apply_settings(settings: Any) -> None:
    """
    Apply log level and debug flag from a settings object.

    Args:
        settings: ChartSettings instance
    """
    if settings.debug:
        set_debug_mode(True)
    else:
        logging.getLogger(PACKAGE_LOGGER).setLevel(settings.log_level)


def _chart_frames(obj: Any) -> List[Tuple[str, Any]]:
    """Bound frames of a chart, one per dataset; never validates or joins them."""
    plot = getattr(obj, "plot", None)
    if plot is None or not hasattr(plot, "data"):
        return []
    model = plot.data()
    if hasattr(model, "indexes"):
        frames = [(f"dataset {index}", dataset.frame) for index, dataset in model]
    else:
        frames = [("pie", getattr(model, "frame", None))]
    return [(label, frame) for label, frame in frames if frame is not None]


def _describe_result(result: Any) -> str:
    # plotly figures expose traces via .data, matplotlib figures via .axes
    if hasattr(result, "data") and hasattr(result, "layout"):
        return f"{len(result.data)} traces"
    if hasattr(result, "axes") and isinstance(getattr(result, "axes"), list):
        return f"{len(result.axes)} axes"
    return type(result).__name__


def log_chart_build(func: F) -> F:
    """
    Decorator to log figure building with timing and error reporting.

    Logs:
    - Start of the build with the chart title when one is set
    - Dataset shapes (in debug mode)
    - Execution time in milliseconds
    - Number of traces or axes in the resulting figure
    - Error information on failure

    Usage:
        @log_chart_build
        def build_xy_figure(chart):
            ...

    Args:
        func: Figure builder function to decorate

    Returns:
        Decorated function with logging
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        func_name = func.__name__

        title_info = ""
        for arg in args:
            title = getattr(getattr(arg, "title", None), "text", None)
            if title:
                title_info = f" title='{title}'"
                break

        logger.info(f"📊 Building chart: {func_name}{title_info}")

        if is_debug_mode():
            logger.debug(f"  → Function: {func.__module__}.{func_name}")
            for i, arg in enumerate(args):
                for label, frame in _chart_frames(arg):
                    logger.debug(f"  → arg[{i}] {label}: shape={frame.shape}, cols={list(frame.columns)[:10]}")

        start_time = time.perf_counter()

        try:
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - start_time) * 1000

            logger.info(
                f"✅ Chart built: {func_name} "
                f"({elapsed_ms:.1f}ms, {_describe_result(result)})"
            )

            if is_debug_mode() and hasattr(result, "layout") and hasattr(result, "data"):
                layout_keys = list(result.layout.to_plotly_json().keys())[:15]
                logger.debug(f"  → Figure layout keys: {layout_keys}")
                logger.debug(f"  → Trace types: {[trace.type for trace in result.data]}")

            return result

        except Exception as e:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"❌ Chart build failed: {func_name} "
                f"({elapsed_ms:.1f}ms, {type(e).__name__}: {e})"
            )

            if is_debug_mode():
                logger.exception("  📋 Full traceback:")
            else:
                logger.error("  💡 Hint: Set FRAMECHART_DEBUG=true for full traceback")

            raise

    return wrapper  # type: ignore


@contextmanager
def log_data_preparation(description: str):
    """
    Context manager for logging data binding steps with timing.

    Usage:
        with log_data_preparation("Unifying 3 datasets"):
            frame = pd.concat(frames, axis=1)

    Args:
        description: Human-readable description of the step

    Yields:
        None
    """
    start = time.perf_counter()

    if is_debug_mode():
        logger.debug(f"🔄 {description}...")

    try:
        yield

    except Exception as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error(f"  ✗ {description} failed ({elapsed_ms:.1f}ms): {e}")
        raise

    else:
        elapsed_ms = (time.perf_counter() - start) * 1000

        if is_debug_mode():
            logger.debug(f"  ✓ {description} ({elapsed_ms:.1f}ms)")


def log_data_info(df: Any, label: str = "DataFrame") -> None:
    """
    Log a summary of a DataFrame (only in debug mode).

    Args:
        df: pandas DataFrame to inspect
        label: Label for the DataFrame in logs
    """
    if not is_debug_mode():
        return

    if not hasattr(df, "shape"):
        logger.debug(f"📋 {label}: Not a DataFrame (type={type(df).__name__})")
        return

    info_parts = [f"shape={df.shape}", f"cols={list(df.columns)}"]

    if len(df) > 0:
        info_parts.append(f"index=[{df.index[0]} ... {df.index[-1]}]")

    null_count = int(df.isnull().sum().sum())
    if null_count > 0:
        info_parts.append(f"nulls={null_count}")

    logger.debug(f"📋 {label}: {', '.join(info_parts)}")
