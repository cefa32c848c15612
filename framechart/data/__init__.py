"""
Data binding layer: adapts DataFrames to the models plots render.
"""
from .dataset import XyDataset, Observable
from .model import XyModel, unify_datasets
from .pie import PieModel
from .trend import TrendLine, trend_key_for
from .stats import histogram, histogram_frame, autocorrelation, confidence_bound

__all__ = [
    "XyDataset",
    "XyModel",
    "PieModel",
    "TrendLine",
    "Observable",
    "unify_datasets",
    "trend_key_for",
    "histogram",
    "histogram_frame",
    "autocorrelation",
    "confidence_bound",
]
