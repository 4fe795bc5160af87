"""Classifier adapters and model persistence."""

from .rf_model import RandomForestClassifierModel, load_rf_model, save_rf_model

__all__ = [
    "RandomForestClassifierModel",
    "load_rf_model",
    "save_rf_model",
]
