"""Batch and single-site m6A prediction."""

from .predict import positive_probabilities, predict_batch, predict_single

__all__ = [
    "positive_probabilities",
    "predict_batch",
    "predict_single",
]
