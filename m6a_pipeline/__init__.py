"""m6A site prediction package."""

from . import features, models, prediction
from .exceptions import (
    ClassifierInvocationError,
    InvalidSequenceLength,
    M6APredictionError,
    MissingFeatureColumns,
)
from .features import dna_encoding, encode
from .prediction import predict_batch, predict_single

__all__ = [
    "features",
    "models",
    "prediction",
    "ClassifierInvocationError",
    "InvalidSequenceLength",
    "M6APredictionError",
    "MissingFeatureColumns",
    "dna_encoding",
    "encode",
    "predict_batch",
    "predict_single",
]
