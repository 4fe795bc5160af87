"""Feature preparation utilities."""

from .data_preprocessing import (
    check_required_columns,
    normalize_categories,
    prepare_features,
)
from .domains import to_domain
from .sequence_encoder import SequenceEncoder, dna_encoding, encode

__all__ = [
    "check_required_columns",
    "normalize_categories",
    "prepare_features",
    "to_domain",
    "SequenceEncoder",
    "dna_encoding",
    "encode",
]
