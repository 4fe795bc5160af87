"""Score candidate m6A sites with a pre-trained classifier.

The classifier is any object exposing ``predict_proba(features)``. It is
given the prepared table (normalized categories plus one categorical column
per nucleotide position) and may return either one positive-class
probability per row, or a scikit-learn style matrix with one column per
class, in which case the ``"Positive"`` column is picked through
``model.classes_``.
"""

import logging
import numbers
import numpy as np
import pandas as pd

from m6a_pipeline.constants import (
    DEFAULT_THRESHOLD,
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    PROB_COLUMN,
    STATUS_COLUMN,
    STATUS_DTYPE,
)
from m6a_pipeline.exceptions import ClassifierInvocationError
from m6a_pipeline.features.data_preprocessing import check_required_columns, prepare_features

logger = logging.getLogger(__name__)


def _check_threshold(threshold):
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
        raise ValueError(f"threshold must be a number in [0, 1], got {threshold!r}")
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must lie in [0, 1], got {threshold}")


def _positive_column(model, n_columns):
    classes = getattr(model, "classes_", None)
    if classes is not None:
        classes = list(classes)
        if POSITIVE_LABEL not in classes:
            raise ClassifierInvocationError(
                f"Classifier classes {classes} do not include {POSITIVE_LABEL!r}"
            )
        return classes.index(POSITIVE_LABEL)
    if n_columns == 2:
        return 1
    raise ClassifierInvocationError(
        f"Cannot tell which of {n_columns} probability columns is {POSITIVE_LABEL!r}"
    )


def positive_probabilities(model, features):
    """Call the classifier once and return the positive-class probabilities.

    Parameters
    ----------
    model : object
        Classifier exposing ``predict_proba``.
    features : pandas.DataFrame
        Prepared feature table.

    Returns
    -------
    numpy.ndarray
        One probability in [0, 1] per row of ``features``.

    Raises
    ------
    ClassifierInvocationError
        If the classifier raises, or its output is not one valid probability
        per row.
    """
    try:
        raw = model.predict_proba(features)
    except Exception as e:
        raise ClassifierInvocationError(f"Classifier failed on the prepared feature table: {e}") from e

    try:
        probs = np.asarray(raw, dtype=float)
    except (TypeError, ValueError) as e:
        raise ClassifierInvocationError(f"Classifier returned non-numeric probabilities: {e}") from e

    if probs.ndim == 2:
        probs = probs[:, _positive_column(model, probs.shape[1])]
    elif probs.ndim != 1:
        raise ClassifierInvocationError(f"Classifier returned an array of shape {probs.shape}")

    if len(probs) != len(features):
        raise ClassifierInvocationError(
            f"Classifier returned {len(probs)} probabilities for {len(features)} rows"
        )
    if not np.all((probs >= 0.0) & (probs <= 1.0)):
        raise ClassifierInvocationError("Classifier returned probabilities outside [0, 1]")

    return probs


def predict_batch(model, records, threshold=DEFAULT_THRESHOLD):
    """Predict m6A probability and status for every site in a table.

    Parameters
    ----------
    model : object
        Pre-trained classifier exposing ``predict_proba``.
    records : pandas.DataFrame
        Site features. Must contain ``gc_content``, ``RNA_type``,
        ``RNA_region``, ``exon_length``, ``distance_to_junction``,
        ``evolutionary_conservation`` and ``DNA_5mer``.
    threshold : float
        Cutoff in [0, 1]; a site is ``"Positive"`` only when its probability
        is strictly greater.

    Returns
    -------
    pandas.DataFrame
        A new table holding the normalized input, the encoded position
        columns, ``predicted_m6A_prob`` and ``predicted_m6A_status``, in the
        input row order. ``records`` itself is left untouched.
    """
    check_required_columns(records)
    _check_threshold(threshold)

    # Results from an earlier run are replaced, never fed to the classifier
    features = prepare_features(records.drop(columns=[PROB_COLUMN, STATUS_COLUMN], errors="ignore"))

    probs = positive_probabilities(model, features)
    status = np.where(probs > threshold, POSITIVE_LABEL, NEGATIVE_LABEL)

    features[PROB_COLUMN] = probs
    features[STATUS_COLUMN] = pd.Categorical(status, dtype=STATUS_DTYPE)

    logger.debug("Scored %d sites at threshold %s: %d positive",
                 len(features), threshold, int((status == POSITIVE_LABEL).sum()))
    return features


def predict_single(model, gc_content, RNA_type, RNA_region, exon_length,
                   distance_to_junction, evolutionary_conservation, DNA_5mer,
                   threshold=DEFAULT_THRESHOLD):
    """Predict m6A probability and status for a single site.

    Builds a one-row table from the arguments and scores it with
    :func:`predict_batch`.

    Returns
    -------
    dict
        ``{"predicted_m6A_prob": float, "predicted_m6A_status": str}``.
    """
    single_row_df = pd.DataFrame({
        "gc_content": [gc_content],
        "RNA_type": [RNA_type],
        "RNA_region": [RNA_region],
        "exon_length": [exon_length],
        "distance_to_junction": [distance_to_junction],
        "evolutionary_conservation": [evolutionary_conservation],
        "DNA_5mer": [DNA_5mer],
    })

    result_df = predict_batch(model, single_row_df, threshold)

    return {
        PROB_COLUMN: float(result_df[PROB_COLUMN].iloc[0]),
        STATUS_COLUMN: str(result_df[STATUS_COLUMN].iloc[0]),
    }
