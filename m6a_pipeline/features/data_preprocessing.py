import logging

from m6a_pipeline.constants import CATEGORICAL_DTYPES, REQUIRED_COLUMNS, SEQUENCE_COLUMN
from m6a_pipeline.exceptions import MissingFeatureColumns
from .domains import to_domain
from .sequence_encoder import SequenceEncoder

logger = logging.getLogger(__name__)


def check_required_columns(df_inp):
    """Verify that all required feature columns are present.

    Parameters
    ----------
    df_inp : pandas.DataFrame
        Raw site features supplied by the caller.

    Raises
    ------
    MissingFeatureColumns
        Lists every absent column, not only the first.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df_inp.columns]
    if missing:
        raise MissingFeatureColumns(missing)


# Function to align categorical columns with the training-time domains
def normalize_categories(df_inp):
    """Cast RNA annotations onto their fixed categorical domains.

    Parameters
    ----------
    df_inp : pandas.DataFrame
        Site features containing ``RNA_type`` and ``RNA_region``.

    Returns
    -------
    pandas.DataFrame
        Copy of the input where both annotation columns are categoricals
        with the training-time levels. Values outside a domain become NaN.
    """
    df = df_inp.copy()

    for col, dtype in CATEGORICAL_DTYPES.items():
        # Go through object so an existing categorical with other levels is re-mapped by value
        df[col] = to_domain(df[col].to_numpy(dtype=object), dtype)
        n_unknown = int(df[col].isna().sum())
        if n_unknown:
            logger.debug("%d value(s) in %s fall outside %s and were set to missing",
                         n_unknown, col, list(dtype.categories))

    return df


# Function to build the full feature table handed to the classifier
def prepare_features(df_inp, encoder=None):
    """Validate, normalize and sequence-encode a table of candidate sites.

    Parameters
    ----------
    df_inp : pandas.DataFrame
        Raw site features with the seven required columns.
    encoder : SequenceEncoder, optional
        Encoder for the ``DNA_5mer`` column. Defaults to ``position_`` columns.

    Returns
    -------
    pandas.DataFrame
        Normalized features with one categorical column per nucleotide
        position appended, in the input row order.
    """
    check_required_columns(df_inp)
    encoder = encoder or SequenceEncoder()

    df = normalize_categories(df_inp)

    dna_encoded = encoder.encode_many(df[SEQUENCE_COLUMN])
    # Assign by position so rows stay aligned whatever the caller's index holds
    for col in dna_encoded.columns:
        df[col] = dna_encoded[col].array

    return df
