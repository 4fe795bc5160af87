import logging
import pandas as pd
from typing import Iterable, List

from m6a_pipeline.constants import NUCLEOTIDE_DTYPE, POSITION_PREFIX
from m6a_pipeline.exceptions import InvalidSequenceLength
from .domains import to_domain

logger = logging.getLogger(__name__)


class SequenceEncoder:

    """Encode fixed-length DNA windows as per-position categorical columns.

    Parameters
    ----------
    prefix : str
        Column name prefix; columns are named ``f"{prefix}{i}"`` for
        ``i = 1 .. N``.

    Attributes
    ----------
    dtype : pandas.CategoricalDtype
        Category domain shared by every position column (A, T, C, G).
    """


    def __init__(self, prefix: str = POSITION_PREFIX):
        self.prefix = prefix
        self.dtype = NUCLEOTIDE_DTYPE

    def columns(self, length: int) -> List[str]:
        """Position column names for a window of ``length`` nucleotides."""
        return [f"{self.prefix}{i}" for i in range(1, length + 1)]

    def encode(self, sequence: str) -> list:

        """Split a single sequence into its nucleotide tokens.

        Parameters
        ----------
        sequence : str
            DNA window, uppercase.

        Returns
        -------
        list
            One single-character token per position, left to right.
        """


        return list(sequence)

    def encode_many(self, sequences: Iterable[str]) -> pd.DataFrame:

        """Encode a batch of equal-length sequences into a DataFrame.

        The window length N is taken from the first sequence. Characters
        outside the nucleotide alphabet become missing categories.

        Parameters
        ----------
        sequences : Iterable[str]
            Ordered sequences; a ``pandas.Series`` keeps its index.

        Returns
        -------
        pandas.DataFrame
            One row per sequence and N categorical columns.

        Raises
        ------
        ValueError
            If no sequences are given.
        InvalidSequenceLength
            If any sequence differs in length from the first one.
        """


        if isinstance(sequences, pd.Series):
            index = sequences.index
            sequences = sequences.tolist()
        else:
            sequences = list(sequences)
            index = None

        if not sequences:
            raise ValueError("At least one sequence is required to determine the window length.")

        first = sequences[0]
        if not isinstance(first, str):
            raise InvalidSequenceLength(None, [0])
        seq_len = len(first)

        bad_rows = [
            i for i, seq in enumerate(sequences)
            if not isinstance(seq, str) or len(seq) != seq_len
        ]
        if bad_rows:
            raise InvalidSequenceLength(seq_len, bad_rows)

        token_rows = [self.encode(seq) for seq in sequences]
        # Tokens outside the alphabet become the missing category
        encoded = pd.DataFrame(
            {col: to_domain([row[i] for row in token_rows], self.dtype)
             for i, col in enumerate(self.columns(seq_len))},
            index=index,
        )

        logger.debug("Encoded %d sequences into %d position columns", len(encoded), seq_len)
        return encoded


def encode(sequences: Iterable[str], prefix: str = POSITION_PREFIX) -> pd.DataFrame:
    """Encode DNA sequences into categorical position columns.

    Example: ``encode(["ATCGG", "TTAGC"])`` gives a 2 x 5 frame with columns
    ``position_1 .. position_5``.
    """
    return SequenceEncoder(prefix).encode_many(sequences)


dna_encoding = encode
