import pandas as pd


def to_domain(values, dtype):
    """Map raw values onto a closed categorical domain.

    Parameters
    ----------
    values : array-like
        Raw labels; anything not among ``dtype.categories`` (including NaN)
        becomes the missing category.
    dtype : pandas.CategoricalDtype
        Target domain with its fixed level order.

    Returns
    -------
    pandas.Categorical
    """
    # get_indexer gives -1 for unknown labels, which is the missing code
    codes = dtype.categories.get_indexer(pd.Index(values, dtype=object))
    return pd.Categorical.from_codes(codes, dtype=dtype)
