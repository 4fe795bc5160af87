"""Errors raised while preparing and scoring m6A candidate sites."""


class M6APredictionError(Exception):
    """Base class for all prediction pipeline errors."""


class MissingFeatureColumns(M6APredictionError, KeyError):
    """Raised when an input table lacks one or more required columns.

    Attributes
    ----------
    missing : list[str]
        Every absent column, in the order the pipeline requires them.
    """

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required feature columns: {', '.join(self.missing)}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.args[0]

    def __reduce__(self):
        return type(self), (self.missing,)


class InvalidSequenceLength(M6APredictionError, ValueError):
    """Raised when the sequences of a batch do not share a common length.

    Attributes
    ----------
    expected_length : int or None
        Length of the first sequence in the batch, or None when the first
        sequence itself is missing.
    rows : list[int]
        Zero-based positions of the sequences whose length differs.
    """

    def __init__(self, expected_length, rows):
        self.expected_length = expected_length
        self.rows = list(rows)
        if expected_length is None:
            super().__init__("First sequence is missing; the window length cannot be determined")
            return
        preview = ", ".join(str(r) for r in self.rows[:10])
        if len(self.rows) > 10:
            preview += ", ..."
        super().__init__(
            f"Expected all sequences to have length {expected_length}; "
            f"{len(self.rows)} sequence(s) differ at row position(s) {preview}"
        )

    def __reduce__(self):
        return type(self), (self.expected_length, self.rows)


class ClassifierInvocationError(M6APredictionError, RuntimeError):
    """Raised when the classifier rejects the prepared table or returns unusable output."""
