import logging
import pickle
import pandas as pd
from sklearn.ensemble import RandomForestClassifier

from m6a_pipeline.constants import PROB_COLUMN, STATUS_COLUMN

logger = logging.getLogger(__name__)


class RandomForestClassifierModel:
    """
    A Random Forest classifier for m6A sites using scikit-learn.

    Takes the prepared site tables produced by
    :func:`m6a_pipeline.features.prepare_features` directly: numeric columns
    are used as-is and categorical columns are one-hot encoded against their
    fixed levels, so a missing category becomes an all-zero indicator block.

    Args:
        n_estimators (int): Number of decision trees in the forest.
        max_depth (int): Maximum depth of the trees.
        min_samples_split (int): Fewest sites a node needs before it is split.
        min_samples_leaf (int): Fewest sites allowed in a leaf.
        random_state (int): Seed for the forest, for reproducible fits.
    """
    def __init__(self, n_estimators=100, max_depth=None, min_samples_split=2, min_samples_leaf=1, random_state=None):
        self.model = RandomForestClassifier(
            n_estimators=n_estimators,
            criterion='gini',  # Gini impurity
            max_depth=max_depth,
            min_samples_split=min_samples_split,
            min_samples_leaf=min_samples_leaf,
            random_state=random_state,
        )
        self.feature_names_ = None

    @property
    def classes_(self):
        """Class labels seen during training, in predict_proba column order."""
        return self.model.classes_

    def _design_matrix(self, features):
        blocks = []
        for col in features.columns:
            if col in (PROB_COLUMN, STATUS_COLUMN):
                continue
            series = features[col]
            if isinstance(series.dtype, pd.CategoricalDtype):
                blocks.append(pd.get_dummies(series, prefix=col, dtype=float))
            elif pd.api.types.is_numeric_dtype(series.dtype):
                blocks.append(series.astype(float).to_frame())
            # free-text columns such as the raw DNA_5mer carry no features
        if not blocks:
            return pd.DataFrame(index=features.index)
        return pd.concat(blocks, axis=1)

    def transform(self, features):
        """
        Build the numeric design matrix for a prepared feature table.

        Args:
            features (pd.DataFrame): Prepared site features.

        Returns:
            pd.DataFrame: Float matrix laid out as at training time.

        Raises:
            KeyError: If a feature used at training time is absent.
        """
        X = self._design_matrix(features)
        if self.feature_names_ is None:
            return X
        missing = [c for c in self.feature_names_ if c not in X.columns]
        if missing:
            raise KeyError(f"Features seen at training time are missing: {missing}")
        return X[self.feature_names_]

    def train(self, features, labels):
        """
        Fit the forest on labelled sites and record the design-matrix layout.

        Args:
            features (pd.DataFrame): Site table from ``prepare_features``.
            labels (array-like): "Positive" / "Negative" labels.
        """
        self.feature_names_ = None
        X = self.transform(features)
        self.feature_names_ = list(X.columns)
        self.model.fit(X, labels)
        logger.debug("Fitted random forest on %d sites and %d features", *X.shape)
        return self

    def predict(self, features):
        """
        Call each site Positive or Negative by majority vote of the trees.

        Args:
            features (pd.DataFrame): Site table from ``prepare_features``.

        Returns:
            np.array: One m6A label per site.
        """
        return self.model.predict(self.transform(features))

    def predict_proba(self, features):
        """
        Score each site with the share of trees voting for each label.

        Args:
            features (pd.DataFrame): Site table from ``prepare_features``.

        Returns:
            np.array: Shape (n_sites, 2), columns ordered as ``classes_``.
        """
        return self.model.predict_proba(self.transform(features))

    def evaluate(self, features, labels):
        """
        Fraction of sites whose predicted label matches ``labels``.

        Args:
            features (pd.DataFrame): Site table from ``prepare_features``.
            labels (array-like): Known "Positive" / "Negative" calls.
        """
        return self.model.score(self.transform(features), labels)


def save_rf_model(model_path, model):
    """
    Pickle a fitted site classifier, training-time feature layout included.

    Args:
        model_path (str): Destination file, conventionally ``*.pkl``.
        model (RandomForestClassifierModel): Fitted adapter.
    """
    with open(model_path, 'wb') as f:
        pickle.dump(model, f)


def load_rf_model(model_path):
    """
    Unpickle a site classifier written by :func:`save_rf_model`.

    Only load files from a trusted source; unpickling runs arbitrary code.

    Args:
        model_path (str): Pickled adapter file.

    Returns:
        RandomForestClassifierModel: Adapter ready for ``predict_batch``.
    """
    with open(model_path, 'rb') as f:
        return pickle.load(f)
