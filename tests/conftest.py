import pytest
import pandas as pd

from m6a_pipeline.constants import RNA_REGIONS, RNA_TYPES
from m6a_pipeline.features import prepare_features
from m6a_pipeline.models import RandomForestClassifierModel


class StubClassifier:
    """Deterministic classifier that returns ``gc_content`` as the positive probability."""

    def __init__(self):
        self.calls = 0
        self.seen = []

    def predict_proba(self, features):
        self.calls += 1
        self.seen.append(features.copy())
        return features["gc_content"].to_numpy(dtype=float)


class FailingClassifier:
    """Classifier that rejects every table it is given."""

    def __init__(self):
        self.calls = 0

    def predict_proba(self, features):
        self.calls += 1
        raise ValueError("feature names do not match those seen during fit")


@pytest.fixture
def stub_model():
    return StubClassifier()


@pytest.fixture
def failing_model():
    return FailingClassifier()


@pytest.fixture
def sample_records():
    """Three valid candidate sites."""
    return pd.DataFrame({
        "gc_content": [0.2, 0.5, 0.8],
        "RNA_type": ["mRNA", "lincRNA", "pseudogene"],
        "RNA_region": ["CDS", "3'UTR", "intron"],
        "exon_length": [120, 85, 310],
        "distance_to_junction": [8, 40, 2],
        "evolutionary_conservation": [0.5, 0.1, 0.9],
        "DNA_5mer": ["GGACA", "ATCGG", "TTAGC"],
    })


def _training_table(n_rows=40):
    motifs = [("GGACA", "Positive"), ("GGACT", "Positive"), ("TTTTT", "Negative"), ("CCGCC", "Negative")]
    rows = []
    for i in range(n_rows):
        seq, label = motifs[i % len(motifs)]
        rows.append({
            "gc_content": 0.4 + 0.01 * (i % 5),
            "RNA_type": RNA_TYPES[i % len(RNA_TYPES)],
            "RNA_region": RNA_REGIONS[(i // 2) % len(RNA_REGIONS)],
            "exon_length": 100 + i,
            "distance_to_junction": 10 + 3 * i,
            "evolutionary_conservation": 0.5,
            "DNA_5mer": seq,
            "label": label,
        })
    return pd.DataFrame(rows)


@pytest.fixture
def training_table():
    return _training_table()


@pytest.fixture
def trained_rf(training_table):
    """Random forest fitted on a table where GGAC motifs are the positive sites."""
    features = prepare_features(training_table.drop(columns="label"))
    model = RandomForestClassifierModel(n_estimators=20, random_state=0)
    model.train(features, training_table["label"])
    return model
