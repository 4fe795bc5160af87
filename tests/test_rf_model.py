import pytest
import numpy as np

from m6a_pipeline.constants import PROB_COLUMN, STATUS_COLUMN
from m6a_pipeline.exceptions import ClassifierInvocationError
from m6a_pipeline.features import prepare_features
from m6a_pipeline.models import RandomForestClassifierModel, load_rf_model, save_rf_model
from m6a_pipeline.prediction import predict_batch, predict_single


class TestRandomForestClassifierModel:
    """Tests for the random forest classifier adapter."""

    def test_classes_include_positive(self, trained_rf):
        """Test that the fitted classes are the two m6A labels."""
        assert sorted(trained_rf.classes_) == ["Negative", "Positive"]

    def test_design_matrix_one_hot_encodes_categories(self, trained_rf, training_table):
        """Test that categorical columns expand to one indicator per level."""
        X = trained_rf.transform(prepare_features(training_table.drop(columns="label")))
        assert "RNA_type_lncRNA" in X.columns
        assert "RNA_region_3'UTR" in X.columns
        assert [c for c in X.columns if c.startswith("position_1_")] == [
            "position_1_A", "position_1_T", "position_1_C", "position_1_G"
        ]
        assert "DNA_5mer" not in X.columns
        assert X.shape[1] == 4 + 4 + 4 + 5 * 4

    def test_learns_the_motif(self, trained_rf, training_table):
        """Test that the forest separates GGAC windows from the rest."""
        features = prepare_features(training_table.drop(columns="label"))
        assert trained_rf.evaluate(features, training_table["label"]) == pytest.approx(1.0)

    def test_predict_proba_shape(self, trained_rf, sample_records):
        """Test one probability column per class."""
        probs = trained_rf.predict_proba(prepare_features(sample_records))
        assert probs.shape == (3, 2)
        np.testing.assert_allclose(probs.sum(axis=1), 1.0)

    def test_column_order_does_not_matter(self, trained_rf, sample_records):
        """Test that features are matched by name, not position."""
        features = prepare_features(sample_records)
        shuffled = features[features.columns[::-1]]
        np.testing.assert_allclose(trained_rf.predict_proba(features), trained_rf.predict_proba(shuffled))

    def test_missing_category_is_tolerated(self, trained_rf, sample_records):
        """Test that a NaN category gives an all-zero indicator block."""
        sample_records.loc[0, "RNA_type"] = "snoRNA"
        sample_records.loc[1, "DNA_5mer"] = "GGNCA"
        X = trained_rf.transform(prepare_features(sample_records))
        assert X.filter(like="RNA_type_").iloc[0].sum() == 0
        assert X.filter(like="position_3_").iloc[1].sum() == 0

    def test_missing_trained_feature_raises(self, trained_rf, sample_records):
        """Test that a feature seen at training time must be present."""
        features = prepare_features(sample_records).drop(columns="evolutionary_conservation")
        with pytest.raises(KeyError):
            trained_rf.predict_proba(features)

    def test_pickle_round_trip(self, trained_rf, sample_records, tmp_path):
        """Test that a saved model predicts the same probabilities after loading."""
        path = tmp_path / "rf_fit.pkl"
        save_rf_model(path, trained_rf)
        loaded = load_rf_model(path)
        features = prepare_features(sample_records)
        np.testing.assert_allclose(loaded.predict_proba(features), trained_rf.predict_proba(features))
        assert loaded.feature_names_ == trained_rf.feature_names_


class TestPipelineWithRandomForest:
    """Tests for scoring through the pipeline with a real forest."""

    def test_predict_batch(self, trained_rf, sample_records):
        """Test that the GGACA site is the one called Positive."""
        result = predict_batch(trained_rf, sample_records)
        assert result[PROB_COLUMN].between(0, 1).all()
        assert result.loc[0, STATUS_COLUMN] == "Positive"
        assert result[PROB_COLUMN].idxmax() == 0

    def test_predict_single(self, trained_rf):
        """Test the single-site wrapper with the forest."""
        result = predict_single(trained_rf, 0.42, "mRNA", "CDS", 110, 25, 0.5, "GGACT")
        assert result["predicted_m6A_status"] == "Positive"

    def test_unknown_rna_type_is_scored(self, trained_rf, sample_records):
        """Test that the forest scores a site whose RNA type is missing."""
        sample_records.loc[0, "RNA_type"] = "snoRNA"
        result = predict_batch(trained_rf, sample_records)
        assert len(result) == 3

    def test_schema_mismatch_is_wrapped(self, training_table, sample_records):
        """Test that a forest trained on other features surfaces a ClassifierInvocationError."""
        features = prepare_features(training_table.drop(columns="label"))
        features["extra_score"] = 1.0
        model = RandomForestClassifierModel(n_estimators=5, random_state=0).train(features, training_table["label"])
        with pytest.raises(ClassifierInvocationError) as excinfo:
            predict_batch(model, sample_records)
        assert isinstance(excinfo.value.__cause__, KeyError)
