import argparse
import logging
import os
import pickle
import sys
import pandas as pd

from m6a_pipeline.constants import DEFAULT_THRESHOLD, POSITIVE_LABEL, STATUS_COLUMN
from m6a_pipeline.exceptions import M6APredictionError
from m6a_pipeline.models.rf_model import load_rf_model
from m6a_pipeline.prediction.predict import predict_batch

logger = logging.getLogger("m6a_pipeline")


def _configure_logging(level):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):

    """Score a CSV table of candidate sites with a pickled classifier.

    Parameters are read from the command line. The input table must carry
    the seven required feature columns; the output adds the encoded position
    columns, ``predicted_m6A_prob`` and ``predicted_m6A_status``.

    Returns
    -------
    int
        Process exit status, 0 on success and 1 on any input or scoring error.
    """


    # Define arguments and parse.
    parser = argparse.ArgumentParser(description='Predict m6A status for candidate sites.')
    parser.add_argument("--model_path", type=str, required=True, help="Path to the pickled classifier.")
    parser.add_argument("--input_path", type=str, required=True, help="Path to the site features csv.")
    parser.add_argument("--output_path", type=str, required=True, help="Output path for predictions.")
    parser.add_argument("--threshold", type=float, required=False, default=DEFAULT_THRESHOLD, help="Probability cutoff for Positive calls.")
    parser.add_argument("--log_level", type=str, required=False, default="INFO", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help="Logging verbosity.")

    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    for path in (args.model_path, args.input_path):
        if not os.path.exists(path):
            logger.error("File %s does not exist", path)
            return 1

    try:
        model = load_rf_model(args.model_path)
    except (pickle.UnpicklingError, EOFError, AttributeError, ImportError) as e:
        logger.error("Could not load model from %s: %s", args.model_path, e)
        return 1

    try:
        feature_df = pd.read_csv(args.input_path)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        logger.error("Could not read site features from %s: %s", args.input_path, e)
        return 1

    try:
        result_df = predict_batch(model, feature_df, args.threshold)
    except (M6APredictionError, ValueError) as e:
        logger.error("Prediction failed: %s", e)
        return 1

    out_dir = os.path.dirname(args.output_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    result_df.to_csv(args.output_path, index=False)

    n_positive = int((result_df[STATUS_COLUMN] == POSITIVE_LABEL).sum())
    logger.info("Scored %d sites, %d positive; predictions saved to %s",
                len(result_df), n_positive, args.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
