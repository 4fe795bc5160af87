# constants.py

import pandas as pd

# Nucleotide alphabet, in the level order used when the classifier was trained
NUCLEOTIDES = ("A", "T", "C", "G")

# Closed categorical domains for the site annotations
RNA_TYPES = ("mRNA", "lincRNA", "lncRNA", "pseudogene")
RNA_REGIONS = ("CDS", "intron", "3'UTR", "5'UTR")

NUCLEOTIDE_DTYPE = pd.CategoricalDtype(categories=list(NUCLEOTIDES))
RNA_TYPE_DTYPE = pd.CategoricalDtype(categories=list(RNA_TYPES))
RNA_REGION_DTYPE = pd.CategoricalDtype(categories=list(RNA_REGIONS))

CATEGORICAL_DTYPES = {
    "RNA_type": RNA_TYPE_DTYPE,
    "RNA_region": RNA_REGION_DTYPE,
}

SEQUENCE_COLUMN = "DNA_5mer"
POSITION_PREFIX = "position_"

# Columns every input table must carry before it can be scored
REQUIRED_COLUMNS = (
    "gc_content",
    "RNA_type",
    "RNA_region",
    "exon_length",
    "distance_to_junction",
    "evolutionary_conservation",
    SEQUENCE_COLUMN,
)

# Prediction outputs
POSITIVE_LABEL = "Positive"
NEGATIVE_LABEL = "Negative"
STATUS_DTYPE = pd.CategoricalDtype(categories=[POSITIVE_LABEL, NEGATIVE_LABEL])
PROB_COLUMN = "predicted_m6A_prob"
STATUS_COLUMN = "predicted_m6A_status"

DEFAULT_THRESHOLD = 0.5
