# Dimensionality of every vector that flows through the pipeline
# (all-MiniLM-L6-v2 produces 384-dimensional token vectors)
D_MODEL = 384

# Seeds for the fixed "pretrained" projection matrices
WEIGHT_SEEDS = { "query": 1234,
                 "key": 5678,
                 "value": 9012,
                 "output": 3456 }

# He initialisation is sqrt(2 / fan_in), we push the variance up a little
# so attention scores are less uniform
WEIGHT_GAIN = 1.2

LAYER_NORM_EPSILON = 1e-6

PE_BASE = 10000

PCA_ITERATIONS = 15
DEFAULT_PCA_SEED = 0

DEFAULT_MODEL_NAME = "sentence-transformers/all-MiniLM-L6-v2"

STAGES = ("raw", "positional", "attended")
SOURCE_IDS = ("A", "B")
