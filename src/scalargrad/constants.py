# Step used by the central-difference gradient estimate.
NUMERIC_EPSILON = 1e-6

# Largest accepted |analytic - numerical| gradient difference.
GRADIENT_TOLERANCE = 1e-5

# Graphviz output settings.
RENDER_FORMAT = "svg"
RANK_DIR = "LR"
