"""Defines constants shared across the project."""

# Reconstruction source tags
DOWN_SRC = -1  # Downstream (TMS) reconstruction
PAN_SRC = 0  # Pandora ND-LAr reconstruction
DLP_SRC = 1  # SPINE (DeepLearnPhysics) ND-LAr reconstruction

# Match type values
UNIQUE_NO_TIME = 0
UNIQUE_WITH_TIME = 1

# Default boundary-proximity cutoffs in cm
DOWN_Z_CUTOFF = 20.0
UP_Z_CUTOFF = 20.0

# Trigger time conversion factor (s -> ns)
SEC_TO_NS = 1e9

# Name of the default matching geometry
DEFAULT_GEO = "ndlar_tms"
