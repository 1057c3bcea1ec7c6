"""Default numerical tolerances."""

# Acceptance threshold for near-zero negative eigenvalues in PSD factorization.
PSD_TOL = 1e-8

# Max absolute mismatch when matching linear and constant terms of a norm.
COEFFICIENT_TOL = 1e-8
