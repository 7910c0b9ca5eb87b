"""Physical constants shared across the package."""

R_J = 8.314462618  # J/(mol·K)
R_KJ = R_J * 1e-3  # kJ/(mol·K)

STANDARD_TEMPERATURE = 298.15  # K
