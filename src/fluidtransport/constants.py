"""Reference constants for common gases."""

# Sutherland's law for air (White, Viscous Fluid Flow)
AIR_MU_REF = 1.716e-5  # Pa*s
AIR_T_REF = 273.15  # K
AIR_SUTHERLAND_S = 110.4  # K

AIR_PRANDTL = 0.72

# Status string returned by the real-fluid service when a call succeeded
NO_ERROR_STATUS = "No errors"

# Flash specification: temperature and density
FLASH_TD = "Td"
