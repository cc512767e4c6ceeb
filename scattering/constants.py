"""
Physical constants used by the ScatterX amplitude engine.

Units: MeV (natural units c = hbar = 1), except HBARC which carries fm.
"""

import math

# Mathematical constant
pi = math.pi

# Electromagnetic coupling
ALPHA = 1.0 / 137.035999084  # Fine-structure constant (Thomson limit)
ee = math.sqrt(4.0 * pi * ALPHA)  # Electric charge in natural units

# Electroweak boson masses and widths (MeV)
MW = 80379.0
GAMW = 2085.0
MZ = 91187.6
GAMZ = 2495.2

# Weak mixing angle, on-shell scheme: cos(theta_W) = MW / MZ
cw = MW / MZ
sw = math.sqrt(1.0 - cw * cw)
sw2 = sw * sw

# Unit conversions
HBARC = 197.3269804  # MeV fm
FM2_TO_MB = 10.0  # 1 fm^2 = 10 mb
HBARC2 = HBARC * HBARC * FM2_TO_MB  # MeV^2 mb
MB_TO_NB = 1e6

# Nucleon form-factor parameters
MV2 = 0.71e6  # Vector dipole mass squared (MeV^2)
MA = 1.0e3  # Axial dipole mass (MeV)
GA = -1.2694  # Axial coupling at Q^2 = 0
MU_P = 2.793  # Proton magnetic moment (nuclear magnetons)
MU_N = -1.913  # Neutron magnetic moment (nuclear magnetons)

__all__ = [
    'pi', 'ALPHA', 'ee',
    'MW', 'GAMW', 'MZ', 'GAMZ',
    'cw', 'sw', 'sw2',
    'HBARC', 'FM2_TO_MB', 'HBARC2', 'MB_TO_NB',
    'MV2', 'MA', 'GA', 'MU_P', 'MU_N',
]
