"""
Kinematics helpers for ScatterX.

Units: MeV (natural units c = 1).
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple
import numpy as np


# -----------------------------
# FourVector
# -----------------------------
@dataclass(frozen=True)
class FourVector:
    E: float
    px: float
    py: float
    pz: float

    @property
    def p(self) -> np.ndarray:
        return np.array([self.px, self.py, self.pz], dtype=float)

    @property
    def p2(self) -> float:
        """Squared three-momentum |p|^2."""
        return self.px * self.px + self.py * self.py + self.pz * self.pz

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.p2)

    @property
    def m2(self) -> float:
        """Invariant mass squared (may be negative for spacelike vectors)."""
        return self.E * self.E - self.p2

    @property
    def mass(self) -> float:
        return math.sqrt(max(self.m2, 0.0))

    def dot(self, other: "FourVector") -> float:
        """Minkowski inner product with (+,-,-,-) signature."""
        return self.E * other.E - (self.px * other.px + self.py * other.py + self.pz * other.pz)

    def __getitem__(self, mu: int) -> float:
        return self.to_tuple()[mu]

    def __add__(self, other: "FourVector") -> "FourVector":
        return FourVector(self.E + other.E, self.px + other.px, self.py + other.py, self.pz + other.pz)

    def __sub__(self, other: "FourVector") -> "FourVector":
        return FourVector(self.E - other.E, self.px - other.px, self.py - other.py, self.pz - other.pz)

    def __neg__(self) -> "FourVector":
        return FourVector(-self.E, -self.px, -self.py, -self.pz)

    def __mul__(self, scale: float) -> "FourVector":
        return FourVector(self.E * scale, self.px * scale, self.py * scale, self.pz * scale)

    __rmul__ = __mul__

    def __truediv__(self, scale: float) -> "FourVector":
        return FourVector(self.E / scale, self.px / scale, self.py / scale, self.pz / scale)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.E, self.px, self.py, self.pz)

    def to_array(self) -> np.ndarray:
        return np.array(self.to_tuple(), dtype=float)

    def __repr__(self) -> str:
        return f"FourVector(E={self.E:.6f}, px={self.px:.6f}, py={self.py:.6f}, pz={self.pz:.6f})"


# -----------------------------
# Elastic two-body scattering
# -----------------------------
def elastic_scatter(lepton_in: FourVector,
                    target_mass: float,
                    lepton_out_mass: float,
                    cos_theta: float,
                    phi: float = 0.0) -> Tuple[FourVector, FourVector]:
    """
    Final state of lepton + target (at rest) -> lepton' + target' at fixed lab angle.

    The incoming lepton must travel along +z. Solves energy-momentum
    conservation for the outgoing lepton energy at polar angle theta.

    Returns:
        (lepton_out, target_out) four-vectors.
    """
    if not -1.0 <= cos_theta <= 1.0:
        raise ValueError("cos(theta) must lie in [-1, 1].")

    E = lepton_in.E
    k = lepton_in.magnitude
    M = target_mass
    m = lepton_out_mass
    m_in2 = lepton_in.m2

    # (E + M - E')^2 - |k - k'|^2 = M^2 with |k'| = sqrt(E'^2 - m^2)
    # -> a E' + b = c |k'| with a = E + M, b = -(m_in2 + m^2)/2 - E M, c = k cos(theta)
    # squared: A E'^2 + B E' + C = 0, A = a^2 - c^2, B = 2 a b, C = b^2 + c^2 m^2
    # B^2 - 4AC reduces to 4 c^2 (b^2 - A m^2); the a^2 b^2 terms cancel exactly
    a = E + M
    b = -(m_in2 + m * m) / 2.0 - E * M
    c = k * cos_theta
    A = a * a - c * c
    B = 2.0 * a * b
    C = b * b + c * c * m * m
    reduced = b * b - A * m * m
    if reduced < 0.0:
        raise ValueError("Elastic scattering kinematically forbidden at this angle.")

    # B < 0, so q > 0 and neither root loses digits to cancellation
    q = -(B - 2.0 * abs(c) * math.sqrt(reduced)) / 2.0
    roots = [q / A, C / q]
    roots = [root for root in roots if root >= m]
    if not roots:
        raise ValueError("Elastic scattering kinematically forbidden at this angle.")

    # squaring admits a spurious branch with a E' + b = -c |k'|
    def residual(root):
        k_out = math.sqrt(max(root * root - m * m, 0.0))
        return abs(a * root + b - c * k_out)

    E_out = min(roots, key=residual)

    k_out = math.sqrt(max(E_out * E_out - m * m, 0.0))
    sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
    lepton_out = FourVector(
        E_out,
        k_out * sin_theta * math.cos(phi),
        k_out * sin_theta * math.sin(phi),
        k_out * cos_theta,
    )
    target_in = FourVector(M, 0.0, 0.0, 0.0)
    target_out = lepton_in + target_in - lepton_out
    return lepton_out, target_out
