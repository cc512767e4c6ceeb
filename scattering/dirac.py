"""
Dirac algebra for ScatterX.

Chiral (Weyl) representation with metric diag(1, -1, -1, -1):

    gamma^0 = [[0, 1], [1, 0]]
    gamma^i = [[0, sigma^i], [-sigma^i, 0]]
    gamma^5 = i gamma^0 gamma^1 gamma^2 gamma^3 = diag(-1, -1, 1, 1)

Spinors are helicity eigenstates normalised to ubar u = 2m, so that
sum_h u ubar = pslash + m and sum_h v vbar = pslash - m.

Everything here is pure: constructors return fresh objects and no
module state is ever mutated.
"""

from __future__ import annotations
import math
from typing import Union
import numpy as np

from .kinematics import FourVector

Scalar = Union[int, float, complex]

METRIC = np.diag([1.0, -1.0, -1.0, -1.0])

# -----------------------------
# Constant matrices
# -----------------------------
_I2 = np.eye(2, dtype=np.complex128)
_Z2 = np.zeros((2, 2), dtype=np.complex128)
_PAULI = (
    np.array([[0, 1], [1, 0]], dtype=np.complex128),
    np.array([[0, -1j], [1j, 0]], dtype=np.complex128),
    np.array([[1, 0], [0, -1]], dtype=np.complex128),
)

_GAMMA = (
    np.block([[_Z2, _I2], [_I2, _Z2]]),
    *(np.block([[_Z2, s], [-s, _Z2]]) for s in _PAULI),
)
_IDENTITY = np.eye(4, dtype=np.complex128)
_GAMMA5 = 1j * _GAMMA[0] @ _GAMMA[1] @ _GAMMA[2] @ _GAMMA[3]


class SpinMatrix:
    """4x4 complex matrix acting on Dirac spinors."""

    __slots__ = ("data",)
    # numpy scalars on the left defer to __rmul__
    __array_ufunc__ = None

    def __init__(self, data=None):
        if data is None:
            self.data = np.zeros((4, 4), dtype=np.complex128)
        else:
            self.data = np.array(data, dtype=np.complex128).reshape(4, 4)

    # -------------------- Named constructors --------------------

    @classmethod
    def identity(cls) -> "SpinMatrix":
        return cls(_IDENTITY)

    @classmethod
    def gamma_mu(cls, mu: int) -> "SpinMatrix":
        if not 0 <= mu < 4:
            raise IndexError(f"Lorentz index must be 0..3, got {mu}")
        return cls(_GAMMA[mu])

    @classmethod
    def gamma_0(cls) -> "SpinMatrix":
        return cls(_GAMMA[0])

    @classmethod
    def gamma_1(cls) -> "SpinMatrix":
        return cls(_GAMMA[1])

    @classmethod
    def gamma_2(cls) -> "SpinMatrix":
        return cls(_GAMMA[2])

    @classmethod
    def gamma_3(cls) -> "SpinMatrix":
        return cls(_GAMMA[3])

    @classmethod
    def gamma_5(cls) -> "SpinMatrix":
        return cls(_GAMMA5)

    @classmethod
    def pl(cls) -> "SpinMatrix":
        """Left-handed projector (1 - gamma5)/2."""
        return cls((_IDENTITY - _GAMMA5) / 2)

    @classmethod
    def pr(cls) -> "SpinMatrix":
        """Right-handed projector (1 + gamma5)/2."""
        return cls((_IDENTITY + _GAMMA5) / 2)

    @classmethod
    def sigma_mu_nu(cls, mu: int, nu: int) -> "SpinMatrix":
        """sigma^{mu nu} = i (gamma^mu gamma^nu - g^{mu nu})."""
        if not (0 <= mu < 4 and 0 <= nu < 4):
            raise IndexError(f"Lorentz indices must be 0..3, got ({mu}, {nu})")
        return cls(1j * (_GAMMA[mu] @ _GAMMA[nu] - METRIC[mu, nu] * _IDENTITY))

    @classmethod
    def slashed(cls, p: FourVector) -> "SpinMatrix":
        """p_mu gamma^mu = E gamma^0 - px gamma^1 - py gamma^2 - pz gamma^3."""
        E, px, py, pz = p.to_tuple()
        return cls(E * _GAMMA[0] - px * _GAMMA[1] - py * _GAMMA[2] - pz * _GAMMA[3])

    # -------------------- Arithmetic --------------------

    def __add__(self, other: "SpinMatrix") -> "SpinMatrix":
        if not isinstance(other, SpinMatrix):
            return NotImplemented
        return SpinMatrix(self.data + other.data)

    def __sub__(self, other: "SpinMatrix") -> "SpinMatrix":
        if not isinstance(other, SpinMatrix):
            return NotImplemented
        return SpinMatrix(self.data - other.data)

    def __neg__(self) -> "SpinMatrix":
        return SpinMatrix(-self.data)

    def __mul__(self, other):
        if isinstance(other, SpinMatrix):
            return SpinMatrix(self.data @ other.data)
        if isinstance(other, Spinor):
            if other.bar:
                raise TypeError("SpinMatrix * Spinor requires an unbarred spinor")
            return Spinor(self.data @ other.data, bar=False)
        if isinstance(other, (int, float, complex, np.number)):
            return SpinMatrix(self.data * other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float, complex, np.number)):
            return SpinMatrix(other * self.data)
        return NotImplemented

    # -------------------- Comparison / access --------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, SpinMatrix):
            return NotImplemented
        return bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def isclose(self, other: "SpinMatrix", rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self.data, other.data, rtol=rtol, atol=atol))

    def __getitem__(self, idx):
        if isinstance(idx, tuple):
            return self.data[idx]
        return self.data.flat[idx]

    def __len__(self) -> int:
        return 16

    size = __len__

    def __repr__(self) -> str:
        return f"SpinMatrix({np.array2string(self.data, precision=4)})"


class Spinor:
    """
    Four-component Dirac spinor.

    Unbarred spinors are column vectors, barred spinors row vectors:
    bar * unbar is a complex scalar, unbar.outer(bar) a SpinMatrix.
    """

    __slots__ = ("data", "bar")
    __array_ufunc__ = None

    def __init__(self, data, bar: bool = False):
        self.data = np.array(data, dtype=np.complex128).reshape(4)
        self.bar = bar

    def __mul__(self, other):
        if isinstance(other, Spinor):
            if not self.bar or other.bar:
                raise TypeError("Spinor inner product needs barred * unbarred")
            return complex(self.data @ other.data)
        if isinstance(other, SpinMatrix):
            if not self.bar:
                raise TypeError("Spinor * SpinMatrix requires a barred spinor")
            return Spinor(self.data @ other.data, bar=True)
        if isinstance(other, (int, float, complex, np.number)):
            return Spinor(self.data * other, bar=self.bar)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float, complex, np.number)):
            return Spinor(other * self.data, bar=self.bar)
        return NotImplemented

    def __add__(self, other: "Spinor") -> "Spinor":
        if not isinstance(other, Spinor) or other.bar != self.bar:
            return NotImplemented
        return Spinor(self.data + other.data, bar=self.bar)

    def outer(self, other: "Spinor") -> SpinMatrix:
        """u (x) ubar -> 4x4 matrix."""
        if self.bar or not other.bar:
            raise TypeError("Spinor outer product needs unbarred.outer(barred)")
        return SpinMatrix(np.outer(self.data, other.data))

    def conjugate(self) -> "Spinor":
        """Dirac conjugate: ubar = u^dagger gamma^0 and back."""
        if self.bar:
            return Spinor(_GAMMA[0] @ self.data.conj(), bar=False)
        return Spinor(self.data.conj() @ _GAMMA[0], bar=True)

    def __getitem__(self, idx: int) -> complex:
        return complex(self.data[idx])

    def __len__(self) -> int:
        return 4

    def __repr__(self) -> str:
        kind = "SpinorBar" if self.bar else "Spinor"
        return f"{kind}({np.array2string(self.data, precision=4)})"


# -----------------------------
# Helicity spinors
# -----------------------------
def _check_helicity(helicity: int):
    if helicity not in (-1, 1):
        raise ValueError(f"Helicity must be +1 or -1, got {helicity}")


def _helicity_eigenstate(helicity: int, p: FourVector) -> np.ndarray:
    """Two-component chi_h with (sigma . p_hat) chi_h = h chi_h."""
    pmag = p.magnitude
    pt2 = p.px * p.px + p.py * p.py
    # |p| + pz, as pt^2 / (|p| - pz) when pz < 0
    s = pmag + p.pz if p.pz >= 0.0 else pt2 / (pmag - p.pz)
    if pmag == 0.0:
        chi_plus = np.array([1.0, 0.0], dtype=np.complex128)
        chi_minus = np.array([0.0, 1.0], dtype=np.complex128)
    elif s <= 0.0:
        # anti-parallel to z
        chi_plus = np.array([0.0, 1.0], dtype=np.complex128)
        chi_minus = np.array([-1.0, 0.0], dtype=np.complex128)
    else:
        norm = math.sqrt(2.0 * pmag * s)
        chi_plus = np.array([s, complex(p.px, p.py)], dtype=np.complex128) / norm
        chi_minus = np.array([complex(-p.px, p.py), s], dtype=np.complex128) / norm
    return chi_plus if helicity == 1 else chi_minus


def _omegas(p: FourVector):
    """(sqrt(E + |p|), sqrt(E - |p|)) with the small root taken as m / sqrt(E + |p|)."""
    pmag = p.magnitude
    omega_plus = math.sqrt(p.E + pmag)
    omega_minus = p.mass / omega_plus if omega_plus > 0.0 else 0.0
    return omega_plus, omega_minus


def _omega(sign: int, omegas) -> float:
    return omegas[0] if sign > 0 else omegas[1]


def v_spinor(helicity: int, p: FourVector) -> Spinor:
    """Antiparticle spinor v(h, p) for a physical (E >= 0) momentum."""
    _check_helicity(helicity)
    if p.E < 0.0:
        raise ValueError("v_spinor requires a positive-energy momentum")
    omegas = _omegas(p)
    chi = _helicity_eigenstate(-helicity, p)
    upper = -helicity * _omega(helicity, omegas) * chi
    lower = helicity * _omega(-helicity, omegas) * chi
    return Spinor(np.concatenate([upper, lower]), bar=False)


def vbar_spinor(helicity: int, p: FourVector) -> Spinor:
    return v_spinor(helicity, p).conjugate()


def u_spinor(helicity: int, p: FourVector) -> Spinor:
    """
    Particle spinor u(h, p).

    A negative-energy momentum -p is the crossed leg of an antiparticle
    with momentum p and yields v(h, p).
    """
    _check_helicity(helicity)
    if p.E < 0.0:
        return v_spinor(helicity, -p)
    omegas = _omegas(p)
    chi = _helicity_eigenstate(helicity, p)
    upper = _omega(-helicity, omegas) * chi
    lower = _omega(helicity, omegas) * chi
    return Spinor(np.concatenate([upper, lower]), bar=False)


def ubar_spinor(helicity: int, p: FourVector) -> Spinor:
    """Barred particle spinor; crossed (E < 0) momenta give vbar(h, -p)."""
    return u_spinor(helicity, p).conjugate()
