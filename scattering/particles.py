from __future__ import annotations
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True, order=True)
class PID:
    """
    PDG-style particle identity.

    Equality, ordering and hashing are by integer code, so PIDs work as
    dict keys everywhere. Antiparticles carry a negative code.
    """

    code: int

    def __post_init__(self):
        if isinstance(self.code, PID):
            object.__setattr__(self, "code", self.code.code)
        object.__setattr__(self, "code", int(self.code))

    # -------------------- Named constructors --------------------

    @classmethod
    def electron(cls) -> "PID":
        return cls(11)

    @classmethod
    def nu_electron(cls) -> "PID":
        return cls(12)

    @classmethod
    def muon(cls) -> "PID":
        return cls(13)

    @classmethod
    def nu_muon(cls) -> "PID":
        return cls(14)

    @classmethod
    def tau(cls) -> "PID":
        return cls(15)

    @classmethod
    def nu_tau(cls) -> "PID":
        return cls(16)

    @classmethod
    def photon(cls) -> "PID":
        return cls(22)

    @classmethod
    def z(cls) -> "PID":
        return cls(23)

    @classmethod
    def w_plus(cls) -> "PID":
        return cls(24)

    @classmethod
    def w_minus(cls) -> "PID":
        return cls(-24)

    @classmethod
    def proton(cls) -> "PID":
        return cls(2212)

    @classmethod
    def neutron(cls) -> "PID":
        return cls(2112)

    @classmethod
    def carbon(cls) -> "PID":
        return cls(1000060120)

    # -------------------- Properties --------------------

    @property
    def is_neutrino(self) -> bool:
        return abs(self.code) in (12, 14, 16)

    @property
    def is_antiparticle(self) -> bool:
        return self.code < 0

    def anti(self) -> "PID":
        return PID(-self.code)

    def __int__(self) -> int:
        return self.code

    def __repr__(self) -> str:
        return f"PID({self.code})"

    def __str__(self) -> str:
        return str(self.code)


# |code| -> (name, mass [MeV], charge [e] of the particle, spin)
_PARTICLE_TABLE: Dict[int, tuple] = {
    11: ("electron", 0.51099895, -1.0, 0.5),
    12: ("nu_e", 0.0, 0.0, 0.5),
    13: ("muon", 105.6583755, -1.0, 0.5),
    14: ("nu_mu", 0.0, 0.0, 0.5),
    15: ("tau", 1776.86, -1.0, 0.5),
    16: ("nu_tau", 0.0, 0.0, 0.5),
    22: ("photon", 0.0, 0.0, 1.0),
    23: ("Z", 91187.6, 0.0, 1.0),
    24: ("W+", 80379.0, 1.0, 1.0),
    2212: ("proton", 938.27208816, 1.0, 0.5),
    2112: ("neutron", 939.56542052, 0.0, 0.5),
    1000060120: ("carbon", 11177.9292, 6.0, 0.0),
}

# Antiparticle names where they differ from a "~" prefix
_ANTI_NAMES = {
    11: "positron",
    13: "antimuon",
    15: "antitau",
    24: "W-",
}


class ParticleInfo:
    """
    Static particle properties keyed by PID.

    Includes an in-memory cache of resolved entries; unknown codes raise.
    """

    _cache: Dict[int, "ParticleInfo"] = {}

    def __new__(cls, pid):
        pid = PID(pid)
        if pid.code in cls._cache:
            return cls._cache[pid.code]

        data = _PARTICLE_TABLE.get(abs(pid.code))
        if data is None:
            raise ValueError(f"❌ Particle with PID {pid.code} not found in particle table")

        self = super().__new__(cls)
        name, mass, charge, spin = data
        self.pid = pid
        self.mass = mass
        self.spin = spin
        if pid.is_antiparticle:
            self.name = _ANTI_NAMES.get(abs(pid.code), f"~{name}")
            self.charge = -charge
        else:
            self.name = name
            self.charge = charge

        cls._cache[pid.code] = self
        return self

    @property
    def is_neutrino(self) -> bool:
        return self.pid.is_neutrino

    @classmethod
    def from_name(cls, name: str) -> "ParticleInfo":
        """Resolve a particle by (case-insensitive) name, e.g. 'nu_mu' or 'positron'."""
        key = name.lower()
        for code, data in _PARTICLE_TABLE.items():
            if data[0].lower() == key:
                return cls(code)
            anti_name = _ANTI_NAMES.get(code, f"~{data[0]}")
            if anti_name.lower() == key:
                return cls(-code)
        raise ValueError(f"❌ Particle '{name}' not found in particle table")

    def __repr__(self):
        return (
            f"ParticleInfo(name={self.name}, pid={self.pid.code}, mass={self.mass:.4f} MeV, "
            f"charge={self.charge:+.0f}e, spin={self.spin})"
        )
