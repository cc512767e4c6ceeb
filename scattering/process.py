from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from .particles import PID


@dataclass(frozen=True)
class ProcessInfo:
    """
    Minimal process descriptor.

    ids: lepton legs, ids[0] = beam lepton, ids[-1] = final lepton.
         Entries in between are spectators and are ignored by the resolver.
    hadrons_in / hadrons_out: hadronic initial/final species; hadrons_in[0]
         is the target whose mass enters the flux factor.
    """

    ids: Tuple[PID, ...]
    hadrons_in: Tuple[PID, ...] = field(default=(PID.proton(),))
    hadrons_out: Tuple[PID, ...] = field(default=(PID.proton(),))

    def __post_init__(self):
        object.__setattr__(self, "ids", tuple(PID(i) for i in self.ids))
        object.__setattr__(self, "hadrons_in", tuple(PID(i) for i in self.hadrons_in))
        object.__setattr__(self, "hadrons_out", tuple(PID(i) for i in self.hadrons_out))
        if len(self.ids) < 2:
            raise ValueError(f"Process needs an initial and a final lepton, got {list(self.ids)}")

    @property
    def beam(self) -> PID:
        return self.ids[0]

    @property
    def final_lepton(self) -> PID:
        return self.ids[-1]

    @classmethod
    def from_string(cls, text: str) -> "ProcessInfo":
        """
        Parse a compact descriptor.

        Examples:
            "14 -> 13"                  nu_mu -> mu-, proton target
            "11 2212 -> 11 2212"        e- p -> e- p
            "-14 2212 -> -13 2112"      nu_mu~ p -> mu+ n

        Codes of magnitude above 100 are hadrons; the rest are leptons.
        """
        if "->" not in text:
            raise ValueError(f"❌ Process '{text}' must contain '->'")
        lhs, rhs = text.split("->", 1)
        try:
            initial = [int(tok) for tok in lhs.split()]
            final = [int(tok) for tok in rhs.split()]
        except ValueError as exc:
            raise ValueError(f"❌ Process '{text}' contains a non-integer PID") from exc

        leptons_in = [c for c in initial if abs(c) < 100]
        leptons_out = [c for c in final if abs(c) < 100]
        if len(leptons_in) != 1 or len(leptons_out) != 1:
            raise ValueError(f"❌ Process '{text}' needs exactly one lepton on each side")

        hadrons_in = tuple(c for c in initial if abs(c) >= 100) or (PID.proton().code,)
        hadrons_out = tuple(c for c in final if abs(c) >= 100) or hadrons_in
        return cls(ids=(leptons_in[0], leptons_out[0]), hadrons_in=hadrons_in, hadrons_out=hadrons_out)

    def __str__(self) -> str:
        lhs = " ".join(str(p) for p in (self.ids[0], *self.hadrons_in))
        rhs = " ".join(str(p) for p in (self.ids[-1], *self.hadrons_out))
        return f"{lhs} -> {rhs}"
