"""
Electroweak coupling resolution.

Classifies a lepton process as neutral or charged current and picks the
single mediator, its couplings, mass and width. This is the only place
coupling constants for the leptonic vertex are defined.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from .constants import ee, sw, cw, MW, GAMW, MZ, GAMZ
from .exceptions import ClassificationError
from .particles import PID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CouplingParameters:
    mediator: PID
    coupl_left: complex
    coupl_right: complex
    mass: float
    width: float
    anti: bool


def is_neutral_current(initial: PID, final: PID) -> bool:
    return initial == final


def is_charged_current(neutrino: bool, initial: PID, final: PID) -> bool:
    """
    Codes differ by one unit in the neutrino-consistent direction (nu_l = l + 1).

    Compared on |code| with matching sign, so nu~ -> l+ classifies like nu -> l-.
    """
    if initial.is_antiparticle != final.is_antiparticle:
        return False
    return abs(initial.code) - (2 * int(neutrino) - 1) == abs(final.code)


def resolve_couplings(ids: Sequence) -> CouplingParameters:
    """
    Resolve the mediator and couplings for a lepton process.

    Args:
        ids: lepton PIDs, ids[0] = beam lepton, ids[-1] = final lepton

    Returns:
        CouplingParameters for the W, Z or photon branch

    Raises:
        ClassificationError: neither neutral nor charged current
    """
    if len(ids) < 2:
        raise ClassificationError(f"Process needs at least two leptons, got {list(ids)}")
    initial, final = PID(ids[0]), PID(ids[-1])
    i = 1j

    init_neutrino = initial.is_neutrino
    neutral_current = is_neutral_current(initial, final)
    charged_current = is_charged_current(init_neutrino, initial, final)
    if not neutral_current and not charged_current:
        raise ClassificationError(
            f"Invalid process {initial.code} -> {final.code}: neither neutral nor charged current"
        )

    if charged_current:
        if init_neutrino:
            mediator = PID.w_minus() if initial.is_antiparticle else PID.w_plus()
        else:
            mediator = PID.w_plus() if initial.is_antiparticle else PID.w_minus()
        params = CouplingParameters(
            mediator=mediator,
            coupl_left=ee * i / (sw * math.sqrt(2)),
            coupl_right=0j,
            mass=MW,
            width=GAMW,
            anti=initial.is_antiparticle,
        )
    elif init_neutrino:
        params = CouplingParameters(
            mediator=PID.z(),
            coupl_left=(cw * ee * i) / (2 * sw) + (ee * i * sw) / (2 * cw),
            coupl_right=0j,
            mass=MZ,
            width=GAMZ,
            anti=initial.is_antiparticle,
        )
    else:
        params = CouplingParameters(
            mediator=PID.photon(),
            coupl_left=-ee * i,
            coupl_right=-ee * i,
            mass=0.0,
            width=0.0,
            anti=initial.is_antiparticle,
        )

    logger.debug(
        f"Resolved {initial.code} -> {final.code}: mediator={params.mediator.code}, "
        f"cL={params.coupl_left:.6f}, cR={params.coupl_right:.6f}, M={params.mass}, Γ={params.width}"
    )
    return params
