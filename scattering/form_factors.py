"""
Form-factor coupling table.

Static map (target species, mediator) -> ordered list of FormFactorInfo.
The order is the order in which the nuclear model contracts the form
factors, so it must not be rearranged.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from .constants import ee, sw, cw
from .exceptions import UnsupportedMediatorError
from .particles import PID


class FormFactorType(Enum):
    F1p = "F1p"
    F1n = "F1n"
    F2p = "F2p"
    F2n = "F2n"
    FA = "FA"
    FCoh = "FCoh"


@dataclass(frozen=True)
class FormFactorInfo:
    type: FormFactorType
    coupling: complex


FFDictionary = Dict[Tuple[PID, PID], List[FormFactorInfo]]

TARGETS = (PID.proton(), PID.neutron(), PID.carbon())


def _isovector(coupl: complex) -> List[FormFactorInfo]:
    return [
        FormFactorInfo(FormFactorType.F1p, coupl),
        FormFactorInfo(FormFactorType.F1n, -coupl),
        FormFactorInfo(FormFactorType.F2p, coupl),
        FormFactorInfo(FormFactorType.F2n, -coupl),
        FormFactorInfo(FormFactorType.FA, coupl),
    ]


def form_factor_table(mediator) -> FFDictionary:
    """
    Build the form-factor couplings for every supported target.

    Species that do not couple to the mediator map to an empty list.

    Raises:
        UnsupportedMediatorError: mediator is not W+, W-, Z or photon
    """
    mediator = PID(mediator)
    proton, neutron, carbon = TARGETS
    i = 1j
    results: FFDictionary = {}

    if mediator == PID.w_plus():
        coupl = ee * i / (sw * math.sqrt(2) * 2)
        results[(proton, mediator)] = _isovector(coupl)
        results[(neutron, mediator)] = []
        results[(carbon, mediator)] = []
    elif mediator == PID.w_minus():
        coupl = ee * i / (sw * math.sqrt(2) * 2)
        results[(neutron, mediator)] = _isovector(coupl)
        results[(proton, mediator)] = []
        results[(carbon, mediator)] = []
    elif mediator == PID.z():
        coupl1 = cw * ee * i / (2 * sw) - ee * i * sw / (2 * cw)
        coupl2 = -(cw * ee * i / (2 * sw))
        results[(proton, mediator)] = [
            FormFactorInfo(FormFactorType.F1p, coupl1),
            FormFactorInfo(FormFactorType.F1n, coupl2),
            FormFactorInfo(FormFactorType.F2p, coupl1),
            FormFactorInfo(FormFactorType.F2n, coupl2),
            FormFactorInfo(FormFactorType.FA, coupl2),
        ]
        results[(neutron, mediator)] = [
            FormFactorInfo(FormFactorType.F1n, coupl1),
            FormFactorInfo(FormFactorType.F1p, coupl2),
            FormFactorInfo(FormFactorType.F2n, coupl1),
            FormFactorInfo(FormFactorType.F2p, coupl2),
            FormFactorInfo(FormFactorType.FA, coupl2),
        ]
        results[(carbon, mediator)] = []
    elif mediator == PID.photon():
        coupl = i * ee
        results[(proton, mediator)] = [
            FormFactorInfo(FormFactorType.F1p, coupl),
            FormFactorInfo(FormFactorType.F2p, coupl),
        ]
        results[(neutron, mediator)] = [
            FormFactorInfo(FormFactorType.F1n, coupl),
            FormFactorInfo(FormFactorType.F2n, coupl),
        ]
        results[(carbon, mediator)] = [FormFactorInfo(FormFactorType.FCoh, 6.0 * coupl)]
    else:
        raise UnsupportedMediatorError(f"Invalid probe: mediator {mediator.code} has no form factors")

    return results


def lookup_form_factors(table: FFDictionary, target, mediator) -> List[FormFactorInfo]:
    """Fetch one entry; a missing (target, mediator) pair is an error, never an empty default."""
    key = (PID(target), PID(mediator))
    try:
        return table[key]
    except KeyError:
        raise UnsupportedMediatorError(
            f"No form factors for target {key[0].code} with mediator {key[1].code}"
        ) from None
