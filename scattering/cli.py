#!/usr/bin/env python3
"""
Cross-section driver for ScatterX.

Examples:
    scatterx --process "14 2112 -> 13 2212" --energy 1000 --cos-theta 0.9
    scatterx --process "11 2212 -> 11 2212" --energy 500 --cos-theta 0.5 --verbose
"""

import argparse
import logging
import sys

import numpy as np

from .beams import Beam, Monochromatic
from .config import RunConfig
from .currents import get_builder
from .events import Event
from .exceptions import ScatteringError
from .form_factors import TARGETS
from .hard_scattering import HardScattering
from .kinematics import FourVector, elastic_scatter
from .nuclear_model import FreeNucleon
from .particles import ParticleInfo

logger = logging.getLogger(__name__)


def build_parser():
    return argparse.ArgumentParser(
        description="ScatterX lepton-nucleon cross sections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  scatterx --process "14 2112 -> 13 2212" --energy 1000 --cos-theta 0.9
  scatterx --process "-14 2212 -> -13 2112" --energy 2000 --cos-theta 0.95
  scatterx --process "11 2212 -> 11 2212" --energy 500 --cos-theta 0.5 --verbose"""
    )


def build_event(config: RunConfig) -> Event:
    """Monochromatic beam on a nucleon at rest, outgoing lepton at fixed cos(theta)."""
    process = config.process_info()
    beam = Beam({process.beam: Monochromatic(config.beam_energy)})
    lepton_in = beam.flux(process.beam, [])
    target_mass = ParticleInfo(process.hadrons_in[0]).mass
    lepton_out, target_out = elastic_scatter(
        lepton_in, target_mass, ParticleInfo(process.final_lepton).mass, config.cos_theta
    )
    target_in = FourVector(target_mass, 0.0, 0.0, 0.0)
    return Event(momenta=[target_in, lepton_in, target_out, lepton_out])


def run(config: RunConfig):
    """Compute and fill one event; returns (event, xsecs, filled)."""
    process = config.process_info()
    scattering = HardScattering(FreeNucleon(np.random.default_rng(config.seed)), get_builder(config.builder))
    scattering.set_process(process)

    event = build_event(config)
    xsecs = scattering.cross_section(event)
    filled = scattering.fill_event(event, xsecs)
    logger.info(f"✅ {process}: total {sum(xsecs):.6e} nb, filled={filled}")
    return event, xsecs, filled


def main(argv=None):
    parser = build_parser()
    parser.add_argument("--process", type=str, default=None, help='Process descriptor, e.g. "14 2112 -> 13 2212"')
    parser.add_argument("--energy", type=float, default=None, help="Beam energy in MeV")
    parser.add_argument("--cos-theta", type=float, default=None, help="Outgoing lepton cos(theta) (default 0.9)")
    parser.add_argument("--builder", type=str, default=None, help='Current builder name (default "sm")')
    parser.add_argument("--seed", type=int, default=None, help="Random seed for target selection")
    parser.add_argument("--verbose", action="store_true", help="Show debug output")
    args = parser.parse_args(argv)

    try:
        config = RunConfig.from_env(
            process=args.process,
            beam_energy=args.energy,
            cos_theta=args.cos_theta,
            builder=args.builder,
            seed=args.seed,
            log_level="DEBUG" if args.verbose else None,
        )
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    print("\n" + "=" * 60)
    print("⚛️  ScatterX Cross Sections")
    print("=" * 60)
    print(f"Process          : {config.process}")
    print(f"Beam Energy      : {config.beam_energy} MeV")
    print(f"cos(theta)       : {config.cos_theta}")
    print(f"Current Builder  : {config.builder}")
    print("=" * 60 + "\n")

    try:
        event, xsecs, filled = run(config)
    except (ScatteringError, ValueError, KeyError) as exc:
        logger.error(f"❌ {exc}")
        return 1

    print("Cross sections (nb):")
    for target, xsec in zip(TARGETS, xsecs):
        print(f"  • {ParticleInfo(target).name:10s}: {xsec:.6e}")
    if filled:
        print(f"\nSelected target  : {ParticleInfo(event.target).name}")
    else:
        print("\nNo target couples to this process at these kinematics.")
    print("=" * 60 + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
