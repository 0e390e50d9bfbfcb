"""
Neutrino Event Generation Runner Module

This module provides the main generation runner function that can be called
from scripts or imported directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from . import config
from .core.data_classes import Event
from .core.distributions import CategoricalDistribution, PowerLawDistribution, make_rng
from .core.geometry import Cylinder, CylinderSurface
from .core.injectors import Injector, LIInjector, SurfaceInjector, VolumeInjector
from .core.io_utils import export_events_to_csv
from .core.sampling import LowerHalfSphere, UniformAngularDistribution
from .core.simulation import generate_events
from .plotting import print_statistics, visualize_events

INJECTOR_KINDS = ("volume", "surface", "replay")


def build_injector(
    kind: str,
    replay_dir: Optional[Path] = None,
    drop_starting: bool = False,
) -> Injector:
    """Build an injector around the configured detector cylinder.

    Parameters
    ----------
    kind : str
        One of ``"volume"``, ``"surface"`` or ``"replay"``.
    replay_dir : Path, optional
        Replay directory; required for ``"replay"``.
    drop_starting : bool
        For ``"replay"``, drop rows whose initial vertex lies inside the
        detector cylinder.
    """
    cylinder = Cylinder(config.DETECTOR_CENTER, config.DETECTOR_HEIGHT_M, config.DETECTOR_RADIUS_M)
    energy_dist = PowerLawDistribution(config.ENERGY_SPECTRAL_INDEX, config.ENERGY_MIN_GEV, config.ENERGY_MAX_GEV)
    type_dist = CategoricalDistribution(config.DEFAULT_PARTICLE_TYPES, config.DEFAULT_PARTICLE_TYPE_PROBABILITIES)

    if kind == "volume":
        return VolumeInjector(
            cylinder, energy_dist, type_dist, UniformAngularDistribution(),
            config.DEFAULT_LENGTH_M, config.DEFAULT_TIME_NS,
        )
    if kind == "surface":
        return SurfaceInjector(
            CylinderSurface.from_volume(cylinder), energy_dist, type_dist, LowerHalfSphere(),
            config.DEFAULT_LENGTH_M, config.DEFAULT_TIME_NS,
        )
    if kind == "replay":
        if replay_dir is None:
            raise ValueError("A replay directory is required for the replay injector")
        return LIInjector.from_directory(
            replay_dir, drop_starting=drop_starting, volume=cylinder if drop_starting else None,
        )
    raise ValueError(f"Unknown injector kind '{kind}', expected one of {INJECTOR_KINDS}")


def run_event_generation(
    injector_kind: str = "volume",
    n_events: Optional[int] = None,
    seed: Optional[int] = None,
    replay_dir: Optional[Path] = None,
    drop_starting: bool = False,
    output_dir: Optional[Path] = None,
    save_results: bool = True,
    generate_plots: bool = True,
    show_plots: bool = False,
) -> List[Event]:
    """Run a complete event generation.

    This is the main entry point for generating events. It handles:
    1. Building the injector from config defaults
    2. Drawing the events with a seeded generator
    3. Exporting results
    4. Generating visualization plots

    Parameters
    ----------
    injector_kind : str
        ``"volume"``, ``"surface"`` or ``"replay"``.
    n_events : int, optional
        Number of events. If None, uses config default.
    seed : int, optional
        Generator seed. If None, uses config default.
    replay_dir : Path, optional
        Replay directory for the replay injector.
    drop_starting : bool
        Drop replay rows starting inside the detector.
    output_dir : Path, optional
        Directory for output files (Data/, Figures/). If None, uses current working directory.
    save_results : bool
        Whether to save results to CSV.
    generate_plots : bool
        Whether to generate visualization plots.
    show_plots : bool
        Whether to open plot windows.

    Returns
    -------
    List[Event]
        Generated events.
    """
    output_dir = Path.cwd() if output_dir is None else Path(output_dir)
    n_events = config.DEFAULT_N_EVENTS if n_events is None else n_events
    seed = config.DEFAULT_SEED if seed is None else seed

    injector = build_injector(injector_kind, replay_dir=replay_dir, drop_starting=drop_starting)

    print("\n" + "="*70)
    print("EVENT GENERATION CONFIGURATION")
    print("="*70)
    print(f"Injector: {type(injector).__name__}")
    if injector_kind == "replay":
        print(f"Replay source: {replay_dir} ({len(injector)} rows)")
    else:
        print(f"Detector cylinder: center={config.DETECTOR_CENTER}, "
              f"height={config.DETECTOR_HEIGHT_M} m, radius={config.DETECTOR_RADIUS_M} m")
        print(f"Energy spectrum: E^-{config.ENERGY_SPECTRAL_INDEX} "
              f"in [{config.ENERGY_MIN_GEV:.1e}, {config.ENERGY_MAX_GEV:.1e}] GeV")
    print(f"Seed: {seed}")
    print("="*70 + "\n")

    print(f"[info] Starting generation of {n_events} events...")
    events = generate_events(injector, n_events, make_rng(seed))

    print_statistics(events)

    if save_results and events:
        csv_filename = str(output_dir / config.DATA_OUTPUT_DIR / config.EVENT_DATA_CSV)
        export_events_to_csv(events, filename=csv_filename)

    if generate_plots and events:
        print("[info] Generating visualizations...")
        save_base = str(output_dir / config.FIGURES_OUTPUT_DIR / config.EVENT_FIGURE_BASE)
        visualize_events(events, save_path=save_base, show=show_plots)
        print("[info] Visualization complete!")

    return events


def main(argv=None):
    """Command-line entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate neutrino detector events")
    parser.add_argument("-i", "--injector", choices=INJECTOR_KINDS, default="volume",
                        help="Injector type")
    parser.add_argument("-n", "--events", type=int, default=None,
                        help="Number of events to generate")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random generator seed")
    parser.add_argument("--replay-dir", type=Path, default=None,
                        help="Replay directory (for --injector replay)")
    parser.add_argument("--drop-starting", action="store_true",
                        help="Drop replay rows starting inside the detector")
    parser.add_argument("--no-save", action="store_true",
                        help="Don't save results to CSV")
    parser.add_argument("--no-plot", action="store_true",
                        help="Don't generate visualization plots")
    parser.add_argument("--show", action="store_true",
                        help="Open plot windows")
    parser.add_argument("--output-dir", type=Path, default=None,
                        help="Output directory for results and figures")

    args = parser.parse_args(argv)

    run_event_generation(
        injector_kind=args.injector,
        n_events=args.events,
        seed=args.seed,
        replay_dir=args.replay_dir,
        drop_starting=args.drop_starting,
        output_dir=args.output_dir,
        save_results=not args.no_save,
        generate_plots=not args.no_plot,
        show_plots=args.show,
    )


if __name__ == "__main__":
    main()
