"""
Generated-event visualization.

This module provides plots and summaries of injected events: energy
spectrum, zenith and azimuth distributions and vertex positions.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .. import config
from ..core.data_classes import Event
from ..core.particle_types import ptype_for_code


def load_event_data(csv_file: Union[str, Path]) -> pd.DataFrame:
    """Load an event CSV written by ``export_events_to_csv``.

    Example
    -------
    >>> events = load_event_data('Data/events.csv')
    >>> print(f"Loaded {events['event_id'].nunique()} events")
    """
    csv_file = Path(csv_file)
    if not csv_file.is_file():
        raise FileNotFoundError(f"Event data file '{csv_file}' does not exist")
    return pd.read_csv(csv_file)


def _leading_particles(events: List[Event]):
    return [e.particles[0] for e in events if e.particles]


def visualize_events(events: List[Event], save_path: Optional[str] = None, show: bool = True):
    """Create an overview figure of generated events.

    Parameters
    ----------
    events : List[Event]
        Generated events; the first particle of each event is plotted.
    save_path : str, optional
        Base path for saving the figure.
    show : bool
        Whether to open the figure window.
    """
    particles = _leading_particles(events)
    if not particles:
        print("[warning] No events to visualize.")
        return

    energies = np.array([p.energy for p in particles])
    directions = np.array([p.direction for p in particles])
    positions = np.array([p.position for p in particles])
    cos_zenith = directions[:, 2]
    azimuth = np.arctan2(directions[:, 1], directions[:, 0]) % (2 * np.pi)
    shown = positions[:config.MAX_VERTICES_TO_PLOT]

    fig, axes = plt.subplots(2, 2, figsize=(12, 10))

    # 1. Energy spectrum (top-left)
    ax1 = axes[0, 0]
    if np.all(energies > 0) and energies.max() > energies.min():
        bins = np.logspace(np.log10(energies.min()), np.log10(energies.max()), 50)
        ax1.set_xscale('log')
        ax1.set_yscale('log')
    else:
        bins = 50
    ax1.hist(energies, bins=bins, color='blue', alpha=0.7)
    ax1.set_xlabel('Energy (GeV)')
    ax1.set_ylabel('Count')
    ax1.set_title('Energy Spectrum')
    ax1.grid(True, alpha=0.3)

    # 2. cos(zenith) (top-right)
    ax2 = axes[0, 1]
    ax2.hist(cos_zenith, bins=50, range=(-1, 1), color='teal', alpha=0.7)
    ax2.set_xlabel('cos(zenith)')
    ax2.set_ylabel('Count')
    ax2.set_title('Zenith Distribution')
    ax2.grid(True, alpha=0.3)

    # 3. Azimuth (bottom-left)
    ax3 = axes[1, 0]
    ax3.hist(azimuth, bins=50, range=(0, 2 * np.pi), color='purple', alpha=0.7)
    ax3.set_xlabel('Azimuth (rad)')
    ax3.set_ylabel('Count')
    ax3.set_title('Azimuth Distribution')
    ax3.grid(True, alpha=0.3)

    # 4. Vertex positions, x-z projection (bottom-right)
    ax4 = axes[1, 1]
    ax4.scatter(shown[:, 0], shown[:, 2], s=4, alpha=0.4, color='red')
    ax4.set_xlabel('x (m)')
    ax4.set_ylabel('z (m)')
    ax4.set_title(f'Vertex Positions ({len(shown)} shown)')
    ax4.set_aspect('equal', adjustable='datalim')
    ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        out = Path(f"{save_path}_overview.png")
        out.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(out, dpi=config.PLOT_DPI, bbox_inches='tight')
        print(f"[info] Saved event overview to {out}")

    if show:
        plt.show()
    else:
        plt.close(fig)


def print_statistics(events: List[Event]):
    """Print a statistical summary of generated events."""
    particles = _leading_particles(events)
    if not particles:
        print("\n[Statistics] No events to display.")
        return

    energies = np.array([p.energy for p in particles])
    cos_zenith = np.array([p.direction[2] for p in particles])
    codes, counts = np.unique([p.particle_type for p in particles], return_counts=True)

    print("\n" + "="*60)
    print("GENERATED EVENT STATISTICS")
    print("="*60)
    print(f"Total events: {len(events)}")
    for code, count in zip(codes, counts):
        try:
            name = ptype_for_code(code).name
        except ValueError:
            name = "UNKNOWN"
        print(f"  {name} ({code}): {count} ({100*count/len(particles):.2f}%)")
    print()
    print("Energy (GeV):")
    print(f"  Mean: {np.mean(energies):.4e}, Median: {np.median(energies):.4e}")
    print(f"  Range: [{np.min(energies):.4e}, {np.max(energies):.4e}]")
    print()
    print("cos(zenith):")
    print(f"  Mean: {np.mean(cos_zenith):.4f}, Std: {np.std(cos_zenith):.4f}")

    weights = [e.flux_weight for e in events if e.flux_weight is not None]
    if weights:
        print()
        print("Flux weights:")
        print(f"  Sum: {np.sum(weights):.4e}, Mean: {np.mean(weights):.4e}")
    print("="*60 + "\n")
