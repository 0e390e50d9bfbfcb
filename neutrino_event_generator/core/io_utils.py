"""
Data export utilities for generated events.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import pandas as pd

from .data_classes import Event

EVENT_CSV_HEADERS = [
    'event_id',
    'particle_index',
    'particle_type',
    'position_x_m',
    'position_y_m',
    'position_z_m',
    'direction_x',
    'direction_y',
    'direction_z',
    'time_ns',
    'energy_GeV',
    'length_m',
    'flux_weight',
    'one_weight',
    'initial_energy_GeV',
    'source_row_index',
]


def _event_rows(events: List[Event]):
    for event_id, event in enumerate(events, start=1):
        for particle_index, p in enumerate(event.particles):
            yield [
                event_id,
                particle_index,
                p.particle_type,
                p.position[0], p.position[1], p.position[2],
                p.direction[0], p.direction[1], p.direction[2],
                p.time,
                p.energy,
                p.length,
                event.flux_weight,
                event.one_weight,
                event.initial_energy,
                event.source_row_index,
            ]


def export_events_to_csv(events: List[Event], filename: str = "events.csv"):
    """Export events to a CSV file, one row per particle.

    Missing annotations are written as empty fields.

    Parameters
    ----------
    events : List[Event]
        Generated events.
    filename : str
        Output CSV filename.
    """
    if not events:
        print("[warning] No events to export.")
        return

    output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(EVENT_CSV_HEADERS)
        for row in _event_rows(events):
            writer.writerow(['' if value is None else value for value in row])

    print(f"[info] Exported {len(events)} events to {output_path}")


def events_to_dataframe(events: List[Event]) -> pd.DataFrame:
    """Flatten events into a DataFrame with the CSV export columns."""
    return pd.DataFrame(list(_event_rows(events)), columns=EVENT_CSV_HEADERS)
