"""
High-level event generation driver.
"""

from __future__ import annotations

from collections import Counter
from typing import List

import numpy as np
from tqdm import tqdm

from .constants import DEBUG, print_rejection_stats
from .data_classes import Event
from .injectors import Injector, LIInjector


def generate_events(
    injector: Injector,
    n_events: int,
    rng: np.random.Generator,
    progress: bool = True,
) -> List[Event]:
    """Draw ``n_events`` events from ``injector``.

    Replay injectors hold a finite pool; when fewer rows remain than
    requested, generation stops at the end of the pool with a warning.

    Parameters
    ----------
    injector : Injector
        Source of events.
    n_events : int
        Number of events to draw.
    rng : np.random.Generator
        Random generator shared by all draws.
    progress : bool, optional
        Show a tqdm progress bar.

    Returns
    -------
    list of Event
    """
    if n_events < 0:
        raise ValueError(f"n_events must be non-negative, got {n_events}")

    if isinstance(injector, LIInjector) and injector.remaining < n_events:
        print(f"[warning] Replay injector has only {injector.remaining} rows left; "
              f"generating {injector.remaining} instead of {n_events} events.")
        n_events = injector.remaining

    events: List[Event] = []
    for _ in tqdm(range(n_events), desc="Generating events", disable=not progress):
        events.append(injector.draw(rng))

    type_counts = Counter(p.particle_type for e in events for p in e.particles)
    print(f"[info] Generated {len(events)} events with {type(injector).__name__}")
    for ptype, count in sorted(type_counts.items()):
        print(f"  - type {ptype}: {count} ({count/len(events)*100:.2f}%)")

    if DEBUG:
        print_rejection_stats()

    return events
