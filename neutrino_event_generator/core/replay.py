"""
Ingestion of precomputed interaction tables for replay injection.

A replay source consists of one or more groups. Each group holds three
row-aligned leg tables and two weight arrays::

    {
        "initial": DataFrame,   # incoming neutrino
        "final_1": DataFrame,   # primary final-state lepton
        "final_2": DataFrame,   # hadronic final state
        "one_weights": array,
        "flux_weights": array,
    }

Leg tables carry the columns listed in ``LEG_COLUMNS``; directions are
stored as (zenith, azimuth) in radians. Groups are concatenated in order
into a single DataFrame indexed by ``row_id`` = 1..N, with leg columns
prefixed ``initial_``, ``final1_`` and ``final2_``.

On disk each group is a sub-directory with ``initial.csv``, ``final_1.csv``,
``final_2.csv`` and ``weights.csv`` (columns ``one_weight``, ``flux_weight``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from .geometry import Volume

LEG_COLUMNS = ("particle_type", "x", "y", "z", "zenith", "azimuth", "energy")
LEG_KEYS = {"initial": "initial_", "final_1": "final1_", "final_2": "final2_"}
WEIGHT_KEYS = {"one_weights": "one_weight", "flux_weights": "flux_weight"}


def _leg_frame(group: Mapping, key: str, label: str) -> pd.DataFrame:
    if key not in group:
        raise ValueError(f"Replay group {label} is missing '{key}'")
    frame = pd.DataFrame(group[key]).reset_index(drop=True)
    missing = [c for c in LEG_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"Replay group {label} '{key}' lacks columns {missing}")
    return frame.loc[:, list(LEG_COLUMNS)]


def _join_group(group: Mapping, label: str) -> pd.DataFrame:
    """Join the legs and weights of one group by row position."""
    legs = [_leg_frame(group, key, label).add_prefix(prefix) for key, prefix in LEG_KEYS.items()]
    n_rows = len(legs[0])
    if any(len(leg) != n_rows for leg in legs):
        raise ValueError(f"Replay group {label} has leg tables of different lengths")

    joined = pd.concat(legs, axis=1)
    for key, column in WEIGHT_KEYS.items():
        if key not in group:
            raise ValueError(f"Replay group {label} is missing '{key}'")
        weights = np.asarray(group[key], dtype=float).reshape(-1)
        if len(weights) != n_rows:
            raise ValueError(f"Replay group {label} '{key}' has {len(weights)} entries, expected {n_rows}")
        joined[column] = weights
    return joined


def _renumber(table: pd.DataFrame) -> pd.DataFrame:
    table = table.reset_index(drop=True)
    table.index = pd.RangeIndex(1, len(table) + 1, name="row_id")
    return table


def build_replay_table(groups: Iterable[Mapping]) -> pd.DataFrame:
    """Concatenate replay groups into one table with row ids 1..N."""
    frames = [_join_group(group, label=str(i)) for i, group in enumerate(groups)]
    if not frames:
        raise ValueError("No replay groups supplied")
    return _renumber(pd.concat(frames, ignore_index=True))


def initial_positions(table: pd.DataFrame) -> np.ndarray:
    return table[["initial_x", "initial_y", "initial_z"]].to_numpy(dtype=float)


def filter_starting_events(table: pd.DataFrame, volume: Volume) -> pd.DataFrame:
    """Drop rows whose initial vertex lies inside ``volume``; renumber 1..N."""
    keep = np.array([not volume.contains(pos) for pos in initial_positions(table)], dtype=bool)
    dropped = int(np.count_nonzero(~keep))
    print(f"[info] Dropped {dropped} of {len(table)} replay rows starting inside the exclusion volume")
    return _renumber(table.loc[keep])


def _group_order(group_dir: Path):
    # group_9 before group_10
    stem, _, suffix = group_dir.name.rpartition("_")
    if suffix.isdigit():
        return stem, int(suffix)
    return group_dir.name, -1


def read_replay_groups(path) -> List[dict]:
    """Read replay groups from the sub-directories of ``path``.

    Sub-directories are ordered by name, with a trailing ``_<number>``
    compared numerically, so groups written by ``write_replay_groups`` come
    back in the order they were written.
    """
    root = Path(path)
    if not root.is_dir():
        raise FileNotFoundError(f"Replay directory '{root}' does not exist")

    group_dirs = sorted((p for p in root.iterdir() if p.is_dir()), key=_group_order)
    if not group_dirs:
        raise ValueError(f"Replay directory '{root}' contains no groups")

    groups = []
    for group_dir in group_dirs:
        weights = pd.read_csv(group_dir / "weights.csv")
        group = {key: pd.read_csv(group_dir / f"{key}.csv") for key in LEG_KEYS}
        group["one_weights"] = weights["one_weight"].to_numpy(dtype=float)
        group["flux_weights"] = weights["flux_weight"].to_numpy(dtype=float)
        print(f"[info] Loaded replay group '{group_dir.name}' ({len(weights)} rows)")
        groups.append(group)
    return groups


def write_replay_groups(groups: Iterable[Mapping], path) -> Path:
    """Write replay groups as CSV sub-directories readable by ``read_replay_groups``."""
    root = Path(path)
    root.mkdir(parents=True, exist_ok=True)
    for i, group in enumerate(groups):
        group_dir = root / f"group_{i:03d}"
        group_dir.mkdir(exist_ok=True)
        for key in LEG_KEYS:
            _leg_frame(group, key, str(i)).to_csv(group_dir / f"{key}.csv", index=False)
        pd.DataFrame({
            "one_weight": np.asarray(group["one_weights"], dtype=float),
            "flux_weight": np.asarray(group["flux_weights"], dtype=float),
        }).to_csv(group_dir / "weights.csv", index=False)
    return root


def load_replay_table(path, exclusion_volume: Optional[Volume] = None) -> pd.DataFrame:
    """Read, join and optionally filter a replay source on disk."""
    table = build_replay_table(read_replay_groups(path))
    if exclusion_volume is not None:
        table = filter_starting_events(table, exclusion_volume)
    return table
