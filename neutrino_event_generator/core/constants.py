"""
Numerical constants, debug flag and rejection-sampling statistics.
"""

import math

TWO_PI = 2.0 * math.pi

# Debug flag
DEBUG = False

# Global statistics for rejection-sampler efficiency monitoring
REJECTION_STATS = {
    'direction_proposals': 0,
    'direction_accepted': 0,
    'footprint_proposals': 0,
    'footprint_accepted': 0,
    'grazing_retries': 0,
}


def reset_rejection_stats():
    """Reset rejection-sampler statistics counters."""
    for key in REJECTION_STATS:
        REJECTION_STATS[key] = 0


def print_rejection_stats():
    """Print acceptance rates of the flux-weighted ray sampler.

    Low direction acceptance means the cosine range sits where the projected
    area is small compared to its maximum. Many grazing retries point to a
    footprint sampler fighting round-off at the silhouette edge.
    """
    stats = REJECTION_STATS
    total = stats['direction_proposals']

    if total == 0:
        print("No rejection-sampling proposals recorded.")
        return

    footprint_total = stats['footprint_proposals']

    print("\n" + "="*60)
    print("FLUX-WEIGHTED RAY SAMPLER STATISTICS")
    print("="*60)
    print(f"Direction proposals:       {total:,}")
    print(f"Direction accepted:        {stats['direction_accepted']:,} "
          f"({100*stats['direction_accepted']/total:.2f}%)")
    if footprint_total > 0:
        print(f"Footprint proposals:       {footprint_total:,}")
        print(f"Footprint accepted:        {stats['footprint_accepted']:,} "
              f"({100*stats['footprint_accepted']/footprint_total:.2f}%)")
    print(f"Grazing-ray retries:       {stats['grazing_retries']:,}")
    print("="*60)

    if stats['direction_accepted'] < 0.05 * total:
        print("[warning] Direction acceptance below 5%")
        print("   The requested cosine range covers little projected area;")
        print("   consider widening it or expect slow sampling.")
    print()
