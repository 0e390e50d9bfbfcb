"""
Plotting subpackage for generated-event visualization.

Example usage:
    from neutrino_event_generator.plotting import visualize_events, print_statistics

    visualize_events(events, save_path='Figures/event_overview')
    print_statistics(events)

    # Reload an exported file
    from neutrino_event_generator.plotting import load_event_data
    frame = load_event_data('Data/events.csv')
"""

from .events import (
    load_event_data,
    visualize_events,
    print_statistics,
)

__all__ = [
    "load_event_data",
    "visualize_events",
    "print_statistics",
]
