#!/usr/bin/env python
"""
Neutrino Event Generator - Main Runner Script

Usage:
    python scripts/generate_events.py
    python scripts/generate_events.py -i surface -n 1000
    python scripts/generate_events.py -i replay --replay-dir Data/replay --drop-starting

Output files (Data/, Figures/) are written to the current working directory
or to the directory given by --output-dir.
"""

from neutrino_event_generator.runner import main


if __name__ == "__main__":
    main()
