"""
Configuration settings for neutrino event generation.

This module collects the default parameters used by the injectors, the
samplers and the command-line runner. Users can modify these values to
customise generation without changing the core code; every function that
reads them also accepts an explicit keyword override.
"""

from __future__ import annotations

# =============================================================================
# Detector Geometry (m)
# =============================================================================

# Injection cylinder enclosing the instrumented volume
DETECTOR_CENTER = (0.0, 0.0, 0.0)
DETECTOR_HEIGHT_M = 1000.0
DETECTOR_RADIUS_M = 500.0

# =============================================================================
# Event Distributions
# =============================================================================

# Power-law energy spectrum E^-index (GeV)
ENERGY_SPECTRAL_INDEX = 2.0
ENERGY_MIN_GEV = 1.0e2
ENERGY_MAX_GEV = 1.0e7

# Particle types injected by the volume/surface injectors (PDG codes)
DEFAULT_PARTICLE_TYPES = (11, -11)
DEFAULT_PARTICLE_TYPE_PROBABILITIES = (0.5, 0.5)

# Fixed track length (m) and vertex time (ns)
DEFAULT_LENGTH_M = 0.0
DEFAULT_TIME_NS = 0.0

# =============================================================================
# Sampling Parameters
# =============================================================================

# Cap on proposals per rejection loop before giving up
MAX_REJECTION_ITERATIONS = 100_000

# Zenith-cosine band of the ambient flux for surface injection
SURFACE_COS_RANGE = (-1.0, 1.0)

# Number of events generated by the runner
DEFAULT_N_EVENTS = 1000

# Seed for numpy.random.default_rng
DEFAULT_SEED = 31338

# =============================================================================
# Output Settings
# =============================================================================

DATA_OUTPUT_DIR = "Data"
FIGURES_OUTPUT_DIR = "Figures"
EVENT_DATA_CSV = "events.csv"
EVENT_FIGURE_BASE = "events"

# Plot DPI settings
PLOT_DPI = 300

# Maximum number of vertices drawn in scatter panels
MAX_VERTICES_TO_PLOT = 5000
