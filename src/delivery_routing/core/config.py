from __future__ import annotations

from .geodesics import miles_to_meters

# Simulated annealing schedule
EPOCHS_DEFAULT = 100
INITIAL_TEMPERATURE_MILES = 0.5
INITIAL_TEMPERATURE_METERS_DEFAULT = miles_to_meters(INITIAL_TEMPERATURE_MILES)
COOLING_RATE_DEFAULT = 0.9
MIN_EXCLUDED_FRACTION_DEFAULT = 0.2

# Command synthesis: turn angles within this many degrees of straight ahead
# count as continuing on the current heading.
STRAIGHT_TOLERANCE_DEGREES = 1.0
