"""
Freefall App - Free-Fall Depth Stopwatch

Times a fall with a start/stop stopwatch, derives the depth travelled from
elapsed time under constant gravity, and keeps an editable, persisted history
of completed measurements.
"""

__version__ = "0.1.0"
__author__ = "Freefall Team"
