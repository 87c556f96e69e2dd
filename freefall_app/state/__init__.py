"""
Run state machine module.

Manages the Idle/Running stopwatch lifecycle, periodic readout sampling and
emission of completed measurements.
"""
