"""
Utility functions module.

Clock and scheduler capabilities injected into the run timer.

Time Semantics:
- Elapsed time is always measured on a monotonic clock, never wall-clock time
- Periodic sampling is installed through a Scheduler and every installed tick
  is cancelled through the handle it returned
"""
