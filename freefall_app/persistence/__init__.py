"""
Persistence module.

Key-value storage backends and the measurement history store that keeps its
whole list in one storage slot.
"""
