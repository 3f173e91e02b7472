"""
Two-body propagation of orbital elements.
"""

from .propagator import propagate, propagate_trajectory, state_from_elements, true_anomaly_at_time

__all__ = [
    'propagate',
    'propagate_trajectory',
    'state_from_elements',
    'true_anomaly_at_time',
]
