"""
Fix filtering stages: gating, speed smoothing and distance integration.

Example usage:
    validator = FixValidator(config)
    smoother = SpeedSmoother(window=config.smoothing_window)
    accumulator = DistanceAccumulator(get_distance_function('haversine'))

    verdict = validator.validate(fix, now)
    if verdict.accepted:
        speed = smoother.push(verdict.speed_mps)
        delta = accumulator.accumulate(fix.position, verdict.speed_mps, config)
"""

from .distance import DistanceAccumulator
from .smoothing import SpeedSmoother
from .validator import FixValidator, validate_fix


def get_distance_function(name='haversine'):
    """
    Factory function to get a point-to-point distance function by name.

    Args:
        name (str): Distance model - options:
            - 'haversine': Great-circle distance on a spherical Earth (default)
            - 'equirectangular': Local flat-plane projection, cheaper

    Returns:
        Callable (lat1, lon1, lat2, lon2) -> meters

    Raises:
        ValueError: If name is not recognized
    """
    if name == 'haversine':
        from .utils import haversine_distance
        return haversine_distance
    elif name == 'equirectangular':
        from .utils import equirectangular_distance
        return equirectangular_distance
    else:
        raise ValueError(f"Unknown distance function: {name}. Use 'haversine' or 'equirectangular'")


__all__ = [
    'DistanceAccumulator',
    'FixValidator',
    'SpeedSmoother',
    'get_distance_function',
    'validate_fix',
]
