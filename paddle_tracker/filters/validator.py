"""
Fix gate: drops stale, malformed and low-confidence fixes before they reach
any accumulator.

The gate is a pure function of (fix, config, now). Rejection is a verdict,
not an exception; the caller drops the fix and moves on.
"""

import logging

from ..models import FixVerdict, RejectReason, is_finite

logger = logging.getLogger(__name__)


def validate_fix(fix, config, now):
    """
    Decide whether a fix may be used.

    Args:
        fix (Fix): Raw fix from the location source
        config (FilterConfig): Accuracy and age thresholds
        now (float): Current wall-clock time in seconds

    Returns:
        FixVerdict: accepted with the sanitized speed, or rejected with a reason
    """
    if not is_finite(fix.latitude, fix.longitude, fix.horizontal_accuracy_m, fix.timestamp):
        return FixVerdict.reject(RejectReason.INVALID)
    if not (-90.0 <= fix.latitude <= 90.0 and -180.0 <= fix.longitude <= 180.0):
        return FixVerdict.reject(RejectReason.INVALID)

    # Buffered fixes delivered late, or stamped ahead of the clock, are not integrated
    if abs(now - fix.timestamp) > config.max_fix_age_s:
        return FixVerdict.reject(RejectReason.STALE)

    # Negative accuracy is the sensor's "no valid position" sentinel
    if fix.horizontal_accuracy_m < 0:
        return FixVerdict.reject(RejectReason.INVALID)
    if fix.horizontal_accuracy_m > config.max_accuracy_m:
        return FixVerdict.reject(RejectReason.LOW_ACCURACY)

    speed = fix.speed_mps
    if not is_finite(speed) or speed < 0:
        speed = 0.0
    return FixVerdict.accept(float(speed))


class FixValidator:
    """Binds validate_fix() to one config and logs every rejection."""

    def __init__(self, config):
        """
        Args:
            config (FilterConfig): Accuracy and age thresholds
        """
        self.config = config

    def validate(self, fix, now):
        verdict = validate_fix(fix, self.config, now)
        if not verdict.accepted:
            logger.debug("fix rejected (%s): %s", verdict.reason.value, fix)
        return verdict

