"""
Interface of the location provider the session drives.

The provider owns permissions and the actual sensor. The session only issues
intents (request authorization, start, stop) and receives fixes and
authorization changes through WorkoutSession.on_fix() and
WorkoutSession.on_authorization_changed().
"""

from abc import ABC, abstractmethod
from enum import Enum


class AuthorizationStatus(Enum):
    NOT_DETERMINED = 'not_determined'
    DENIED = 'denied'
    RESTRICTED = 'restricted'
    AUTHORIZED_WHEN_IN_USE = 'authorized_when_in_use'
    AUTHORIZED_ALWAYS = 'authorized_always'

    @property
    def is_authorized(self):
        return self in (AuthorizationStatus.AUTHORIZED_WHEN_IN_USE, AuthorizationStatus.AUTHORIZED_ALWAYS)


class LocationSource(ABC):
    """
    Abstract base class for location providers.

    All subclasses must implement:
    - request_authorization()
    - start_updates()
    - stop_updates()

    Fixes may be delivered from any thread; the session serializes them.
    """

    @abstractmethod
    def request_authorization(self):
        """Ask the platform for location permission (non-blocking)."""
        pass

    @abstractmethod
    def start_updates(self):
        """Begin delivering fixes."""
        pass

    @abstractmethod
    def stop_updates(self):
        """Stop delivering fixes."""
        pass
