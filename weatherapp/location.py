"""Device location access expressed as permission state plus a source."""
from __future__ import annotations

import enum
import logging
from typing import Optional, Protocol

from .entities import Coordinate

logger = logging.getLogger(__name__)


class PermissionState(str, enum.Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class LocationAction(str, enum.Enum):
    START_UPDATES = "start_updates"
    STOP_UPDATES = "stop_updates"
    REQUEST_PERMISSION = "request_permission"


def location_action_for(state: PermissionState) -> LocationAction:
    """What the location stream should do after the permission becomes ``state``."""
    if state is PermissionState.GRANTED:
        return LocationAction.START_UPDATES
    if state is PermissionState.UNDETERMINED:
        return LocationAction.REQUEST_PERMISSION
    return LocationAction.STOP_UPDATES


class LocationSource(Protocol):
    def permission_state(self) -> PermissionState:
        ...

    def request_permission(self) -> None:
        ...

    def start_updates(self) -> None:
        ...

    def stop_updates(self) -> None:
        ...

    def last_known(self) -> Optional[Coordinate]:
        ...


class StaticLocationSource:
    """A location source with a fixed position.

    Stands in for a sensor on hosts without one (the CLI passes the
    position on the command line). ``request_permission`` resolves an
    undetermined state to ``grant_on_request``.
    """

    def __init__(
        self,
        coordinate: Optional[Coordinate] = None,
        state: PermissionState = PermissionState.GRANTED,
        grant_on_request: bool = True,
    ) -> None:
        self._coordinate = coordinate
        self._state = state
        self._grant_on_request = grant_on_request
        self.updating = False
        self.permission_requests = 0

    def permission_state(self) -> PermissionState:
        return self._state

    def request_permission(self) -> None:
        self.permission_requests += 1
        if self._state is PermissionState.UNDETERMINED:
            self._state = PermissionState.GRANTED if self._grant_on_request else PermissionState.DENIED
            logger.info("Location permission resolved to %s", self._state.value)

    def start_updates(self) -> None:
        self.updating = True

    def stop_updates(self) -> None:
        self.updating = False

    def last_known(self) -> Optional[Coordinate]:
        return self._coordinate


__all__ = [
    "PermissionState",
    "LocationAction",
    "location_action_for",
    "LocationSource",
    "StaticLocationSource",
]
