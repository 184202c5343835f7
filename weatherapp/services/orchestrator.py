from __future__ import annotations

import logging
from typing import Optional

from ..abstractions import Geocoder, WeatherClient
from ..entities import (
    CityRegion,
    Coordinate,
    InputMode,
    LocationDescriptor,
    PostalCode,
    PresentationState,
)
from ..exceptions import NetworkError, PermissionDenied, PersistenceFailure, ValidationError
from ..formatting import icon_url
from ..location import (
    LocationAction,
    LocationSource,
    PermissionState,
    location_action_for,
)
from ..storage import LastLocationStore


class WeatherOrchestrator:
    """Owns the presentation state and sequences geocoding, weather and persistence.

    Entry points never raise; every outcome lands in :attr:`state`.
    Entry points are not serialised against each other: when two are in
    flight at once, whichever settles last wins ``current_reading`` and
    ``error_message``.
    """

    IMAGE_BASE_URL = "https://openweathermap.org/img/wn"

    def __init__(
        self,
        *,
        geocoder: Geocoder,
        weather_client: WeatherClient,
        last_location: LastLocationStore,
        location_source: Optional[LocationSource] = None,
        image_base_url: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.geocoder = geocoder
        self.weather_client = weather_client
        self.last_location = last_location
        self.location_source = location_source
        self.image_base_url = image_base_url or self.IMAGE_BASE_URL
        self.state = PresentationState()
        self._log = logger or logging.getLogger(self.__class__.__name__)

    # Public API ---------------------------------------------------------
    async def submit(self) -> None:
        """Geocode the descriptor currently entered and fetch its weather."""
        try:
            descriptor = self._descriptor()
        except ValidationError as exc:
            self.state.error_message = str(exc)
            return
        try:
            coord = await self.geocoder.geocode(descriptor)
        except NetworkError as exc:
            self._log.warning("Geocoding %s failed: %s", descriptor, exc)
            self.state.error_message = str(exc)
            return
        await self._fetch_weather(coord)

    async def use_current_location(self) -> None:
        source = self.location_source
        if source is None:
            self._log.info("No location source configured")
            self.state.location_permission_denied = True
            return
        permission = source.permission_state()
        if permission is PermissionState.UNDETERMINED:
            source.request_permission()
            return
        try:
            coord = self._device_coordinate(source, permission)
        except PermissionDenied:
            self.state.location_permission_denied = True
            return
        await self._fetch_weather(coord)

    async def restore_last_session(self) -> None:
        try:
            coord = self.last_location.load()
        except PersistenceFailure as exc:
            self._log.warning("Could not read last location: %s", exc)
            return
        if coord is None:
            return
        await self._fetch_weather(coord)

    def set_input_mode(self, mode: InputMode) -> None:
        state = self.state
        state.input_mode = mode
        state.error_message = ""
        if mode is InputMode.POSTAL_CODE:
            state.city_input = ""
            state.region_input = ""
        else:
            state.postal_input = ""

    def update_inputs(
        self,
        *,
        city: Optional[str] = None,
        region: Optional[str] = None,
        postal_code: Optional[str] = None,
    ) -> None:
        if city is not None:
            self.state.city_input = city
        if region is not None:
            self.state.region_input = region
        if postal_code is not None:
            self.state.postal_input = postal_code

    def handle_permission_change(self, permission: PermissionState) -> LocationAction:
        """React to a permission change reported by the platform.

        Does not fetch weather by itself; the user has to ask again.
        """
        action = location_action_for(permission)
        source = self.location_source
        if source is not None:
            if action is LocationAction.START_UPDATES:
                source.start_updates()
            elif action is LocationAction.REQUEST_PERMISSION:
                source.request_permission()
            else:
                source.stop_updates()
        self._log.debug("Permission %s -> %s", permission.value, action.value)
        return action

    def dismiss_location_alert(self) -> None:
        self.state.location_permission_denied = False

    def icon_url(self) -> Optional[str]:
        reading = self.state.current_reading
        if reading is None:
            return None
        return icon_url(self.image_base_url, reading.icon_code)

    # Helpers ------------------------------------------------------------
    def _descriptor(self) -> LocationDescriptor:
        state = self.state
        if state.input_mode is InputMode.CITY_STATE:
            return CityRegion(city=state.city_input, region=state.region_input)
        return PostalCode(postal_code=state.postal_input)

    def _device_coordinate(self, source: LocationSource, permission: PermissionState) -> Coordinate:
        if permission is not PermissionState.GRANTED:
            raise PermissionDenied(permission.value)
        source.start_updates()
        try:
            coord = source.last_known()
        finally:
            source.stop_updates()
        # no fix yet: fall through with (0, 0)
        return coord or Coordinate(latitude=0.0, longitude=0.0)

    async def _fetch_weather(self, coord: Coordinate) -> None:
        try:
            reading = await self.weather_client.fetch_weather(coord)
        except NetworkError as exc:
            self._log.warning("Weather fetch for %s failed: %s", coord, exc)
            self.state.error_message = str(exc)
            return
        self.state.error_message = ""
        self.state.current_reading = reading
        self.last_location.save_in_background(coord)


__all__ = ["WeatherOrchestrator"]
