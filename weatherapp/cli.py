"""Terminal front end: drives the orchestrator and prints its state."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .entities import Coordinate, InputMode, REGIONS
from .exceptions import ImproperlyConfigured
from .formatting import format_reading
from .images import ImageCache, WeatherIcon
from .location import PermissionState, StaticLocationSource
from .providers import OpenWeatherClient, OpenWeatherGeocoder, RequestConfig
from .services import WeatherOrchestrator
from .settings import Settings, load_settings
from .storage import LastLocationStore, SqliteKeyValueStore

logger = logging.getLogger(__name__)

LOCATION_ALERT = "Location Access Required: please enable location access from settings to use this feature"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weatherapp", description="Show the current weather")
    parser.add_argument("--icon", type=Path, help="Write the condition icon (PNG) to this path")
    commands = parser.add_subparsers(dest="command")

    city = commands.add_parser("city", help="Look up by city and state")
    city.add_argument("city")
    city.add_argument("state", choices=[code for code in REGIONS if code], metavar="STATE")

    zip_code = commands.add_parser("zip", help="Look up by zip code")
    zip_code.add_argument("zip")

    here = commands.add_parser("here", help="Use the device location")
    here.add_argument("--lat", type=float, help="Latitude reported by the device")
    here.add_argument("--lon", type=float, help="Longitude reported by the device")
    here.add_argument("--deny", action="store_true", help="Simulate denied location access")

    commands.add_parser("last", help="Show the weather for the last location")
    return parser


def build_orchestrator(settings: Settings, location_source: Optional[StaticLocationSource] = None) -> WeatherOrchestrator:
    request_config = RequestConfig(timeout=settings.request_timeout)
    return WeatherOrchestrator(
        geocoder=OpenWeatherGeocoder(
            api_key=settings.api_key,
            base_url=settings.geocoding_url,
            country=settings.country,
            request_config=request_config,
        ),
        weather_client=OpenWeatherClient(
            api_key=settings.api_key,
            base_url=settings.weather_url,
            request_config=request_config,
        ),
        last_location=LastLocationStore(SqliteKeyValueStore(settings.state_db)),
        location_source=location_source,
        image_base_url=settings.image_url,
    )


def _location_source(args: argparse.Namespace) -> Optional[StaticLocationSource]:
    if args.command != "here":
        return None
    if args.deny:
        return StaticLocationSource(state=PermissionState.DENIED)
    coordinate = None
    if args.lat is not None and args.lon is not None:
        coordinate = Coordinate(latitude=args.lat, longitude=args.lon)
    return StaticLocationSource(coordinate=coordinate)


async def run(args: argparse.Namespace, orchestrator: WeatherOrchestrator, request_config: RequestConfig) -> int:
    logger.debug("Running command %s", args.command or "last")
    if args.command == "city":
        orchestrator.set_input_mode(InputMode.CITY_STATE)
        orchestrator.update_inputs(city=args.city, region=args.state)
        await orchestrator.submit()
    elif args.command == "zip":
        orchestrator.set_input_mode(InputMode.POSTAL_CODE)
        orchestrator.update_inputs(postal_code=args.zip)
        await orchestrator.submit()
    elif args.command == "here":
        await orchestrator.use_current_location()
    else:
        await orchestrator.restore_last_session()

    if args.icon is not None:
        icon = WeatherIcon(ImageCache(request_config=request_config))
        if await icon.update(orchestrator.icon_url()):
            args.icon.write_bytes(icon.image)

    await orchestrator.last_location.flush()
    return render(orchestrator, sys.stdout)


def render(orchestrator: WeatherOrchestrator, out: TextIO) -> int:
    state = orchestrator.state
    if state.location_permission_denied:
        out.write(LOCATION_ALERT + "\n")
        return 1
    if state.error_message:
        out.write(state.error_message + "\n")
        return 1
    if state.current_reading is None:
        out.write("No saved location yet\n")
        return 0
    lines: List[str] = format_reading(state.current_reading)
    out.write("\n".join(lines) + "\n")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ImproperlyConfigured as exc:
        sys.stderr.write(f"{exc}\n")
        sys.exit(2)
    logging.basicConfig(level=settings.log_level)
    orchestrator = build_orchestrator(settings, _location_source(args))
    request_config = RequestConfig(timeout=settings.request_timeout)
    sys.exit(asyncio.run(run(args, orchestrator, request_config)))


__all__ = ["build_parser", "build_orchestrator", "run", "render", "main"]
