import asyncio
from collections.abc import Callable

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from weathercast.config import AppConfig, UnitSystem, WeatherEnv, load_config
from weathercast.controller import ServiceFactory
from weathercast.events import WeatherEvent
from weathercast.location import Coordinate, StaticLocationProvider
from weathercast.shared.logging_mixin import configure_logging
from weathercast.state import AppState, DisplayValue, ErrorDisplay
from weathercast.weather import WeatherError
from weathercast.weather.formatting import format_display


def _load_api_key() -> str:
    try:
        return WeatherEnv().openweather_api_key
    except ValidationError as e:
        raise click.ClickException(
            "OPENWEATHER_API_KEY is not set. "
            "Please set it in your .env file or environment."
        ) from e


def _load_app_config(config_path: str | None, units: str | None) -> AppConfig:
    try:
        config = load_config(config_path) if config_path else AppConfig()
    except (FileNotFoundError, RuntimeError) as e:
        raise click.ClickException(str(e)) from e

    if units:
        config.weather.units = UnitSystem(units)
    return config


def _static_provider(latitude: float | None, longitude: float | None):
    if latitude is None and longitude is None:
        return None
    if latitude is None or longitude is None:
        raise click.UsageError("--lat and --lon must be given together")
    return StaticLocationProvider([Coordinate(latitude=latitude, longitude=longitude)])


def _render(text: str, is_error: bool) -> None:
    click.echo(click.style("─" * 40, fg="cyan"))
    click.echo(click.style(text, fg="red" if is_error else None, bold=is_error))


def _render_display(display: DisplayValue, units: UnitSystem) -> None:
    _render(format_display(display, units), isinstance(display, ErrorDisplay))


def _subscribe_renderer(app_state: AppState, units: UnitSystem) -> list[Callable[[], None]]:
    """Re-render whenever the weather or error slot changes.

    One update can touch both slots, so a display equal to the last one
    rendered is skipped.
    """
    last_rendered: list[DisplayValue] = []

    def refresh(_value) -> None:
        display = app_state.display()
        if last_rendered and last_rendered[-1] == display:
            return
        last_rendered[:] = [display]
        _render_display(display, units)

    return [app_state.weather.subscribe(refresh), app_state.error.subscribe(refresh)]


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override WEATHERCAST_LOG_LEVEL.",
)
def main(log_level):
    """Current weather for where you are."""
    load_dotenv()
    if log_level:
        configure_logging(log_level)


units_option = click.option(
    "--units",
    type=click.Choice([u.value for u in UnitSystem]),
    default=None,
    help="Unit system sent to the API.",
)
config_option = click.option(
    "--config", "config_path", type=click.Path(), default=None, help="YAML config file."
)


latitude_range = click.FloatRange(-90, 90)
longitude_range = click.FloatRange(-180, 180)


@main.command()
@click.option("--lat", "latitude", type=latitude_range, required=True)
@click.option("--lon", "longitude", type=longitude_range, required=True)
@units_option
@config_option
def now(latitude, longitude, units, config_path):
    """Fetch the weather once for the given coordinates."""
    api_key = _load_api_key()
    config = _load_app_config(config_path, units)
    coordinate = Coordinate(latitude=latitude, longitude=longitude)

    async def run():
        services = ServiceFactory(config, api_key).create_services()
        await services.orchestrator.fetch_now(coordinate)
        return services.app_state.display()

    display = asyncio.run(run())
    _render_display(display, config.weather.units)
    if isinstance(display, ErrorDisplay):
        raise SystemExit(1)


@main.command()
@click.option("--lat", "latitude", type=latitude_range, default=None)
@click.option("--lon", "longitude", type=longitude_range, default=None)
@units_option
@config_option
def watch(latitude, longitude, units, config_path):
    """Follow the current location and refresh on every new fix."""
    api_key = _load_api_key()
    config = _load_app_config(config_path, units)
    provider = _static_provider(latitude, longitude)

    async def run():
        services = ServiceFactory(config, api_key, location_provider=provider).create_services()

        async def on_permission_denied(error: WeatherError) -> None:
            click.echo(click.style("Location Permission Required", fg="yellow", bold=True))
            click.echo(error.message)

        services.event_bus.subscribe(WeatherEvent.PERMISSION_DENIED, on_permission_denied)
        unsubscribers = _subscribe_renderer(services.app_state, config.weather.units)

        await services.orchestrator.start()
        try:
            await asyncio.Event().wait()
        finally:
            await services.orchestrator.stop()
            for unsubscribe in unsubscribers:
                unsubscribe()

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        click.echo()


if __name__ == "__main__":
    main()
