"""Command line interface for DeliveryPlanner.

Provides a Click-based command and a programmatic build_config() function
for creating PlannerConfig objects from individual parameters.
"""

from pathlib import Path
from typing import Any, Optional
import logging

import click
import numpy as np

from .config import AnnealingParams, PlannerConfig
from .planner import DeliveryPlanner, PlanResult
from ..core.config import (
    COOLING_RATE_DEFAULT,
    EPOCHS_DEFAULT,
    INITIAL_TEMPERATURE_MILES,
)
from ..core.data import load_deliveries, load_street_map
from ..core.errors import MapLoadError, RoutingError
from ..core.geodesics import meters_to_miles, miles_to_meters


def build_config(
    name: str = "Deliveries",
    map_path: Optional[str] = None,
    deliveries_path: Optional[str] = None,
    random_seed: Optional[int] = None,
    # Annealing parameters
    epochs: int = EPOCHS_DEFAULT,
    initial_temperature_miles: float = INITIAL_TEMPERATURE_MILES,
    cooling_rate: float = COOLING_RATE_DEFAULT,
    attempts_per_epoch: Optional[int] = None,
    acceptance_threshold: Optional[int] = None,
    accept_worsening: bool = True,
    # Config file override
    config_dict: Optional[dict[str, Any]] = None,
) -> PlannerConfig:
    """Build PlannerConfig from individual parameters.

    Parameters
    ----------
    name : str
        Human-readable name of the delivery run
    map_path : str, optional
        Path to the map data file
    deliveries_path : str, optional
        Path to the deliveries file
    random_seed : int, optional
        Random seed for reproducibility
    epochs : int
        Number of annealing epochs (E)
    initial_temperature_miles : float
        Initial annealing temperature in miles (T0)
    cooling_rate : float
        Temperature factor applied after each epoch
    attempts_per_epoch : int, optional
        Proposals per epoch, defaults to E * (N + 2)
    acceptance_threshold : int, optional
        Accepted moves ending an epoch early, defaults to E * (N + 2)
    accept_worsening : bool
        Whether longer tours may be accepted
    config_dict : dict, optional
        Nested dictionary overriding the individual parameters

    Returns
    -------
    PlannerConfig
        Configured planner configuration object
    """
    annealing_kwargs = dict(
        epochs=epochs,
        initial_temperature_meters=miles_to_meters(initial_temperature_miles),
        cooling_rate=cooling_rate,
        attempts_per_epoch=attempts_per_epoch,
        acceptance_threshold=acceptance_threshold,
        accept_worsening=accept_worsening,
    )
    planner_kwargs = dict(
        name=name,
        map_path=map_path,
        deliveries_path=deliveries_path,
        random_seed=random_seed,
    )
    if config_dict:
        params = dict(config_dict)
        annealing_kwargs.update(params.pop("annealing", {}) or {})
        planner_kwargs.update(params)

    return PlannerConfig(annealing=AnnealingParams(**annealing_kwargs), **planner_kwargs)


def _print_plan(result: PlanResult) -> None:
    click.echo("Stops in delivery order:")
    for stop in result.stops:
        click.echo(f"  {stop.item} at {stop.location}")
    click.echo(
        f"Crow distance: {meters_to_miles(result.initial_crow_distance_meters):.2f} "
        f"-> {meters_to_miles(result.final_crow_distance_meters):.2f} miles"
    )
    click.echo("Commands:")
    for line in result.describe():
        click.echo(f"  {line}")
    click.echo(f"Total travel distance: {result.total_distance_miles:.2f} miles")


@click.command()
@click.argument("map_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("deliveries_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--random-seed", type=int, default=None, help="Random seed for reproducibility."
)
@click.option(
    "--epochs",
    type=int,
    default=EPOCHS_DEFAULT,
    help="Number of annealing epochs (E).",
)
@click.option(
    "--initial-temperature-miles",
    type=float,
    default=INITIAL_TEMPERATURE_MILES,
    help="Initial annealing temperature in miles (T0).",
)
@click.option(
    "--cooling-rate",
    type=float,
    default=COOLING_RATE_DEFAULT,
    help="Temperature factor applied after each epoch.",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the plan as JSON to this file.",
)
@click.option("--verbose", is_flag=True, help="Log debug messages.")
def main(
    map_path,
    deliveries_path,
    random_seed,
    epochs,
    initial_temperature_miles,
    cooling_rate,
    output,
    verbose,
):
    """Plan deliveries from MAP_PATH and DELIVERIES_PATH and print directions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    config = build_config(
        name=Path(deliveries_path).stem,
        map_path=map_path,
        deliveries_path=deliveries_path,
        random_seed=random_seed,
        epochs=epochs,
        initial_temperature_miles=initial_temperature_miles,
        cooling_rate=cooling_rate,
    )

    try:
        graph = load_street_map(config.map_path)
        depot, stops = load_deliveries(config.deliveries_path)
        planner = DeliveryPlanner(graph=graph, config=config)
        result = planner.plan(
            depot, stops, rng=np.random.default_rng(config.random_seed)
        )
    except MapLoadError as err:
        raise click.ClickException(f"Unable to load data: {err}")
    except RoutingError as err:
        raise click.ClickException(f"Unable to plan deliveries: {err}")

    _print_plan(result)
    if output:
        result.dump_json(output)
        click.echo(f"Plan saved to {output}")
    return result


if __name__ == "__main__":
    main()
