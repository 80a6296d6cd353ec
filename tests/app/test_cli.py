"""Tests for the delivery-routing command and build_config."""

from click.testing import CliRunner

import numpy as np
import pytest

from delivery_routing.app import AnnealingParams, PlannerConfig, PlanResult, build_config
from delivery_routing.app.cli import main
from delivery_routing.core import miles_to_meters

from conftest import grid_coordinate, write_deliveries_file


@pytest.fixture
def deliveries_file(tmp_path):
    return write_deliveries_file(
        tmp_path / "deliveries.txt",
        grid_coordinate(0, 0),
        [("pizza", grid_coordinate(2, 2)), ("sushi", grid_coordinate(0, 2))],
    )


class TestBuildConfig:
    """Tests for build_config."""

    def test_defaults(self):
        config = build_config()
        assert config == PlannerConfig()

    def test_temperature_in_miles(self):
        config = build_config(initial_temperature_miles=2.0)
        assert np.isclose(
            config.annealing.initial_temperature_meters, miles_to_meters(2.0)
        )

    def test_individual_parameters(self):
        config = build_config(
            name="Tuesday", random_seed=7, epochs=12, cooling_rate=0.8
        )
        assert config.name == "Tuesday"
        assert config.random_seed == 7
        assert config.annealing.epochs == 12
        assert config.annealing.cooling_rate == 0.8

    def test_config_dict_overrides(self):
        config = build_config(
            epochs=12,
            config_dict={"random_seed": 5, "annealing": {"epochs": 3}},
        )
        assert config.random_seed == 5
        assert config.annealing.epochs == 3

    @pytest.mark.parametrize(
        "params",
        [
            {"epochs": -1},
            {"initial_temperature_meters": 0.0},
            {"cooling_rate": 0.0},
            {"cooling_rate": 1.5},
            {"min_excluded_fraction": 0.9},
        ],
    )
    def test_invalid_annealing_params(self, params):
        with pytest.raises(ValueError):
            AnnealingParams(**params)


def test_cli_prints_plan(map_file, deliveries_file, tmp_path):
    output = tmp_path / "plan.json"
    result = CliRunner().invoke(
        main,
        [
            str(map_file),
            str(deliveries_file),
            "--random-seed",
            "1",
            "--epochs",
            "5",
            "--output",
            str(output),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Deliver pizza" in result.output
    assert "Deliver sushi" in result.output
    assert "Total travel distance:" in result.output
    plan = PlanResult.load_json(output)
    assert sorted(s.item for s in plan.stops) == ["pizza", "sushi"]
    assert plan.logs.config["name"] == "deliveries"


def test_cli_unreachable_stop(map_file, tmp_path, island_points):
    deliveries = write_deliveries_file(
        tmp_path / "deliveries.txt",
        grid_coordinate(0, 0),
        [("pizza", island_points[0])],
    )
    result = CliRunner().invoke(main, [str(map_file), str(deliveries)])
    assert result.exit_code == 1
    assert "Unable to plan deliveries" in result.output


def test_cli_malformed_map(tmp_path, deliveries_file):
    map_file = tmp_path / "broken.txt"
    map_file.write_text("Main St\nmany\n")
    result = CliRunner().invoke(main, [str(map_file), str(deliveries_file)])
    assert result.exit_code == 1
    assert "Unable to load data" in result.output


def test_cli_missing_file(tmp_path, deliveries_file):
    result = CliRunner().invoke(
        main, [str(tmp_path / "missing.txt"), str(deliveries_file)]
    )
    assert result.exit_code != 0
