"""Tests for the Typer command line application."""

from __future__ import annotations

import orjson
import pytest
from typer.testing import CliRunner

from conftest import NULL_ISLAND_PLACEKEY, SF_H3, SF_PLACEKEY
from placekit.cli.typer_app import app
from placekit.config.models.settings import Settings

GET_CONFIG_TARGET = "placekit.cli.handlers.lookup_handler.get_config"
CLIENT_TARGET = "placekit.cli.handlers.lookup_handler.PlacekeyClient"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def json_envelope(result) -> dict:
    return orjson.loads(result.stdout)


class TestIdentifierCommands:
    """encode, decode, validate and normalize."""

    def test_encode_coordinates(self, runner):
        result = runner.invoke(app, ["encode", "--", "37.7371", "-122.44283"])

        assert result.exit_code == 0
        assert SF_PLACEKEY in result.stdout

    def test_encode_h3(self, runner):
        result = runner.invoke(app, ["--json", "encode", "--h3", SF_H3])

        assert result.exit_code == 0
        envelope = json_envelope(result)
        assert envelope["success"] is True
        assert envelope["command"] == "encode"
        assert envelope["data"] == {"placekey": SF_PLACEKEY, "h3": SF_H3}

    def test_encode_requires_coordinates(self, runner):
        result = runner.invoke(app, ["encode", "37.7371"])

        assert result.exit_code == 2

    def test_decode_json(self, runner):
        result = runner.invoke(app, ["--json", "decode", SF_PLACEKEY])

        assert result.exit_code == 0
        data = json_envelope(result)["data"]
        assert data["h3"] == SF_H3
        assert data["latitude"] == pytest.approx(37.7371, abs=1e-3)

    def test_decode_invalid(self, runner):
        result = runner.invoke(app, ["--json", "--log-level", "CRITICAL", "decode", "@5vg-7gq-tv1"])

        assert result.exit_code == 2
        envelope = json_envelope(result)
        assert envelope["success"] is False
        assert envelope["errors"]

    def test_validate_all_valid(self, runner):
        result = runner.invoke(app, ["--json", "validate", SF_PLACEKEY, "222-227" + SF_PLACEKEY])

        assert result.exit_code == 0
        assert json_envelope(result)["data"]["results"] == {
            SF_PLACEKEY: True,
            "222-227" + SF_PLACEKEY: True,
        }

    def test_validate_invalid_exit_code(self, runner):
        result = runner.invoke(app, ["validate", SF_PLACEKEY, "not-a-placekey"])

        assert result.exit_code == 2

    def test_normalize(self, runner):
        result = runner.invoke(app, ["normalize", "223227@5vg-82n-kzz"])

        assert result.exit_code == 0
        assert "223-227@5vg-82n-kzz" in result.stdout


class TestSpatialCommands:
    """neighbors, distance, boundary and polyfill."""

    def test_neighbors(self, runner):
        result = runner.invoke(app, ["--json", "neighbors", SF_PLACEKEY, "--k", "1"])

        assert result.exit_code == 0
        neighbors = json_envelope(result)["data"]["neighbors"]
        assert len(neighbors) == 7
        assert neighbors == sorted(neighbors)

    def test_distance(self, runner):
        result = runner.invoke(app, ["--json", "distance", NULL_ISLAND_PLACEKEY, SF_PLACEKEY])

        assert result.exit_code == 0
        assert 12.7e6 < json_envelope(result)["data"]["meters"] < 12.9e6

    def test_boundary_geojson(self, runner):
        result = runner.invoke(app, ["--json", "boundary", SF_PLACEKEY, "--geojson"])

        assert result.exit_code == 0
        data = json_envelope(result)["data"]
        assert len(data["boundary"]) == 6
        assert data["boundary"][0][0] < 0
        assert data["geojson"]["type"] == "Polygon"

    def test_polyfill_wkt(self, runner):
        wkt = "POLYGON ((37.733 -122.448, 37.733 -122.438, 37.742 -122.438, 37.742 -122.448, 37.733 -122.448))"

        result = runner.invoke(app, ["--json", "polyfill", wkt])

        assert result.exit_code == 0
        data = json_envelope(result)["data"]
        assert data["interior"]
        assert not set(data["interior"]) & set(data["boundary"])

    def test_polyfill_geojson_file(self, runner, tmp_path):
        feature = {
            "type": "Feature",
            "properties": {},
            "geometry": {
                "type": "Polygon",
                "coordinates": [
                    [
                        [-122.448, 37.733],
                        [-122.438, 37.733],
                        [-122.438, 37.742],
                        [-122.448, 37.742],
                        [-122.448, 37.733],
                    ]
                ],
            },
        }
        path = tmp_path / "area.geojson"
        path.write_bytes(orjson.dumps(feature))

        result = runner.invoke(app, ["--json", "polyfill", str(path), "--geojson-input"])

        assert result.exit_code == 0
        assert json_envelope(result)["data"]["interior"]

    def test_polyfill_invalid_geojson(self, runner):
        result = runner.invoke(app, ["polyfill", "{not json", "--geojson-input"])

        assert result.exit_code == 2


class TestLookupCommands:
    """Commands backed by the resolution API, with the client mocked."""

    def test_lookup(self, runner, mocker):
        mocker.patch(
            GET_CONFIG_TARGET,
            return_value=Settings(api={"placekey": {"api_key": "k"}}),
        )
        client_class = mocker.patch(CLIENT_TARGET)
        client_class.return_value.lookup.return_value = {"placekey": SF_PLACEKEY}

        result = runner.invoke(
            app,
            ["--json", "lookup", "--latitude", "37.7371", "--longitude", "-122.44283"],
        )

        assert result.exit_code == 0
        assert json_envelope(result)["data"] == {"placekey": SF_PLACEKEY}
        client_class.return_value.lookup.assert_called_once_with(
            {"latitude": 37.7371, "longitude": -122.44283},
            None,
        )

    def test_lookup_without_api_key(self, runner, mocker):
        mocker.patch(
            GET_CONFIG_TARGET,
            return_value=Settings(api={"placekey": {"api_key": ""}}),
        )

        result = runner.invoke(
            app,
            ["lookup", "--latitude", "37.7371", "--longitude", "-122.44283"],
        )

        assert result.exit_code == 1

    def test_lookup_insufficient_inputs(self, runner, mocker):
        get_config = mocker.patch(GET_CONFIG_TARGET)

        result = runner.invoke(app, ["lookup", "--city", "San Francisco"])

        assert result.exit_code == 2
        get_config.assert_not_called()

    def test_datasets(self, runner, mocker):
        mocker.patch(GET_CONFIG_TARGET, return_value=Settings())
        client_class = mocker.patch(CLIENT_TARGET)
        client_class.return_value.list_free_datasets.return_value = ["poi"]

        result = runner.invoke(app, ["--json", "datasets"])

        assert result.exit_code == 0
        assert json_envelope(result)["data"] == {"datasets": ["poi"]}


class TestGlobalOptions:
    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "placekit 0.1.0" in result.stdout

    def test_no_arguments_shows_help(self, runner):
        result = runner.invoke(app, [])

        assert "encode" in result.output
