"""Tests for the output snapshot and the command line."""
from pathlib import Path
import dataclasses
import json
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest

from towngen.cli import main
from towngen.model import Model
from towngen.snapshot import CitySnapshot, size_class


@pytest.fixture(scope="module")
def city():
    return Model(15, 42)


def test_size_classes():
    assert size_class(6) == "Small Town"
    assert size_class(9) == "Small Town"
    assert size_class(10) == "Large Town"
    assert size_class(15) == "Small City"
    assert size_class(24) == "Large City"
    assert size_class(39) == "Large City"
    assert size_class(40) == "Metropolis"
    assert size_class(3) == "Unknown State"


def test_snapshot_mirrors_model(city):
    snapshot = CitySnapshot.from_model(city)
    assert snapshot.seed == city.seed
    assert snapshot.n_patches == 15
    assert snapshot.size_class == "Small City"
    assert len(snapshot.patches) == len(city.patches)
    assert snapshot.city_radius == city.city_radius
    assert len(snapshot.border.gates) == len(city.border.gates)
    assert (snapshot.wall is None) == (city.wall is None)
    assert (snapshot.citadel is None) == (city.citadel is None)

    first = snapshot.patches[0]
    assert first.shape == tuple(v.coords() for v in city.patches[0].shape)
    assert first.ward == city.patches[0].ward.kind.value


def test_snapshot_is_frozen(city):
    snapshot = CitySnapshot.from_model(city)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.seed = 1


def test_snapshot_is_a_copy():
    model = Model(6, 3)
    snapshot = CitySnapshot.from_model(model)
    before = snapshot.patches[0].shape
    model.patches[0].shape[0].x += 1.0
    assert snapshot.patches[0].shape == before


def test_to_dict_is_json(city):
    data = CitySnapshot.from_model(city).to_dict()
    text = json.dumps(data)
    loaded = json.loads(text)
    assert loaded["seed"] == city.seed
    assert len(loaded["patches"]) == len(city.patches)
    assert loaded["size_class"] == "Small City"


def test_cli_prints_json(capsys, city):
    assert main(["--seed", "42", "-s", "15", "--indent", "0"]) == 0
    out = capsys.readouterr().out
    data = json.loads(out)
    assert data["seed"] == city.seed
    assert data["n_patches"] == 15


def test_cli_clamps_size(capsys):
    assert main(["--seed", "42", "-s", "3"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["n_patches"] == 6
