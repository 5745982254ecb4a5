"""
Pytest configuration for guoba-data tests.
"""

import json

import pytest

from guoba_data.core.config import Settings
from guoba_data.core.models import UserSeries


EXPERIMENTS = [
    {
        "id": "em-sands",
        "name": "EM Sands",
        "template": "em_sands",
        "oneShot": False,
        "x": "Artifact XP",
        "y": "Elemental Mastery",
        "special": {"KQMS": [[0, 80], [100, 120]]},
    },
    {
        "id": "crit-value",
        "name": "Crit Value",
        "outputFile": "crit_value_all",
        "x": "Artifact XP",
        "y": "Crit Value",
    },
    {
        "id": "one-shot",
        "name": "One Shot",
        "oneShot": True,
        "y": "Score",
    },
]

USERS = [
    {
        "responseId": "r1",
        "createTime": "2022-05-01T10:00:00Z",
        "arLvl": "55",
        "arXP": "1000",
        "server": "EU",
        "dbFile": {"fileId": "f1"},
        "discord": "zeta#0001",
        "affiliation": "KQM Theorycraft",
        "hasWeapons": "Yes",
        "hasChars": "Yes",
        "showTag": "Yes",
    },
    {
        "responseId": "r2",
        "arLvl": "50",
        "arXP": "0",
        "server": "NA",
        "dbFile": {"fileId": "f2"},
        "discord": "hidden#0002",
        "affiliation": "",
        "showTag": "No",
    },
    {
        "responseId": "r3",
        "arLvl": "45",
        "arXP": "abc",
        "server": "Asia",
        "dbFile": {"fileId": "f3"},
        "discord": "alpha#0003",
        "affiliation": "Genshin Optimizer",
        "showTag": "Yes",
    },
]

OUTPUTS = {
    "em_sands": [
        {"user": "f2.json", "stats": [[0, 50], [100, 70]]},
        {"user": "f1.json", "stats": [[0, 60], [50, 90], [100, 95]]},
        {"user": "unknown.json", "stats": [[0, 40]]},
        {"user": "f3.json", "stats": [[0, 55]]},
    ],
    "one-shot": [
        {"user": "f1.json", "stats": [[0, 10]]},
        {"user": "f2.json", "stats": [[0, 30]]},
        {"user": "f3.json", "stats": [[0, 20]]},
    ],
}


def _write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path):
    """A data directory laid out like the exported site data."""
    _write_json(tmp_path / "experiments.json", EXPERIMENTS)
    _write_json(tmp_path / "users.json", USERS)
    for name, entries in OUTPUTS.items():
        _write_json(tmp_path / "output" / f"{name}.json", entries)
    return tmp_path


@pytest.fixture
def settings(data_dir):
    return Settings(data_dir=data_dir)


@pytest.fixture
def scenario_users():
    """Two users whose ranking flips once x >= 5."""
    return [
        UserSeries(nickname="A", affiliation="KQM Abyss", ar=100, stats=[(0, 10), (10, 20)]),
        UserSeries(nickname="B", affiliation="KQM Leaks", ar=200, stats=[(0, 5), (10, 30)]),
    ]
