import random
import typing

import pytest

import pulsefield.performer
import pulsefield.score
import pulsefield.session


TWO_MODULE_SCORE: typing.List[typing.Dict[str, typing.Any]] = [
	{"number": 1, "score": [{"note": "E4", "duration": 1}, {"note": "G4", "duration": 1}]},
	{"number": 2, "score": [{"note": "C5", "duration": 2, "gracenote": "B4"}]},
]


@pytest.fixture
def rng () -> random.Random:

	"""A seeded random source so every test run draws the same values."""

	return random.Random(1234)


@pytest.fixture
def score (rng: random.Random) -> pulsefield.score.Score:

	"""Module 1: two single-pulse notes.  Module 2: one note with a grace note."""

	return pulsefield.score.read_score(TWO_MODULE_SCORE, rng)


@pytest.fixture
def long_score (rng: random.Random) -> pulsefield.score.Score:

	"""A score whose first module lasts four pulses."""

	return pulsefield.score.read_score([
		{"number": 1, "score": [{"note": n, "duration": 1} for n in ("C4", "D4", "E4", "F4")]},
		{"number": 2, "score": [{"note": "G4", "duration": 1}]},
	], rng)


@pytest.fixture
def roster () -> typing.List[pulsefield.performer.Performer]:

	"""Three performers, identified by instrument."""

	return [
		pulsefield.performer.Performer(id=name, instrument=name)
		for name in ("piano", "marimba", "cello")
	]


@pytest.fixture
def session (
	score: pulsefield.score.Score,
	roster: typing.List[pulsefield.performer.Performer],
	rng: random.Random
) -> pulsefield.session.SessionState:

	"""A fresh session over the two-module score."""

	return pulsefield.session.create_session(score, roster, rng)
