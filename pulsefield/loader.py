"""Load score and ensemble definitions from disk.

``.json`` files are read with :mod:`json` and ``.yaml``/``.yml`` files with
``yaml.safe_load``, so camelCase ``score.json`` and ``ensemble.json`` exports
load unchanged alongside hand-written YAML.
"""

import json
import logging
import os
import random
import typing

import yaml

import pulsefield.performer
import pulsefield.score


logger = logging.getLogger(__name__)

_SUPPORTED_EXTENSIONS = (".yaml", ".yml", ".json")


def load_data (path: str) -> typing.Any:

	"""
	Parse a YAML or JSON file, choosing the parser by extension.

	Raises:
		ValueError: If the file extension is not supported.
		FileNotFoundError: If the file does not exist.
	"""

	_, extension = os.path.splitext(path)
	extension = extension.lower()

	if extension not in _SUPPORTED_EXTENSIONS:
		raise ValueError(f"Unsupported file type '{extension}' for {path}")

	with open(path, 'r') as f:

		if extension == ".json":
			return json.load(f)

		return yaml.safe_load(f)


def load_score (path: str, rng: typing.Optional[random.Random] = None) -> pulsefield.score.Score:

	"""Load a score file: a list of modules, or a mapping with a ``modules`` list."""

	data = load_data(path)

	if isinstance(data, dict):
		data = data.get("modules")

	if not isinstance(data, list):
		raise ValueError(f"Score file {path} must contain a list of modules")

	score = pulsefield.score.read_score(data, rng)
	logger.info(f"Loaded {len(score)} modules from {path}")

	return score


def load_roster (path: str) -> typing.List[pulsefield.performer.Performer]:

	"""Load an ensemble file: a list of performers, or a mapping with a ``performers`` list."""

	data = load_data(path)

	if isinstance(data, dict):
		data = data.get("performers")

	if not isinstance(data, list):
		raise ValueError(f"Ensemble file {path} must contain a list of performers")

	roster = pulsefield.performer.read_roster(data)
	logger.info(f"Loaded {len(roster)} performers from {path}")

	return roster
