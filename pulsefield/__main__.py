import argparse
import logging
import os
import typing

import yaml

import pulsefield.display
import pulsefield.loader
import pulsefield.performance
import pulsefield.playlist


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DEFAULT_CONFIG: typing.Dict[str, typing.Any] = {
	"session": {"bpm": 120, "ticks": 64, "seed": None},
	"performance": {"advance_probability": 0.25},
	"score": "examples/in_c_opening.yaml",
	"ensemble": "examples/ensemble.yaml",
}


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file, filling gaps from the defaults.
	"""

	config = {
		"session": dict(DEFAULT_CONFIG["session"]),
		"performance": dict(DEFAULT_CONFIG["performance"]),
		"score": DEFAULT_CONFIG["score"],
		"ensemble": DEFAULT_CONFIG["ensemble"],
	}

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return config

	with open(config_path, 'r') as f:
		loaded = yaml.safe_load(f) or {}

	if not isinstance(loaded, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	for section in ("session", "performance"):

		values = loaded.get(section) or {}

		if not isinstance(values, dict):
			raise ValueError(f"Config file {config_path}: '{section}' must be a mapping")

		config[section].update(values)

	for key in ("score", "ensemble"):
		if loaded.get(key):
			config[key] = loaded[key]

	return config


def parse_args (argv: typing.Optional[typing.Sequence[str]] = None) -> argparse.Namespace:

	"""Parse command line overrides for the config file."""

	parser = argparse.ArgumentParser(description="Simulate an ensemble performing an open-form score")
	parser.add_argument("--config", default="config.yaml", help="YAML config file (default: config.yaml)")
	parser.add_argument("--score", help="Score file (YAML or JSON)")
	parser.add_argument("--ensemble", help="Ensemble roster file (YAML or JSON)")
	parser.add_argument("--bpm", type=float, help="Tempo in pulses per minute")
	parser.add_argument("--ticks", type=int, help="Number of pulses to simulate")
	parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
	parser.add_argument("--autopilot", type=float, help="Probability an idle performer advances each pulse")

	return parser.parse_args(argv)


def main (argv: typing.Optional[typing.Sequence[str]] = None) -> None:

	"""
	Main entry point: load the score and ensemble, then render the performance.
	"""

	args = parse_args(argv)
	config = load_config(args.config)

	bpm = args.bpm if args.bpm is not None else config["session"]["bpm"]
	ticks = args.ticks if args.ticks is not None else config["session"]["ticks"]
	seed = args.seed if args.seed is not None else config["session"].get("seed")
	autopilot = args.autopilot if args.autopilot is not None else config["performance"]["advance_probability"]

	performance = pulsefield.performance.Performance(
		score = pulsefield.loader.load_score(args.score or config["score"]),
		roster = pulsefield.loader.load_roster(args.ensemble or config["ensemble"]),
		bpm = bpm,
		seed = seed,
		autopilot = autopilot
	)

	logger.info(f"Performing {ticks} pulses at {bpm:g} BPM")

	pulse = pulsefield.playlist.pulse_duration(bpm)

	for n in range(ticks):

		state = performance.tick(n * pulse)
		print(pulsefield.display.format_status(state, bpm))

		for line in pulsefield.display.format_ensemble(state):
			print(line)

		if performance.finished:
			logger.info(f"Every performer reached the final module at beat {state.beat}")
			break


if __name__ == "__main__":
	main()
