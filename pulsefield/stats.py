"""Ensemble-wide statistics consulted by the synchronization policy.

:func:`compute_stats` is a pure function of the performer states and the
current beat.  It is rerun wholesale after every tick; nothing is updated
incrementally.
"""

import dataclasses
import typing

import pulsefield.performer


@dataclasses.dataclass(frozen=True)
class EnsembleStats:

	"""Spread of module indices and of remaining scheduled pulses across the ensemble."""

	min_module_index: int = 0
	max_module_index: int = 0
	min_time_to_last_beat: float = 0.0
	max_time_to_last_beat: float = 0.0
	player_count: int = 0


def compute_stats (performers: typing.Sequence[pulsefield.performer.PerformerState], beat: int) -> EnsembleStats:

	"""Recompute EnsembleStats from scratch for the given beat."""

	if not performers:
		return EnsembleStats()

	module_indices = [p.module_index for p in performers]
	times_to_last_beat = [p.time_to_last_beat(beat) for p in performers]

	return EnsembleStats(
		min_module_index = min(module_indices),
		max_module_index = max(module_indices),
		min_time_to_last_beat = min(times_to_last_beat),
		max_time_to_last_beat = max(times_to_last_beat),
		player_count = len(performers)
	)
