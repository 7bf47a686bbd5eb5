"""The session aggregate - the single root of truth for a performance.

:class:`SessionState` is an immutable value.  Event handlers never modify one
in place; they build the next snapshot with :func:`dataclasses.replace`,
sharing only frozen substructure with the previous one.
"""

import dataclasses
import random
import typing

import pulsefield.performer
import pulsefield.score
import pulsefield.stats


@dataclasses.dataclass(frozen=True)
class SessionState:

	"""
	Everything the engine knows at one instant.

	Attributes:
		beat: Global pulse counter, incremented once per tick.
		score: The fixed score.
		performers: Performer states in roster order.
		stats: Ensemble statistics as of the last tick.
	"""

	beat: int
	score: pulsefield.score.Score
	performers: typing.Tuple[pulsefield.performer.PerformerState, ...]
	stats: pulsefield.stats.EnsembleStats

	def find_performer (self, performer_id: str) -> typing.Optional[int]:

		"""Return the index of the performer with ``performer_id``, or None."""

		for index, state in enumerate(self.performers):
			if state.performer.id == performer_id:
				return index

		return None

	def performer (self, performer_id: str) -> pulsefield.performer.PerformerState:

		"""
		Return the state of the performer with ``performer_id``.

		Raises:
			KeyError: If no such performer exists.
		"""

		index = self.find_performer(performer_id)

		if index is None:
			raise KeyError(performer_id)

		return self.performers[index]

	def replace_performer (self, index: int, state: pulsefield.performer.PerformerState) -> "SessionState":

		"""Return a new session with the performer at ``index`` swapped for ``state``."""

		performers = self.performers[:index] + (state,) + self.performers[index + 1:]
		return dataclasses.replace(self, performers=performers)


def create_session (
	score: pulsefield.score.Score,
	roster: typing.Sequence[pulsefield.performer.Performer],
	rng: typing.Optional[random.Random] = None
) -> SessionState:

	"""
	Start a session with every performer unstarted at a random position.

	Raises:
		ValueError: If two performers share an id.
	"""

	rng = rng or random.Random()

	ids = [performer.id for performer in roster]

	if len(set(ids)) != len(ids):
		raise ValueError(f"Performer ids must be unique, got {ids}")

	performers = tuple(pulsefield.performer.initial_performer_state(p, rng) for p in roster)

	return SessionState(
		beat = 0,
		score = score,
		performers = performers,
		stats = pulsefield.stats.compute_stats(performers, 0)
	)
