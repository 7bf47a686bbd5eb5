"""Synchronization policy - when a performer may move on to the next module.

Performers start together and then drift apart freely:

- **Unison start.** An unstarted performer may take the first module only
  while no performer has more than one pulse of material left to play.
- **Free movement.** Once started, a performer may advance whenever there is
  a next module and every performer in the ensemble has started.

A granted advance boosts the mover's advance factor by ``1 / decay ** N``
(N = ensemble size) and then decays *every* performer's factor once, so a
single move pulses the mover and fades the rest of the ensemble together.
Denied requests leave the session untouched.
"""

import dataclasses
import logging

import pulsefield.constants
import pulsefield.performer
import pulsefield.score
import pulsefield.session
import pulsefield.stats


logger = logging.getLogger(__name__)


def can_advance (
	performer: pulsefield.performer.PerformerState,
	score: pulsefield.score.Score,
	stats: pulsefield.stats.EnsembleStats
) -> bool:

	"""Return True if ``performer`` may move to its next module given the latest stats."""

	has_more_modules = performer.module_index + 1 < len(score)

	if not has_more_modules:
		return False

	if not performer.has_started:
		# First module is played in unison
		return stats.max_time_to_last_beat <= 1

	return stats.min_module_index >= 0


def assign_module (
	performer: pulsefield.performer.PerformerState,
	stats: pulsefield.stats.EnsembleStats
) -> pulsefield.performer.PerformerState:

	"""Move ``performer`` to the next module and boost its advance factor."""

	boost = pulsefield.constants.ADVANCE_DECAY ** stats.player_count

	return dataclasses.replace(
		performer,
		module_index = performer.module_index + 1,
		advance_factor = performer.advance_factor / boost
	)


def decay_advance_factor (performer: pulsefield.performer.PerformerState) -> pulsefield.performer.PerformerState:
	return dataclasses.replace(performer, advance_factor=performer.advance_factor * pulsefield.constants.ADVANCE_DECAY)


def advance_performer (state: pulsefield.session.SessionState, performer_id: str) -> pulsefield.session.SessionState:

	"""
	Apply an advance request for ``performer_id``.

	Returns ``state`` itself when the performer is unknown or the request is
	denied.
	"""

	index = state.find_performer(performer_id)

	if index is None:
		logger.warning(f"Advance requested for unknown performer '{performer_id}'")
		return state

	performer = state.performers[index]

	if not can_advance(performer, state.score, state.stats):
		logger.debug(f"Advance denied for '{performer_id}' on module {performer.module_index}")
		return state

	advanced = state.replace_performer(index, assign_module(performer, state.stats))
	performers = tuple(decay_advance_factor(p) for p in advanced.performers)

	logger.debug(f"Advance granted for '{performer_id}' to module {performer.module_index + 1}")

	return dataclasses.replace(advanced, performers=performers)
