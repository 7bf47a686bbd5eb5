"""Events and the transition function.

The engine's whole input surface is three event types.  :func:`transition`
maps ``(state, event)`` to the next state and is the only way a session
moves forward.  Events are applied one at a time, in the order received.
"""

import dataclasses
import logging
import random
import typing

import pulsefield.session
import pulsefield.synchronization
import pulsefield.tick


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Tick:

	"""One pulse of the clock at absolute ``time`` (seconds) and tempo ``bpm``."""

	time: float
	bpm: float


@dataclasses.dataclass(frozen=True)
class AdvanceRequest:

	"""A performer asks to move on to their next module."""

	performer_id: str


@dataclasses.dataclass(frozen=True)
class SetPosition:

	"""Move a performer. ``pan`` is clamped to [-1, 1]; ``y`` is stored as given."""

	performer_id: str
	pan: float
	y: float


Event = typing.Union[Tick, AdvanceRequest, SetPosition]


def set_position (
	state: pulsefield.session.SessionState,
	performer_id: str,
	pan: float,
	y: float
) -> pulsefield.session.SessionState:

	"""Reposition a performer; unknown performers are ignored."""

	index = state.find_performer(performer_id)

	if index is None:
		logger.warning(f"Position change for unknown performer '{performer_id}'")
		return state

	performer = dataclasses.replace(
		state.performers[index],
		pan = min(1.0, max(-1.0, pan)),
		y = y
	)

	return state.replace_performer(index, performer)


def transition (
	state: pulsefield.session.SessionState,
	event: Event,
	rng: typing.Optional[random.Random] = None
) -> pulsefield.session.SessionState:

	"""
	Apply one event and return the resulting session.

	Parameters:
		state: The current session; it is never modified.
		event: A :class:`Tick`, :class:`AdvanceRequest` or :class:`SetPosition`.
		rng: Random source for playlist jitter on ticks.

	Raises:
		ValueError: For a tick with a non-positive tempo.
		TypeError: For an object that is not one of the event types.
	"""

	if isinstance(event, Tick):
		return pulsefield.tick.tick(state, event.time, event.bpm, rng)

	if isinstance(event, AdvanceRequest):
		return pulsefield.synchronization.advance_performer(state, event.performer_id)

	if isinstance(event, SetPosition):
		return set_position(state, event.performer_id, event.pan, event.y)

	raise TypeError(f"Unknown event type: {type(event).__name__}")
