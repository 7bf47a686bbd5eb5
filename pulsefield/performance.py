"""A running performance - the stateful boundary around the pure engine.

:class:`Performance` owns the current :class:`~pulsefield.session.SessionState`
and the random source, feeds events through
:func:`~pulsefield.events.transition`, and tells listeners what changed.
Presentation and audio layers subscribe rather than poll:

```python
performance = pulsefield.Performance(score, roster, bpm=120, seed=7)
performance.on("note", lambda performer_id, item: synth.play(item))
performance.render(ticks=64)
```

Listener events:

- ``"state"`` - ``callback(state)`` after every transition.
- ``"note"`` - ``callback(performer_id, item)`` for each item surfaced by a tick.
- ``"advance"`` - ``callback(performer_id, module_index)`` when a performer moves.

With ``autopilot`` above zero, a performer whose queue has run dry asks to
advance with that probability after each tick, so a performance can play
itself through the score.
"""

import logging
import random
import typing

import pulsefield.events
import pulsefield.performer
import pulsefield.playlist
import pulsefield.score
import pulsefield.session


logger = logging.getLogger(__name__)

CallbackType = typing.Callable[..., typing.Any]

_EVENT_NAMES = ("state", "note", "advance")


class Performance:

	"""Hold a session, apply events to it, and notify listeners."""

	def __init__ (
		self,
		score: pulsefield.score.Score,
		roster: typing.Sequence[pulsefield.performer.Performer],
		bpm: float = 120,
		seed: typing.Optional[int] = None,
		rng: typing.Optional[random.Random] = None,
		autopilot: float = 0.0
	) -> None:

		"""
		Create a performance at beat 0 with everyone unstarted.

		Parameters:
			score: The score to perform.
			roster: Performers, in display order.
			bpm: Default tempo for ticks that do not give one.
			seed: Seed for a private ``random.Random`` (ignored if ``rng`` is given).
			rng: Explicit random source.
			autopilot: Probability (0-1) that a performer with an exhausted
				queue requests to advance after a tick.
		"""

		pulsefield.playlist.pulse_duration(bpm)

		if not 0.0 <= autopilot <= 1.0:
			raise ValueError(f"Autopilot probability must be between 0 and 1, got {autopilot}")

		self.bpm = bpm
		self.autopilot = autopilot
		self.rng = rng or random.Random(seed)
		self._state = pulsefield.session.create_session(score, roster, self.rng)
		self._listeners: typing.Dict[str, typing.List[CallbackType]] = {name: [] for name in _EVENT_NAMES}

	@property
	def state (self) -> pulsefield.session.SessionState:

		"""The current session snapshot."""

		return self._state

	@property
	def finished (self) -> bool:

		"""True once every performer is on the final module."""

		final_index = self._state.score.final_index

		return bool(self._state.performers) and all(
			p.module_index == final_index for p in self._state.performers
		)

	def on (self, event_name: str, callback: CallbackType) -> None:

		"""Register a listener for ``"state"``, ``"note"`` or ``"advance"``."""

		if event_name not in self._listeners:
			raise ValueError(f"Unknown event {event_name!r}, expected one of {_EVENT_NAMES}")

		self._listeners[event_name].append(callback)

	def off (self, event_name: str, callback: CallbackType) -> None:

		"""Remove a listener previously added with :meth:`on`."""

		if callback not in self._listeners.get(event_name, []):
			raise ValueError(f"Callback not registered for event {event_name!r}")

		self._listeners[event_name].remove(callback)

	def _emit (self, event_name: str, *args: typing.Any) -> None:

		for callback in self._listeners[event_name]:
			callback(*args)

	def dispatch (self, event: pulsefield.events.Event) -> pulsefield.session.SessionState:

		"""Apply one event, notify listeners, and return the new state."""

		previous = self._state
		self._state = pulsefield.events.transition(previous, event, self.rng)

		if isinstance(event, pulsefield.events.Tick):
			for performer in self._state.performers:
				for item in performer.now_playing:
					self._emit("note", performer.performer.id, item)

		elif self._state is not previous and isinstance(event, pulsefield.events.AdvanceRequest):
			moved = self._state.performer(event.performer_id)
			logger.info(f"{moved.performer.id} ({moved.performer.instrument}) moves to module {moved.module_index}")
			self._emit("advance", moved.performer.id, moved.module_index)

		self._emit("state", self._state)

		return self._state

	def tick (self, time: float, bpm: typing.Optional[float] = None) -> pulsefield.session.SessionState:

		"""Play one pulse, then let autopilot performers ask to advance."""

		self.dispatch(pulsefield.events.Tick(time=time, bpm=bpm if bpm is not None else self.bpm))

		if self.autopilot > 0:
			self._run_autopilot()

		return self._state

	def advance (self, performer_id: str) -> pulsefield.session.SessionState:
		return self.dispatch(pulsefield.events.AdvanceRequest(performer_id=performer_id))

	def set_position (self, performer_id: str, pan: float, y: float) -> pulsefield.session.SessionState:
		return self.dispatch(pulsefield.events.SetPosition(performer_id=performer_id, pan=pan, y=y))

	def _run_autopilot (self) -> None:

		"""Request an advance for each performer that has run out of material, with some probability."""

		beat = self._state.beat

		for performer in self._state.performers:

			exhausted = performer.playlist is None or (
				not performer.playlist.items and performer.time_to_last_beat(beat) <= 1
			)

			if exhausted and self.rng.random() < self.autopilot:
				self.advance(performer.performer.id)

	def render (self, ticks: int, start_time: float = 0.0) -> pulsefield.session.SessionState:

		"""
		Run ``ticks`` pulses back to back without waiting on a real clock.

		Tick ``n`` is stamped ``start_time + n * pulse``.
		"""

		if ticks < 0:
			raise ValueError("Tick count cannot be negative")

		pulse = pulsefield.playlist.pulse_duration(self.bpm)

		for n in range(ticks):
			self.tick(start_time + n * pulse)

		return self._state
