import dataclasses
import random
import typing

import pulsefield.constants
import pulsefield.playlist


@dataclasses.dataclass(frozen=True)
class Performer:

	"""Identity of one ensemble member and the instrument they play."""

	id: str
	instrument: str


@dataclasses.dataclass(frozen=True)
class PerformerState:

	"""
	Where one performer is in the piece, and what they are sounding right now.

	Attributes:
		performer: Identity and instrument.
		module_index: Current module, ``-1`` before the performer has started.
		playlist: Pending scheduled events, ``None`` until first scheduled.
		now_playing: Events surfaced by the most recent tick.
		advance_factor: Decaying feedback multiplier, read by presentation only.
		pan: Horizontal position, kept within [-1, 1].
		y: Vertical position.
	"""

	performer: Performer
	module_index: int = pulsefield.constants.UNSTARTED
	playlist: typing.Optional[pulsefield.playlist.Playlist] = None
	now_playing: typing.Tuple[pulsefield.playlist.PlaylistItem, ...] = ()
	advance_factor: float = 1.0
	pan: float = 0.0
	y: float = 0.0

	@property
	def has_started (self) -> bool:
		return self.module_index >= 0

	def time_to_last_beat (self, beat: int) -> float:

		"""Pulses of material still scheduled ahead of ``beat`` (0 with no playlist)."""

		if self.playlist is None:
			return 0.0

		return self.playlist.last_beat - beat


def read_roster (raw_roster: typing.Sequence[typing.Mapping[str, typing.Any]]) -> typing.List[Performer]:

	"""
	Build performers from raw roster entries.

	Each entry needs an ``instrument``; ``id`` defaults to the instrument.

	Raises:
		ValueError: If an entry has no instrument or two performers share an id.
	"""

	performers: typing.List[Performer] = []
	seen: typing.Set[str] = set()

	for raw in raw_roster:

		instrument = raw.get("instrument")

		if not instrument:
			raise ValueError(f"Roster entry has no instrument: {raw!r}")

		performer_id = str(raw.get("id") or instrument)

		if performer_id in seen:
			raise ValueError(f"Duplicate performer id '{performer_id}'")

		seen.add(performer_id)
		performers.append(Performer(id=performer_id, instrument=str(instrument)))

	return performers


def initial_performer_state (performer: Performer, rng: random.Random) -> PerformerState:

	"""Create an unstarted performer at a random position."""

	return PerformerState(
		performer = performer,
		pan = rng.random() * 2 - 1,
		y = rng.random() * 2 - 1
	)
