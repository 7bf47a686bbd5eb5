"""Playlist generation - turning a module's notes into absolute-time events.

A performer's :class:`Playlist` is a pending queue of :class:`PlaylistItem`
events plus a watermark (``last_beat``) of how far playback has been scheduled.
Every time a performer needs more material, :func:`make_playlist` appends the
whole of their current module to the queue, starting at a given absolute time.
Unplayed items are never discarded; the tick driver removes them as they come
due.

Attack times are computed from the running sum of pulse durations before each
note.  Rests produce no item.  A grace note becomes an extra item that starts
``GRACE_NOTE_OFFSET`` pulses ahead of its host and releases exactly as the host
attacks.
"""

import dataclasses
import math
import random
import typing

import pulsefield.constants
import pulsefield.score


@dataclasses.dataclass(frozen=True)
class PlaylistItem:

	"""
	A single scheduled sounding event.

	Attributes:
		pitch: The pitch to sound.
		attack_at: Absolute start time, in seconds.
		release_at: Absolute end time, in seconds.
		hue: Display hue inherited from the module.
	"""

	pitch: str
	attack_at: float
	release_at: float
	hue: int


@dataclasses.dataclass(frozen=True)
class Playlist:

	"""Pending events for one performer, with the scheduling watermark and jitter."""

	items: typing.Tuple[PlaylistItem, ...] = ()
	last_beat: float = 0.0
	imperfection_delay: float = 0.0


def pulse_duration (bpm: float) -> float:

	"""
	Return the length of one pulse in seconds at the given tempo.

	Raises:
		ValueError: If ``bpm`` is not a positive, finite number.
	"""

	if not math.isfinite(bpm) or bpm <= 0:
		raise ValueError(f"BPM must be positive, got {bpm}")

	return pulsefield.constants.SECONDS_PER_MINUTE / bpm


def make_playlist_items (
	notes: typing.Sequence[pulsefield.score.Note],
	hue: int,
	bpm: float,
	start_time: float
) -> typing.List[PlaylistItem]:

	"""Schedule a note sequence from ``start_time``, skipping rests and adding grace notes."""

	pulse = pulse_duration(bpm)
	items: typing.List[PlaylistItem] = []
	pulses_elapsed = 0.0

	for note in notes:

		if not note.is_rest:

			attack_at = start_time + pulses_elapsed * pulse

			items.append(PlaylistItem(
				pitch = typing.cast(str, note.pitch),
				attack_at = attack_at,
				release_at = attack_at + pulse * note.duration,
				hue = hue
			))

			if note.grace:
				items.append(PlaylistItem(
					pitch = note.grace,
					attack_at = attack_at - pulse * pulsefield.constants.GRACE_NOTE_OFFSET,
					release_at = attack_at,
					hue = hue
				))

		pulses_elapsed += note.duration

	return items


def make_playlist (
	playlist: typing.Optional[Playlist],
	module: pulsefield.score.Module,
	start_time: float,
	beat: float,
	bpm: float,
	rng: random.Random
) -> Playlist:

	"""
	Append one pass of ``module`` to a performer's pending queue.

	Parameters:
		playlist: The performer's current playlist, or ``None`` if they have
			never been scheduled.  Its pending items are kept in front.
		module: The module to schedule.
		start_time: Absolute time (seconds) of the module's first pulse.
		beat: The beat at which the module's notes begin.
		bpm: Current tempo.
		rng: Source for the fresh imperfection delay.

	Returns:
		A new Playlist whose ``last_beat`` is ``beat`` plus the module's
		length in pulses.
	"""

	existing = playlist.items if playlist is not None else ()
	new_items = make_playlist_items(module.notes, module.hue, bpm, start_time)

	return Playlist(
		items = existing + tuple(new_items),
		last_beat = beat + module.duration,
		imperfection_delay = rng.uniform(
			pulsefield.constants.IMPERFECTION_DELAY_MIN,
			pulsefield.constants.IMPERFECTION_DELAY_MAX
		)
	)
