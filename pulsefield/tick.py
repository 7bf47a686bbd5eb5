"""Tick driver - the once-per-pulse orchestration step.

Each tick runs two passes over the ensemble and then refreshes the shared
statistics:

1. **Schedule maintenance.** A started performer whose playlist is missing or
   has run out (its ``last_beat`` is at or behind the current beat) gets
   another pass of their current module appended, starting at the tick's
   time.
2. **Now-playing extraction.** Every pending item attacking before the end of
   this pulse is moved into the performer's now-playing window, shifted by the
   playlist's imperfection delay.  The window is replaced, not accumulated.

The beat counter then increments and :func:`~pulsefield.stats.compute_stats`
rebuilds the stats for the new beat.
"""

import dataclasses
import math
import random
import typing

import pulsefield.performer
import pulsefield.playlist
import pulsefield.score
import pulsefield.session
import pulsefield.stats


def needs_material (performer: pulsefield.performer.PerformerState, beat: int) -> bool:

	"""Return True if a started performer has nothing scheduled past ``beat``."""

	if not performer.has_started:
		return False

	if performer.playlist is None:
		return True

	return math.floor(performer.playlist.last_beat) <= beat


def assign_playlist (
	performer: pulsefield.performer.PerformerState,
	score: pulsefield.score.Score,
	time: float,
	beat: int,
	bpm: float,
	rng: random.Random
) -> pulsefield.performer.PerformerState:

	"""Top up the performer's playlist with their current module if they are running dry."""

	if not needs_material(performer, beat):
		return performer

	start_beat = performer.playlist.last_beat if performer.playlist is not None else beat

	playlist = pulsefield.playlist.make_playlist(
		performer.playlist,
		score[performer.module_index],
		time,
		start_beat,
		bpm,
		rng
	)

	return dataclasses.replace(performer, playlist=playlist)


def assign_now_playing (
	performer: pulsefield.performer.PerformerState,
	time: float,
	bpm: float
) -> pulsefield.performer.PerformerState:

	"""Move items due within this pulse from the pending queue into the now-playing window."""

	if performer.playlist is None:
		return dataclasses.replace(performer, now_playing=())

	window_end = time + pulsefield.playlist.pulse_duration(bpm)
	pending = performer.playlist.items

	due = 0
	while due < len(pending) and pending[due].attack_at < window_end:
		due += 1

	delay = performer.playlist.imperfection_delay
	now_playing = tuple(
		dataclasses.replace(item, attack_at=item.attack_at + delay)
		for item in pending[:due]
	)

	return dataclasses.replace(
		performer,
		now_playing = now_playing,
		playlist = dataclasses.replace(performer.playlist, items=pending[due:])
	)


def update_playlists (
	state: pulsefield.session.SessionState,
	time: float,
	bpm: float,
	rng: random.Random
) -> pulsefield.session.SessionState:

	"""Run schedule maintenance, then now-playing extraction, for every performer."""

	scheduled = [
		assign_playlist(performer, state.score, time, state.beat, bpm, rng)
		for performer in state.performers
	]

	performers = tuple(assign_now_playing(performer, time, bpm) for performer in scheduled)

	return dataclasses.replace(state, performers=performers)


def tick (
	state: pulsefield.session.SessionState,
	time: float,
	bpm: float,
	rng: typing.Optional[random.Random] = None
) -> pulsefield.session.SessionState:

	"""
	Advance the session by one pulse.

	Parameters:
		state: The current session.
		time: Absolute time of this pulse, in seconds.
		bpm: Current tempo.
		rng: Source for imperfection delays of regenerated playlists.

	Raises:
		ValueError: If ``bpm`` is not positive.
	"""

	# Reject a bad tempo before touching any state
	pulsefield.playlist.pulse_duration(bpm)

	rng = rng or random.Random()

	updated = update_playlists(state, time, bpm, rng)
	beat = updated.beat + 1

	return dataclasses.replace(
		updated,
		beat = beat,
		stats = pulsefield.stats.compute_stats(updated.performers, beat)
	)
