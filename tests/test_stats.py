import dataclasses

import pulsefield.performer
import pulsefield.playlist
import pulsefield.session
import pulsefield.stats


def _with_playlist (state: pulsefield.performer.PerformerState, module_index: int, last_beat: float) -> pulsefield.performer.PerformerState:

	"""Place a performer on a module with a playlist ending at ``last_beat``."""

	return dataclasses.replace(
		state,
		module_index = module_index,
		playlist = pulsefield.playlist.Playlist(last_beat=last_beat)
	)


def test_initial_stats (session: pulsefield.session.SessionState) -> None:

	"""Nobody has started and nobody has anything scheduled."""

	assert session.stats == pulsefield.stats.EnsembleStats(
		min_module_index = -1,
		max_module_index = -1,
		min_time_to_last_beat = 0.0,
		max_time_to_last_beat = 0.0,
		player_count = 3
	)


def test_spread_across_performers (session: pulsefield.session.SessionState) -> None:

	"""Stats report the spread of module indices and remaining pulses."""

	a, b, c = session.performers
	performers = (_with_playlist(a, 0, 12), _with_playlist(b, 3, 10), c)

	stats = pulsefield.stats.compute_stats(performers, beat=9)

	assert stats.min_module_index == -1
	assert stats.max_module_index == 3
	assert stats.min_time_to_last_beat == 0
	assert stats.max_time_to_last_beat == 3
	assert stats.player_count == 3


def test_time_to_last_beat_can_be_negative (session: pulsefield.session.SessionState) -> None:

	"""A playlist that has run past its watermark reports negative time left."""

	a, b, c = session.performers
	performers = (_with_playlist(a, 0, 4), _with_playlist(b, 0, 8), _with_playlist(c, 0, 8))

	stats = pulsefield.stats.compute_stats(performers, beat=6)

	assert stats.min_time_to_last_beat == -2
	assert stats.min_module_index == 0


def test_stats_are_idempotent (session: pulsefield.session.SessionState) -> None:

	"""Recomputing over the same snapshot gives the same result."""

	a, b, c = session.performers
	performers = (_with_playlist(a, 1, 5.5), b, _with_playlist(c, 0, 2))

	assert pulsefield.stats.compute_stats(performers, 3) == pulsefield.stats.compute_stats(performers, 3)


def test_empty_ensemble () -> None:

	"""An empty ensemble yields zeroed stats."""

	assert pulsefield.stats.compute_stats((), 10) == pulsefield.stats.EnsembleStats()
