import random

import pytest

import pulsefield.events
import pulsefield.score
import pulsefield.session


def _advance_all (state: pulsefield.session.SessionState, rng: random.Random) -> pulsefield.session.SessionState:

	"""Send an advance request for every performer."""

	for performer in state.performers:
		state = pulsefield.events.transition(state, pulsefield.events.AdvanceRequest(performer.performer.id), rng)

	return state


def test_three_performers_start_together (session: pulsefield.session.SessionState, rng: random.Random) -> None:

	"""Tick, everyone asks to start, then the next tick surfaces only the first note."""

	state = pulsefield.events.transition(session, pulsefield.events.Tick(time=0.0, bpm=60), rng)

	assert [p.module_index for p in state.performers] == [-1, -1, -1]
	assert state.stats.max_time_to_last_beat == 0

	state = _advance_all(state, rng)
	assert [p.module_index for p in state.performers] == [0, 0, 0]

	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=0.5, bpm=60), rng)

	for performer in state.performers:
		assert [i.pitch for i in performer.now_playing] == ["E4"]
		assert performer.now_playing[0].attack_at == pytest.approx(0.5, abs=0.005)
		assert [(i.pitch, i.attack_at) for i in performer.playlist.items] == [("G4", 1.5)]


def test_ensemble_moves_on_and_grace_notes_sound (session: pulsefield.session.SessionState, rng: random.Random) -> None:

	"""Once everyone has started, one performer can move on alone and play the grace note."""

	state = pulsefield.events.transition(session, pulsefield.events.Tick(time=0.0, bpm=60), rng)
	state = _advance_all(state, rng)
	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=1.0, bpm=60), rng)

	assert state.stats.min_module_index == 0

	state = pulsefield.events.transition(state, pulsefield.events.AdvanceRequest("piano"), rng)
	assert [p.module_index for p in state.performers] == [1, 0, 0]

	# The piano finishes module 1's queue before picking up module 2.
	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=2.0, bpm=60), rng)
	assert [i.pitch for i in state.performer("piano").now_playing] == ["G4"]

	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=3.0, bpm=60), rng)
	piano = state.performer("piano")
	marimba = state.performer("marimba")

	main, grace = piano.now_playing
	assert (main.pitch, grace.pitch) == ("C5", "B4")
	assert grace.release_at == main.release_at - 2.0
	assert main.attack_at - grace.attack_at == pytest.approx(0.15)
	assert [i.pitch for i in marimba.now_playing] == ["E4"]


def test_late_joiner_waits_for_module_boundary (long_score: pulsefield.score.Score, roster: list, rng: random.Random) -> None:

	"""Requests interleaved with ticks: a latecomer joins only when the others are within a pulse of the end."""

	state = pulsefield.session.create_session(long_score, roster, rng)
	state = pulsefield.events.transition(state, pulsefield.events.AdvanceRequest("piano"), rng)

	# piano now holds four pulses of material
	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=0.0, bpm=60), rng)
	assert state.stats.max_time_to_last_beat == 3

	denied = pulsefield.events.transition(state, pulsefield.events.AdvanceRequest("marimba"), rng)
	assert denied is state

	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=1.0, bpm=60), rng)
	assert pulsefield.events.transition(state, pulsefield.events.AdvanceRequest("marimba"), rng) is state

	state = pulsefield.events.transition(state, pulsefield.events.Tick(time=2.0, bpm=60), rng)
	assert state.stats.max_time_to_last_beat == 1

	state = pulsefield.events.transition(state, pulsefield.events.AdvanceRequest("marimba"), rng)
	assert state.performer("marimba").module_index == 0


def test_advance_after_start_before_tick_uses_stale_stats (session: pulsefield.session.SessionState, rng: random.Random) -> None:

	"""Stats only refresh on ticks, so a second request in the same pulse is still judged as unstarted-ensemble."""

	state = _advance_all(session, rng)
	assert state.stats.min_module_index == -1

	assert pulsefield.events.transition(state, pulsefield.events.AdvanceRequest("piano"), rng) is state


class TestSetPosition:

	def test_position_is_stored (self, session: pulsefield.session.SessionState) -> None:
		"""Positions change without any gating."""
		state = pulsefield.events.transition(session, pulsefield.events.SetPosition("cello", pan=0.25, y=-0.5))
		cello = state.performer("cello")
		assert (cello.pan, cello.y) == (0.25, -0.5)

	def test_pan_is_clamped_and_y_is_not (self, session: pulsefield.session.SessionState) -> None:
		"""Pan stays in [-1, 1]; y passes straight through."""
		state = pulsefield.events.transition(session, pulsefield.events.SetPosition("cello", pan=3.0, y=7.5))
		assert state.performer("cello").pan == 1.0
		assert state.performer("cello").y == 7.5

		state = pulsefield.events.transition(state, pulsefield.events.SetPosition("cello", pan=-9.0, y=-7.5))
		assert state.performer("cello").pan == -1.0
		assert state.performer("cello").y == -7.5

	def test_unknown_performer_is_ignored (self, session: pulsefield.session.SessionState) -> None:
		"""Moving someone who is not in the ensemble changes nothing."""
		assert pulsefield.events.transition(session, pulsefield.events.SetPosition("harp", 0.0, 0.0)) is session

	def test_other_performers_untouched (self, session: pulsefield.session.SessionState) -> None:
		"""Only the named performer moves."""
		state = pulsefield.events.transition(session, pulsefield.events.SetPosition("piano", 0.0, 0.0))
		assert state.performers[1:] == session.performers[1:]


def test_tick_with_bad_tempo_raises (session: pulsefield.session.SessionState) -> None:

	"""A non-positive tempo is rejected at the boundary."""

	with pytest.raises(ValueError):
		pulsefield.events.transition(session, pulsefield.events.Tick(time=0.0, bpm=-1))


def test_unknown_event_type_raises (session: pulsefield.session.SessionState) -> None:

	"""Only the three event types are understood."""

	with pytest.raises(TypeError):
		pulsefield.events.transition(session, "tick")  # type: ignore[arg-type]


def test_seeded_runs_repeat (score: pulsefield.score.Score, roster: list) -> None:

	"""The same seed and events always produce the same session."""

	def run (seed: int) -> pulsefield.session.SessionState:
		rng = random.Random(seed)
		state = pulsefield.session.create_session(score, roster, rng)
		state = _advance_all(state, rng)
		for n in range(6):
			state = pulsefield.events.transition(state, pulsefield.events.Tick(time=n * 0.5, bpm=120), rng)
		return state

	assert run(8) == run(8)
	assert run(8) != run(9)
