"""Plain-text ensemble dashboard for the command line.

The status line summarises the whole ensemble::

	120 BPM  Beat: 64  Modules: 2-5  Remaining: 0.0-3.0

The ensemble table shows one row per performer, with a bar marking progress
through the score and the notes sounding in the current pulse::

	  piano       |###.......|  3/10  x1.08  E4 C4
	  marimba     |##........|  2/10  x0.91  -
"""

import typing

import pulsefield.performer
import pulsefield.session


_LABEL_WIDTH = 12
_BAR_WIDTH = 10


def format_status (state: pulsefield.session.SessionState, bpm: float) -> str:

	"""Return a one-line summary of beat, module spread and remaining schedule."""

	stats = state.stats

	return (
		f"{bpm:g} BPM  Beat: {state.beat}  "
		f"Modules: {stats.min_module_index + 1}-{stats.max_module_index + 1}  "
		f"Remaining: {stats.min_time_to_last_beat:.1f}-{stats.max_time_to_last_beat:.1f}"
	)


def _progress_bar (module_index: int, module_count: int) -> str:

	"""Fill a fixed-width bar in proportion to modules reached (1-based)."""

	if module_count <= 0:
		return "." * _BAR_WIDTH

	filled = round(_BAR_WIDTH * (module_index + 1) / module_count)
	return "#" * filled + "." * (_BAR_WIDTH - filled)


def format_performer (performer: pulsefield.performer.PerformerState, module_count: int) -> str:

	"""Render one performer's row of the ensemble table."""

	label = performer.performer.id[:_LABEL_WIDTH].ljust(_LABEL_WIDTH)
	bar = _progress_bar(performer.module_index, module_count)
	notes = " ".join(item.pitch for item in performer.now_playing) or "-"

	return f"  {label}|{bar}|  {performer.module_index + 1}/{module_count}  x{performer.advance_factor:.2f}  {notes}"


def format_ensemble (state: pulsefield.session.SessionState) -> typing.List[str]:

	"""Render the ensemble table, one line per performer."""

	module_count = len(state.score)
	return [format_performer(p, module_count) for p in state.performers]
