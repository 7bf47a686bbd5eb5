"""Score model - the fixed, ordered list of modules every performer works through.

A :class:`Score` is built once from raw definitions (parsed JSON or YAML) by
:func:`read_score` and never changes for the life of a session.  Each
:class:`Module` carries its notes and a cosmetic hue.  Hues walk from a fixed
base colour: a small random step between neighbouring modules, or a large one
where the raw data flags a hue change.

Raw module definitions accept either camelCase or snake_case keys::

	{"number": 1, "changeHue": False, "score": [{"note": "E4", "duration": 1, "gracenote": "C4"}]}
	{"number": 1, "change_hue": False, "notes": [{"pitch": "E4", "duration": 1, "grace": "C4"}]}
"""

import dataclasses
import random
import typing

import pulsefield.constants


@dataclasses.dataclass(frozen=True)
class Note:

	"""
	One entry of a module's note sequence.

	Attributes:
		pitch: Pitch identifier (e.g. ``"E4"``), or ``None`` for a rest.
		duration: Length in pulses.
		grace: Optional grace-note pitch sounded just before this note.
	"""

	pitch: typing.Optional[str]
	duration: float
	grace: typing.Optional[str] = None

	@property
	def is_rest (self) -> bool:

		"""Return True if this note makes no sound."""

		return not self.pitch


@dataclasses.dataclass(frozen=True)
class Module:

	"""A numbered score segment with its notes and display hue."""

	number: int
	notes: typing.Tuple[Note, ...]
	hue: int = pulsefield.constants.BASE_HUE

	@property
	def duration (self) -> float:

		"""Total length of the module in pulses."""

		return sum(note.duration for note in self.notes)


@dataclasses.dataclass(frozen=True)
class Score:

	"""An ordered, immutable sequence of modules."""

	modules: typing.Tuple[Module, ...] = ()

	def __len__ (self) -> int:
		return len(self.modules)

	def __getitem__ (self, index: int) -> Module:
		return self.modules[index]

	def __iter__ (self) -> typing.Iterator[Module]:
		return iter(self.modules)

	@property
	def final_index (self) -> int:

		"""Index of the last module (``-1`` for an empty score)."""

		return len(self.modules) - 1


def generate_hues (change_flags: typing.Sequence[bool], rng: random.Random) -> typing.List[int]:

	"""
	Walk a hue for each module.

	The first module takes the base hue.  Every later module steps away from
	its predecessor in a random direction: a third of the hue circle when its
	flag is set, a small fixed step otherwise.  One random draw is consumed
	per module, including the first.
	"""

	hues: typing.List[int] = []

	for change_hue in change_flags:

		direction = -1 if rng.random() < 0.5 else 1

		if not hues:
			hues.append(pulsefield.constants.BASE_HUE)
			continue

		step = pulsefield.constants.LARGE_HUE_STEP if change_hue else pulsefield.constants.SMALL_HUE_STEP
		hues.append((hues[-1] - direction * step) % pulsefield.constants.HUE_RANGE)

	return hues


def _first_present (raw: typing.Mapping[str, typing.Any], *keys: str) -> typing.Any:

	"""Return the value of the first key present in ``raw``, or None."""

	for key in keys:
		if key in raw:
			return raw[key]

	return None


def read_note (raw: typing.Mapping[str, typing.Any]) -> Note:

	"""Build a Note from a raw mapping, validating its duration."""

	duration = raw.get("duration")

	if duration is None:
		raise ValueError(f"Note is missing a duration: {raw!r}")

	duration = float(duration)

	if duration <= 0:
		raise ValueError(f"Note duration must be positive, got {duration}")

	pitch = _first_present(raw, "note", "pitch")
	grace = _first_present(raw, "gracenote", "grace")

	return Note(
		pitch = str(pitch) if pitch else None,
		duration = duration,
		grace = str(grace) if grace else None
	)


def read_score (raw_modules: typing.Sequence[typing.Mapping[str, typing.Any]], rng: typing.Optional[random.Random] = None) -> Score:

	"""
	Build an immutable Score from raw module definitions.

	Parameters:
		raw_modules: Parsed module mappings, in performance order.
		rng: Random source for the hue walk.  Pass a seeded
			``random.Random`` for reproducible colours.

	Raises:
		ValueError: If a module has no note list or a note is malformed.
	"""

	rng = rng or random.Random()

	hues = generate_hues(
		[bool(_first_present(raw, "changeHue", "change_hue")) for raw in raw_modules],
		rng
	)

	modules: typing.List[Module] = []

	for index, (raw, hue) in enumerate(zip(raw_modules, hues)):

		raw_notes = _first_present(raw, "score", "notes")

		if raw_notes is None:
			raise ValueError(f"Module at position {index} has no notes")

		modules.append(Module(
			number = int(raw.get("number", index + 1)),
			notes = tuple(read_note(raw_note) for raw_note in raw_notes),
			hue = hue
		))

	return Score(modules=tuple(modules))
