"""Scheduling and feedback constants.

Time in the engine is counted in **pulses** (beats). A tempo in BPM turns a
pulse into seconds: ``pulse_duration = 60 / bpm``.

- `GRACE_NOTE_OFFSET = 0.15` - how far (in pulses) a grace note starts ahead
  of its host note.
- `ADVANCE_DECAY = 0.95` - the shared per-advance decay applied to every
  performer's advance factor.
- `IMPERFECTION_DELAY` - bounds (in seconds) of the humanisation jitter drawn
  for each freshly generated playlist.
- Hue constants describe the cosmetic colour walk across score modules.
"""

SECONDS_PER_MINUTE = 60.0

GRACE_NOTE_OFFSET = 0.15

ADVANCE_DECAY = 0.95

IMPERFECTION_DELAY_MIN = -0.005
IMPERFECTION_DELAY_MAX = 0.005

# Hues wrap within [0, HUE_RANGE)

HUE_RANGE = 256
BASE_HUE = 227
LARGE_HUE_STEP = HUE_RANGE // 3
SMALL_HUE_STEP = 10

UNSTARTED = -1
