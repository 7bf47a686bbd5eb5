"""
Pulsefield - an ensemble engine for open-form minimalist scores.

Pieces like Terry Riley's *In C* hand every player the same ordered list of
short modules.  Each player repeats a module as long as they like, then moves
on, so the texture drifts and overlaps while a loose rule keeps the ensemble
from spreading too far apart.  Pulsefield is the scheduling core of such a
performance:

- **Score model.** An immutable, ordered list of modules with notes, rests
  and grace notes, loaded from YAML or JSON.
- **Playlists.** Each time a performer runs out of material, their current
  module is appended to their queue as absolute-time note events, with a
  little humanising jitter.
- **Synchronization.** Everyone starts the first module together; after that
  performers advance freely, and each advance sends a pulse of feedback
  through the whole ensemble.
- **Pure transitions.** A session is an immutable value.  Ticks, advance
  requests and position changes each produce a new one, and all randomness
  comes from an injectable ``random.Random`` so seeded runs repeat exactly.

No audio or MIDI is produced.  Listen for ``"note"`` events on a
``Performance`` and hand the items to whatever makes sound.

Minimal example:

    ```python
    import pulsefield

    score = pulsefield.read_score([
        {"number": 1, "score": [{"note": "E4", "duration": 2, "gracenote": "C4"}]},
        {"number": 2, "score": [{"note": "E4", "duration": 1}, {"note": "F4", "duration": 1}]},
    ])
    roster = [pulsefield.Performer(id="piano", instrument="piano")]

    performance = pulsefield.Performance(score, roster, bpm=120, seed=1, autopilot=0.3)
    performance.on("note", lambda performer_id, item: print(performer_id, item.pitch))
    performance.render(ticks=32)
    ```

Package-level exports: ``Performance``, ``Performer``, ``read_score``,
``create_session``, ``transition``, ``Tick``, ``AdvanceRequest``, ``SetPosition``.
"""

import pulsefield.events
import pulsefield.performance
import pulsefield.performer
import pulsefield.score
import pulsefield.session


Performance = pulsefield.performance.Performance
Performer = pulsefield.performer.Performer
read_score = pulsefield.score.read_score
create_session = pulsefield.session.create_session
transition = pulsefield.events.transition
Tick = pulsefield.events.Tick
AdvanceRequest = pulsefield.events.AdvanceRequest
SetPosition = pulsefield.events.SetPosition
