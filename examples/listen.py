import logging

import pulsefield
import pulsefield.display
import pulsefield.loader

logging.basicConfig(level=logging.INFO)

score = pulsefield.loader.load_score("examples/in_c_opening.yaml")
roster = pulsefield.loader.load_roster("examples/ensemble.yaml")

performance = pulsefield.Performance(score, roster, bpm=132, seed=3, autopilot=0.2)


def on_note (performer_id, item):

	# Hand these to a synth or MIDI layer.
	logging.info(f"{performer_id:<8} {item.pitch:<4} {item.attack_at:7.3f}s -> {item.release_at:7.3f}s")


def on_advance (performer_id, module_index):
	logging.info(f"{performer_id} -> module {module_index + 1}")


performance.on("note", on_note)
performance.on("advance", on_advance)

if __name__ == "__main__":

	state = performance.render(ticks=96)
	print(pulsefield.display.format_status(state, performance.bpm))

	for line in pulsefield.display.format_ensemble(state):
		print(line)
