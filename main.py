# main.py
"""Virtuoso: play a MIDI file one chord per keypress.

Hook the "Virtuoso" virtual MIDI port up to a synth or DAW, pick a track,
and every key (or every note-on from a MIDI keyboard) plays the next note
or chord of the song with its original feel.
"""
import sys, os
sys.path.append(os.path.dirname(__file__))  # keep top-level packages importable

import argparse
import logging
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from utils.crashlog import setup_crashlog, log_exception, log_dir, note_session
from utils.path import resource_path
from config import AppConfig, PlaybackConfig, PortConfig, RenderConfig
from errors import FatalInputError
from midi.parser import load_tracks
from notes.model import TrackChoice
from notes.chords import default_threshold, group_chords
from audio.synth import Synth
from input.triggers import KeyboardTrigger, MidiTrigger, list_input_ports
from timeline.scheduler import Scheduler
from timeline.playback import PlaybackDriver
from ui import prompts
from render.renderer import Renderer
from app import App, DONE

DEFAULT_MIDI = resource_path(os.path.join("assets", "sample.mid"))
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

log = logging.getLogger("virtuoso")

@dataclass
class Settings:
    instrument: Optional[str]   # MIDI input port name, None = computer keyboard
    track: TrackChoice
    group_chords: bool
    threshold_ms: Optional[float]

def _init_logging(debug: bool = False):
    if logging.getLogger().handlers:
        return
    logs = log_dir()
    log_path = os.path.join(logs, "app.log")

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )
    # the console handler stays quiet so prompts are readable; app.log gets everything
    logging.getLogger().handlers[0].setLevel(logging.DEBUG if debug else logging.WARNING)
    logging.getLogger().setLevel(logging.DEBUG)
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(log_path, maxBytes=2*1024*1024, backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError as e:
        logging.warning("File logging disabled: %s", e)

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="virtuoso", description=__doc__.splitlines()[0])
    ap.add_argument('midi_file', nargs='?', default=DEFAULT_MIDI,
                    help="MIDI file to play (default: bundled sample)")
    ap.add_argument('--sustain-ms', type=float, default=PlaybackConfig.sustain_ms,
                    help="how long each note sounds")
    ap.add_argument('--port-name', default=PortConfig.output_name,
                    help="name of the virtual MIDI output port")
    ap.add_argument('--fps', type=int, default=RenderConfig.fps,
                    help="main loop rate (timer resolution)")
    ap.add_argument('--debug', action='store_true')
    return ap.parse_args(argv)

def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        playback=PlaybackConfig(sustain_ms=args.sustain_ms),
        ports=PortConfig(output_name=args.port_name),
        render=RenderConfig(fps=args.fps),
    )

def collect_settings(tracks: List[TrackChoice], port_names: Sequence[str], cfg: AppConfig,
                     ask: Callable[[str], str] = input,
                     out: Callable[[str], None] = print) -> Settings:
    instrument = prompts.choose(
        prompts.instrument_options(port_names, cfg.ports.keyboard_label),
        "Which instrument do you want to use?", ask=ask, out=out)
    track = prompts.choose(
        [(t.label, t) for t in tracks],
        "Which track do you want to play?", ask=ask, out=out)
    group = prompts.confirm(
        "Do you want to play chords with a single key? It's easier.",
        default=True, ask=ask, out=out)
    threshold = None
    if group:
        threshold = prompts.ask_threshold(
            default_threshold(track.notes, cfg.playback.threshold_ratio), ask=ask, out=out)
    return Settings(instrument, track, group, threshold)

def play(cfg: AppConfig, midi_path: str) -> str:
    note_session(file=midi_path)
    tracks = load_tracks(midi_path, cfg.playback.default_tempo)

    with ExitStack() as stack:
        # open the output first so the DAW can be wired up while answering prompts
        synth = stack.enter_context(Synth.open_virtual(cfg.ports.output_name))
        settings = collect_settings(tracks, list_input_ports(), cfg)
        chords = group_chords(settings.track.notes, settings.group_chords, settings.threshold_ms)
        log.info("Track %r: %d notes -> %d chords (grouping=%s, threshold=%s ms)",
                 settings.track.name, len(settings.track.notes), len(chords),
                 settings.group_chords, settings.threshold_ms)
        note_session(track=settings.track.label, grouping=settings.group_chords,
                     threshold_ms=settings.threshold_ms, instrument=settings.instrument or "keyboard")

        if settings.instrument is None:
            trigger = KeyboardTrigger()
        else:
            trigger = stack.enter_context(MidiTrigger.open(settings.instrument))

        renderer = Renderer(cfg.render, title=f"{os.path.basename(midi_path)} - {settings.track.name}")
        stack.callback(renderer.close)

        scheduler = Scheduler()
        driver = PlaybackDriver(chords, synth, scheduler, cfg.playback.sustain_ms)
        note_session(progress=lambda: f"{driver.played}/{driver.total} chords played")
        print("\nYou can exit at any time by hitting the Esc key.\n")
        return App(cfg, driver, trigger, renderer).run()

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_crashlog()
    _init_logging(args.debug)
    log.info("Starting with %s", args.midi_file)

    try:
        result = play(build_config(args), args.midi_file)
    except KeyboardInterrupt:
        log.info("Interrupted")
        return 1
    except FatalInputError as e:
        log.error("%s", e)
        print(e, file=sys.stderr)
        return 1
    except Exception as e:
        path = log_exception("Top-level exception", e)
        logging.error("Unhandled exception: %s", e, exc_info=True)
        print(f"Something went wrong, details in {path}", file=sys.stderr)
        return 1

    if result == DONE:
        print("Thanks for playing!")
    return 0

if __name__ == '__main__':
    sys.exit(main())
