# app.py
import logging
from typing import Callable, Iterable, Optional
from config import AppConfig
from timeline.playback import PlaybackDriver
from input.triggers import is_exit_event

log = logging.getLogger(__name__)

RUNNING, DONE, ABORTED = "running", "done", "aborted"

class App:
    """Main loop: triggers in, advance(), fire due signals, draw.

    Everything runs on this one thread, so the chord queue needs no lock.
    After the last chord the loop stops listening to triggers and keeps
    running only until the scheduled note-offs have been sent.
    """
    def __init__(self, cfg: AppConfig, driver: PlaybackDriver, trigger, renderer=None,
                 events: Optional[Callable[[], Iterable]] = None):
        self.cfg = cfg
        self.driver = driver
        self.scheduler = driver.scheduler
        self.trigger = trigger
        self.renderer = renderer
        if events is None:
            import pygame
            events = pygame.event.get
        self.events = events
        self.draining = driver.finished

    def step(self, events: Iterable) -> str:
        triggers = 0
        for e in events:
            if is_exit_event(e, self.cfg.exit_chars):
                return ABORTED
            triggers += self.trigger.handle_event(e)
        triggers += self.trigger.poll()

        for _ in range(triggers):
            if self.draining:
                break
            self.driver.advance()
            if self.driver.finished:
                log.info("Last chord scheduled, waiting for %d pending signal(s)", len(self.scheduler))
                self.draining = True

        self.scheduler.run_due()
        if self.draining and not self.scheduler.pending:
            return DONE
        return RUNNING

    def abort(self):
        dropped = self.scheduler.cancel_all()
        self.driver.synth.all_notes_off()
        log.info("Aborted with %d/%d chords played, %d signal(s) dropped",
                 self.driver.played, self.driver.total, dropped)

    def run(self) -> str:
        result = RUNNING
        try:
            while result == RUNNING:
                dt = self.renderer.tick(self.cfg.render.fps) if self.renderer else 0.0
                result = self.step(self.events())
                if self.renderer and self.renderer.due(dt):
                    self.renderer.draw(self.driver.played, self.driver.total,
                                       self.trigger.label, self.driver.sounding,
                                       self.driver.state)
        except KeyboardInterrupt:
            result = ABORTED
        if result == ABORTED:
            self.abort()
        return result
