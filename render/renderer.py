# render/renderer.py
import logging
import pygame
from config import RenderConfig

STATUS_H = 36
WHITE_SET = {0, 2, 4, 5, 7, 9, 11}
FIRST_MIDI, LAST_MIDI = 21, 108  # 88 keys

log = logging.getLogger(__name__)

class Renderer:
    """Small status window: song title, progress and a piano strip.

    It is also where pygame reads the computer keyboard, so it has to be
    open (and focused) for keyboard triggers.
    """
    def __init__(self, cfg: RenderConfig, title: str = ""):
        pygame.init()
        self.cfg = cfg
        self.title = title
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption(f"Virtuoso - {title}" if title else "Virtuoso")
        self.font = pygame.font.SysFont("consolas", 18)
        self.font_small = pygame.font.SysFont("consolas", 14)
        self.clock = pygame.time.Clock()
        self._since_draw = 0.0
        self.whites = [p for p in range(FIRST_MIDI, LAST_MIDI + 1) if (p % 12) in WHITE_SET]
        self.white_w = float(cfg.window_w) / float(len(self.whites) or 1)

    def tick(self, fps=500) -> float:
        return self.clock.tick(fps) / 1000.0

    def due(self, dt: float) -> bool:
        """Throttle drawing to draw_fps while the loop itself runs faster."""
        self._since_draw += dt
        if self._since_draw >= 1.0 / max(1, self.cfg.draw_fps):
            self._since_draw = 0.0
            return True
        return False

    def draw(self, played: int, total: int, source: str, sounding=(), state: str = ""):
        self.screen.fill((12, 12, 14))
        self.draw_status_bar(played, total, source, state)
        self.draw_keyboard(highlight=set(sounding))
        pygame.display.flip()

    def draw_status_bar(self, played: int, total: int, source: str, state: str = ""):
        w = self.cfg.window_w
        pygame.draw.rect(self.screen, (24, 24, 28), (0, 0, w, STATUS_H))
        pygame.draw.line(self.screen, (60, 60, 66), (0, STATUS_H), (w, STATUS_H), 1)

        title = self.font_small.render(self.title, True, (220, 220, 230))
        self.screen.blit(title, (10, (STATUS_H - title.get_height()) // 2))
        right = self.font_small.render(f"{source}  |  {self.cfg.exit_hint}", True, (180, 180, 190))
        self.screen.blit(right, (w - right.get_width() - 10, (STATUS_H - right.get_height()) // 2))

        progress = self.font.render(f"chord {played}/{total}  {state}", True, (200, 200, 210))
        self.screen.blit(progress, (10, STATUS_H + 10))
        bar_y = STATUS_H + 38
        pygame.draw.rect(self.screen, (40, 40, 46), (10, bar_y, w - 20, 6), border_radius=3)
        if total:
            pygame.draw.rect(self.screen, (80, 200, 120),
                             (10, bar_y, int((w - 20) * played / total), 6), border_radius=3)

    def draw_keyboard(self, highlight: set):
        w, h, ph = self.cfg.window_w, self.cfg.window_h, self.cfg.piano_h
        pygame.draw.rect(self.screen, (28, 28, 32), (0, h - ph, w, ph))

        x = 0.0
        for p in self.whites:
            fill = (230, 230, 230) if p not in highlight else (255, 240, 170)
            pygame.draw.rect(self.screen, fill, (x, h - ph, self.white_w - 1, ph))
            x += self.white_w

        # black key sits on the right edge of the white key below it
        for i, p in enumerate(self.whites[:-1]):
            if (p % 12) in {0, 2, 5, 7, 9}:
                bx = i * self.white_w + self.white_w * 0.7
                fill = (18, 18, 20) if (p + 1) not in highlight else (255, 200, 120)
                pygame.draw.rect(self.screen, fill, (bx, h - ph, self.white_w * 0.6, ph * 0.6))

    def close(self):
        log.debug("Closing display")
        pygame.display.quit()
        pygame.quit()
