"""
client.py

pygame front end: maps keys and clicks to flap/reset, renders snapshots,
and drives the engine with a fixed-timestep loop.
"""

import logging
import math
from typing import Optional

import pygame

from .audio import FlapSound
from .config import GameConfig
from .constants import (
    FPS, TICK_TIME, GROUND_HEIGHT, AUDIO_SAMPLE_RATE,
    COLOR_SKY_TOP, COLOR_SKY_BOTTOM, COLOR_HILLS_FAR, COLOR_HILLS_NEAR,
    COLOR_PIPE, COLOR_PIPE_RIM, COLOR_GROUND, COLOR_BODY, COLOR_EYE,
    COLOR_MEAT, COLOR_MEAT_HIGHLIGHT, COLOR_BONE, COLOR_TEXT, COLOR_TEXT_DIM, COLOR_RECORD,
)
from .data_models import GamePhase
from .driver import FrameDriver
from .engine import GameEngine
from .record_db import SqliteRecordStore

log = logging.getLogger(__name__)

MAX_STEPS_PER_LOOP = 5  # drop time after a stall instead of fast-forwarding


# ----------------- Renderer -----------------

class PygameRenderer:
    """Draws a snapshot onto the window. Reads state, never mutates it."""

    def __init__(self, screen: pygame.Surface, config: GameConfig,
                 audio: Optional[FlapSound] = None):
        self.screen = screen
        self.width = int(config.width)
        self.height = int(config.height)
        self.audio = audio
        self.sky = self._build_sky()
        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 24)

    def _build_sky(self) -> pygame.Surface:
        sky = pygame.Surface((self.width, self.height))
        for y in range(self.height):
            t = y / max(self.height - 1, 1)
            color = tuple(int(a + (b - a) * t) for a, b in zip(COLOR_SKY_TOP, COLOR_SKY_BOTTOM))
            pygame.draw.line(sky, color, (0, y), (self.width, y))
        return sky

    def render(self, snapshot: dict):
        self.screen.blit(self.sky, (0, 0))
        self._draw_hills(snapshot["frame"])

        for pipe in snapshot["obstacles"]:
            self._draw_pipe(pipe)
        for pickup in snapshot["pickups"]:
            self._draw_pickup(pickup, snapshot["frame"])

        pygame.draw.rect(self.screen, COLOR_GROUND,
                         (0, self.height - GROUND_HEIGHT, self.width, GROUND_HEIGHT))
        self._draw_body(snapshot["player"])
        self._draw_hud(snapshot)

        phase = snapshot["phase"]
        if phase == GamePhase.IDLE.value:
            self._draw_start_overlay()
        elif phase == GamePhase.GAME_OVER.value:
            self._draw_game_over(snapshot)

        pygame.display.flip()

    def _draw_hills(self, frame: int):
        w, h = self.width, self.height
        offset = (frame * 0.2) % w

        far = [(-w + offset, h - 60)]
        for x in range(-w, w * 2 + 1, 60):
            y = h - 60 - math.sin((x + frame * 0.6) * 0.01) * 18 - 6 * math.sin(x * 0.02)
            far.append((x + offset, y))
        far += [(w, h), (0, h)]
        pygame.draw.polygon(self.screen, COLOR_HILLS_FAR, far)

        near = [(-w + offset * 0.6, h - 40)]
        for x in range(-w, w * 2 + 1, 80):
            y = h - 40 - math.sin((x + frame * 0.3) * 0.008) * 12
            near.append((x + offset * 0.6, y))
        near += [(w, h), (0, h)]
        pygame.draw.polygon(self.screen, COLOR_HILLS_NEAR, near)

    def _draw_pipe(self, pipe: dict):
        x, w = pipe["x"], pipe["width"]
        top_h = pipe["gap_y"]
        bottom_y = pipe["gap_y"] + pipe["gap_height"]
        bottom_h = self.height - bottom_y

        pygame.draw.rect(self.screen, COLOR_PIPE, (x, 0, w, top_h), border_radius=6)
        pygame.draw.rect(self.screen, COLOR_PIPE, (x, bottom_y, w, bottom_h), border_radius=6)
        pygame.draw.rect(self.screen, COLOR_PIPE_RIM, (x + w - 6, 0, 6, top_h))
        pygame.draw.rect(self.screen, COLOR_PIPE_RIM, (x + w - 6, bottom_y, 6, bottom_h))

    def _draw_pickup(self, pickup: dict, frame: int):
        # chicken leg: meat, highlight, bone
        x, y, r = pickup["x"], pickup["y"], pickup["r"]
        bob = math.sin((x + y + frame) * 0.02) * r * 0.15
        y += bob
        pygame.draw.ellipse(self.screen, COLOR_MEAT,
                            (x - r * 1.15, y - r * 0.75, r * 2, r * 1.5))
        pygame.draw.ellipse(self.screen, COLOR_MEAT_HIGHLIGHT,
                            (x - r * 0.6, y - r * 0.4, r * 0.7, r * 0.5))
        pygame.draw.rect(self.screen, COLOR_BONE, (x + r * 0.4, y - r * 0.15, r * 0.6, r * 0.3))
        pygame.draw.circle(self.screen, COLOR_EYE, (x + r * 1.05, y), max(1, r * 0.18))

    def _draw_body(self, player: dict):
        x, y, r, tilt = player["x"], player["y"], player["r"], player["tilt"]
        pygame.draw.circle(self.screen, COLOR_BODY, (x, y), r)
        # eye sits at (5, -3) in body space
        ex = x + 5 * math.cos(tilt) + 3 * math.sin(tilt)
        ey = y + 5 * math.sin(tilt) - 3 * math.cos(tilt)
        pygame.draw.circle(self.screen, COLOR_EYE, (ex, ey), 2)

    def _draw_hud(self, snapshot: dict):
        score = self.large_font.render(str(snapshot["score"]), True, COLOR_TEXT)
        self.screen.blit(score, (self.width // 2 - score.get_width() // 2, 16))

        best = self.font.render(f"Best: {snapshot['best']}", True, COLOR_TEXT)
        self.screen.blit(best, (10, 10))

        legs = self.font.render(f"Legs: {snapshot['pickups_collected']}", True, COLOR_TEXT)
        self.screen.blit(legs, (self.width - legs.get_width() - 10, 10))

        if self.audio is not None:
            label = "M: sound off" if self.audio.muted else "M: sound on"
            mute = self.font.render(label, True, COLOR_TEXT_DIM)
            self.screen.blit(mute, (10, self.height - GROUND_HEIGHT + 8))

    def _blit_centered(self, surface: pygame.Surface, y: float):
        self.screen.blit(surface, (self.width // 2 - surface.get_width() // 2, y))

    def _draw_start_overlay(self):
        self._blit_centered(self.large_font.render("Fallpy", True, COLOR_TEXT), self.height * 0.3)
        self._blit_centered(self.font.render("Space / Click to flap", True, COLOR_TEXT),
                            self.height * 0.3 + 50)

    def _draw_game_over(self, snapshot: dict):
        shade = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        shade.fill((10, 20, 35, 150))
        self.screen.blit(shade, (0, 0))

        y = self.height * 0.25
        self._blit_centered(self.large_font.render("Game Over", True, COLOR_TEXT), y)
        lines = [
            f"Score: {snapshot['score']}",
            f"Legs: {snapshot['pickups_collected']}",
            f"Best: {snapshot['best']}",
        ]
        for i, line in enumerate(lines):
            self._blit_centered(self.font.render(line, True, COLOR_TEXT), y + 50 + i * 26)
        if snapshot["new_record"]:
            self._blit_centered(self.font.render("New record!", True, COLOR_RECORD), y + 130)
        self._blit_centered(self.font.render("Enter / Click to play again", True, COLOR_TEXT_DIM),
                            y + 160)


# ----------------- Game Client -----------------

class FallpyClient:
    def __init__(self, config: GameConfig, db_file: str):
        self.config = config.validate()
        pygame.mixer.pre_init(frequency=AUDIO_SAMPLE_RATE, size=-16, channels=1)
        pygame.init()
        self.screen = pygame.display.set_mode((int(config.width), int(config.height)))
        pygame.display.set_caption("Fallpy")

        self.records = SqliteRecordStore(db_file)
        self.audio = FlapSound(self.records)
        self.audio.load()

        self.engine = GameEngine(config, records=self.records, audio=self.audio)
        self.renderer = PygameRenderer(self.screen, config, self.audio)
        self.driver = FrameDriver(self.engine, self.renderer)

        self.clock = pygame.time.Clock()
        self.step_timer = 0.0
        self.needs_repaint = False

    def run(self):
        """The main client execution loop."""
        self.driver.reset()
        log.info("Window open %dx%d, best=%d", self.config.width, self.config.height,
                 self.engine.state.best)

        running = True
        while running:
            frame_time = self.clock.tick(FPS) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_key(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self._handle_click()
                elif event.type in (pygame.WINDOWEXPOSED, pygame.VIDEOEXPOSE):
                    self.needs_repaint = True

            # --- Fixed Timestep ---
            if self.driver.scheduled:
                self.step_timer = min(self.step_timer + frame_time, MAX_STEPS_PER_LOOP * TICK_TIME)
                while self.step_timer >= TICK_TIME and self.driver.scheduled:
                    self.step_timer -= TICK_TIME
                    self.driver.tick()
            else:
                # idle or game over: the driver already drew this state once
                self.step_timer = 0.0
                if self.needs_repaint:
                    self.needs_repaint = False
                    self.driver.render()

        self.records.close()
        pygame.quit()

    def _handle_key(self, key: int) -> bool:
        if key == pygame.K_ESCAPE:
            return False
        if key in (pygame.K_SPACE, pygame.K_UP):
            self.driver.flap()
        elif key == pygame.K_RETURN and self.engine.phase is GamePhase.GAME_OVER:
            self.driver.reset()
        elif key == pygame.K_m:
            self.audio.toggle_mute()
            self.needs_repaint = True
        return True

    def _handle_click(self):
        if self.engine.phase is GamePhase.GAME_OVER:
            self.driver.reset()
        else:
            self.driver.flap()
