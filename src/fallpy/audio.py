"""
audio.py: Flap sound effect for the pygame client, with a persisted mute flag.
"""

import logging
import math
from array import array

import pygame

from .constants import (
    AUDIO_SAMPLE_RATE, FLAP_DURATION, FLAP_FREQ_END, FLAP_FREQ_START, FLAP_VOLUME
)

log = logging.getLogger(__name__)

MUTE_KEY = "muted"
RAMP_TIME = 0.12        # pitch sweep finishes slightly before the tone ends
SILENT_GAIN = 0.0001


def square_sweep(sample_rate: int = AUDIO_SAMPLE_RATE) -> array:
    """
    A square wave sweeping FLAP_FREQ_START -> FLAP_FREQ_END with an
    exponentially decaying gain, as signed 16-bit mono samples.
    """
    samples = array("h")
    count = int(sample_rate * FLAP_DURATION)
    phase = 0.0
    for i in range(count):
        t = i / sample_rate
        ramp = min(t / RAMP_TIME, 1.0)
        freq = FLAP_FREQ_START * (FLAP_FREQ_END / FLAP_FREQ_START) ** ramp
        gain = FLAP_VOLUME * (SILENT_GAIN / FLAP_VOLUME) ** (t / FLAP_DURATION)
        phase += freq / sample_rate
        level = 1.0 if math.fmod(phase, 1.0) < 0.5 else -1.0
        samples.append(int(level * gain * 32767))
    return samples


class FlapSound:
    """AudioSink that plays the flap tone unless muted."""

    def __init__(self, settings):
        self.settings = settings
        self.muted = settings.get_setting(MUTE_KEY, "0") == "1"
        self.sound = None

    def load(self) -> bool:
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=AUDIO_SAMPLE_RATE, size=-16, channels=1)
            freq, _, channels = pygame.mixer.get_init()
            mono = square_sweep(freq)
            samples = array("h", (s for s in mono for _ in range(channels)))
            self.sound = pygame.mixer.Sound(buffer=samples.tobytes())
        except pygame.error as e:
            log.warning("Audio unavailable, continuing without sound: %s", e)
            self.sound = None
        return self.sound is not None

    def on_flap(self):
        if self.muted or self.sound is None:
            return
        self.sound.play()

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        self.settings.set_setting(MUTE_KEY, "1" if self.muted else "0")
        log.info("Sound %s", "muted" if self.muted else "unmuted")
        return self.muted
