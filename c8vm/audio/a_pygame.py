#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer through PyGame / SDL as a continuous square wave.

A single period of the wave is built as an unsigned 8-bit sample, and PyGame
loops it for as long as the buzzer is enabled.  Starting an already playing
buzzer (or stopping a silent one) does nothing, so the driver can call these
freely.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import AudioError, Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.25


class Audio(AudioBase):
    def __init__(self, frequency=TONE_FREQUENCY, volume=DEFAULT_VOLUME):
        super().__init__()

        try:
            pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, allowedchanges=0)
            pygame.mixer.init()
        except pygame.error as e:
            raise AudioError("Unable to initialise audio: {}".format(e)) from None

        # Square wave: high for the first half of each period, low for the second
        period = max(2, int(round(PLAYBACK_FREQUENCY / frequency)))
        half_period = period // 2
        self.buffer = bytes([0xFF] * half_period + [0x00] * (period - half_period))
        self.sound = pygame.mixer.Sound(buffer=self.buffer)
        self.sound.set_volume(volume)

    def start(self):
        if not self.playing:
            self.sound.play(-1)

        super().start()

    def stop(self):
        if self.playing:
            self.sound.stop()

        super().stop()

    def shutdown(self):
        super().shutdown()
        pygame.mixer.quit()
