#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.

The machine only has a buzzer, which sounds whenever the sound timer is above
zero.  The cycle driver calls 'start' and 'stop' as the timer changes.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class AudioError(Exception):
    pass


class Audio:
    def __init__(self):
        # Buzzer should be disabled (not playing sounds) by default
        self.playing = False

    def start(self):
        self.playing = True

    def stop(self):
        self.playing = False

    def is_playing(self):
        return self.playing

    def shutdown(self):
        self.stop()
