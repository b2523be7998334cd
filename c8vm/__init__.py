#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import APP_INTRO, APP_COPYRIGHT, DISPLAY_SIZES, DEFAULT_DISPLAY_SIZE, DEFAULT_KEYMAP, MEM_SIZE
from .cpu import CPU
from .debugger import Debugger
from .driver import CycleDriver, DriverError
from .framebuffer import Framebuffer, FramebufferError
from .hostio import Loader
from .inputs.i_null import InputsError
from .keypad import Keypad
from .audio.a_null import AudioError
from .renderers.r_null import RendererError
from .ram import RAM
from .stack import Stack

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def _select_plugins(opt_renderer, mute_audio):
    # flake8: noqa: F401
    # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
    if opt_renderer is None or opt_renderer == "pygame":
        try:
            import pygame
        except ImportError:
            raise StartupError(
                "PyGame does not appear to be installed."
            )

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer

        if mute_audio:
            from .audio.a_null import Audio
        else:
            from .audio.a_pygame import Audio
    elif opt_renderer == "null":
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio
    else:
        raise StartupError("Unknown renderer '{}'.".format(opt_renderer))

    return Renderer, Inputs, Audio


def _get_scale(size):
    if size is None:
        return DISPLAY_SIZES[DEFAULT_DISPLAY_SIZE]

    if isinstance(size, int):
        return size

    try:
        return DISPLAY_SIZES[size] if size in DISPLAY_SIZES else int(size)
    except ValueError:
        raise StartupError("Unknown display size '{}'.".format(size)) from None


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    Renderer, Inputs, Audio = _select_plugins(args["renderer"], args["mute"])
    loader = Loader()

    # Read ROM binary before touching any host systems
    try:
        rom = loader.load_binary(args["filename"])
    except OSError as e:
        raise StartupError("Unable to read ROM '{}': {}".format(args["filename"], e.strerror or e)) from None

    # Allocate system memory and the call stack inside it
    ram = RAM(MEM_SIZE)
    stack = Stack(ram)
    keypad = Keypad()
    renderer = inputs = audio = None

    try:
        # Plugins raise their own errors if the host can't provide a display or audio, so convert them all to
        # startup errors here
        try:
            renderer = Renderer(scale=_get_scale(args["size"]))
            framebuffer = Framebuffer(
                renderer, allow_wrapping=bool(args["screen_wrap_quirks"])
            )
            inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, keypad)
            audio = Audio()
        except (RendererError, FramebufferError, InputsError, AudioError) as e:
            raise StartupError(str(e)) from None

        # Set up debugger and live output if necessary
        debugger = Debugger()
        debugger.set_live(args["debug"])

        # Create a new CPU, plug it into the rest of the system, and load the program at the default address
        cpu = CPU(
            ram, stack, framebuffer, keypad, inputs, debugger, shift_flag_quirks=bool(args["shift_flag_quirks"])
        )
        cpu.load_rom(rom)

        try:
            driver = CycleDriver(
                cpu, framebuffer, keypad, inputs, audio, clock_speed=args["clock_speed"],
                frame_sync=args["frame_sync"], exit_on_halt=args["exit_on_halt"]
            )
        except DriverError as e:
            raise StartupError(str(e)) from None

        return driver.run()
    finally:
        # The CPU has quit, so shut down the host systems.  __del__ cannot be relied upon when using PyPy
        for plugin in audio, inputs, renderer:
            if plugin is not None:
                plugin.shutdown()
