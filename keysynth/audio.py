"""Keyboard-driven synthesiser voices."""

from __future__ import annotations

import math
import threading
from enum import Enum
from typing import Optional

from keysynth.noisemaker import NoiseMaker, Sink

_PI = 3.14159

#: Virtual-key code to note frequency in Hz.
NOTE_FREQUENCIES: dict[int, float] = {
    0x51: 523.25,   # C5 (Q)
    0x57: 587.33,   # D5 (W)
    0x45: 659.25,   # E5 (E)
    0x52: 698.46,   # F5 (R)
    0x54: 783.99,   # G5 (T)
    0x59: 880.00,   # A5 (Y)
    0x55: 987.77,   # B5 (U)
    0x49: 1046.50,  # C6 (I)
    0x4F: 1174.66,  # D6 (O)
    0x50: 1318.51,  # E6 (P)
    0x5A: 261.626,  # C4 (Z)
    0x58: 293.665,  # D4 (X)
    0x43: 329.628,  # E4 (C)
    0x56: 349.228,  # F4 (V)
    0x42: 392.000,  # G4 (B)
    0x4E: 440.000,  # A4 (N)
    0x4D: 493.883,  # B4 (M)
}


class WaveType(Enum):
    SINE = "sine"
    SQUARE = "square"


def note_frequency(key: int) -> Optional[float]:
    """Frequency bound to a virtual-key code, or None if the key plays nothing."""
    return NOTE_FREQUENCIES.get(key)


def sine_sound(freq: float, time: float) -> float:
    return math.sin(freq * 2.0 * _PI * time)


def square_sound(freq: float, time: float) -> float:
    """A softened square wave shaped by raising a constant to a sine."""
    amplitude = 1.0
    squareness = 3.0
    return (amplitude / abs(squareness) ** math.sin(squareness * freq * _PI * time) + 1.0) - amplitude / 2.0


class AudioManager:
    """Tracks held keys and mixes their notes into one output signal."""

    def __init__(self) -> None:
        self._notes: dict[int, float] = {}
        self._lock = threading.Lock()
        self.wave_type = WaveType.SINE
        self._sound: Optional[NoiseMaker] = None

    def start(self, sink: Sink) -> NoiseMaker:
        """Start streaming the mixed signal to ``sink``."""
        if self._sound is not None:
            raise RuntimeError("audio already started")
        sound = NoiseMaker(sink)
        sound.set_user_function(self.sample)
        sound.start()
        self._sound = sound
        return sound

    def shutdown(self) -> None:
        if self._sound is not None:
            self._sound.stop()
            self._sound = None

    def handle_key_down(self, key: int) -> None:
        with self._lock:
            if key in self._notes:
                return
            freq = note_frequency(key)
            if freq is not None:
                self._notes[key] = freq

    def handle_key_up(self, key: int) -> None:
        with self._lock:
            self._notes.pop(key, None)

    def set_wave_type(self, wave_type: WaveType) -> None:
        self.wave_type = WaveType(wave_type)

    def active_notes(self) -> dict[int, float]:
        """A copy of the held keys and their frequencies."""
        with self._lock:
            return dict(self._notes)

    def _frequencies(self) -> list[float]:
        with self._lock:
            return list(self._notes.values())

    def make_sine_noise(self, time: float) -> float:
        return sum(sine_sound(f, time) for f in self._frequencies()) * 0.5

    def make_square_noise(self, time: float) -> float:
        return sum(square_sound(f, time) for f in self._frequencies()) * 0.5

    def sample(self, time: float) -> float:
        """Mixed output at ``time`` for the current wave type."""
        if self.wave_type is WaveType.SINE:
            return self.make_sine_noise(time)
        if self.wave_type is WaveType.SQUARE:
            return self.make_square_noise(time)
        return 0.0