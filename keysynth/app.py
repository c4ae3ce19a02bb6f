"""Window, input handling and audio output for the keyboard synthesiser."""

from __future__ import annotations

import argparse
import time
from array import array
from typing import Optional, Sequence

import pygame

from keysynth.audio import AudioManager, WaveType

WINDOW_TITLE = "Dear ImGui DirectX9 Example"
PANEL_TITLE = "MIDI Controller Window"
BASE_SIZE = (1280, 800)
CLEAR_COLOR = (0.45, 0.55, 0.60, 1.00)
FRAME_RATE = 60


def key_to_vk(key: int) -> Optional[int]:
    """Virtual-key code for a pygame key constant, or None if it has none."""
    if pygame.K_a <= key <= pygame.K_z:
        return key - pygame.K_a + ord("A")
    if pygame.K_0 <= key <= pygame.K_9:
        return key - pygame.K_0 + ord("0")
    return None


def _to_pcm16(samples: Sequence[int], channels: int) -> bytes:
    """Reduce signed 32-bit samples to interleaved signed 16-bit PCM."""
    return array("h", (s >> 16 for s in samples for _ in range(channels))).tobytes()


class PygameSink:
    """Plays blocks of 32-bit samples through the pygame mixer.

    Each call blocks until the mixer channel has room for another block,
    which paces the generator to the playback rate.
    """

    def __init__(self, sample_rate: int = 44100, channels: int = 1) -> None:
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate}")
        if channels <= 0:
            raise ValueError(f"channels must be positive, got {channels}")
        self.sample_rate = sample_rate
        self.channels = channels
        self._channel: Optional[pygame.mixer.Channel] = None
        self._out_channels = channels

    def _open(self) -> pygame.mixer.Channel:
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=self.channels)
        _, _, self._out_channels = pygame.mixer.get_init()
        self._channel = pygame.mixer.Channel(0)
        return self._channel

    def __call__(self, samples: Sequence[int]) -> None:
        channel = self._channel or self._open()
        sound = pygame.mixer.Sound(buffer=_to_pcm16(samples, self._out_channels))
        while channel.get_queue() is not None:
            time.sleep(0.001)
        if channel.get_busy():
            channel.queue(sound)
        else:
            channel.play(sound)


class App:
    """The synthesiser window: plays notes from the keyboard and picks the wave shape."""

    def __init__(self, scale: float = 1.0) -> None:
        if scale <= 0:
            raise ValueError(f"scale must be positive, got {scale}")
        self.scale = scale
        self.size = (int(BASE_SIZE[0] * scale), int(BASE_SIZE[1] * scale))
        self.audio = AudioManager()
        self.sine_button = self._rect(20, 50, 130, 32)
        self.square_button = self._rect(160, 50, 130, 32)
        self._resized = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None

    def _rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        s = self.scale
        return pygame.Rect(int(x * s), int(y * s), int(w * s), int(h * s))

    def initialize(self) -> None:
        """Open the audio device and the window; raises pygame.error on failure."""
        try:
            pygame.init()
            pygame.mixer.init(frequency=44100, size=-16, channels=1)
            self.audio.start(PygameSink(44100, 1))
            self._screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
            pygame.display.set_caption(WINDOW_TITLE)
            self._font = pygame.font.Font(None, int(24 * self.scale))
        except Exception:
            self.shutdown()
            raise

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Apply one event; returns False when the application should quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            vk = key_to_vk(event.key)
            if vk is not None:
                self.audio.handle_key_down(vk)
        elif event.type == pygame.KEYUP:
            vk = key_to_vk(event.key)
            if vk is not None:
                self.audio.handle_key_up(vk)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.sine_button.collidepoint(event.pos):
                self.audio.set_wave_type(WaveType.SINE)
            elif self.square_button.collidepoint(event.pos):
                self.audio.set_wave_type(WaveType.SQUARE)
        elif event.type == pygame.VIDEORESIZE:
            if event.w and event.h:
                self.size = (event.w, event.h)
                self._resized = True
        return True

    def _draw_button(self, rect: pygame.Rect, label: str, selected: bool) -> None:
        colour = (66, 150, 250) if selected else (41, 74, 122)
        pygame.draw.rect(self._screen, colour, rect)
        text = self._font.render(label, True, (255, 255, 255))
        self._screen.blit(text, text.get_rect(center=rect.center))

    def _render(self) -> None:
        r, g, b, a = CLEAR_COLOR
        self._screen.fill((int(r * a * 255), int(g * a * 255), int(b * a * 255)))
        panel = self._rect(10, 10, 300, 90)
        pygame.draw.rect(self._screen, (15, 15, 15), panel)
        pygame.draw.rect(self._screen, (41, 74, 122), (panel.x, panel.y, panel.w, int(28 * self.scale)))
        title = self._font.render(PANEL_TITLE, True, (255, 255, 255))
        self._screen.blit(title, (panel.x + int(6 * self.scale), panel.y + int(6 * self.scale)))
        wave = self.audio.wave_type
        self._draw_button(self.sine_button, "Sine Wave", wave is WaveType.SINE)
        self._draw_button(self.square_button, "Square Wave", wave is WaveType.SQUARE)
        pygame.display.flip()

    def run(self) -> None:
        """Process events and redraw until the window is closed."""
        if self._screen is None:
            raise RuntimeError("initialize() must be called before run()")
        clock = pygame.time.Clock()
        while True:
            if not all([self.handle_event(event) for event in pygame.event.get()]):
                break
            if self._resized:
                self._screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
                self._resized = False
            self._render()
            clock.tick(FRAME_RATE)

    def shutdown(self) -> None:
        self.audio.shutdown()
        self._screen = None
        self._font = None
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="keysynth", description="Play notes from the computer keyboard.")
    parser.add_argument("--scale", type=float, default=1.0, help="window size scale factor")
    args = parser.parse_args(argv)
    app = App(args.scale)
    try:
        app.initialize()
    except (pygame.error, RuntimeError):
        return 1
    try:
        app.run()
    finally:
        app.shutdown()
    return 0