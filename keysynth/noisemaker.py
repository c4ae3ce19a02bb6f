"""Block-based sample generator that feeds rendered audio to a sink."""

from __future__ import annotations

import threading
from typing import Callable, Optional, Sequence

SampleFunction = Callable[[float], float]
Sink = Callable[[Sequence[int]], None]

#: Largest value of a signed 32-bit sample.
MAX_SAMPLE = 2**31 - 1


def clip(sample: float, maximum: float) -> float:
    """Limit ``sample`` to the range ``[-maximum, maximum]``."""
    if sample >= 0.0:
        return min(sample, maximum)
    return max(sample, -maximum)


class NoiseMaker:
    """Renders blocks of 32-bit PCM samples from a function of time.

    Each block holds ``block_samples`` samples. While running, a worker
    thread renders blocks one after another and hands each to ``sink``,
    which is expected to pace the output (for example by blocking until
    the audio device has room for it).
    """

    def __init__(
        self,
        sink: Optional[Sink] = None,
        sample_rate: int = 44100,
        channels: int = 1,
        blocks: int = 8,
        block_samples: int = 512,
    ) -> None:
        for name, value in (
            ("sample_rate", sample_rate),
            ("channels", channels),
            ("blocks", blocks),
            ("block_samples", block_samples),
        ):
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        self.sink = sink
        self.sample_rate = sample_rate
        self.channels = channels
        self.blocks = blocks
        self.block_samples = block_samples
        self._user_function: Optional[SampleFunction] = None
        self._time = 0.0
        self._time_lock = threading.Lock()
        self._running = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def set_user_function(self, func: Optional[SampleFunction]) -> None:
        """Use ``func`` instead of :meth:`user_process` to produce samples."""
        self._user_function = func

    def user_process(self, time: float) -> float:
        """Default sample source: silence. Subclasses may override."""
        return 0.0

    def time(self) -> float:
        """Time in seconds of the next sample to be rendered."""
        with self._time_lock:
            return self._time

    @property
    def running(self) -> bool:
        return self._running.is_set()

    def render_block(self) -> list[int]:
        """Render one block of samples and advance the clock."""
        source = self._user_function or self.user_process
        step = 1.0 / self.sample_rate
        block = []
        with self._time_lock:
            now = self._time
        for _ in range(self.block_samples):
            block.append(int(clip(source(now), 1.0) * MAX_SAMPLE))
            now += step
        with self._time_lock:
            self._time = now
        return block

    def start(self) -> None:
        """Reset the clock and start delivering blocks to the sink."""
        if self.sink is None:
            raise RuntimeError("no sink to deliver samples to")
        if self.running:
            raise RuntimeError("already running")
        with self._time_lock:
            self._time = 0.0
        self._running.set()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop delivering blocks and wait for the worker to finish."""
        self._running.clear()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        while self._running.is_set():
            block = self.render_block()
            self.sink(block)

    def __enter__(self) -> "NoiseMaker":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()