import threading

import pytest

from keysynth.noisemaker import MAX_SAMPLE, NoiseMaker, clip


@pytest.mark.parametrize(
    "sample, maximum, expected",
    [(0.5, 1.0, 0.5), (2.0, 1.0, 1.0), (-2.0, 1.0, -1.0), (-0.25, 1.0, -0.25), (0.0, 1.0, 0.0)],
)
def test_clip(sample, maximum, expected):
    assert clip(sample, maximum) == expected


def test_max_sample_is_signed_32_bit_limit():
    maker = NoiseMaker(block_samples=3)
    maker.set_user_function(lambda t: 1.0)
    assert maker.render_block() == [2**31 - 1] * 3


def test_render_clips_out_of_range_values():
    maker = NoiseMaker(block_samples=2)
    maker.set_user_function(lambda t: 5.0)
    assert maker.render_block() == [MAX_SAMPLE, MAX_SAMPLE]
    maker.set_user_function(lambda t: -5.0)
    assert maker.render_block() == [-MAX_SAMPLE, -MAX_SAMPLE]


def test_default_user_process_is_silence():
    maker = NoiseMaker(block_samples=16)
    assert maker.user_process(0.0) == 0.0
    assert maker.render_block() == [0] * 16


def test_user_process_can_be_overridden():
    class Half(NoiseMaker):
        def user_process(self, time):
            return 0.5

    base = NoiseMaker(block_samples=4)
    assert base.render_block() == [0] * 4

    maker = Half(block_samples=4)
    assert NoiseMaker.user_process(maker, 0.0) == 0.0
    assert maker.render_block() == [int(0.5 * MAX_SAMPLE)] * 4
    assert maker.time() == pytest.approx(base.time())


def test_time_advances_per_sample():
    seen = []
    maker = NoiseMaker(sample_rate=8, block_samples=4)
    maker.set_user_function(lambda t: seen.append(t) or 0.0)
    maker.render_block()
    assert seen == pytest.approx([0.0, 1 / 8, 2 / 8, 3 / 8])
    assert maker.time() == pytest.approx(4 / 8)
    maker.render_block()
    assert maker.time() == pytest.approx(8 / 8)


@pytest.mark.parametrize("name", ["sample_rate", "channels", "blocks", "block_samples"])
def test_non_positive_settings_rejected(name):
    with pytest.raises(ValueError):
        NoiseMaker(**{name: 0})


def test_start_without_sink_raises():
    with pytest.raises(RuntimeError):
        NoiseMaker().start()


def test_running_delivers_blocks_to_sink():
    blocks = []
    enough = threading.Event()

    def sink(block):
        blocks.append(list(block))
        if len(blocks) >= 3:
            enough.set()

    maker = NoiseMaker(sink, block_samples=8)
    maker.set_user_function(lambda t: 1.0)
    with maker:
        assert enough.wait(5)
    assert not maker.running
    assert all(block == [MAX_SAMPLE] * 8 for block in blocks)
    assert maker.time() == pytest.approx(len(blocks) * 8 / 44100)


def test_double_start_raises():
    maker = NoiseMaker(lambda block: None, block_samples=4)
    maker.start()
    try:
        with pytest.raises(RuntimeError):
            maker.start()
    finally:
        maker.stop()
    assert not maker.running


def test_stop_when_not_running_leaves_clock_alone():
    maker = NoiseMaker(sample_rate=4, block_samples=2)
    maker.render_block()
    maker.stop()
    assert maker.time() == pytest.approx(2 / 4)