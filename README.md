# keysynth

A small synthesizer that you play from the computer keyboard. Letter keys
sound notes, and a window lets you switch between a sine voice and a square
voice.

## Installing

```
pip install .
```

## Playing

```
keysynth
keysynth --scale 1.5
```

A window opens. `--scale` enlarges or shrinks the window and its controls;
it defaults to 1.0. Hold keys to sound notes. You can hold several keys at
once, and their voices are mixed together.

| Keys                  | Notes        |
|-----------------------|--------------|
| `Z X C V B N M`       | C4 to B4     |
| `Q W E R T Y U I O P` | C5 to E6     |

Other keys play nothing. The window has two buttons, **Sine Wave** and
**Square Wave**. They choose the voice used for every sounding note. Click
one with the left mouse button. Close the window to quit. The command exits
with status 1 if the window or the audio device cannot be opened.

## Using it from Python

The sound engine works without a window.

`keysynth.noisemaker.NoiseMaker` renders blocks of signed 32-bit samples
from a function of time:

- `render_block()` returns one block of `block_samples` samples, clipped to
  full scale, and advances its clock. The default is 512 samples.
- `set_user_function(func)` sets the function the samples come from. Without
  one, `user_process` is used, and it returns silence.
- `time()` gives the time, in seconds, of the next sample.

`start()` resets the clock and begins handing blocks to the sink on a
background thread. The sink is any callable that takes a sequence of
samples. `stop()` ends the thread. A `NoiseMaker` can also be used as a
context manager, which starts and stops it.

`keysynth.audio.AudioManager` keeps track of the keys being held and
produces the mixed signal. Keys are given as virtual-key codes, which are
the upper-case ASCII codes of the letters:

```python
from keysynth.audio import AudioManager, WaveType, note_frequency

manager = AudioManager()
manager.handle_key_down(ord("N"))      # A4
manager.set_wave_type(WaveType.SQUARE)
print(note_frequency(ord("N")))        # 440.0
print(manager.active_notes())          # {78: 440.0}
print(manager.sample(0.001))
manager.handle_key_up(ord("N"))
```

Other functions and methods:

- `sine_sound(freq, time)` and `square_sound(freq, time)` give one voice.
- `make_sine_noise(time)` and `make_square_noise(time)` mix every held note,
  scaled by one half.

To stream the signal, pass a sink to `AudioManager.start`. Call
`AudioManager.shutdown` to stop it. `keysynth.app.PygameSink` is the sink
the application uses: it plays blocks through the pygame mixer and waits
for room in the output queue before taking the next block.

## What it does not do

keysynth only plays live sound from the keyboard. It does not read or send
MIDI, it does not record or save audio to a file, and it has no controls
beyond the choice of wave shape.

## Running the tests

```
pip install ".[test]"
pytest
```