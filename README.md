# audiochroma

Streaming stages for chroma-based audio analysis. Each stage takes its
input piece by piece and passes every result to a *consumer*: any object
with a `consume` method. Stages can therefore be chained into a pipeline,
and the last consumer in the chain collects the output.

## Stages

### `audiochroma.audio_processor.AudioProcessor(sample_rate, consumer)`

Takes interleaved 16-bit audio with any number of channels. It mixes the
audio down to mono by averaging the channels, converts it to
`sample_rate` when the input rate differs, and passes blocks of int16
samples to `consumer.consume`.

- `reset(sample_rate, num_channels)` prepares for a new stream. It raises
  `ValueError` when `num_channels` is not positive or `sample_rate` is
  1000 Hz or less.
- `consume(samples)` accepts a sequence or array of interleaved samples.
  It raises `RuntimeError` if `reset` has not been called, and
  `ValueError` if the sample count is not a multiple of the channel count.
- `flush()` pushes through any audio still held in the internal buffer.

### `audiochroma.resample`

- `Resampler(out_rate, in_rate, filter_length=16, phase_shift=8, linear=False, cutoff=0.8)`:
  a stateful polyphase resampler with a Kaiser-windowed sinc filter bank.
  `resample(src, dst_size, update_ctx=True)` returns a tuple of the
  produced int16 samples (at most `dst_size`) and the number of input
  samples consumed. With `update_ctx=False` the resampler state is left
  unchanged. `compensate(sample_delta, compensation_distance)` stretches
  or squeezes the next `compensation_distance` outputs.
- `build_filter(factor, tap_count, phase_count, scale, window_type)`
  builds the int16 filter bank: window type 0 is cubic, 1 is a
  Blackman-Nuttall windowed sinc, higher values a Kaiser windowed sinc
  with that beta.
- `bessel(x)`: zeroth order modified Bessel function of the first kind.

### `audiochroma.fft.FFT(frame_size, overlap, consumer)`

Cuts a mono int16 stream into frames of `frame_size` samples that overlap
by `overlap` samples. Each frame is scaled by `1 / 32767`, weighted by a
Hamming window, and its power spectrum (`frame_size // 2 + 1` values) is
passed on. `frame_size`, `increment` and `overlap` are available as
attributes. `reset()` drops samples still waiting for a complete frame.

### `audiochroma.chroma.Chroma(min_freq, max_freq, frame_size, sample_rate, consumer)`

Folds each power spectrum into 12 pitch-class energies, using only the
bins between `min_freq` and `max_freq`. Band 0 is the pitch class of A
(octaves are counted from 27.5 Hz). When the `interpolate` attribute is
set to `True`, the energy of a bin is split between its band and the
nearest neighbouring band. `freq_to_octave(freq, base=27.5)` is also
provided.

### `audiochroma.chroma_filter.ChromaFilter(coefficients, consumer)`

FIR filter across successive chroma vectors. It takes 1 to 8
coefficients; the first applies to the oldest vector. Nothing is emitted
until the filter has been filled. `reset()` clears the history.

### `audiochroma.chroma_resampler.ChromaResampler(factor, consumer)`

Emits the mean of every `factor` consecutive chroma vectors. `reset()`
discards a partially accumulated group.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install ".[test]"
```

## Example

```python
import numpy as np

from audiochroma.audio_processor import AudioProcessor
from audiochroma.chroma import Chroma
from audiochroma.chroma_filter import ChromaFilter
from audiochroma.fft import FFT


class Collector:
    def __init__(self):
        self.items = []

    def consume(self, features):
        self.items.append(list(features))


# five seconds of a 440 Hz tone, stereo, 44.1 kHz
t = np.arange(44100 * 5)
tone = (10000 * np.sin(2 * np.pi * 440 * t / 44100)).astype(np.int16)
stereo = np.repeat(tone, 2)

collector = Collector()
chroma_filter = ChromaFilter([0.25, 0.75, 1.0, 0.75, 0.25], collector)
chroma = Chroma(28, 3520, 4096, 11025, chroma_filter)
fft = FFT(4096, 4096 - 4096 // 3, chroma)
processor = AudioProcessor(11025, fft)

processor.reset(44100, 2)
processor.consume(stereo)
processor.flush()

print(len(collector.items))
```

Call `reset` on a stage before it starts a new stream.

## What this package does not do

It does not decode audio files; it works on raw 16-bit samples you
supply. It does not turn chroma vectors into fingerprints, and it has no
fingerprint compression, encoding, hashing or matching. There is no
command-line tool.

## Running the tests

```
pytest
```