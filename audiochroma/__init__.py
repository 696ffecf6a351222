"""Streaming stages for chroma-based audio analysis: resampling, down-mixing, FFT and chroma."""

__version__ = "1.4.0"
__all__ = [
    "audio_processor",
    "chroma",
    "chroma_filter",
    "chroma_resampler",
    "fft",
    "resample",
]