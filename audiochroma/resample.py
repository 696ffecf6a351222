"""Polyphase audio resampler with a Kaiser-windowed sinc filter bank."""

from __future__ import annotations

import math

import numpy as np

FILTER_SHIFT = 15
WINDOW_TYPE = 9

_FELEM_MIN = -32768
_FELEM_MAX = 32767


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder matching truncating division."""
    return a - b * _cdiv(a, b)


def _clip16(value: int) -> int:
    return min(max(value, _FELEM_MIN), _FELEM_MAX)


def bessel(x: float) -> float:
    """Zeroth order modified Bessel function of the first kind."""
    v = 1.0
    lastv = 0.0
    t = 1.0
    x = x * x / 4
    i = 1
    while v != lastv:
        lastv = v
        t *= x / (i * i)
        v += t
        i += 1
    return v


def build_filter(
    factor: float,
    tap_count: int,
    phase_count: int,
    scale: int,
    window_type: int,
) -> np.ndarray:
    """Build a polyphase filter bank of ``phase_count * tap_count`` int16 taps.

    ``window_type`` 0 selects a cubic filter, 1 a Blackman-Nuttall windowed
    sinc and anything above a Kaiser windowed sinc with that beta.  Every
    phase is normalised so its coefficients sum to roughly ``scale``.
    """
    if tap_count < 1 or phase_count < 1:
        raise ValueError("tap_count and phase_count must be positive")
    center = (tap_count - 1) // 2
    if factor > 1.0:
        factor = 1.0

    bank = np.zeros(phase_count * tap_count, dtype=np.int16)
    for ph in range(phase_count):
        tab = []
        norm = 0.0
        for i in range(tap_count):
            offset = (i - center) - ph / phase_count
            x = math.pi * offset * factor
            y = 1.0 if x == 0 else math.sin(x) / x
            if window_type == 0:
                d = -0.5
                x = abs(offset * factor)
                if x < 1.0:
                    y = 1 - 3 * x * x + 2 * x * x * x + d * (-x * x + x * x * x)
                else:
                    y = d * (-4 + 8 * x - 5 * x * x + x * x * x)
            elif window_type == 1:
                w = 2.0 * x / (factor * tap_count) + math.pi
                y *= (
                    0.3635819
                    - 0.4891775 * math.cos(w)
                    + 0.1365995 * math.cos(2 * w)
                    - 0.0106411 * math.cos(3 * w)
                )
            else:
                w = 2.0 * x / (factor * tap_count * math.pi)
                y *= bessel(window_type * math.sqrt(max(1 - w * w, 0)))
            tab.append(y)
            norm += y
        row = ph * tap_count
        for i, value in enumerate(tab):
            bank[row + i] = _clip16(math.floor(value * scale / norm + 0.5))
    return bank


class Resampler:
    """Stateful converter of 16-bit sample streams between two rates."""

    def __init__(
        self,
        out_rate: int,
        in_rate: int,
        filter_length: int = 16,
        phase_shift: int = 8,
        linear: bool = False,
        cutoff: float = 0.8,
    ) -> None:
        if out_rate <= 0 or in_rate <= 0:
            raise ValueError("sample rates must be positive")
        factor = min(out_rate * cutoff / in_rate, 1.0)
        phase_count = 1 << phase_shift

        self.phase_shift = phase_shift
        self.phase_mask = phase_count - 1
        self.linear = bool(linear)
        self.filter_length = max(math.ceil(filter_length / factor), 1)

        fl = self.filter_length
        core = build_filter(factor, fl, phase_count, 1 << FILTER_SHIFT, WINDOW_TYPE)
        bank = np.zeros(fl * (phase_count + 1), dtype=np.int64)
        bank[: fl * phase_count] = core
        bank[fl * phase_count + 1 : fl * phase_count + fl] = bank[: fl - 1]
        bank[fl * phase_count] = bank[fl - 1]
        self.filter_bank = bank

        self.src_incr = out_rate
        self.ideal_dst_incr = in_rate * phase_count
        self.dst_incr = self.ideal_dst_incr
        self.index = -phase_count * ((fl - 1) // 2)
        self.frac = 0
        self.compensation_distance = 0

    def compensate(self, sample_delta: int, compensation_distance: int) -> None:
        """Stretch or squeeze the next ``compensation_distance`` outputs."""
        if compensation_distance == 0:
            raise ValueError("compensation_distance must be non-zero")
        self.compensation_distance = compensation_distance
        self.dst_incr = self.ideal_dst_incr - _cdiv(
            self.ideal_dst_incr * sample_delta, compensation_distance
        )

    def resample(self, src, dst_size: int, update_ctx: bool = True):
        """Resample ``src`` into at most ``dst_size`` samples.

        Returns the produced int16 samples and the number of input samples
        that were consumed.  With ``update_ctx`` false the resampler state is
        left untouched.
        """
        src = np.asarray(src, dtype=np.int64)
        src_size = len(src)
        index = self.index
        frac = self.frac
        src_incr = self.src_incr
        dst_incr_frac = _cmod(self.dst_incr, src_incr)
        dst_incr = _cdiv(self.dst_incr, src_incr)
        compensation_distance = self.compensation_distance
        out: list[int] = []

        if (
            compensation_distance == 0
            and self.filter_length == 1
            and self.phase_shift == 0
        ):
            index2 = index << 32
            incr = _cdiv((1 << 32) * self.dst_incr, src_incr)
            dst_size = min(
                dst_size, _cdiv((src_size - 1 - index) * src_incr, self.dst_incr)
            )
            for _ in range(max(dst_size, 0)):
                out.append(int(src[index2 >> 32]))
                index2 += incr
            dst_index = len(out)
            frac += dst_index * dst_incr_frac
            index += dst_index * dst_incr
            index += _cdiv(frac, src_incr)
            frac = _cmod(frac, src_incr)
        else:
            fl = self.filter_length
            bank = self.filter_bank
            dst_index = 0
            while dst_index < dst_size:
                off = fl * (index & self.phase_mask)
                taps = bank[off : off + fl]
                sample_index = index >> self.phase_shift
                if sample_index < 0:
                    if src_size == 0:
                        break
                    idx = np.abs(np.arange(sample_index, sample_index + fl)) % src_size
                    val = int(np.dot(src[idx], taps))
                elif sample_index + fl > src_size:
                    break
                elif self.linear:
                    segment = src[sample_index : sample_index + fl]
                    val = int(np.dot(segment, taps))
                    v2 = int(np.dot(segment, bank[off + fl : off + 2 * fl]))
                    val += _cdiv((v2 - val) * frac, src_incr)
                else:
                    val = int(np.dot(src[sample_index : sample_index + fl], taps))

                val = (val + (1 << (FILTER_SHIFT - 1))) >> FILTER_SHIFT
                out.append(_clip16(val))

                frac += dst_incr_frac
                index += dst_incr
                if frac >= src_incr:
                    frac -= src_incr
                    index += 1

                dst_index += 1
                if dst_index == compensation_distance:
                    compensation_distance = 0
                    dst_incr_frac = _cmod(self.ideal_dst_incr, src_incr)
                    dst_incr = _cdiv(self.ideal_dst_incr, src_incr)

        consumed = max(index, 0) >> self.phase_shift
        if index >= 0:
            index &= self.phase_mask

        if compensation_distance:
            compensation_distance -= dst_index
            if compensation_distance <= 0:
                raise RuntimeError("compensation distance overrun")

        if update_ctx:
            self.frac = frac
            self.index = index
            self.dst_incr = dst_incr_frac + src_incr * dst_incr
            self.compensation_distance = compensation_distance

        return np.array(out, dtype=np.int16), consumed