import io
import struct

import numpy as np
import pytest
import soundfile as sf

from wavetrim.audio.types import SampleBuffer
from wavetrim.audio.wav_encoder import encode


def test_header_layout_for_stereo():
    buffer = SampleBuffer.silent(10, 48_000, channel_count=2)
    blob = encode(buffer)
    fields = struct.unpack("<4sI4s4sIHHIIHH4sI", blob.header)
    assert fields == (
        b"RIFF",
        36 + 40,
        b"WAVE",
        b"fmt ",
        16,
        1,
        2,
        48_000,
        48_000 * 2 * 2,
        4,
        16,
        b"data",
        40,
    )
    assert len(blob) == 44 + 40


@pytest.mark.parametrize("frames,channels", [(0, 1), (1, 1), (1000, 2), (333, 6)])
def test_length_matches_frame_and_channel_count(frames, channels):
    blob = encode(SampleBuffer.silent(frames, 16_000, channel_count=channels))
    assert len(blob) == 44 + frames * channels * 2
    assert len(blob.payload) == frames * channels * 2


def test_sample_conversion_clamps_and_truncates():
    values = [-3.0, -1.0, -0.5, -0.00001, 0.0, 0.5, 0.99999, 1.0, 2.0]
    blob = encode(SampleBuffer.from_channels([values], 8000))
    pcm = np.frombuffer(blob.payload, dtype="<i2").tolist()
    assert pcm == [-32768, -32768, -16384, 0, 0, 16383, 32766, 32767, 32767]


def test_frames_are_interleaved():
    left = [0.5, 0.25]
    right = [-0.5, -0.25]
    blob = encode(SampleBuffer.from_channels([left, right], 8000))
    pcm = np.frombuffer(blob.payload, dtype="<i2").tolist()
    assert pcm == [16383, -16384, 8191, -8192]


def test_standard_reader_decodes_within_one_step():
    rng = np.random.default_rng(11)
    source = rng.uniform(-1.2, 1.2, (2, 4410)).astype(np.float32)
    buffer = SampleBuffer(sample_rate=44_100, channels=source)
    blob = encode(buffer)

    decoded, sample_rate = sf.read(io.BytesIO(blob.data), dtype="int16", always_2d=True)
    assert sample_rate == 44_100
    assert decoded.shape == (4410, 2)
    clamped = np.clip(source.T.astype(np.float64), -1.0, 1.0)
    expected = np.where(clamped < 0, clamped * 32768, clamped * 32767)
    assert np.max(np.abs(decoded.astype(np.float64) - expected)) <= 1.0


def test_save_writes_blob(tmp_path):
    blob = encode(SampleBuffer.silent(100, 8000))
    target = blob.save(tmp_path / "out" / "clip.wav")
    assert target.read_bytes() == blob.data
