import numpy as np
import pytest
import soundfile as sf

from wavetrim.audio.decoder import load_buffer
from wavetrim.audio.errors import DecodeError, UnsupportedFormatError
from wavetrim.audio.types import SampleBuffer
from wavetrim.audio.wav_encoder import encode


def test_load_from_path_keeps_channels(tmp_path):
    path = tmp_path / "stereo.wav"
    data = np.stack([np.linspace(-0.5, 0.5, 800), np.full(800, 0.25)], axis=1)
    sf.write(str(path), data, 16_000, subtype="PCM_16")

    buffer = load_buffer(path)
    assert buffer.sample_rate == 16_000
    assert buffer.channel_count == 2
    assert buffer.frame_count == 800
    assert buffer.channels.dtype == np.float32
    np.testing.assert_allclose(buffer.channel(1), 0.25, atol=1e-4)


def test_load_from_encoded_bytes():
    source = SampleBuffer.from_channels([np.full(441, 0.5)], 44_100)
    buffer = load_buffer(encode(source).data)
    assert buffer.frame_count == 441
    np.testing.assert_allclose(buffer.channel(0), 0.5, atol=1 / 32768)


def test_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(UnsupportedFormatError):
        load_buffer(path)


def test_garbage_bytes_raise_decode_error():
    with pytest.raises(DecodeError):
        load_buffer(b"definitely not audio")
