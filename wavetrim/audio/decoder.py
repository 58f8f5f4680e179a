"""Decode audio files or uploads into SampleBuffers via libsndfile."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

import soundfile as sf

from ..config import CONFIG
from .errors import DecodeError, UnsupportedFormatError
from .types import SampleBuffer

LOGGER = logging.getLogger("wavetrim.decoder")

AudioSource = Union[str, Path, bytes, BinaryIO]


def load_buffer(source: AudioSource) -> SampleBuffer:
    """Decode ``source`` (path, raw bytes or binary file object) to float32."""

    if isinstance(source, (str, Path)):
        path = Path(source)
        if path.suffix.lower() not in CONFIG.supported_extensions:
            supported = ", ".join(CONFIG.supported_extensions)
            raise UnsupportedFormatError(f"{path.name}: only {supported} files are supported")
        handle: Union[str, BinaryIO] = str(path)
        name = path.name
    elif isinstance(source, (bytes, bytearray)):
        handle = io.BytesIO(bytes(source))
        name = "<bytes>"
    else:
        handle = source
        name = getattr(source, "name", "<stream>")

    try:
        data, sample_rate = sf.read(handle, dtype="float32", always_2d=True)
    except (sf.LibsndfileError, TypeError) as exc:
        raise DecodeError(f"Could not decode {name}: {exc}") from exc
    buffer = SampleBuffer(sample_rate=sample_rate, channels=data.T)
    LOGGER.info(
        "Decoded %s: %d frame(s), %d channel(s) @ %d Hz",
        name,
        buffer.frame_count,
        buffer.channel_count,
        buffer.sample_rate,
    )
    return buffer


__all__ = ["AudioSource", "load_buffer"]
