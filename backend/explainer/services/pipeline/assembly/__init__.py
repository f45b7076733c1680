"""Assembly stage - audio concatenation, muxing and delivery."""

from .delivery import iter_file_chunks, stream_video
from .ffmpeg import (
    build_concat_cmd,
    build_mux_cmd,
    concatenate_audio,
    mux_video_audio,
    quote_concat_path,
    write_concat_manifest,
)

__all__ = [
    "iter_file_chunks",
    "stream_video",
    "build_concat_cmd",
    "build_mux_cmd",
    "concatenate_audio",
    "mux_video_audio",
    "quote_concat_path",
    "write_concat_manifest",
]
