"""Content types of inscriptions and how they are displayed."""

from __future__ import annotations

import enum
import os
import struct
from pathlib import Path


class Media(enum.Enum):
    """How an inscription's content is presented."""

    AUDIO = "audio"
    IFRAME = "iframe"
    IMAGE = "image"
    PDF = "pdf"
    TEXT = "text"
    UNKNOWN = "unknown"
    VIDEO = "video"

    @classmethod
    def from_content_type(cls, s: str) -> "Media":
        for content_type, media, _ in TABLE:
            if content_type == s:
                return media
        raise ValueError(f"unknown content type: {s}")


TABLE: tuple[tuple[str, Media, tuple[str, ...]], ...] = (
    ("application/json", Media.TEXT, ("json",)),
    ("application/pdf", Media.PDF, ("pdf",)),
    ("application/pgp-signature", Media.TEXT, ("asc",)),
    ("application/yaml", Media.TEXT, ("yaml", "yml")),
    ("audio/flac", Media.AUDIO, ("flac",)),
    ("audio/mpeg", Media.AUDIO, ("mp3",)),
    ("audio/wav", Media.AUDIO, ("wav",)),
    ("image/apng", Media.IMAGE, ("apng",)),
    ("image/avif", Media.IMAGE, ()),
    ("image/gif", Media.IMAGE, ("gif",)),
    ("image/jpeg", Media.IMAGE, ("jpg", "jpeg")),
    ("image/png", Media.IMAGE, ("png",)),
    ("image/svg+xml", Media.IFRAME, ("svg",)),
    ("image/webp", Media.IMAGE, ("webp",)),
    ("model/gltf-binary", Media.UNKNOWN, ("glb",)),
    ("model/stl", Media.UNKNOWN, ("stl",)),
    ("text/css", Media.TEXT, ("css",)),
    ("text/html;charset=utf-8", Media.IFRAME, ("html",)),
    ("text/javascript", Media.TEXT, ("js",)),
    ("text/plain;charset=utf-8", Media.TEXT, ("txt",)),
    ("text/markdown;charset=utf-8", Media.TEXT, ("md",)),
    ("video/mp4", Media.VIDEO, ("mp4",)),
    ("video/webm", Media.VIDEO, ("webm",)),
)


def content_type_for_path(path: str | os.PathLike) -> str:
    """Content type for a file, chosen by its extension."""
    path = Path(path)
    if not path.suffix:
        raise ValueError("file must have extension")
    extension = path.suffix[1:].lower()

    if extension == "mp4":
        check_mp4_codec(path)

    for content_type, _, extensions in TABLE:
        if extension in extensions:
            return content_type

    supported = sorted(extensions[0] for _, _, extensions in TABLE if extensions)
    raise ValueError(
        f"unsupported file extension `.{extension}`, "
        f"supported extensions: {' '.join(supported)}"
    )


_VIDEO_CODECS = {b"avc1": "h264", b"hev1": "h265", b"vp09": "vp9"}


def _boxes(data: bytes):
    """Yield (type, payload) for each box in a run of MP4 boxes."""
    pos = 0
    while pos + 8 <= len(data):
        size, kind = struct.unpack_from(">I4s", data, pos)
        header = 8
        if size == 1:
            if pos + 16 > len(data):
                raise ValueError("truncated mp4 box header")
            (size,) = struct.unpack_from(">Q", data, pos + 8)
            header = 16
        elif size == 0:
            size = len(data) - pos
        if size < header or pos + size > len(data):
            raise ValueError(f"invalid mp4 box size for {kind!r}")
        yield kind, data[pos + header : pos + size]
        pos += size


def _child(data: bytes, kind: bytes) -> bytes | None:
    return next((payload for k, payload in _boxes(data) if k == kind), None)


def check_mp4_codec(path: str | os.PathLike) -> None:
    """Raise unless every video track in the MP4 file is H.264."""
    data = Path(path).read_bytes()
    top = dict(_boxes(data))
    if b"ftyp" not in top:
        raise ValueError("ftyp not found")
    moov = top.get(b"moov")
    if moov is None:
        raise ValueError("moov not found")

    for kind, trak in _boxes(moov):
        if kind != b"trak":
            continue
        mdia = _child(trak, b"mdia")
        if mdia is None:
            raise ValueError("mdia not found")
        hdlr = _child(mdia, b"hdlr")
        if hdlr is None or len(hdlr) < 12:
            raise ValueError("hdlr not found")
        handler = hdlr[8:12]
        if handler != b"vide":
            if handler not in (b"soun", b"sbtl"):
                raise ValueError(f"unsupported track type: {handler!r}")
            continue
        stbl = _child(_child(mdia, b"minf") or b"", b"stbl")
        stsd = _child(stbl or b"", b"stsd")
        if stsd is None or len(stsd) < 8:
            raise ValueError("stsd not found")
        entry = next(_boxes(stsd[8:]), None)
        if entry is None:
            raise ValueError("no sample description in video track")
        codec = _VIDEO_CODECS.get(entry[0])
        if codec is None:
            raise ValueError(f"unsupported media type: {entry[0]!r}")
        if codec != "h264":
            raise ValueError(
                f"Unsupported video codec, only H.264 is supported in MP4: {codec}"
            )