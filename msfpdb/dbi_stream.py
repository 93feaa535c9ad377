"""The DBI stream: header validation and access to its sub-streams.

The DBI stream starts with a :class:`~msfpdb.dbi_types.StreamHeader`, followed
by sub-streams laid out back to back in a fixed order: module info, section
contributions, section map, source info, type server map, EC data and the
optional debug header.
"""

from __future__ import annotations

import struct

from .dbi_types import (
    DBIVersion,
    DebugHeader,
    SectionContribution,
    SectionContributionVersion,
    StreamHeader,
)
from .msf import DirectMSFStream

__all__ = [
    "PDBError",
    "InvalidStreamError",
    "InvalidSignatureError",
    "UnknownVersionError",
    "InvalidStreamIndexError",
    "DBIStream",
    "validate_dbi_stream",
    "create_dbi_stream",
]

_VERSION_FIELD = struct.Struct("<I")


class PDBError(Exception):
    """Base class for malformed or unsupported PDB data."""


class InvalidStreamError(PDBError):
    """A stream is missing or too small to hold its header."""


class InvalidSignatureError(PDBError):
    """A stream header carries the wrong signature."""


class UnknownVersionError(PDBError):
    """A stream header carries a version this package does not understand."""


class InvalidStreamIndexError(PDBError):
    """A stream index refers to a stream that is not present."""


def _read_header(stream: DirectMSFStream) -> StreamHeader:
    return StreamHeader.from_bytes(stream.read_at_offset(StreamHeader.SIZE, 0))


def validate_dbi_stream(stream: DirectMSFStream) -> StreamHeader:
    """Check that *stream* holds a DBI stream this package can read and return its header."""
    if stream.size < StreamHeader.SIZE:
        raise InvalidStreamError("DBI stream is too small to hold its header")
    header = _read_header(stream)
    if header.signature != StreamHeader.SIGNATURE:
        raise InvalidSignatureError(
            f"DBI stream signature {header.signature:#010x} is not {StreamHeader.SIGNATURE:#010x}"
        )
    if header.version != DBIVersion.V70:
        raise UnknownVersionError(f"unknown DBI stream version {int(header.version)}")
    return header


def create_dbi_stream(stream: DirectMSFStream) -> DBIStream:
    """Create a :class:`DBIStream` from the raw DBI stream."""
    return DBIStream(stream)


class DBIStream:
    """The DBI stream, giving access to its header and sub-streams."""

    def __init__(self, stream: DirectMSFStream) -> None:
        self.stream = stream
        self.header = _read_header(stream)

    def substream_offsets(self) -> dict[str, int]:
        """Return the stream offset of every sub-stream, keyed by name, in stream order."""
        header = self.header
        sizes = (
            ("module_info", header.module_info_size),
            ("section_contribution", header.section_contribution_size),
            ("section_map", header.section_map_size),
            ("source_info", header.source_info_size),
            ("type_server_map", header.type_server_map_size),
            ("ec", header.ec_size),
        )
        offsets: dict[str, int] = {}
        position = StreamHeader.SIZE
        for name, size in sizes:
            offsets[name] = position
            position += size
        offsets["debug_header"] = position
        return offsets

    def has_debug_header(self) -> bool:
        """Return whether the optional debug header sub-stream is present."""
        return self.header.optional_debug_header_size != 0

    def debug_header(self) -> DebugHeader:
        """Return the optional debug header sub-stream."""
        if not self.has_debug_header():
            raise InvalidStreamIndexError("DBI stream has no debug header")
        offset = self.substream_offsets()["debug_header"]
        return DebugHeader.from_bytes(self.stream.read_at_offset(DebugHeader.SIZE, offset))

    def validate_image_section_stream(self) -> int:
        """Check that an image section stream exists and return its stream index."""
        index = self.debug_header().section_header_stream_index
        if index == DebugHeader.INVALID_STREAM_INDEX:
            raise InvalidStreamIndexError("DBI stream has no image section stream")
        return index

    def _section_contribution_version(self) -> int:
        offset = self.substream_offsets()["section_contribution"]
        (version,) = _VERSION_FIELD.unpack(
            self.stream.read_at_offset(_VERSION_FIELD.size, offset)
        )
        return version

    def validate_section_contribution_stream(self) -> None:
        """Check that the section contribution sub-stream has a supported version."""
        version = self._section_contribution_version()
        if version != SectionContributionVersion.VER60:
            raise UnknownVersionError(
                f"unknown section contribution version {version:#010x}"
            )

    def section_contributions(self) -> list[SectionContribution]:
        """Return every entry of the section contribution sub-stream."""
        total = self.header.section_contribution_size
        if total < _VERSION_FIELD.size:
            raise InvalidStreamError("section contribution sub-stream is too small")
        size = total - _VERSION_FIELD.size
        offset = self.substream_offsets()["section_contribution"] + _VERSION_FIELD.size
        data = self.stream.read_at_offset(size, offset)
        count = size // SectionContribution.SIZE
        return [
            SectionContribution.from_bytes(data, position)
            for position in range(0, count * SectionContribution.SIZE, SectionContribution.SIZE)
        ]

    def module_info_bytes(self) -> bytes:
        """Return the raw bytes of the module info sub-stream."""
        offset = self.substream_offsets()["module_info"]
        return self.stream.read_at_offset(self.header.module_info_size, offset)

    def source_info_bytes(self) -> bytes:
        """Return the raw bytes of the source info sub-stream."""
        offset = self.substream_offsets()["source_info"]
        return self.stream.read_at_offset(self.header.source_info_size, offset)