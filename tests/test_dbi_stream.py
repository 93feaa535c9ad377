import struct

import pytest

from msfpdb.dbi_stream import (
    DBIStream,
    InvalidSignatureError,
    InvalidStreamError,
    InvalidStreamIndexError,
    PDBError,
    UnknownVersionError,
    create_dbi_stream,
    validate_dbi_stream,
)
from msfpdb.dbi_types import (
    DBIVersion,
    SectionContribution,
    SectionContributionVersion,
    StreamHeader,
)
from msfpdb.msf import DirectMSFStream

HEADER_LAYOUT = "<IIIHHHHHHIIIIIIIIHHI"
CONTRIBUTION_LAYOUT = "<HHIIIHHII"

MODULE_INFO = bytes(range(40))
SECTION_MAP = b"S" * 8
SOURCE_INFO = b"source-info!"
EC_DATA = b"ECEC"
CONTRIBUTIONS = [
    SectionContribution(1, 0, 0x10, 0x200, 0x60000020, 3, 0, 0, 0),
    SectionContribution(2, 0, 0x40, 0x80, 0x40000040, 4, 0, 0, 0),
]


def _contribution_bytes(version, contributions):
    body = b"".join(
        struct.pack(
            CONTRIBUTION_LAYOUT,
            c.section,
            c.padding,
            c.offset,
            c.size,
            c.characteristics,
            c.module_index,
            c.padding2,
            c.data_crc,
            c.relocation_crc,
        )
        for c in contributions
    )
    return struct.pack("<I", version) + body


def _build_payload(
    signature=0xFFFFFFFF,
    version=19990903,
    contribution_version=int(SectionContributionVersion.VER60),
    section_header_index=5,
    with_debug_header=True,
):
    contributions = _contribution_bytes(contribution_version, CONTRIBUTIONS)
    debug = struct.pack("<11H", 0, 0, 0, 0, 0, section_header_index, 0, 0, 0, 0, 0)
    if not with_debug_header:
        debug = b""
    header = struct.pack(
        HEADER_LAYOUT,
        signature,
        version,
        1,
        7,
        0,
        8,
        0,
        9,
        0,
        len(MODULE_INFO),
        len(contributions),
        len(SECTION_MAP),
        len(SOURCE_INFO),
        0,
        0,
        len(debug),
        len(EC_DATA),
        0,
        0x8664,
        0,
    )
    return header + MODULE_INFO + contributions + SECTION_MAP + SOURCE_INFO + EC_DATA + debug


def _scattered_stream(payload, block_size=32):
    """Lay the payload's blocks out in the file in reverse order."""
    blocks = [payload[start : start + block_size] for start in range(0, len(payload), block_size)]
    count = len(blocks)
    file_data = bytearray((count + 1) * block_size)
    indices = []
    for number, block in enumerate(blocks):
        file_index = count - number
        file_data[file_index * block_size : file_index * block_size + len(block)] = block
        indices.append(file_index)
    return DirectMSFStream(bytes(file_data), block_size, indices, len(payload))


def test_validate_accepts_v70_header():
    header = validate_dbi_stream(_scattered_stream(_build_payload()))
    assert header.version == DBIVersion.V70
    assert header.signature == StreamHeader.SIGNATURE


def test_validate_rejects_short_stream():
    stream = _scattered_stream(b"\xff" * 16)
    with pytest.raises(InvalidStreamError):
        validate_dbi_stream(stream)


def test_validate_rejects_bad_signature():
    stream = _scattered_stream(_build_payload(signature=0x12345678))
    with pytest.raises(InvalidSignatureError):
        validate_dbi_stream(stream)


def test_validate_rejects_other_version():
    stream = _scattered_stream(_build_payload(version=int(DBIVersion.V110)))
    with pytest.raises(UnknownVersionError):
        validate_dbi_stream(stream)


def test_errors_share_a_base_class():
    stream = _scattered_stream(_build_payload(signature=0))
    with pytest.raises(PDBError):
        validate_dbi_stream(stream)


def test_create_reads_header_fields():
    dbi = create_dbi_stream(_scattered_stream(_build_payload()))
    assert dbi.header.global_stream_index == 7
    assert dbi.header.public_stream_index == 8
    assert dbi.header.symbol_record_stream_index == 9


def test_substream_offsets_follow_header_sizes():
    dbi = DBIStream(_scattered_stream(_build_payload()))
    offsets = dbi.substream_offsets()
    header = dbi.header
    assert offsets["module_info"] == StreamHeader.SIZE
    assert offsets["section_contribution"] == offsets["module_info"] + header.module_info_size
    assert offsets["section_map"] == offsets["section_contribution"] + header.section_contribution_size
    assert offsets["source_info"] == offsets["section_map"] + header.section_map_size
    assert offsets["type_server_map"] == offsets["source_info"] + header.source_info_size
    assert offsets["ec"] == offsets["type_server_map"] + header.type_server_map_size
    assert offsets["debug_header"] == offsets["ec"] + header.ec_size


def test_module_and_source_info_bytes_are_read_across_blocks():
    dbi = DBIStream(_scattered_stream(_build_payload(), block_size=16))
    assert dbi.module_info_bytes() == MODULE_INFO
    assert dbi.source_info_bytes() == SOURCE_INFO


def test_section_contributions_round_trip():
    dbi = DBIStream(_scattered_stream(_build_payload()))
    assert dbi.section_contributions() == CONTRIBUTIONS


def test_section_contribution_version_ver60_is_accepted():
    dbi = DBIStream(_scattered_stream(_build_payload()))
    dbi.validate_section_contribution_stream()
    assert len(dbi.section_contributions()) == len(CONTRIBUTIONS)


def test_section_contribution_version_v2_is_rejected():
    payload = _build_payload(contribution_version=int(SectionContributionVersion.V2))
    dbi = DBIStream(_scattered_stream(payload))
    with pytest.raises(UnknownVersionError):
        dbi.validate_section_contribution_stream()


def test_debug_header_gives_image_section_stream():
    dbi = DBIStream(_scattered_stream(_build_payload(section_header_index=5)))
    assert dbi.has_debug_header() is True
    assert dbi.debug_header().section_header_stream_index == 5
    assert dbi.validate_image_section_stream() == 5


def test_invalid_image_section_index_is_rejected():
    dbi = DBIStream(_scattered_stream(_build_payload(section_header_index=0xFFFF)))
    with pytest.raises(InvalidStreamIndexError):
        dbi.validate_image_section_stream()


def test_missing_debug_header():
    dbi = DBIStream(_scattered_stream(_build_payload(with_debug_header=False)))
    assert dbi.has_debug_header() is False
    with pytest.raises(InvalidStreamIndexError):
        dbi.debug_header()
    with pytest.raises(InvalidStreamIndexError):
        dbi.validate_image_section_stream()