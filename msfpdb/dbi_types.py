"""Record layouts and enumerations found in the DBI stream and in CodeView symbol data.

Every fixed-size structure is a frozen dataclass with a ``SIZE`` and a
``from_bytes`` constructor that decodes the little-endian on-disk form.
Short input raises :class:`ValueError`.
"""

from __future__ import annotations

import enum
import struct
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

__all__ = [
    "DBIVersion",
    "StreamHeader",
    "DebugHeader",
    "SectionContributionVersion",
    "SectionContribution",
    "ModuleInfo",
    "SymbolRecordKind",
    "ThunkOrdinal",
    "TrampolineType",
    "ProcedureFlags",
    "PublicSymbolFlags",
    "CompileSymbolFlags",
    "CPUType",
    "DebugSubsectionKind",
    "ChecksumKind",
    "InlineeSourceLineKind",
    "SymbolRecord",
    "read_symbol_record",
    "iter_symbol_records",
    "DebugSubsectionHeader",
    "Line",
    "Column",
    "LinesHeader",
    "LinesFileBlockHeader",
    "FileChecksumHeader",
    "InlineeSourceLine",
    "InlineeSourceLineEx",
]


def _unpack(layout: struct.Struct, data: Any, offset: int) -> tuple:
    if offset < 0 or offset + layout.size > len(data):
        raise ValueError(
            f"need {layout.size} bytes at offset {offset}, but data holds {len(data)}"
        )
    return layout.unpack_from(data, offset)


def _coerce(enum_cls: type[enum.Enum], value: int) -> Any:
    """Return the enum member for *value*, or the plain integer if it has none."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


# ---------------------------------------------------------------------------
# DBI stream structures
# ---------------------------------------------------------------------------


class DBIVersion(enum.IntEnum):
    VC41 = 930803
    V50 = 19960307
    V60 = 19970606
    V70 = 19990903
    V110 = 20091201


@dataclass(frozen=True)
class StreamHeader:
    """Header at the start of the DBI stream."""

    SIGNATURE: ClassVar[int] = 0xFFFFFFFF
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IIIHHHHHHIIIIIIIIHHI")
    SIZE: ClassVar[int] = _LAYOUT.size

    signature: int
    version: DBIVersion | int
    age: int
    global_stream_index: int
    toolchain: int
    public_stream_index: int
    pdb_dll_version: int
    symbol_record_stream_index: int
    pdb_dll_rbld: int
    module_info_size: int
    section_contribution_size: int
    section_map_size: int
    source_info_size: int
    type_server_map_size: int
    mfc_type_server_index: int
    optional_debug_header_size: int
    ec_size: int
    flags: int
    machine: int
    padding: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> StreamHeader:
        values = list(_unpack(cls._LAYOUT, data, offset))
        values[1] = _coerce(DBIVersion, values[1])
        return cls(*values)


@dataclass(frozen=True)
class DebugHeader:
    """Optional debug header sub-stream: indices of further streams."""

    INVALID_STREAM_INDEX: ClassVar[int] = 0xFFFF
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<11H")
    SIZE: ClassVar[int] = _LAYOUT.size

    fpo_data_stream_index: int
    exception_data_stream_index: int
    fixup_data_stream_index: int
    omap_to_src_data_stream_index: int
    omap_from_src_data_stream_index: int
    section_header_stream_index: int
    token_data_stream_index: int
    xdata_stream_index: int
    pdata_stream_index: int
    new_fpo_data_stream_index: int
    original_section_header_data_stream_index: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> DebugHeader:
        return cls(*_unpack(cls._LAYOUT, data, offset))


class SectionContributionVersion(enum.IntEnum):
    VER60 = 0xEFFE0000 + 19970605
    V2 = 0xEFFE0000 + 20140516


@dataclass(frozen=True)
class SectionContribution:
    """One entry of the section contribution sub-stream."""

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<HHIIIHHII")
    SIZE: ClassVar[int] = _LAYOUT.size

    section: int
    padding: int
    offset: int
    size: int
    characteristics: int
    module_index: int
    padding2: int
    data_crc: int
    relocation_crc: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> SectionContribution:
        return cls(*_unpack(cls._LAYOUT, data, offset))


@dataclass(frozen=True)
class ModuleInfo:
    """Fixed part of one entry of the module info sub-stream."""

    _HEAD: ClassVar[struct.Struct] = struct.Struct("<I")
    _TAIL: ClassVar[struct.Struct] = struct.Struct("<HHIIIHHIII")
    SIZE: ClassVar[int] = _HEAD.size + SectionContribution.SIZE + _TAIL.size

    unused: int
    section_contribution: SectionContribution
    flags: int
    module_symbol_stream_index: int
    symbol_size: int
    c11_size: int
    c13_size: int
    source_file_count: int
    padding: int
    unused2: int
    source_file_name_index: int
    pdb_file_path_name_index: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> ModuleInfo:
        (unused,) = _unpack(cls._HEAD, data, offset)
        contribution = SectionContribution.from_bytes(data, offset + cls._HEAD.size)
        tail = _unpack(
            cls._TAIL, data, offset + cls._HEAD.size + SectionContribution.SIZE
        )
        return cls(unused, contribution, *tail)


# ---------------------------------------------------------------------------
# CodeView enumerations
# ---------------------------------------------------------------------------


class SymbolRecordKind(enum.IntEnum):
    """CodeView symbol record kinds that can appear in DBI-related streams."""

    S_END = 0x0006
    S_FRAMEPROC = 0x1012
    S_OBJNAME = 0x1101
    S_THUNK32 = 0x1102
    S_BLOCK32 = 0x1103
    S_LABEL32 = 0x1105
    S_LDATA32 = 0x110C
    S_GDATA32 = 0x110D
    S_PUB32 = 0x110E
    S_LPROC32 = 0x110F
    S_GPROC32 = 0x1110
    S_LTHREAD32 = 0x1112
    S_GTHREAD32 = 0x1113
    S_PROCREF = 0x1125
    S_LPROCREF = 0x1127
    S_TRAMPOLINE = 0x112C
    S_SEPCODE = 0x1132
    S_SECTION = 0x1136
    S_COFFGROUP = 0x1137
    S_COMPILE3 = 0x113C
    S_ENVBLOCK = 0x113D
    S_LPROC32_ID = 0x1146
    S_GPROC32_ID = 0x1147
    S_BUILDINFO = 0x114C
    S_INLINESITE = 0x114D
    S_INLINESITE_END = 0x114E
    S_PROC_ID_END = 0x114F
    S_LPROC32_DPC = 0x1155
    S_LPROC32_DPC_ID = 0x1156
    S_INLINESITE2 = 0x115D
    S_UDT = 0x1108
    S_UDT_ST = 0x1003


class ThunkOrdinal(enum.IntEnum):
    NO_TYPE = 0
    THIS_ADJUSTOR = 1
    VIRTUAL_CALL = 2
    PCODE = 3
    DELAY_LOAD = 4
    TRAMPOLINE_INCREMENTAL = 5
    TRAMPOLINE_BRANCH_ISLAND = 6


class TrampolineType(enum.IntEnum):
    INCREMENTAL = 0
    BRANCH_ISLAND = 1


class ProcedureFlags(enum.IntFlag):
    NONE = 0
    NO_FPO = 1 << 0
    INTERRUPT_RETURN = 1 << 1
    FAR_RETURN = 1 << 2
    NO_RETURN = 1 << 3
    UNREACHABLE = 1 << 4
    CUSTOM_CALLING_CONVENTION = 1 << 5
    NO_INLINE = 1 << 6
    OPTIMIZED_DEBUG_INFORMATION = 1 << 7


class PublicSymbolFlags(enum.IntFlag):
    NONE = 0
    CODE = 1 << 0
    FUNCTION = 1 << 1
    MANAGED_CODE = 1 << 2
    MANAGED_IL_CODE = 1 << 3


class CompileSymbolFlags(enum.IntFlag):
    NONE = 0
    SOURCE_LANGUAGE_MASK = 0xFF
    EC = 1 << 8
    NO_DEBUG_INFO = 1 << 9
    LTCG = 1 << 10
    NO_DATA_ALIGN = 1 << 11
    MANAGED_CODE_OR_DATA_PRESENT = 1 << 12
    SECURITY_CHECKS = 1 << 13
    HOT_PATCH = 1 << 14
    CVTCIL = 1 << 15
    MSIL_MODULE = 1 << 16
    SDL = 1 << 17
    PGO = 1 << 18
    EXP = 1 << 19


class CPUType(enum.IntEnum):
    INTEL8080 = 0x0
    INTEL8086 = 0x1
    INTEL80286 = 0x2
    INTEL80386 = 0x3
    INTEL80486 = 0x4
    PENTIUM = 0x5
    PENTIUM_II = 0x6
    PENTIUM_PRO = 0x6
    PENTIUM_III = 0x7
    MIPS = 0x10
    MIPS_R4000 = 0x10
    MIPS16 = 0x11
    MIPS32 = 0x12
    MIPS64 = 0x13
    MIPS_I = 0x14
    MIPS_II = 0x15
    MIPS_III = 0x16
    MIPS_IV = 0x17
    MIPS_V = 0x18
    M68000 = 0x20
    M68010 = 0x21
    M68020 = 0x22
    M68030 = 0x23
    M68040 = 0x24
    ALPHA = 0x30
    ALPHA_21164 = 0x31
    ALPHA_21164A = 0x32
    ALPHA_21264 = 0x33
    ALPHA_21364 = 0x34
    PPC601 = 0x40
    PPC603 = 0x41
    PPC604 = 0x42
    PPC620 = 0x43
    PPCFP = 0x44
    PPCBE = 0x45
    SH3 = 0x50
    SH3E = 0x51
    SH3DSP = 0x52
    SH4 = 0x53
    SHMEDIA = 0x54
    ARM3 = 0x60
    ARM4 = 0x61
    ARM4T = 0x62
    ARM5 = 0x63
    ARM5T = 0x64
    ARM6 = 0x65
    ARM_XMAC = 0x66
    ARM_WMMX = 0x67
    ARM7 = 0x68
    OMNI = 0x70
    IA64 = 0x80
    IA64_1 = 0x80
    IA64_2 = 0x81
    CEE = 0x90
    AM33 = 0xA0
    M32R = 0xB0
    TRICORE = 0xC0
    X64 = 0xD0
    AMD64 = 0xD0
    EBC = 0xE0
    THUMB = 0xF0
    ARMNT = 0xF4
    ARM64 = 0xF6
    HYBRID_X86_ARM64 = 0xF7
    ARM64EC = 0xF8
    ARM64X = 0xF9
    D3D11_SHADER = 0x100


class DebugSubsectionKind(enum.IntEnum):
    S_IGNORE = 0x80000000
    S_SYMBOLS = 0xF1
    S_LINES = 0xF2
    S_STRINGTABLE = 0xF3
    S_FILECHECKSUMS = 0xF4
    S_FRAMEDATA = 0xF5
    S_INLINEELINES = 0xF6
    S_CROSSSCOPEIMPORTS = 0xF7
    S_CROSSSCOPEEXPORTS = 0xF8
    S_IL_LINES = 0xF9
    S_FUNC_MDTOKEN_MAP = 0xFA
    S_TYPE_MDTOKEN_MAP = 0xFB
    S_MERGED_ASSEMBLYINPUT = 0xFC
    S_COFF_SYMBOL_RVA = 0xFD


class ChecksumKind(enum.IntEnum):
    NONE = 0
    MD5 = 1
    SHA1 = 2
    SHA256 = 3


class InlineeSourceLineKind(enum.IntEnum):
    SIGNATURE = 0
    SIGNATURE_EX = 1


# ---------------------------------------------------------------------------
# CodeView symbol records
# ---------------------------------------------------------------------------

_RECORD_HEADER = struct.Struct("<HH")

# (name, first bit, width) of the S_FRAMEPROC flag word
_FRAMEPROC_FLAG_BITS = (
    ("has_alloca", 0, 1),
    ("has_setjmp", 1, 1),
    ("has_longjmp", 2, 1),
    ("has_inline_asm", 3, 1),
    ("has_eh", 4, 1),
    ("inline_spec", 5, 1),
    ("has_seh", 6, 1),
    ("naked", 7, 1),
    ("security_checks", 8, 1),
    ("async_eh", 9, 1),
    ("gs_no_stack_ordering", 10, 1),
    ("was_inlined", 11, 1),
    ("gs_check", 12, 1),
    ("safe_buffers", 13, 1),
    ("encoded_local_base_pointer", 14, 2),
    ("encoded_param_base_pointer", 16, 2),
    ("pogo_on", 18, 1),
    ("valid_counts", 19, 1),
    ("opt_speed", 20, 1),
    ("guard_cf", 21, 1),
    ("guard_cfw", 22, 1),
)


def _decode_frame_flags(value: int) -> dict[str, int | bool]:
    decoded: dict[str, int | bool] = {}
    for name, shift, width in _FRAMEPROC_FLAG_BITS:
        bits = (value >> shift) & ((1 << width) - 1)
        decoded[name] = bool(bits) if width == 1 else bits
    return decoded


@dataclass(frozen=True)
class _Layout:
    fixed: struct.Struct
    names: tuple[str, ...]
    trailing: str | None = None
    convert: Mapping[str, Callable[[int], Any]] = field(default_factory=dict)


_DATA = _Layout(struct.Struct("<IIH"), ("type_index", "offset", "section"), "name")
_PROC = _Layout(
    struct.Struct("<IIIIIIIIHB"),
    (
        "parent",
        "end",
        "next",
        "code_size",
        "debug_start",
        "debug_end",
        "type_index",
        "offset",
        "section",
        "flags",
    ),
    "name",
    {"flags": ProcedureFlags},
)
_UDT = _Layout(struct.Struct("<I"), ("type_index",), "name")

_LAYOUTS: dict[int, _Layout] = {
    SymbolRecordKind.S_FRAMEPROC: _Layout(
        struct.Struct("<IIIIIHI"),
        (
            "cb_frame",
            "cb_pad",
            "off_pad",
            "cb_save_regs",
            "off_ex_hdlr",
            "sect_ex_hdlr",
            "flags",
        ),
        None,
        {"flags": _decode_frame_flags},
    ),
    SymbolRecordKind.S_PUB32: _Layout(
        struct.Struct("<IIH"),
        ("flags", "offset", "section"),
        "name",
        {"flags": PublicSymbolFlags},
    ),
    SymbolRecordKind.S_GDATA32: _DATA,
    SymbolRecordKind.S_GTHREAD32: _DATA,
    SymbolRecordKind.S_LDATA32: _DATA,
    SymbolRecordKind.S_LTHREAD32: _DATA,
    SymbolRecordKind.S_OBJNAME: _Layout(struct.Struct("<I"), ("signature",), "name"),
    SymbolRecordKind.S_TRAMPOLINE: _Layout(
        struct.Struct("<HHIIHH"),
        (
            "type",
            "size",
            "thunk_offset",
            "target_offset",
            "thunk_section",
            "target_section",
        ),
        None,
        {"type": lambda value: _coerce(TrampolineType, value)},
    ),
    SymbolRecordKind.S_SECTION: _Layout(
        struct.Struct("<HBIII"),
        ("section_number", "alignment", "rva", "length", "characteristics"),
        "name",
    ),
    SymbolRecordKind.S_COFFGROUP: _Layout(
        struct.Struct("<IIIH"),
        ("size", "characteristics", "offset", "section"),
        "name",
    ),
    SymbolRecordKind.S_THUNK32: _Layout(
        struct.Struct("<IIIIHHB"),
        ("parent", "end", "next", "offset", "section", "length", "thunk"),
        "name",
        {"thunk": lambda value: _coerce(ThunkOrdinal, value)},
    ),
    SymbolRecordKind.S_LPROC32: _PROC,
    SymbolRecordKind.S_GPROC32: _PROC,
    SymbolRecordKind.S_LPROC32_ID: _PROC,
    SymbolRecordKind.S_GPROC32_ID: _PROC,
    SymbolRecordKind.S_LPROC32_DPC: _PROC,
    SymbolRecordKind.S_LPROC32_DPC_ID: _PROC,
    SymbolRecordKind.S_BLOCK32: _Layout(
        struct.Struct("<IIIIH"),
        ("parent", "end", "code_size", "offset", "section"),
        "name",
    ),
    SymbolRecordKind.S_LABEL32: _Layout(
        struct.Struct("<IHB"),
        ("offset", "section", "flags"),
        "name",
        {"flags": ProcedureFlags},
    ),
    SymbolRecordKind.S_BUILDINFO: _Layout(struct.Struct("<I"), ("type_index",)),
    SymbolRecordKind.S_COMPILE3: _Layout(
        struct.Struct("<IH8H"),
        (
            "flags",
            "machine",
            "version_frontend_major",
            "version_frontend_minor",
            "version_frontend_build",
            "version_frontend_qfe",
            "version_backend_major",
            "version_backend_minor",
            "version_backend_build",
            "version_backend_qfe",
        ),
        "version",
        {
            "flags": CompileSymbolFlags,
            "machine": lambda value: _coerce(CPUType, value),
        },
    ),
    SymbolRecordKind.S_UDT: _UDT,
    SymbolRecordKind.S_UDT_ST: _UDT,
}


def _cstring(payload: bytes, start: int) -> str:
    end = payload.find(b"\0", start)
    if end < 0:
        end = len(payload)
    return payload[start:end].decode("utf-8", errors="replace")


def _decode_fields(kind: int, payload: bytes) -> dict[str, Any]:
    if kind == SymbolRecordKind.S_ENVBLOCK:
        if not payload:
            raise ValueError("S_ENVBLOCK record is too short")
        strings = []
        for raw in payload[1:].split(b"\0"):
            if not raw:
                break
            strings.append(raw.decode("utf-8", errors="replace"))
        return {"flags": payload[0], "strings": strings}

    layout = _LAYOUTS.get(kind)
    if layout is None:
        return {}
    if len(payload) < layout.fixed.size:
        raise ValueError(
            f"record of kind {kind:#06x} needs {layout.fixed.size} bytes, has {len(payload)}"
        )
    values = layout.fixed.unpack_from(payload, 0)
    fields: dict[str, Any] = {}
    for name, value in zip(layout.names, values):
        convert = layout.convert.get(name)
        fields[name] = convert(value) if convert else value
    if layout.trailing is not None:
        fields[layout.trailing] = _cstring(payload, layout.fixed.size)
    if kind == SymbolRecordKind.S_COMPILE3:
        fields["source_language"] = int(fields["flags"]) & 0xFF
    return fields


@dataclass(frozen=True)
class SymbolRecord:
    """A CodeView symbol record: header, raw payload and decoded fields."""

    offset: int
    size: int
    kind: SymbolRecordKind | int
    payload: bytes
    fields: Mapping[str, Any]

    @property
    def name(self) -> str | None:
        """The record's name, for kinds that carry one."""
        return self.fields.get("name")

    @property
    def total_size(self) -> int:
        """Bytes taken by the record including its length field."""
        return self.size + 2


def read_symbol_record(data: Any, offset: int = 0) -> SymbolRecord:
    """Decode the CodeView symbol record that starts at *offset* in *data*."""
    size, kind_value = _unpack(_RECORD_HEADER, data, offset)
    if size < 2:
        raise ValueError(f"symbol record at offset {offset} has invalid size {size}")
    end = offset + 2 + size
    if end > len(data):
        raise ValueError(
            f"symbol record at offset {offset} runs past the end of the data"
        )
    payload = bytes(data[offset + _RECORD_HEADER.size : end])
    kind = _coerce(SymbolRecordKind, kind_value)
    return SymbolRecord(offset, size, kind, payload, _decode_fields(kind_value, payload))


def iter_symbol_records(
    data: Any, offset: int = 0, end: int | None = None
) -> Iterator[SymbolRecord]:
    """Yield the symbol records stored back to back between *offset* and *end*."""
    if end is None:
        end = len(data)
    while offset < end:
        record = read_symbol_record(data, offset)
        yield record
        offset += record.total_size


# ---------------------------------------------------------------------------
# C13 line information
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DebugSubsectionHeader:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<II")
    SIZE: ClassVar[int] = _LAYOUT.size

    kind: DebugSubsectionKind | int
    size: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> DebugSubsectionHeader:
        kind, size = _unpack(cls._LAYOUT, data, offset)
        return cls(_coerce(DebugSubsectionKind, kind), size)


@dataclass(frozen=True)
class Line:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<II")
    SIZE: ClassVar[int] = _LAYOUT.size

    offset: int
    line_start: int
    delta_line_end: int
    is_statement: bool

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> Line:
        code_offset, bits = _unpack(cls._LAYOUT, data, offset)
        return cls(
            code_offset,
            bits & 0xFFFFFF,
            (bits >> 24) & 0x7F,
            bool(bits >> 31),
        )


@dataclass(frozen=True)
class Column:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<HH")
    SIZE: ClassVar[int] = _LAYOUT.size

    start: int
    end: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> Column:
        return cls(*_unpack(cls._LAYOUT, data, offset))


@dataclass(frozen=True)
class LinesHeader:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IHHI")
    SIZE: ClassVar[int] = _LAYOUT.size

    section_offset: int
    section_index: int
    has_columns: bool
    code_size: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> LinesHeader:
        section_offset, section_index, flags, code_size = _unpack(
            cls._LAYOUT, data, offset
        )
        return cls(section_offset, section_index, bool(flags & 1), code_size)


@dataclass(frozen=True)
class LinesFileBlockHeader:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<III")
    SIZE: ClassVar[int] = _LAYOUT.size

    file_checksum_offset: int
    num_lines: int
    size: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> LinesFileBlockHeader:
        return cls(*_unpack(cls._LAYOUT, data, offset))


@dataclass(frozen=True)
class FileChecksumHeader:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IBB")
    HEADER_SIZE: ClassVar[int] = _LAYOUT.size

    filename_offset: int
    checksum_kind: ChecksumKind | int
    checksum: bytes

    @property
    def size(self) -> int:
        """Bytes taken by the header and its checksum."""
        return self.HEADER_SIZE + len(self.checksum)

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> FileChecksumHeader:
        filename_offset, checksum_size, kind = _unpack(cls._LAYOUT, data, offset)
        start = offset + cls.HEADER_SIZE
        if start + checksum_size > len(data):
            raise ValueError("file checksum runs past the end of the data")
        return cls(
            filename_offset,
            _coerce(ChecksumKind, kind),
            bytes(data[start : start + checksum_size]),
        )


@dataclass(frozen=True)
class InlineeSourceLine:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<III")
    SIZE: ClassVar[int] = _LAYOUT.size

    inlinee: int
    file_checksum_offset: int
    line_number: int

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> InlineeSourceLine:
        return cls(*_unpack(cls._LAYOUT, data, offset))


@dataclass(frozen=True)
class InlineeSourceLineEx:
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<IIII")
    HEADER_SIZE: ClassVar[int] = _LAYOUT.size

    inlinee: int
    file_checksum_offset: int
    line_number: int
    extra_file_checksum_offsets: tuple[int, ...]

    @property
    def size(self) -> int:
        """Bytes taken by the entry including its extra offsets."""
        return self.HEADER_SIZE + 4 * len(self.extra_file_checksum_offsets)

    @classmethod
    def from_bytes(cls, data: Any, offset: int = 0) -> InlineeSourceLineEx:
        inlinee, checksum_offset, line_number, extra = _unpack(
            cls._LAYOUT, data, offset
        )
        extras = _unpack(struct.Struct(f"<{extra}I"), data, offset + cls.HEADER_SIZE)
        return cls(inlinee, checksum_offset, line_number, tuple(extras))