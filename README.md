# msfpdb

`msfpdb` reads building blocks of PDB debug-information files: streams held
in the blocks of an MSF container, the DBI stream header and its substreams,
and the CodeView records and line-information structures found in them. It is
pure Python and has no runtime dependencies.

## Installation

```
pip install msfpdb
```

The test extra, `pip install msfpdb[test]`, adds pytest.

## Streams

An MSF file stores each stream as fixed-size blocks that may be scattered
through the file. Given the file's bytes, the block size (a power of two),
the stream's block indices and its size, `msfpdb.msf` offers two ways to
reach a stream:

- `DirectMSFStream` reads on demand. `read_at_offset(size, offset)` returns
  `bytes`, gathered across block boundaries; reading past the end of the
  stream raises `ValueError`. `block_index_for_offset(offset)` returns an
  `IndexAndOffset`, and `data_offset_for(index_and_offset)` turns that into a
  file offset.
- `CoalescedMSFStream` holds a stream, or part of one, as one contiguous
  buffer. `coalesce_blocks(data, block_size, block_indices, size)` builds one
  from the file's blocks, and `coalesce_direct_stream(direct_stream, size,
  offset)` builds one from a range of a direct stream. When the blocks involved
  are consecutive, the buffer is a view into the file and `is_view` is true.
  Otherwise the bytes are copied. `len()` gives its size, and
  `data_at_offset(offset, size)` returns a read-only `memoryview`.

The helpers `block_count(size, block_size)` and
`blocks_are_contiguous(block_indices, block_size, stream_size)` are public as
well.

```python
from msfpdb.msf import DirectMSFStream, coalesce_blocks

stream = DirectMSFStream(file_bytes, 4096, block_indices, stream_size)
first_bytes = stream.read_at_offset(64, 0)

whole = coalesce_blocks(file_bytes, 4096, block_indices, stream_size)
chunk = whole.data_at_offset(0, 16)
```

## The DBI stream

`msfpdb.dbi_stream` works on a `DirectMSFStream` that holds a DBI stream.

`validate_dbi_stream(stream)` checks the header and returns it as a
`StreamHeader`. It raises one of these errors, all subclasses of `PDBError`:

- `InvalidStreamError` when the stream is too small for a header.
- `InvalidSignatureError` when the signature is not `0xFFFFFFFF`.
- `UnknownVersionError` when the version is not `DBIVersion.V70`.

`create_dbi_stream(stream)`, or `DBIStream(stream)`, reads the header without
checking it. A `DBIStream` has `stream` and `header` attributes, and these
methods:

- `substream_offsets()` returns the offset of each substream, keyed by name:
  `module_info`, `section_contribution`, `section_map`, `source_info`,
  `type_server_map`, `ec` and `debug_header`.
- `has_debug_header()` and `debug_header()` give the optional debug header.
  `debug_header()` raises `InvalidStreamIndexError` when the header is absent.
- `validate_image_section_stream()` returns the stream index of the image
  section headers. It raises `InvalidStreamIndexError` if there is none.
- `validate_section_contribution_stream()` raises `UnknownVersionError`
  unless the section contribution substream is version `VER60`.
- `section_contributions()` returns the `SectionContribution` entries in
  stored order.
- `module_info_bytes()` and `source_info_bytes()` return those substreams raw.

## Record types

`msfpdb.dbi_types` decodes little-endian structures with `from_bytes(data,
offset)` and raises `ValueError` on short input. It covers:

- DBI structures: `StreamHeader`, `DebugHeader`, `SectionContribution` and
  `ModuleInfo`.
- CodeView symbol records: `read_symbol_record(data, offset)` returns a
  `SymbolRecord` with its `kind`, raw `payload` and decoded `fields`.
  `iter_symbol_records(data, offset, end)` yields records stored back to back.
- Line information: `DebugSubsectionHeader`, `LinesHeader`,
  `LinesFileBlockHeader`, `Line`, `Column`, `FileChecksumHeader`,
  `InlineeSourceLine` and `InlineeSourceLineEx`.
- Enumerations and flag sets: `DBIVersion`, `SectionContributionVersion`,
  `SymbolRecordKind`, `ThunkOrdinal`, `TrampolineType`, `ProcedureFlags`,
  `PublicSymbolFlags`, `CompileSymbolFlags`, `CPUType`,
  `DebugSubsectionKind`, `ChecksumKind` and `InlineeSourceLineKind`.

## Timing

`msfpdb.timing.TimedScope(message, out=None)` writes an indented message to
`out`, or to standard output when `out` is None. Nested scopes indent further.
`done(count=None)` writes the elapsed milliseconds, and the element count if
one is given, then returns the milliseconds. Calling `done()` twice raises
`RuntimeError`. Used as a context manager, the scope calls `done()` on exit if
it has not been called already.

## What it does not do

`msfpdb` does not open PDB files on its own. It does not parse the MSF
superblock or the stream directory, so you must supply each stream's block
size, block indices and size. It offers no readers for the public, global,
module, type, info or image-section streams beyond the DBI stream, and it has
no command-line tool.