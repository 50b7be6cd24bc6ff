#!/usr/bin/env python3
# ziparchiver.py
#
# Pack files and folders into standard ZIP archives and unpack them again.
# Entries are streamed in bounded chunks, may be AES-256 encrypted (WinZip AES),
# and carry POSIX permission bits that are restored on extraction.
#
# Dependencies: stdlib + pyzipper

from __future__ import annotations

import argparse
import os
import stat
import sys
import time
from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import pyzipper


# =========================
# Constants / Limits
# =========================

DEFAULT_CHUNK_SIZE = 1_048_576
MIN_CHUNK_SIZE = 1

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755
PERMISSION_BITS = 0o7777

AES_KEY_BITS = 256

# DOS timestamps stored in ZIP headers cover 1980..2107
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
ZIP_LAST_TIMESTAMP = (2107, 12, 31, 23, 59, 58)

MSDOS_READONLY_FLAG = 0x01
MSDOS_DIR_FLAG = 0x10
DOS_CREATE_SYSTEM = 0
UNIX_CREATE_SYSTEM = 3
# Modes given to entries written by DOS/Windows tools, which store no Unix bits
DOS_FILE_MODE = 0o664
DOS_DIR_MODE = 0o775
DOS_READONLY_MASK = 0o555
FLAG_ENCRYPTED = 0x1


# =========================
# Enums / Data
# =========================

class CompressionMethod(IntEnum):
    STORE = 0
    DEFLATE = 1
    DEFLATE64 = 2
    BZIP2 = 3
    AES = 4
    ZSTD = 5
    LZMA = 6

    @staticmethod
    def from_code(code: int) -> "CompressionMethod":
        """Map a CLI method code to a method; unknown codes fall back to Deflate."""
        try:
            return CompressionMethod(code)
        except ValueError:
            return CompressionMethod.DEFLATE

    def to_zip(self) -> int:
        if self == CompressionMethod.STORE:
            return pyzipper.ZIP_STORED
        if self == CompressionMethod.DEFLATE:
            return pyzipper.ZIP_DEFLATED
        if self == CompressionMethod.BZIP2:
            return pyzipper.ZIP_BZIP2
        if self == CompressionMethod.LZMA:
            return pyzipper.ZIP_LZMA
        raise UnsupportedMethodError(
            f"Compression method {self.name.lower()} ({int(self)}) is not supported for writing."
        )


DEFAULT_METHOD = CompressionMethod.DEFLATE


class EntryKind(IntEnum):
    FILE = 1
    DIRECTORY = 2


@dataclass(frozen=True)
class SourceEntry:
    path: Path
    kind: EntryKind
    size: int
    mtime: float

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY


@dataclass(frozen=True)
class EntryOptions:
    method: CompressionMethod
    permissions: Optional[int] = None
    password: Optional[str] = None
    date_time: Tuple[int, int, int, int, int, int] = ZIP_EPOCH

    def for_entry(self, entry: SourceEntry) -> "EntryOptions":
        return replace(self, date_time=zip_date_time(entry.mtime))

    def external_attr(self, is_dir: bool) -> int:
        if is_dir:
            mode = DEFAULT_DIR_MODE if self.permissions is None else self.permissions
            return ((stat.S_IFDIR | (mode & PERMISSION_BITS)) << 16) | MSDOS_DIR_FLAG
        mode = DEFAULT_FILE_MODE if self.permissions is None else self.permissions
        return (stat.S_IFREG | (mode & PERMISSION_BITS)) << 16


@dataclass(frozen=True)
class StoredEntry:
    name: str
    is_dir: bool
    size: int
    compressed_size: int
    mode: Optional[int]
    encrypted: bool


# =========================
# Errors
# =========================

class ArchiverError(Exception):
    pass


class NonUtf8PathError(ArchiverError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"{os.fsencode(path)!r} is a non UTF-8 path")
        self.path = path


class TraversalError(ArchiverError):
    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to read {path} while walking the source tree ({cause})")
        self.path = path


class ArchiveIOError(ArchiverError):
    pass


class UnsupportedMethodError(ArchiverError):
    pass


class UnsafeEntryNameError(ArchiverError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Skipping entry with unsafe name: {name!r}")
        self.name = name


# =========================
# Helpers
# =========================

def eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


def _ensure_chunk_size_ok(chunk_size: int) -> None:
    if chunk_size < MIN_CHUNK_SIZE:
        raise ArchiverError(f"--chunk must be at least {MIN_CHUNK_SIZE}, got {chunk_size}")


def _ensure_password_ok(password: Optional[str]) -> None:
    if password is not None and password == "":
        raise ArchiverError("Empty password is not allowed.")


def _is_windows_drive_path(p: str) -> bool:
    # e.g. "C:foo", "C:\\foo" or "\\\\server\\share"
    if len(p) >= 2 and p[1] == ":" and p[0].isalpha():
        return True
    if p.startswith("\\\\"):
        return True
    return False


def zip_date_time(mtime: float) -> Tuple[int, int, int, int, int, int]:
    date_time = tuple(time.localtime(mtime)[:6])
    if date_time < ZIP_EPOCH:
        return ZIP_EPOCH
    if date_time > ZIP_LAST_TIMESTAMP:
        return ZIP_LAST_TIMESTAMP
    return date_time  # type: ignore[return-value]


# =========================
# Path mapping
# =========================

def _require_text(path: Path, text: str) -> str:
    # Undecodable OS bytes surface as lone surrogates, which strict UTF-8 refuses.
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as ex:
        raise NonUtf8PathError(path) from ex
    return text


def archive_entry_name(root: Path, path: Path) -> str:
    """
    Archive name of `path` relative to the traversal `root`, with "/" separators.
    Returns "" for the root itself.
    """
    try:
        rel = path.relative_to(root)
    except ValueError as ex:
        raise ArchiverError(f"Internal: {path} is outside the traversal root {root}") from ex
    if not rel.parts:
        return ""
    return _require_text(path, rel.as_posix())


def single_file_entry_name(path: Path) -> str:
    # A lone file is stored under its path exactly as given, not root-stripped.
    return _require_text(path, str(path))


def enclosed_name(name: str) -> Optional[PurePosixPath]:
    """
    Resolve a stored entry name to a relative path that cannot leave the
    extraction root, or None when the name is unsafe:
    - empty names or names with NUL bytes
    - absolute names, drive letters and UNC prefixes
    - ".." segments climbing above the root at any point
    Backslashes count as separators; "." segments are dropped.
    """
    if not name or "\x00" in name:
        return None
    if _is_windows_drive_path(name):
        return None
    normalized = name.replace("\\", "/")
    if normalized.startswith("/"):
        return None

    parts: List[str] = []
    for part in normalized.split("/"):
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                return None
            parts.pop()
            continue
        if os.name == "nt" and ":" in part:
            return None
        parts.append(part)

    if not parts:
        return None
    return PurePosixPath(*parts)


def require_enclosed_name(name: str) -> PurePosixPath:
    rel = enclosed_name(name)
    if rel is None:
        raise UnsafeEntryNameError(name)
    return rel


def resolve_output_path(output_dir: Optional[Path], rel: PurePosixPath) -> Path:
    if output_dir is None:
        return Path(*rel.parts)
    return output_dir.joinpath(*rel.parts)


# =========================
# Chunked streaming
# =========================

def stream_chunks(source: BinaryIO, sink: BinaryIO, chunk_size: int) -> int:
    """
    Copy `source` to `sink` through reads of at most `chunk_size` bytes.

    Every chunk is written before the next read, and only the bytes a read
    actually returned are written, so short reads are safe. A zero or negative
    chunk size is rejected rather than treated as end of input.
    Returns the number of bytes copied.
    """
    _ensure_chunk_size_ok(chunk_size)
    total = 0
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            break
        sink.write(chunk)
        total += len(chunk)
    return total


# =========================
# Permissions
# =========================

class PermissionCapability:
    def apply(self, path: Path, mode: int) -> None:
        raise NotImplementedError


class PosixPermissions(PermissionCapability):
    def apply(self, path: Path, mode: int) -> None:
        os.chmod(path, mode & PERMISSION_BITS)


class NoopPermissions(PermissionCapability):
    def apply(self, path: Path, mode: int) -> None:
        return None


def default_permissions() -> PermissionCapability:
    if os.name == "posix":
        return PosixPermissions()
    return NoopPermissions()


# =========================
# Source traversal
# =========================

def _source_entry(path: Path) -> Optional[SourceEntry]:
    # stat() follows symlinks: linked files are archived by content.
    try:
        st = path.stat()
    except FileNotFoundError:
        return None
    except OSError as ex:
        raise TraversalError(path, ex) from ex

    if stat.S_ISREG(st.st_mode):
        kind = EntryKind.FILE
        size = int(st.st_size)
    elif stat.S_ISDIR(st.st_mode):
        kind = EntryKind.DIRECTORY
        size = 0
    else:
        return None
    return SourceEntry(
        path=path,
        kind=kind,
        size=size,
        mtime=st.st_mtime,
    )


def _walk_children(directory: Path) -> Iterator[SourceEntry]:
    try:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)
    except OSError as ex:
        raise TraversalError(directory, ex) from ex

    for child in children:
        path = Path(child.path)
        entry = _source_entry(path)
        if entry is None:
            eprint(f"Warning: skipping {path}: not a regular file or directory")
            continue
        yield entry
        # Symlinked directories are recorded but never descended into.
        if entry.is_dir and not child.is_symlink():
            yield from _walk_children(path)


def walk_source_tree(root: Path) -> Iterator[SourceEntry]:
    """
    Depth-first pre-order walk: the root first, then each directory followed by
    its contents, siblings ordered by name.
    """
    entry = _source_entry(root)
    if entry is None or not entry.is_dir:
        raise TraversalError(root, NotADirectoryError(f"not a directory: {root}"))
    yield entry
    yield from _walk_children(root)


# =========================
# Archive writing
# =========================

def _new_container(fh: BinaryIO, compression: int, password: Optional[str]) -> pyzipper.AESZipFile:
    if password is None:
        return pyzipper.AESZipFile(fh, "w", compression=compression)
    zf = pyzipper.AESZipFile(fh, "w", compression=compression, encryption=pyzipper.WZ_AES)
    zf.setpassword(password.encode("utf-8"))
    zf.setencryption(pyzipper.WZ_AES, nbits=AES_KEY_BITS)
    return zf


def _write_container(
    destination: Path,
    options: EntryOptions,
    write_entries: Callable[[pyzipper.AESZipFile], int],
) -> int:
    """
    Create `destination`, let `write_entries` fill it and finalize it once.

    On failure the central directory is never written: the partial file stays
    on disk but no reader will take it for a complete archive.
    """
    compression = options.method.to_zip()
    try:
        fh = open(destination, "wb")
    except OSError as ex:
        raise ArchiveIOError(f"Failed to create archive: {destination} ({ex})") from ex

    with fh:
        zf = _new_container(fh, compression, options.password)
        try:
            written = write_entries(zf)
        except BaseException:
            _abandon_container(zf)
            raise
        zf.close()
    return written


def _abandon_container(zf: pyzipper.AESZipFile) -> None:
    """
    Detach `zf` from its file so neither close() nor __del__ writes a central
    directory.

    pyzipper has no public call for this. It relies on the private `fp`
    attribute: ZipFile.close() returns at once when `fp` is None. The caller
    still owns and closes the underlying file handle.
    """
    zf.fp = None


def _entry_info(zf: pyzipper.AESZipFile, name: str, options: EntryOptions, is_dir: bool):
    if is_dir:
        zinfo = zf.zipinfo_cls(name + "/", date_time=options.date_time)
        zinfo.compress_type = pyzipper.ZIP_STORED
    else:
        zinfo = zf.zipinfo_cls(name, date_time=options.date_time)
        zinfo.compress_type = zf.compression
    # The high word of external_attr holds Unix mode bits; say so on every platform.
    zinfo.create_system = UNIX_CREATE_SYSTEM
    zinfo.external_attr = options.external_attr(is_dir)
    return zinfo


def _write_file_entry(
    zf: pyzipper.AESZipFile,
    entry: SourceEntry,
    name: str,
    options: EntryOptions,
    chunk_size: int,
) -> None:
    zinfo = _entry_info(zf, name, options, is_dir=False)
    # Known size up front lets the codec pick ZIP64 headers for large files.
    zinfo.file_size = entry.size
    with open(entry.path, "rb") as src, zf.open(zinfo, "w") as dest:
        stream_chunks(src, dest, chunk_size)


def _write_directory_entry(zf: pyzipper.AESZipFile, name: str, options: EntryOptions) -> None:
    zf.writestr(_entry_info(zf, name, options, is_dir=True), b"")


def compress_file(
    source: Path,
    destination: Path,
    options: EntryOptions,
    chunk_size: int,
    verbose: bool = False,
) -> int:
    name = single_file_entry_name(source)
    entry = _source_entry(source)
    if entry is None:
        raise ArchiveIOError(f"Source not found or not a regular file: {source}")

    def write_entries(zf: pyzipper.AESZipFile) -> int:
        if verbose:
            print(f"adding: {name}")
        _write_file_entry(zf, entry, name, options.for_entry(entry), chunk_size)
        return 1

    return _write_container(destination, options, write_entries)


def compress_directory(
    source: Path,
    destination: Path,
    options: EntryOptions,
    chunk_size: int,
    verbose: bool = False,
) -> int:
    destination_abs = os.path.abspath(destination)

    def write_entries(zf: pyzipper.AESZipFile) -> int:
        written = 0
        for entry in walk_source_tree(source):
            if os.path.abspath(entry.path) == destination_abs:
                eprint(f"Warning: skipping {entry.path}: it is the archive being written")
                continue
            name = archive_entry_name(source, entry.path)
            entry_options = options.for_entry(entry)

            # Directories are written explicitly; some unzip tools do not
            # recreate them from file paths alone.
            if entry.kind == EntryKind.FILE:
                if verbose:
                    print(f"adding: {name}")
                _write_file_entry(zf, entry, name, entry_options, chunk_size)
            elif name:
                if verbose:
                    print(f"adding: {name}/")
                _write_directory_entry(zf, name, entry_options)
            else:
                continue
            written += 1
        return written

    return _write_container(destination, options, write_entries)


def create_archive(
    source: Path,
    destination: Path,
    method: int = DEFAULT_METHOD,
    permissions: Optional[int] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    password: Optional[str] = None,
    verbose: bool = False,
) -> int:
    """
    Write `source` (a file or a directory tree) to the ZIP archive `destination`.

    `permissions`, when given, is stored on every entry. `password` turns on
    AES-256 encryption for every entry. Returns the number of entries written.

    Errors abort the whole operation; a partially written archive is left on disk.
    """
    _ensure_chunk_size_ok(chunk_size)
    _ensure_password_ok(password)
    if permissions is not None and permissions < 0:
        raise ArchiverError(f"--mode must be a non-negative permission value, got {permissions}")

    options = EntryOptions(
        method=CompressionMethod.from_code(int(method)),
        permissions=permissions,
        password=password,
    )

    try:
        if not source.is_dir():
            return compress_file(source, destination, options, chunk_size, verbose=verbose)
        return compress_directory(source, destination, options, chunk_size, verbose=verbose)
    except OSError as ex:
        raise ArchiveIOError(f"I/O error while creating archive: {ex}") from ex
    except pyzipper.LargeZipFile as ex:
        raise ArchiverError(f"Archive too large: {ex}") from ex


# =========================
# Archive reading
# =========================

def _open_archive(archive: Path, password: Optional[str]) -> pyzipper.AESZipFile:
    try:
        zf = pyzipper.AESZipFile(archive, "r")
    except OSError as ex:
        raise ArchiveIOError(f"Failed to open archive: {archive} ({ex})") from ex
    except pyzipper.BadZipFile as ex:
        raise ArchiverError(f"Not a valid ZIP archive: {archive} ({ex})") from ex
    if password is not None:
        zf.setpassword(password.encode("utf-8"))
    return zf


def _unix_mode(zinfo) -> Optional[int]:
    """
    Permission bits for an entry, or None when the archive does not say.

    Unix-made entries carry the mode in the high word of external_attr.
    DOS-made entries only carry attribute flags: they get 0664/0775, with the
    write bits dropped when the read-only flag is set.
    """
    if zinfo.create_system == UNIX_CREATE_SYSTEM:
        raw = zinfo.external_attr >> 16
        if not raw:
            return None
        return raw & PERMISSION_BITS
    if zinfo.create_system == DOS_CREATE_SYSTEM:
        attrs = zinfo.external_attr & 0xFF
        is_dir = bool(attrs & MSDOS_DIR_FLAG) or zinfo.is_dir()
        mode = DOS_DIR_MODE if is_dir else DOS_FILE_MODE
        if attrs & MSDOS_READONLY_FLAG:
            mode &= DOS_READONLY_MASK
        return mode
    return None


def stored_entry(zinfo) -> StoredEntry:
    return StoredEntry(
        name=zinfo.filename,
        is_dir=zinfo.is_dir(),
        size=zinfo.file_size,
        compressed_size=zinfo.compress_size,
        mode=_unix_mode(zinfo),
        encrypted=bool(zinfo.flag_bits & FLAG_ENCRYPTED),
    )


def list_archive(archive: Path) -> List[StoredEntry]:
    with _open_archive(archive, password=None) as zf:
        return [stored_entry(zinfo) for zinfo in zf.infolist()]


def format_stored_entry(entry: StoredEntry) -> str:
    kind = "d" if entry.is_dir else "f"
    mode = f"{entry.mode:04o}" if entry.mode is not None else "-"
    lock = "*" if entry.encrypted else " "
    return f"{kind} {entry.size:>12} {entry.compressed_size:>12} {mode:>5} {lock} {entry.name}"


def _unlock_for_writing(path: Path, unlocked: Dict[Path, int]) -> None:
    # Gives the owner write (and search, for directories) on an existing path an
    # earlier extraction left locked; the previous mode is kept in `unlocked`.
    if path in unlocked:
        return
    try:
        st = path.lstat()
    except FileNotFoundError:
        return
    if stat.S_ISLNK(st.st_mode):
        return
    needed = stat.S_IWUSR | stat.S_IXUSR if stat.S_ISDIR(st.st_mode) else stat.S_IWUSR
    if (st.st_mode & needed) == needed:
        return
    original = stat.S_IMODE(st.st_mode)
    os.chmod(path, original | needed)
    unlocked[path] = original


def _unlock_parents(output_dir: Optional[Path], rel: PurePosixPath, unlocked: Dict[Path, int]) -> None:
    parts = rel.parts[:-1]
    for depth in range(1, len(parts) + 1):
        _unlock_for_writing(resolve_output_path(output_dir, PurePosixPath(*parts[:depth])), unlocked)


def extract_archive(
    archive: Path,
    output_dir: Optional[Path] = None,
    password: Optional[str] = None,
    verbose: bool = False,
    permissions: Optional[PermissionCapability] = None,
) -> int:
    """
    Extract every safely named entry of `archive` under `output_dir` (or the
    current directory). Entries whose names would escape the root are skipped
    with a warning. Existing files are overwritten, existing directories reused.
    Returns the number of entries extracted.
    """
    _ensure_password_ok(password)
    capability = permissions if permissions is not None else default_permissions()
    extracted = 0
    # Directory modes go on last so a read-only mode cannot block its children.
    deferred_dirs: List[Tuple[Path, int]] = []
    # Read-only leftovers of an earlier extraction, made writable for this one.
    unlocked: Dict[Path, int] = {}

    with _open_archive(archive, password) as zf:
        try:
            for zinfo in zf.infolist():
                try:
                    rel = require_enclosed_name(zinfo.filename)
                except UnsafeEntryNameError as ex:
                    eprint(f"Warning: {ex}")
                    continue

                out_path = resolve_output_path(output_dir, rel)
                mode = _unix_mode(zinfo)

                _unlock_parents(output_dir, rel, unlocked)

                if zinfo.is_dir():
                    if verbose:
                        print(f"creating: {out_path}")
                    out_path.mkdir(parents=True, exist_ok=True)
                    if mode is not None:
                        deferred_dirs.append((out_path, mode))
                else:
                    if verbose:
                        print(f"extracting: {out_path}")
                    out_path.parent.mkdir(parents=True, exist_ok=True)
                    _unlock_for_writing(out_path, unlocked)
                    with zf.open(zinfo) as src, open(out_path, "wb") as dst:
                        stream_chunks(src, dst, DEFAULT_CHUNK_SIZE)
                    if mode is not None:
                        capability.apply(out_path, mode)
                        unlocked.pop(out_path, None)
                extracted += 1

            for dir_path, mode in sorted(deferred_dirs, key=lambda t: len(t[0].parts), reverse=True):
                capability.apply(dir_path, mode)
                unlocked.pop(dir_path, None)

            # Anything unlocked but not re-moded by this archive gets its old mode back.
            for path, original in unlocked.items():
                os.chmod(path, original)

        except OSError as ex:
            raise ArchiveIOError(f"I/O error during extraction: {ex}") from ex
        except NotImplementedError as ex:
            raise ArchiverError(f"Unsupported archive feature: {ex}") from ex
        except RuntimeError as ex:
            # Raised by the codec for a missing or wrong password.
            raise ArchiverError(f"Cannot decrypt archive entry: {ex}") from ex
        except pyzipper.BadZipFile as ex:
            raise ArchiverError(f"Corrupt archive: {archive} ({ex})") from ex

    return extracted


# =========================
# CLI
# =========================

def _parse_mode(text: str) -> int:
    try:
        if len(text) > 1 and text.startswith("0") and text.isdigit():
            value = int(text, 8)
        else:
            value = int(text, 0)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"invalid permission mode: {text!r}") from ex
    if value < 0:
        raise argparse.ArgumentTypeError(f"permission mode must be non-negative: {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ziparchiver",
        description="Pack files and folders into ZIP archives (optionally AES-256 encrypted) and unpack them.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    sub = p.add_subparsers(dest="command", required=True)

    z = sub.add_parser("zip", help="Create an archive from a file or directory.")
    z.add_argument("-s", "--source", required=True, help="File or directory to archive.")
    z.add_argument("-d", "--dest", required=True, help="Archive file to write (overwritten if present).")
    z.add_argument(
        "-m",
        "--method",
        type=int,
        default=int(DEFAULT_METHOD),
        help=(
            "Compression method (default 1):\n"
            "  0=store 1=deflate 2=deflate64 3=bzip2 4=aes 5=zstd 6=lzma\n"
            "Other values fall back to deflate. 2, 4 and 5 cannot be written."
        ),
    )
    z.add_argument(
        "-M",
        "--mode",
        type=_parse_mode,
        default=None,
        help="Permission bits stored on every entry, e.g. 420 or 0o644 (effective on POSIX).",
    )
    z.add_argument(
        "-c",
        "--chunk",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Read buffer size in bytes (default {DEFAULT_CHUNK_SIZE}, minimum {MIN_CHUNK_SIZE}).",
    )
    z.add_argument("-p", "--password", default=None, help="Encrypt every entry with AES-256 using this password.")
    z.add_argument("-v", "--verbose", action="store_true", help="Print each entry as it is added.")

    u = sub.add_parser("unzip", help="Extract an archive.")
    u.add_argument("-a", "--archive", required=True, help="Archive to extract.")
    u.add_argument("-o", "--output", default=None, help="Output directory (default: current directory).")
    u.add_argument("-p", "--password", default=None, help="Password for encrypted entries.")
    u.add_argument("-v", "--verbose", action="store_true", help="Print each entry as it is extracted.")

    ls = sub.add_parser("list", help="List the entries of an archive.")
    ls.add_argument("-a", "--archive", required=True, help="Archive to list.")

    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "zip":
        _ensure_chunk_size_ok(args.chunk)
        create_archive(
            source=Path(args.source),
            destination=Path(args.dest),
            method=CompressionMethod.from_code(args.method),
            permissions=args.mode,
            chunk_size=args.chunk,
            password=args.password,
            verbose=bool(args.verbose),
        )
        return 0

    if args.command == "unzip":
        extract_archive(
            archive=Path(args.archive),
            output_dir=Path(args.output) if args.output is not None else None,
            password=args.password,
            verbose=bool(args.verbose),
        )
        return 0

    for entry in list_archive(Path(args.archive)):
        print(format_stored_entry(entry))
    return 0


def run(argv: Optional[Sequence[str]] = None) -> None:
    try:
        raise SystemExit(main(argv))
    except ArchiverError as ex:
        eprint(f"Error: {ex}")
        raise SystemExit(2)
    except KeyboardInterrupt:
        eprint("Interrupted.")
        raise SystemExit(130)


if __name__ == "__main__":
    run()
