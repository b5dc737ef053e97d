"""
Module for reading input sequences from plain text or FASTA files, optionally compressed.
"""
from io import IOBase, TextIOBase
from lzma import LZMAError
from typing import Union, BinaryIO, Optional
from pathlib import Path
from sys import stdin
from importlib import import_module
from warnings import warn

from linalign import AlignmentError, LinalignWarning


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SeqFileError(AlignmentError, OSError):
    """Raised when a sequence file is missing, unreadable or holds no sequence."""


class SeqFileWarning(LinalignWarning): pass


# Classes --------------------------------------------------------------------------------------------------------------
class PeekableHandle:
    """
    Replays the head of a non-seekable stream (stdin, a pipe) after Xopen has read it
    to look for compression magic bytes.
    """
    __slots__ = ('_stream', '_head')

    def __init__(self, stream: BinaryIO, max_peek: int = 4096):
        self._stream = stream
        self._head = stream.read(max_peek)

    def peek(self, size: int = -1) -> bytes:
        return self._head if size < 0 else self._head[:size]

    def read(self, size: int = -1) -> bytes:
        if not self._head: return self._stream.read(size)
        if size is None or size < 0:
            chunk, self._head = self._head, b''
            return chunk + self._stream.read()
        chunk, self._head = self._head[:size], self._head[size:]
        if len(chunk) < size: chunk += self._stream.read(size - len(chunk))
        return chunk

    def close(self):
        self._stream.close()


class Xopen:
    """
    Opens a path, '-' (stdin) or a file object for reading, transparently
    decompressing gzip, bz2 and xz content. Text-mode handles are returned as they are.

    Examples:
        >>> with Xopen("seq.fasta.gz") as f:
        ...     content = f.read()
    """
    _MAGIC = {
        b'\x1f\x8b': 'gzip',
        b'BZh': 'bz2',
        b'\xfd7zXZ\x00': 'lzma',
    }
    _MIN_N_BYTES = max(len(i) for i in _MAGIC.keys())

    def __init__(self, file: Union[str, Path, BinaryIO]):
        self.file = file
        self._handle: Optional[BinaryIO] = None
        self._raw: Optional[BinaryIO] = None
        self._close_on_exit = False

    def __enter__(self) -> BinaryIO:
        try: self._handle = self._open()
        except Exception:
            if self._raw is not None: self._raw.close()
            raise
        return self._handle

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._close_on_exit and self._handle: self._handle.close()
        if self._raw is not None: self._raw.close()

    def _open(self) -> BinaryIO:
        # 1. Resolve Raw Stream
        if isinstance(self.file, TextIOBase): return self.file
        if isinstance(self.file, IOBase): raw_stream = self.file
        elif str(self.file) in {'-', 'stdin'}: raw_stream = stdin.buffer
        else:
            raw_stream = self._raw = open(Path(self.file).expanduser(), mode='rb')

        # 2. Sniff Compression, seekable streams first
        try:
            if raw_stream.seekable():
                start = raw_stream.read(self._MIN_N_BYTES)
                raw_stream.seek(0)
                return self._wrap(raw_stream, start)
        except (AttributeError, ValueError, OSError): pass

        # Non-Seekable (stdin, pipes) -> Use PeekableHandle
        peekable = PeekableHandle(raw_stream)
        return self._wrap(peekable, peekable.peek(self._MIN_N_BYTES))

    def _wrap(self, stream, start: bytes):
        for magic, pkg in self._MAGIC.items():
            if start.startswith(magic):
                self._close_on_exit = True
                return import_module(pkg).open(stream, mode='rb')
        return stream


# Functions ------------------------------------------------------------------------------------------------------------
def read_sequence(file: Union[str, Path, BinaryIO]) -> str:
    """
    Reads one sequence from a plain text or FASTA file.

    Header lines ('>') and whitespace are dropped. Only the first FASTA record is used;
    a SeqFileWarning is issued if more follow.

    Args:
        file: Path, '-' for stdin, or a binary or text file object.

    Returns:
        The sequence as written in the file.

    Raises:
        SeqFileError: If the file cannot be read, is not text, or contains no sequence.
    """
    try:
        with Xopen(file) as handle: data = handle.read()
    except (OSError, EOFError, LZMAError) as e:
        raise SeqFileError(f"Cannot read sequence file '{file}': {e}") from e
    if isinstance(data, str): text = data
    else:
        try: text = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise SeqFileError(f"Sequence file '{file}' is not a text file") from e

    seq_lines = []
    n_headers = 0
    for line in text.splitlines():
        if line.startswith('>'):
            n_headers += 1
            if n_headers > 1:
                warn(f"'{file}' contains more than one record, only the first is used", SeqFileWarning)
                break
            continue
        seq_lines.append(''.join(line.split()))

    if not (seq := ''.join(seq_lines)): raise SeqFileError(f"No sequence found in '{file}'")
    return seq
