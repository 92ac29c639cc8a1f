"""
Language files.

Game strings are looked up by numeric id (and, in HD Edition, by name).
Three storage formats are supported:
- .dll: string table resources of a PE file (AoK, AoC)
- .ini: `id=text` lines in Windows-1252, `;` comments (Voobly, aoc-language-ini)
- key-value: `id "text"` lines in UTF-8, `//` comments, ids may be names (HD Edition)

Lines that do not parse are skipped.
"""

import io
import re
import struct
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Tuple, Union

from ..constants import SCX_ENCODING
from ..utils import logDebug
from .pe_resources import RT_STRING, PEResources

_ESCAPE = re.compile(r'\\(.)')
_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\'}
STRINGS_PER_BLOCK = 16


def _unescape(text: str) -> str:
    return _ESCAPE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), text)


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def parse_string_block(block_id: int, data: bytes) -> Dict[int, str]:
    """
    Decode one string table block.

    Block n holds strings (n - 1) * 16 .. n * 16 - 1, each stored as a u16
    length in UTF-16 code units followed by UTF-16LE text. Strings that are
    not valid UTF-16 are skipped.
    """
    strings = {}
    index = (block_id - 1) * STRINGS_PER_BLOCK
    offset = 0
    while offset + 2 <= len(data):
        length = struct.unpack_from('<H', data, offset)[0] * 2
        offset += 2
        if length:
            raw = data[offset:offset + length]
            try:
                strings[index] = raw.decode('utf-16-le')
            except UnicodeDecodeError:
                logDebug(f"Skipping undecodable string {index}")
            offset += length
        index += 1
    return strings


def read_string_tables(data: bytes) -> Dict[int, str]:
    """Read every string table resource of a PE file."""
    strings = {}
    for block_id, block in PEResources(data).iter_resources(RT_STRING):
        strings.update(parse_string_block(block_id, block))
    return strings


class LangFile:
    """
    Strings loaded from a language file.

    Usage:
        with open("language.dll", "rb") as f:
            lang = LangFile.from_dll(f)
        lang.get(30177)
    """

    def __init__(self):
        self._strings: Dict[int, str] = {}
        self._named_strings: Dict[str, str] = {}

    @classmethod
    def from_dll(cls, stream: BinaryIO) -> 'LangFile':
        """
        Read the string tables of a language .dll.

        Raises:
            LoadError: if the file is not a PE file or its resources are malformed
        """
        lang_file = cls()
        lang_file._strings = read_string_tables(stream.read())
        return lang_file

    @classmethod
    def from_ini(cls, stream: BinaryIO) -> 'LangFile':
        """Read a Windows-1252 `id=text` language.ini."""
        lang_file = cls()
        text = io.TextIOWrapper(stream, encoding=SCX_ENCODING, errors='replace', newline=None)
        for line in text:
            lang_file._load_ini_line(line.rstrip('\n'))
        text.detach()
        return lang_file

    @classmethod
    def from_keyval(cls, stream: BinaryIO) -> 'LangFile':
        """Read an HD Edition key-value strings file (UTF-8)."""
        lang_file = cls()
        text = io.TextIOWrapper(stream, encoding='utf-8-sig', newline=None)
        for line in text:
            lang_file._load_keyval_line(line)
        text.detach()
        return lang_file

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'LangFile':
        """Read a language file, picking the format from the file extension."""
        path = Path(path)
        loaders = {'.dll': cls.from_dll, '.ini': cls.from_ini}
        loader = loaders.get(path.suffix.lower(), cls.from_keyval)
        with open(path, 'rb') as f:
            return loader(f)

    def _load_ini_line(self, line: str):
        if line.startswith(';') or '=' not in line:
            return
        key, value = line.split('=', 1)
        try:
            string_id = int(key)
        except ValueError:
            logDebug(f"Skipping language line with invalid id: {line!r}")
            return
        self._strings[string_id] = value

    def _load_keyval_line(self, line: str):
        line = line.strip()
        if not line or line.startswith('//') or ' ' not in line:
            return
        key, value = line.split(' ', 1)
        value = _unescape(_unquote(value.strip()))
        if not key.isdigit():
            self._named_strings[key] = value
            return
        try:
            string_id = int(key)
        except ValueError:
            logDebug(f"Skipping language line with invalid id: {line!r}")
            return
        self._strings[string_id] = value

    def get(self, string_id: int) -> Optional[str]:
        return self._strings.get(string_id)

    def get_named(self, name: str) -> Optional[str]:
        """Get a string by name (HD Edition only)."""
        return self._named_strings.get(name)

    def iter(self) -> Iterator[Tuple[int, str]]:
        return iter(self._strings.items())

    def iter_named(self) -> Iterator[Tuple[str, str]]:
        return iter(self._named_strings.items())

    def __len__(self) -> int:
        return len(self._strings) + len(self._named_strings)

    def __contains__(self, string_id: int) -> bool:
        return string_id in self._strings
