"""The records carried on a mission: pet, mission and villain.

Each record packs to a compact byte layout and unpacks from one. Unpacking
returns the record together with the number of bytes it used, so records can
be read one after another from a larger buffer.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple, Union

BytesLike = Union[bytes, bytearray, memoryview]

_PET_HEADER = struct.Struct("<b?")
_MISSION_LENGTH = struct.Struct("<I")
_VILLAIN = struct.Struct("<25sH")

VILLAIN_NAME_FIELD = 25
VILLAIN_NAME_MAX = 24


class DecodeError(ValueError):
    """Raised when a byte buffer does not hold a well-formed record."""


def _encode_cstring(text: str, field: str) -> bytes:
    raw = text.encode("utf-8")
    if b"\0" in raw:
        raise ValueError(f"{field} must not contain NUL characters")
    return raw + b"\0"


def _decode_cstring(data: bytes, offset: int, field: str) -> Tuple[str, int]:
    end = data.find(b"\0", offset)
    if end < 0:
        raise DecodeError(f"{field} is not NUL-terminated")
    try:
        text = data[offset:end].decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{field} is not valid UTF-8") from exc
    return text, end + 1


def _unpack(layout: struct.Struct, data: bytes, offset: int, what: str) -> tuple:
    if len(data) - offset < layout.size:
        raise DecodeError(f"buffer too short for {what}")
    return layout.unpack_from(data, offset)


@dataclass(frozen=True)
class Pet:
    """A pet with a nickname, whether it spins around, and its age (one signed byte)."""

    nickname: str
    spins: bool
    age: int

    def __post_init__(self) -> None:
        if not -128 <= self.age <= 127:
            raise ValueError(f"pet age {self.age} does not fit in one signed byte")
        if "\0" in self.nickname:
            raise ValueError("nickname must not contain NUL characters")

    def to_bytes(self) -> bytes:
        """Pack as age byte, spin flag byte, then the NUL-terminated nickname."""
        return _PET_HEADER.pack(self.age, self.spins) + _encode_cstring(self.nickname, "nickname")

    @classmethod
    def from_bytes(cls, data: BytesLike) -> Tuple["Pet", int]:
        """Unpack a pet from the start of ``data``; return it and the bytes used."""
        buffer = bytes(data)
        age, spins = _unpack(_PET_HEADER, buffer, 0, "pet")
        nickname, offset = _decode_cstring(buffer, _PET_HEADER.size, "nickname")
        return cls(nickname, spins, age), offset


@dataclass(frozen=True)
class Mission:
    """Encoded mission information and its recorded length."""

    info: str
    length: int

    def __post_init__(self) -> None:
        if not 0 <= self.length <= 0xFFFFFFFF:
            raise ValueError(f"mission length {self.length} does not fit in 32 bits")
        if "\0" in self.info:
            raise ValueError("mission info must not contain NUL characters")

    @classmethod
    def create(cls, message: str) -> "Mission":
        """Build a mission whose length is the encoded size of ``message``."""
        return cls(message, len(message.encode("utf-8")))

    def to_bytes(self) -> bytes:
        """Pack as the NUL-terminated info followed by a 32-bit length."""
        return _encode_cstring(self.info, "mission info") + _MISSION_LENGTH.pack(self.length)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> Tuple["Mission", int]:
        """Unpack a mission from the start of ``data``; return it and the bytes used."""
        buffer = bytes(data)
        info, offset = _decode_cstring(buffer, 0, "mission info")
        (length,) = _unpack(_MISSION_LENGTH, buffer, offset, "mission length")
        return cls(info, length), offset + _MISSION_LENGTH.size


@dataclass(frozen=True)
class Villain:
    """A villain stored in a fixed 25-byte name field and a 16-bit age."""

    name: str
    age: int

    def __post_init__(self) -> None:
        if not 0 <= self.age <= 0xFFFF:
            raise ValueError(f"villain age {self.age} does not fit in 16 bits")
        if len(self.name.encode("utf-8")) > VILLAIN_NAME_FIELD:
            raise ValueError("villain name is longer than its field")

    @classmethod
    def create(cls, name: str, age: int) -> "Villain":
        """Build a villain, keeping at most the first 24 bytes of ``name``."""
        raw = name.encode("utf-8").split(b"\0", 1)[0][:VILLAIN_NAME_MAX]
        return cls(raw.decode("utf-8", errors="ignore"), age)

    def to_bytes(self) -> bytes:
        """Pack as a NUL-padded 25-byte name followed by a 16-bit age."""
        return _VILLAIN.pack(self.name.encode("utf-8"), self.age)

    @classmethod
    def from_bytes(cls, data: BytesLike) -> Tuple["Villain", int]:
        """Unpack a villain from the start of ``data``; return it and the bytes used."""
        buffer = bytes(data)
        raw_name, age = _unpack(_VILLAIN, buffer, 0, "villain")
        raw_name = raw_name.split(b"\0", 1)[0]
        try:
            name = raw_name.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("villain name is not valid UTF-8") from exc
        return cls(name, age), _VILLAIN.size