"""Inscriptions embedded in taproot witness scripts."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence, Union

from .media import Media, content_type_for_path

OP_FALSE = 0x00
OP_PUSHDATA1 = 0x4C
OP_PUSHDATA2 = 0x4D
OP_PUSHDATA4 = 0x4E
OP_IF = 0x63
OP_ENDIF = 0x68
OP_CHECKSIG = 0xAC

TAPROOT_ANNEX_PREFIX = 0x50
PROTOCOL_ID = b"ord"
BODY_TAG = b""
CONTENT_TYPE_TAG = b"\x01"
MAX_PUSH_SIZE = 520

Instruction = Union[bytes, int]
"""A script instruction: pushed data as ``bytes`` or a non-push opcode as ``int``."""

_ENVELOPE_HEADER: tuple[Instruction, ...] = (b"", OP_IF, PROTOCOL_ID)


class Curse(enum.Enum):
    """Reasons an inscription may be considered cursed."""

    NOT_IN_FIRST_INPUT = "not_in_first_input"
    NOT_AT_OFFSET_ZERO = "not_at_offset_zero"
    REINSCRIPTION = "reinscription"


class ScriptError(ValueError):
    """Raised when a script cannot be split into instructions."""

    def __init__(self, message: str = "unexpected end of script") -> None:
        super().__init__(message)


class InscriptionError(Exception):
    """Raised when a witness does not yield inscriptions.

    ``kind`` is one of the class constants below; for ``SCRIPT`` the
    underlying :class:`ScriptError` is kept in ``script_error``.
    """

    EMPTY_WITNESS = "empty_witness"
    INVALID_INSCRIPTION = "invalid_inscription"
    KEY_PATH_SPEND = "key_path_spend"
    NO_INSCRIPTION = "no_inscription"
    SCRIPT = "script"
    UNRECOGNIZED_EVEN_FIELD = "unrecognized_even_field"

    def __init__(self, kind: str, script_error: ScriptError | None = None) -> None:
        message = kind if script_error is None else f"{kind}: {script_error}"
        super().__init__(message)
        self.kind = kind
        self.script_error = script_error


class ScriptBuilder:
    """Builds a script by appending opcodes and data pushes."""

    def __init__(self) -> None:
        self._script = bytearray()

    def push_opcode(self, opcode: int) -> "ScriptBuilder":
        self._script.append(opcode)
        return self

    def push_slice(self, data: bytes) -> "ScriptBuilder":
        length = len(data)
        if length < OP_PUSHDATA1:
            self._script.append(length)
        elif length < 0x100:
            self._script.append(OP_PUSHDATA1)
            self._script += length.to_bytes(1, "little")
        elif length < 0x10000:
            self._script.append(OP_PUSHDATA2)
            self._script += length.to_bytes(2, "little")
        elif length < 0x100000000:
            self._script.append(OP_PUSHDATA4)
            self._script += length.to_bytes(4, "little")
        else:
            raise ValueError("push too large")
        self._script += data
        return self

    def into_script(self) -> bytes:
        return bytes(self._script)


_PUSHDATA_WIDTHS = {OP_PUSHDATA1: 1, OP_PUSHDATA2: 2, OP_PUSHDATA4: 4}


def instructions(script: bytes) -> Iterator[Instruction]:
    """Yield the instructions of a script, raising ScriptError if it is truncated."""
    data = bytes(script)
    pos = 0
    while pos < len(data):
        opcode = data[pos]
        pos += 1
        if opcode < OP_PUSHDATA1:
            length = opcode
        elif opcode in _PUSHDATA_WIDTHS:
            width = _PUSHDATA_WIDTHS[opcode]
            if pos + width > len(data):
                raise ScriptError()
            length = int.from_bytes(data[pos : pos + width], "little")
            pos += width
        else:
            yield opcode
            continue
        if pos + length > len(data):
            raise ScriptError()
        yield data[pos : pos + length]
        pos += length


@dataclass(frozen=True)
class Inscription:
    """An inscription: optional content type and optional body."""

    content_type: bytes | None = None
    body: bytes | None = None

    @classmethod
    def from_transaction(
        cls, witnesses: Iterable[Sequence[bytes]]
    ) -> list["TransactionInscription"]:
        """Collect inscriptions from the witnesses of a transaction's inputs."""
        result = []
        for index, witness in enumerate(witnesses):
            try:
                found = parse_witness(witness)
            except InscriptionError:
                continue
            result.extend(
                TransactionInscription(inscription, index, offset)
                for offset, inscription in enumerate(found)
            )
        return result

    @classmethod
    def from_file(
        cls, path: str | os.PathLike, content_size_limit: int | None = None
    ) -> "Inscription":
        """Read an inscription from a file, enforcing an optional size limit."""
        path = Path(path)
        try:
            body = path.read_bytes()
        except OSError as err:
            raise OSError(f"io error reading {path}") from err

        if content_size_limit is not None and len(body) > content_size_limit:
            raise ValueError(
                f"content size of {len(body)} bytes exceeds "
                f"{content_size_limit} byte limit for inscriptions"
            )

        content_type = content_type_for_path(path)
        return cls(content_type=content_type.encode(), body=body)

    def append_reveal_script(self, builder: ScriptBuilder) -> bytes:
        """Append this inscription's envelope to ``builder`` and return the script."""
        builder.push_opcode(OP_FALSE).push_opcode(OP_IF).push_slice(PROTOCOL_ID)
        if self.content_type is not None:
            builder.push_slice(CONTENT_TYPE_TAG).push_slice(self.content_type)
        if self.body is not None:
            builder.push_slice(BODY_TAG)
            for start in range(0, len(self.body), MAX_PUSH_SIZE):
                builder.push_slice(self.body[start : start + MAX_PUSH_SIZE])
        builder.push_opcode(OP_ENDIF)
        return builder.into_script()

    def media(self) -> Media:
        if self.body is None:
            return Media.UNKNOWN
        content_type = self.content_type_str()
        if content_type is None:
            return Media.UNKNOWN
        try:
            return Media.from_content_type(content_type)
        except ValueError:
            return Media.UNKNOWN

    def content_length(self) -> int | None:
        return None if self.body is None else len(self.body)

    def content_type_str(self) -> str | None:
        """The content type as text, or None if absent or not valid UTF-8."""
        if self.content_type is None:
            return None
        try:
            return self.content_type.decode("utf-8")
        except UnicodeDecodeError:
            return None

    def to_witness(self) -> list[bytes]:
        return [self.append_reveal_script(ScriptBuilder()), b""]


@dataclass(frozen=True)
class TransactionInscription:
    """An inscription with the input and envelope position it was found at."""

    inscription: Inscription
    tx_in_index: int
    tx_in_offset: int


_END = object()
_UNSET = object()


class _Parser:
    def __init__(self, script: bytes) -> None:
        self._instructions = instructions(script)
        self._peeked = _UNSET

    def _pull(self):
        try:
            return next(self._instructions, _END)
        except ScriptError as err:
            return err

    def _peek(self):
        if self._peeked is _UNSET:
            self._peeked = self._pull()
        return self._peeked

    def _advance(self) -> Instruction:
        item = self._peek()
        self._peeked = _UNSET
        if item is _END:
            raise InscriptionError(InscriptionError.NO_INSCRIPTION)
        if isinstance(item, ScriptError):
            raise InscriptionError(InscriptionError.SCRIPT, item)
        return item

    def _accept(self, instruction: Instruction) -> bool:
        item = self._peek()
        if item is _END:
            return False
        if isinstance(item, ScriptError):
            raise InscriptionError(InscriptionError.SCRIPT, item)
        if type(item) is type(instruction) and item == instruction:
            self._advance()
            return True
        return False

    def _expect_push(self) -> bytes:
        item = self._advance()
        if isinstance(item, bytes):
            return item
        raise InscriptionError(InscriptionError.INVALID_INSCRIPTION)

    def _match_header(self) -> bool:
        for expected in _ENVELOPE_HEADER:
            item = self._advance()
            if type(item) is not type(expected) or item != expected:
                return False
        return True

    def _parse_one(self) -> Inscription:
        while not self._match_header():
            pass

        fields: dict[bytes, bytes] = {}
        while True:
            item = self._advance()
            if item == BODY_TAG and isinstance(item, bytes):
                chunks = []
                while not self._accept(OP_ENDIF):
                    chunks.append(self._expect_push())
                fields[BODY_TAG] = b"".join(chunks)
                break
            if isinstance(item, bytes):
                if item in fields:
                    raise InscriptionError(InscriptionError.INVALID_INSCRIPTION)
                fields[item] = self._expect_push()
            elif item == OP_ENDIF:
                break
            else:
                raise InscriptionError(InscriptionError.INVALID_INSCRIPTION)

        body = fields.pop(BODY_TAG, None)
        content_type = fields.pop(CONTENT_TYPE_TAG, None)

        if any(tag and tag[0] % 2 == 0 for tag in fields):
            raise InscriptionError(InscriptionError.UNRECOGNIZED_EVEN_FIELD)

        return Inscription(content_type=content_type, body=body)

    def parse_all(self) -> list[Inscription]:
        found = []
        while True:
            try:
                found.append(self._parse_one())
            except InscriptionError as err:
                if err.kind == InscriptionError.NO_INSCRIPTION:
                    return found
                raise


def parse_witness(witness: Sequence[bytes]) -> list[Inscription]:
    """Parse every inscription envelope in a witness's tapscript."""
    if len(witness) == 0:
        raise InscriptionError(InscriptionError.EMPTY_WITNESS)
    if len(witness) == 1:
        raise InscriptionError(InscriptionError.KEY_PATH_SPEND)

    last = witness[-1]
    annex = bool(last) and last[0] == TAPROOT_ANNEX_PREFIX

    if len(witness) == 2 and annex:
        raise InscriptionError(InscriptionError.KEY_PATH_SPEND)

    script = witness[-1] if annex else witness[-2]
    return _Parser(bytes(script)).parse_all()