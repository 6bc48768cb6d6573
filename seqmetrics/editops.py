"""Edit operations, opcodes and the small value types the metrics return."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Generic, TypeVar, overload

T = TypeVar("T")


class EditType(enum.IntEnum):
    """Kind of an edit operation."""

    NONE = 0
    REPLACE = 1
    INSERT = 2
    DELETE = 3


def _inverted_type(kind: EditType) -> EditType:
    if kind is EditType.DELETE:
        return EditType.INSERT
    if kind is EditType.INSERT:
        return EditType.DELETE
    return kind


@dataclass(frozen=True)
class EditOp:
    """A single edit applied to the source sequence.

    REPLACE: replace the element at ``src_pos`` by the one at ``dest_pos``.
    INSERT:  insert the element at ``dest_pos`` before ``src_pos``.
    DELETE:  delete the element at ``src_pos``.
    """

    type: EditType = EditType.NONE
    src_pos: int = 0
    dest_pos: int = 0


@dataclass(frozen=True)
class Opcode:
    """A block edit turning ``s1[src_begin:src_end]`` into ``s2[dest_begin:dest_end]``."""

    type: EditType = EditType.NONE
    src_begin: int = 0
    src_end: int = 0
    dest_begin: int = 0
    dest_end: int = 0


@dataclass(frozen=True)
class LevenshteinWeightTable:
    """Costs of insertions, deletions and substitutions."""

    insert_cost: int = 1
    delete_cost: int = 1
    replace_cost: int = 1


@dataclass(frozen=True)
class ScoreAlignment(Generic[T]):
    """A score together with the aligned parts of both sequences."""

    score: T
    src_start: int = 0
    src_end: int = 0
    dest_start: int = 0
    dest_end: int = 0


def _check_step(step: int) -> None:
    if step == 0:
        raise ValueError("slice step cannot be zero")
    if step < 0:
        raise ValueError("step sizes below 0 lead to an invalid order of editops")


class Editops:
    """An ordered list of :class:`EditOp` with the lengths of both sequences."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, ops: Iterable[EditOp] = (), src_len: int = 0, dest_len: int = 0) -> None:
        self._ops: list[EditOp] = list(ops)
        self.src_len = src_len
        self.dest_len = dest_len

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[EditOp]:
        return iter(self._ops)

    @overload
    def __getitem__(self, index: int) -> EditOp: ...

    @overload
    def __getitem__(self, index: slice) -> Editops: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.slice(index.start, index.stop, 1 if index.step is None else index.step)
        return self._ops[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Editops):
            return NotImplemented
        return (
            self.src_len == other.src_len
            and self.dest_len == other.dest_len
            and self._ops == other._ops
        )

    def __repr__(self) -> str:
        return f"Editops({self._ops!r}, src_len={self.src_len}, dest_len={self.dest_len})"

    def slice(self, start: int | None = None, stop: int | None = None, step: int = 1) -> Editops:
        """Return the selected operations; both lengths are kept."""
        _check_step(step)
        return Editops(self._ops[start:stop:step], self.src_len, self.dest_len)

    def remove_slice(self, start: int | None = None, stop: int | None = None, step: int = 1) -> None:
        """Delete the selected operations in place."""
        _check_step(step)
        del self._ops[start:stop:step]

    def reverse(self) -> Editops:
        """Return the operations in reverse order."""
        return Editops(reversed(self._ops), self.src_len, self.dest_len)

    def inverse(self) -> Editops:
        """Return the operations turning the destination back into the source."""
        return Editops(
            (EditOp(_inverted_type(op.type), op.dest_pos, op.src_pos) for op in self._ops),
            self.dest_len,
            self.src_len,
        )

    def remove_subsequence(self, subsequence: Editops) -> Editops:
        """Remove ``subsequence`` and shift the remaining source positions.

        The result transforms the sequence obtained by applying
        ``subsequence`` into the destination.
        """
        if len(subsequence) > len(self):
            raise ValueError("subsequence is not a subsequence")

        result: list[EditOp] = []
        offset = 0
        remaining = iter(self._ops)
        for sop in subsequence:
            for op in remaining:
                if op == sop:
                    break
                result.append(replace(op, src_pos=op.src_pos + offset))
            else:
                raise ValueError("subsequence is not a subsequence")
            if sop.type is EditType.INSERT:
                offset += 1
            elif sop.type is EditType.DELETE:
                offset -= 1

        result.extend(replace(op, src_pos=op.src_pos + offset) for op in remaining)
        return Editops(result, self.src_len, self.dest_len)

    def as_opcodes(self) -> Opcodes:
        """Group the operations into blocks, including unchanged ranges."""
        return Opcodes.from_editops(self)

    @classmethod
    def from_opcodes(cls, opcodes: Opcodes) -> Editops:
        """Expand block opcodes into single-element operations."""
        ops: list[EditOp] = []
        for op in opcodes:
            if op.type is EditType.REPLACE:
                ops.extend(
                    EditOp(EditType.REPLACE, op.src_begin + j, op.dest_begin + j)
                    for j in range(op.src_end - op.src_begin)
                )
            elif op.type is EditType.INSERT:
                ops.extend(
                    EditOp(EditType.INSERT, op.src_begin, op.dest_begin + j)
                    for j in range(op.dest_end - op.dest_begin)
                )
            elif op.type is EditType.DELETE:
                ops.extend(
                    EditOp(EditType.DELETE, op.src_begin + j, op.dest_begin)
                    for j in range(op.src_end - op.src_begin)
                )
        return cls(ops, opcodes.src_len, opcodes.dest_len)


class Opcodes:
    """An ordered list of :class:`Opcode` with the lengths of both sequences."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, ops: Iterable[Opcode] = (), src_len: int = 0, dest_len: int = 0) -> None:
        self._ops: list[Opcode] = list(ops)
        self.src_len = src_len
        self.dest_len = dest_len

    def __len__(self) -> int:
        return len(self._ops)

    def __iter__(self) -> Iterator[Opcode]:
        return iter(self._ops)

    @overload
    def __getitem__(self, index: int) -> Opcode: ...

    @overload
    def __getitem__(self, index: slice) -> Opcodes: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.slice(index.start, index.stop, 1 if index.step is None else index.step)
        return self._ops[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Opcodes):
            return NotImplemented
        return (
            self.src_len == other.src_len
            and self.dest_len == other.dest_len
            and self._ops == other._ops
        )

    def __repr__(self) -> str:
        return f"Opcodes({self._ops!r}, src_len={self.src_len}, dest_len={self.dest_len})"

    def slice(self, start: int | None = None, stop: int | None = None, step: int = 1) -> Opcodes:
        """Return the selected opcodes; both lengths are kept."""
        _check_step(step)
        return Opcodes(self._ops[start:stop:step], self.src_len, self.dest_len)

    def reverse(self) -> Opcodes:
        """Return the opcodes in reverse order."""
        return Opcodes(reversed(self._ops), self.src_len, self.dest_len)

    def inverse(self) -> Opcodes:
        """Return the opcodes turning the destination back into the source."""
        return Opcodes(
            (
                Opcode(_inverted_type(op.type), op.dest_begin, op.dest_end, op.src_begin, op.src_end)
                for op in self._ops
            ),
            self.dest_len,
            self.src_len,
        )

    def as_editops(self) -> Editops:
        """Expand into single-element operations."""
        return Editops.from_opcodes(self)

    @classmethod
    def from_editops(cls, editops: Editops) -> Opcodes:
        """Group single-element operations into blocks covering both sequences."""
        ops: list[Opcode] = []
        src_pos = dest_pos = 0
        items = list(editops)
        i = 0
        while i < len(items):
            first = items[i]
            if src_pos < first.src_pos or dest_pos < first.dest_pos:
                ops.append(Opcode(EditType.NONE, src_pos, first.src_pos, dest_pos, first.dest_pos))
                src_pos, dest_pos = first.src_pos, first.dest_pos

            src_begin, dest_begin, kind = src_pos, dest_pos, first.type
            while True:
                if kind is EditType.REPLACE:
                    src_pos += 1
                    dest_pos += 1
                elif kind is EditType.INSERT:
                    dest_pos += 1
                elif kind is EditType.DELETE:
                    src_pos += 1
                i += 1
                if i >= len(items):
                    break
                nxt = items[i]
                if nxt.type is not kind or nxt.src_pos != src_pos or nxt.dest_pos != dest_pos:
                    break
            ops.append(Opcode(kind, src_begin, src_pos, dest_begin, dest_pos))

        if src_pos < editops.src_len or dest_pos < editops.dest_len:
            ops.append(Opcode(EditType.NONE, src_pos, editops.src_len, dest_pos, editops.dest_len))
        return cls(ops, editops.src_len, editops.dest_len)