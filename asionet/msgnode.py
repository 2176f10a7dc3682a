"""A fixed-size message buffer that tracks how much of it has been transferred."""

from __future__ import annotations

RECVSIZE = 1024
"""Default size of a receive buffer."""


class MsgNode:
    """A byte buffer of fixed length with a transfer cursor.

    The cursor records how many bytes have already been sent (or received),
    so a partial transfer can be resumed from where it stopped.
    """

    __slots__ = ("msg", "total", "cur_index")

    def __init__(self, data: bytes | bytearray | memoryview | str | None = None,
                 total: int | None = None) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        if total is None:
            if data is None:
                raise ValueError("either data or total must be given")
            total = len(data)
        if total < 0:
            raise ValueError(f"total length must not be negative: {total}")
        self.msg = bytearray(total)
        if data is not None:
            if len(data) > total:
                raise ValueError(
                    f"data of {len(data)} bytes does not fit in {total} bytes"
                )
            self.msg[: len(data)] = data
        self.total = total
        self.cur_index = 0

    def append_data_offset(self, length: int) -> None:
        """Advance the cursor by ``length`` transferred bytes."""
        new_index = self.cur_index + length
        if length < 0 or new_index > self.total:
            raise ValueError(
                f"cannot advance by {length}: {self.cur_index} of {self.total} done"
            )
        self.cur_index = new_index

    def remaining(self) -> memoryview:
        """Return a writable view of the part not yet transferred."""
        return memoryview(self.msg)[self.cur_index:]

    def is_complete(self) -> bool:
        """Whether the whole buffer has been transferred."""
        return self.cur_index == self.total

    @property
    def filled(self) -> bytes:
        """The bytes up to the cursor."""
        return bytes(self.msg[: self.cur_index])

    def __len__(self) -> int:
        return self.total

    def __repr__(self) -> str:
        return f"MsgNode(total={self.total}, cur_index={self.cur_index})"