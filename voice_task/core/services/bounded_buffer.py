"""
Growable byte buffer with a hard size limit.

Chunks are appended as they stream in; the limit is checked on every append
so an oversized upload is rejected without buffering the rest of it.
"""
from ..exceptions import PayloadTooLarge


class BoundedBuffer:
    """Byte sink that raises PayloadTooLarge once its limit is crossed."""

    def __init__(self, max_bytes: int):
        if max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        self.max_bytes = max_bytes
        self._buffer = bytearray()

    def append(self, chunk: bytes) -> None:
        """
        Append a chunk, failing if the running total exceeds the limit.

        The overflowing chunk is not stored.

        Raises:
            PayloadTooLarge: If the total would exceed max_bytes
        """
        if len(self._buffer) + len(chunk) > self.max_bytes:
            raise PayloadTooLarge(self.max_bytes)
        self._buffer.extend(chunk)

    def __len__(self) -> int:
        return len(self._buffer)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)
