"""Append-only text buffer with explicit back-patching."""


class QueryBuffer:
    """Text buffer owned by a single query.

    Besides appending, the only edits allowed are inspecting the last
    character and truncating back to a previously recorded position.
    """

    def __init__(self, initial: str = ""):
        self._parts: list[str] = [initial] if initial else []
        self._length = len(initial)

    def append(self, *texts: str) -> "QueryBuffer":
        """Append one or more text fragments."""
        for text in texts:
            if text:
                self._parts.append(text)
                self._length += len(text)
        return self

    def last_char(self) -> str:
        """Return the last character, or an empty string if the buffer is empty."""
        for part in reversed(self._parts):
            if part:
                return part[-1]
        return ""

    def truncate(self, position: int) -> None:
        """Discard everything after ``position``."""
        if position < 0 or position > self._length:
            raise ValueError(
                f"Cannot truncate buffer of length {self._length} to {position}"
            )
        if position == self._length:
            return
        text = self.getvalue()[:position]
        self._parts = [text] if text else []
        self._length = position

    def getvalue(self) -> str:
        """Return the buffer content."""
        if len(self._parts) > 1:
            self._parts = ["".join(self._parts)]
        return self._parts[0] if self._parts else ""

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.getvalue()
