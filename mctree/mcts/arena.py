from __future__ import annotations

from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class NodeArena(Generic[T]):
    """Slot storage handing out integer keys.

    Removing an entry frees its slot; the most recently freed slot is the next
    one handed out, so keys are only stable while their entry is alive.
    """

    __slots__ = ("_slots", "_free", "_size")

    def __init__(self) -> None:
        self._slots: List[Optional[T]] = []
        self._free: List[int] = []
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return (
            isinstance(key, int)
            and 0 <= key < len(self._slots)
            and self._slots[key] is not None
        )

    def __getitem__(self, key: int) -> T:
        if key not in self:
            raise KeyError(key)
        return self._slots[key]  # type: ignore[return-value]

    def vacant_key(self) -> int:
        """Key the next ``insert`` will use."""
        if self._free:
            return self._free[-1]
        return len(self._slots)

    def insert(self, value: T) -> int:
        if value is None:
            raise ValueError("NodeArena cannot store None.")
        if self._free:
            key = self._free.pop()
            self._slots[key] = value
        else:
            key = len(self._slots)
            self._slots.append(value)
        self._size += 1
        return key

    def remove(self, key: int) -> T:
        value = self[key]
        self._slots[key] = None
        self._free.append(key)
        self._size -= 1
        return value

    def keys(self) -> List[int]:
        return [key for key, value in enumerate(self._slots) if value is not None]

    def items(self) -> Iterator[Tuple[int, T]]:
        for key, value in enumerate(self._slots):
            if value is not None:
                yield key, value
