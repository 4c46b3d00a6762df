from typing import Any, Dict, List

from errors import DuplicateElementError, EmptyQueueError, NotFoundError


class HeapEntry: # one queued element
    __slots__ = ("item", "priority", "order", "index")

    def __init__(self, item, priority: int, order: int, index: int):
        self.item = item
        self.priority = priority
        self.order = order # insertion counter, breaks priority ties
        self.index = index # current slot in the heap list

    def __lt__(self, other):
        return (self.priority, self.order) < (other.priority, other.order)


class IndexedMinHeap:
    """
    Binary min-heap keyed by integer priority with in-place priority changes

    Items are located by identity, not equality: two equal objects are two
    different entries. A side dict maps id(item) -> entry, and every entry
    records its own slot, so an update finds its element in O(1) and
    restores heap order in O(log n)
    """

    def __init__(self):
        self._heap: List[HeapEntry] = []
        self._entries: Dict[int, HeapEntry] = {}
        self._counter = 0

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __contains__(self, item) -> bool:
        return id(item) in self._entries

    def size(self) -> int:
        return len(self._heap)

    def insert(self, item, priority: int) -> None:
        if id(item) in self._entries:
            raise DuplicateElementError(f"{item!r} is already in the queue")
        entry = HeapEntry(item, priority, self._counter, len(self._heap))
        self._counter += 1
        self._heap.append(entry)
        self._entries[id(item)] = entry
        self._sift_up(entry.index)

    def peek_min(self) -> Any:
        if not self._heap:
            raise EmptyQueueError("peek from an empty queue")
        return self._heap[0].item

    def extract_min(self) -> Any:
        if not self._heap:
            raise EmptyQueueError("extract from an empty queue")
        top = self._heap[0]
        last = self._heap.pop()
        if last is not top:
            # move the last entry into the vacated root slot
            self._heap[0] = last
            last.index = 0
            self._sift_down(0)
        del self._entries[id(top.item)]
        return top.item

    def priority_of(self, item) -> int:
        return self._entry_for(item).priority

    def change_priority(self, item, new_priority: int) -> None:
        entry = self._entry_for(item)
        old = entry.priority
        entry.priority = new_priority
        if new_priority < old:
            self._sift_up(entry.index)
        elif new_priority > old:
            self._sift_down(entry.index)

    def increase_priority(self, item, new_priority: int) -> None:
        entry = self._entry_for(item)
        if new_priority < entry.priority:
            raise ValueError(f"new priority {new_priority} is lower than current {entry.priority}")
        entry.priority = new_priority
        self._sift_down(entry.index)

    # Internals

    def _entry_for(self, item) -> HeapEntry:
        entry = self._entries.get(id(item))
        if entry is None:
            raise NotFoundError(f"{item!r} is not in the queue")
        return entry

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].index = i
        heap[j].index = j

    def _sift_up(self, i: int) -> None:
        heap = self._heap
        while i > 0:
            parent = (i - 1) // 2
            if not heap[i] < heap[parent]:
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        heap = self._heap
        n = len(heap)
        while True:
            left = 2 * i + 1
            right = left + 1
            smallest = i
            if left < n and heap[left] < heap[smallest]:
                smallest = left
            if right < n and heap[right] < heap[smallest]:
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest
