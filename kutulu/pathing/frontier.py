from typing import Dict, Hashable, List, Tuple


class OrderedFrontier:
    """
    Binary min-heap keyed by priority with decrease-key support.

    Every item keeps its heap slot in an index map, so locating an item for a
    priority update is a dictionary lookup instead of a scan. Ties between
    equal priorities are resolved by heap position only.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, Hashable]] = []
        self._slots: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, item: Hashable) -> bool:
        return item in self._slots

    def priority_of(self, item: Hashable) -> int:
        return self._heap[self._slots[item]][0]

    def push(self, item: Hashable, priority: int) -> None:
        """
        Add a new item to the frontier.

        Args:
            item (Hashable): The item to queue. Must not already be queued.
            priority (int): Its priority, lower pops first.
        """
        if item in self._slots:
            raise KeyError(f"{item} is already in the frontier")
        self._heap.append((priority, item))
        self._slots[item] = len(self._heap) - 1
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> Tuple[Hashable, int]:
        """
        Remove and return the item with the lowest priority.

        Returns:
            Tuple[Hashable, int]: The item and its priority.
        """
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        last = len(self._heap) - 1
        self._swap(0, last)
        priority, item = self._heap.pop()
        del self._slots[item]
        if self._heap:
            self._sift_down(0)
        return item, priority

    def update(self, item: Hashable, priority: int) -> bool:
        """
        Change the priority of a queued item and restore heap order.

        Items that already left the frontier are ignored.

        Args:
            item (Hashable): The item to update.
            priority (int): The new priority.

        Returns:
            bool: True if the item was queued and updated.
        """
        slot = self._slots.get(item)
        if slot is None:
            return False
        old_priority = self._heap[slot][0]
        self._heap[slot] = (priority, item)
        if priority < old_priority:
            self._sift_up(slot)
        elif priority > old_priority:
            self._sift_down(slot)
        return True

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._slots[heap[i][1]] = i
        self._slots[heap[j][1]] = j

    def _sift_up(self, slot: int) -> None:
        heap = self._heap
        while slot > 0:
            parent = (slot - 1) // 2
            if heap[slot][0] >= heap[parent][0]:
                break
            self._swap(slot, parent)
            slot = parent

    def _sift_down(self, slot: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            smallest = slot
            left = 2 * slot + 1
            right = left + 1
            if left < size and heap[left][0] < heap[smallest][0]:
                smallest = left
            if right < size and heap[right][0] < heap[smallest][0]:
                smallest = right
            if smallest == slot:
                return
            self._swap(slot, smallest)
            slot = smallest
