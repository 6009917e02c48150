"""Pluggable key -> value map backends for the anagram index.

Every backend satisfies the same small contract (``WordMap``): ``get`` returns
the stored value or ``None``, ``put`` inserts or overwrites (last write wins),
and iteration yields each key exactly once. The index builder never knows
which backend it is talking to.

- ``AVLTreeMap``: self-balancing binary search tree, keys iterate in order.
- ``BSTMap``: unbalanced binary search tree, keys iterate in order.
- ``HashMap``: separate chaining hash table that doubles when it gets crowded.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Protocol


class WordMap(Protocol):
    """Mapping contract shared by all index backends."""

    def get(self, key: str) -> Any | None: ...

    def put(self, key: str, value: Any) -> None: ...

    def items(self) -> Iterator[tuple[str, Any]]: ...

    def __iter__(self) -> Iterator[str]: ...

    def __len__(self) -> int: ...


class _TreeNode:
    __slots__ = ("key", "value", "left", "right", "height")

    def __init__(self, key: str, value: Any) -> None:
        self.key = key
        self.value = value
        self.left: _TreeNode | None = None
        self.right: _TreeNode | None = None
        self.height = 1


def _in_order(root: _TreeNode | None) -> Iterator[_TreeNode]:
    stack: list[_TreeNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node
        node = node.right


def _find(root: _TreeNode | None, key: str) -> _TreeNode | None:
    node = root
    while node is not None:
        if key < node.key:
            node = node.left
        elif key > node.key:
            node = node.right
        else:
            return node
    return None


class BSTMap:
    """Unbalanced binary search tree. Insert and lookup are iterative."""

    def __init__(self) -> None:
        self._root: _TreeNode | None = None
        self._size = 0

    def get(self, key: str) -> Any | None:
        node = _find(self._root, key)
        return node.value if node is not None else None

    def put(self, key: str, value: Any) -> None:
        if self._root is None:
            self._root = _TreeNode(key, value)
            self._size = 1
            return

        node = self._root
        while True:
            if key < node.key:
                if node.left is None:
                    node.left = _TreeNode(key, value)
                    break
                node = node.left
            elif key > node.key:
                if node.right is None:
                    node.right = _TreeNode(key, value)
                    break
                node = node.right
            else:
                node.value = value
                return
        self._size += 1

    def height(self) -> int:
        """Number of levels on the longest root-to-leaf path."""
        if self._root is None:
            return 0
        best = 0
        stack = [(self._root, 1)]
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return best

    def items(self) -> Iterator[tuple[str, Any]]:
        for node in _in_order(self._root):
            yield node.key, node.value

    def __iter__(self) -> Iterator[str]:
        for node in _in_order(self._root):
            yield node.key

    def __len__(self) -> int:
        return self._size


def _height(node: _TreeNode | None) -> int:
    return node.height if node is not None else 0


def _update_height(node: _TreeNode) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _rotate_right(node: _TreeNode) -> _TreeNode:
    pivot = node.left
    if pivot is None:
        raise ValueError(f"Cannot rotate right at {node.key!r}: no left child")
    node.left = pivot.right
    pivot.right = node
    _update_height(node)
    _update_height(pivot)
    return pivot


def _rotate_left(node: _TreeNode) -> _TreeNode:
    pivot = node.right
    if pivot is None:
        raise ValueError(f"Cannot rotate left at {node.key!r}: no right child")
    node.right = pivot.left
    pivot.left = node
    _update_height(node)
    _update_height(pivot)
    return pivot


def _rebalance(node: _TreeNode) -> _TreeNode:
    _update_height(node)
    balance = _height(node.left) - _height(node.right)
    if balance > 1:
        left = node.left
        if left is not None and _height(left.left) < _height(left.right):
            node.left = _rotate_left(left)
        return _rotate_right(node)
    if balance < -1:
        right = node.right
        if right is not None and _height(right.right) < _height(right.left):
            node.right = _rotate_right(right)
        return _rotate_left(node)
    return node


class AVLTreeMap:
    """Self-balancing binary search tree (AVL)."""

    def __init__(self) -> None:
        self._root: _TreeNode | None = None
        self._size = 0

    def get(self, key: str) -> Any | None:
        node = _find(self._root, key)
        return node.value if node is not None else None

    def put(self, key: str, value: Any) -> None:
        self._root = self._insert(self._root, key, value)

    def _insert(self, node: _TreeNode | None, key: str, value: Any) -> _TreeNode:
        if node is None:
            self._size += 1
            return _TreeNode(key, value)
        if key < node.key:
            node.left = self._insert(node.left, key, value)
        elif key > node.key:
            node.right = self._insert(node.right, key, value)
        else:
            node.value = value
            return node
        return _rebalance(node)

    def height(self) -> int:
        return _height(self._root)

    def items(self) -> Iterator[tuple[str, Any]]:
        for node in _in_order(self._root):
            yield node.key, node.value

    def __iter__(self) -> Iterator[str]:
        for node in _in_order(self._root):
            yield node.key

    def __len__(self) -> int:
        return self._size


class HashMap:
    """Separate chaining hash table keyed by Python's ``hash``."""

    MAX_LOAD_FACTOR = 0.75

    def __init__(self, capacity: int = 16) -> None:
        self._buckets: list[list[list[Any]]] = [[] for _ in range(max(capacity, 1))]
        self._size = 0

    @property
    def capacity(self) -> int:
        return len(self._buckets)

    def _bucket(self, key: str) -> list[list[Any]]:
        return self._buckets[hash(key) % len(self._buckets)]

    def get(self, key: str) -> Any | None:
        for entry in self._bucket(key):
            if entry[0] == key:
                return entry[1]
        return None

    def put(self, key: str, value: Any) -> None:
        bucket = self._bucket(key)
        for entry in bucket:
            if entry[0] == key:
                entry[1] = value
                return
        bucket.append([key, value])
        self._size += 1
        if self._size > self.MAX_LOAD_FACTOR * len(self._buckets):
            self._resize(len(self._buckets) * 2)

    def _resize(self, capacity: int) -> None:
        old = self._buckets
        self._buckets = [[] for _ in range(capacity)]
        for bucket in old:
            for key, value in bucket:
                self._buckets[hash(key) % capacity].append([key, value])

    def items(self) -> Iterator[tuple[str, Any]]:
        for bucket in self._buckets:
            for key, value in bucket:
                yield key, value

    def __iter__(self) -> Iterator[str]:
        for key, _ in self.items():
            yield key

    def __len__(self) -> int:
        return self._size


BACKENDS: dict[str, Callable[[], WordMap]] = {
    "avl": AVLTreeMap,
    "bst": BSTMap,
    "hash": HashMap,
}


def create_backend(name: str) -> WordMap:
    """Instantiate the backend registered under ``name``."""
    try:
        factory = BACKENDS[name]
    except KeyError:
        raise ValueError(f"Unknown backend: {name!r} (expected one of {', '.join(BACKENDS)})") from None
    return factory()
