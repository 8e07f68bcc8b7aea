"""
Ternary Search Tree (character-per-node, three-way branching) with explicit
value presence and pruning removal.

Each node holds one character and up to three children: `low` for smaller
sibling characters at the same key position, `high` for greater ones, and
`middle` for the next position of the same key. Compared to the standard
trie, there is no per-node child dict, so sparse alphabets cost a constant
three pointers per node.

Key design choices:
- **Explicit presence:** `TernaryNode` carries a `has_value` flag. Stored
  values such as `0`, `""` or `None` are real values and are never confused
  with "no value here".
- **Pruning removal:** `remove` clears the terminal node's value and then
  unlinks, bottom-up, every node that has become a valueless leaf. Nodes that
  still branch for a sibling, or that sit on the path of a longer key
  ("SPACE" inside "SPACES"), are kept.
- **Iterative traversals:** insert, lookup, remove and all enumerations use
  loops and explicit stacks, so long keys do not hit the recursion limit.
- **Raw keys:** keys are compared code unit by code unit. There is no
  normalization hook; "Apple" and "apple" are different keys.


Classes
-------
TernaryNode
    Minimal node holding `char`, `value`, `has_value`, `low`, `middle`, `high`.
TernaryTree
    Public API for insert, lookup, remove, ordered/structural traversal,
    prefix enumeration, batch operations and structural stats.


Complexity (typical)
--------------------
- insert / value / contains / remove: O(L + W) where L = len(key) and W is
  the number of sibling comparisons made along the path
- items / print: O(#nodes)
- enumerate prefix: O(L + size of the prefix subtree)


Conventions & Notes
-------------------
- **Keys:** must be non-empty `str`. An empty key raises `ValueError`, a
  non-string key raises `TypeError`, before anything is touched.
- **Not found is not an error:** `value` returns `default`, `contains` and
  `remove` return False, `insert` of a present key returns False.
- **Ordering:** `items`, `keys`, `print` and `enumerate_prefix` follow code
  point order. `chars` / `print_all` are a pre-order structural dump.
- **Sinks:** `print` and `print_all` write to `file` (default `sys.stdout`);
  the generators behind them can be consumed directly instead.
"""

import logging
import sys

logger = logging.getLogger(__name__)


class TernaryNode:
  __slots__ = ("char", "value", "has_value", "low", "middle", "high")

  def __init__(self, char):
    self.char = char
    self.value = None
    self.has_value = False
    self.low = None
    self.middle = None
    self.high = None

  def is_leaf(self):
    return self.low is None and self.middle is None and self.high is None


class TernaryTree:
  __slots__ = ("root", "_size")

  def __init__(self):
    self.root = None
    self._size = 0

  # ------------------------------------------------------------------
  # Container basics
  # ------------------------------------------------------------------

  def make_empty(self):
    """Drop every node; the tree becomes empty with size 0."""
    self.root = None
    self._size = 0

  def empty(self):
    return self.root is None

  def size(self):
    return self._size

  def __len__(self):
    return self._size

  def __contains__(self, key):
    return self.contains(key)

  def __getitem__(self, key):
    node = self._find(key)
    if node is None or not node.has_value:
      raise KeyError(key)
    return node.value

  def __iter__(self):
    return self.keys()

  def __repr__(self):
    return f"TernaryTree(size={self._size})"

  @staticmethod
  def _check_key(key):
    if not isinstance(key, str):
      raise TypeError(f"key must be str, not {type(key).__name__}")
    if not key:
      raise ValueError("key must be a non-empty string")

  # ------------------------------------------------------------------
  # Insert / lookup
  # ------------------------------------------------------------------

  def insert(self, key, value):
    """Insert `key` with `value`.

    Parameters
    ----------
    key : str
        Non-empty key.
    value : Any
        Payload; any object, including None.

    Returns
    -------
    bool
        True if the key was added, False if it was already present (the
        stored value is left untouched).

    Notes
    -----
    Nodes are created lazily, one per (position, character) not yet on the
    path. A duplicate key only walks existing nodes, so a failed insert
    never changes the structure.

    Complexity
    ----------
    O(L + W) time, O(new_nodes) space.
    """
    self._check_key(key)
    last = len(key) - 1
    i = 0

    if self.root is None:
      self.root = TernaryNode(key[0])
    node = self.root

    while True:
      ch = key[i]
      if ch < node.char:
        if node.low is None:
          node.low = TernaryNode(ch)
        node = node.low
      elif ch > node.char:
        if node.high is None:
          node.high = TernaryNode(ch)
        node = node.high
      elif i == last:
        break
      else:
        i += 1
        if node.middle is None:
          node.middle = TernaryNode(key[i])
        node = node.middle

    if node.has_value:
      return False
    node.value = value
    node.has_value = True
    self._size += 1
    return True

  def _find(self, key):
    """Return the node where `key` terminates, or None if the path runs out."""
    self._check_key(key)
    last = len(key) - 1
    i = 0
    node = self.root

    while node is not None:
      ch = key[i]
      if ch < node.char:
        node = node.low
      elif ch > node.char:
        node = node.high
      elif i == last:
        return node
      else:
        i += 1
        node = node.middle
    return None

  def value(self, key, default=None):
    """Return the value stored for `key`, or `default` when it is absent.

    A node that only lies on the path of a longer key counts as absent.
    Pass a private sentinel as `default` to tell a stored None apart from a
    missing key, or use `contains` / `tree[key]`.
    """
    node = self._find(key)
    if node is None or not node.has_value:
      return default
    return node.value

  def contains(self, key):
    node = self._find(key)
    return node is not None and node.has_value

  # ------------------------------------------------------------------
  # Remove
  # ------------------------------------------------------------------

  def remove(self, key):
    """Remove `key` and prune the nodes that no longer serve any key.

    Parameters
    ----------
    key : str
        Non-empty key.

    Returns
    -------
    bool
        True if the key was present and removed, False otherwise (no
        mutation happens in that case).

    Strategy
    --------
    - Check presence first. A path that exists only because of a longer key
      ("SPACE" when just "SPACES" is stored) must not be touched.
    - Walk down from the root recording each `(owner, slot)` cell that holds
      a visited node; the root cell is `(self, "root")`.
    - Clear the value at the terminal node.
    - Pop cells bottom-up: a node with no value and no children is unlinked
      by emptying its cell; stop at the first node that still has a value or
      a child. Unlinking a `low`/`high` child can turn a valueless parent into
      a leaf, so the check runs on every level, not only `middle` links.

    Complexity
    ----------
    O(L + W) time, O(L + W) extra space for the cell stack.
    """
    if not self.contains(key):
      return False

    last = len(key) - 1
    i = 0
    owner, slot = self, "root"
    cells = []

    while True:
      node = getattr(owner, slot)
      cells.append((owner, slot))
      ch = key[i]
      if ch < node.char:
        owner, slot = node, "low"
      elif ch > node.char:
        owner, slot = node, "high"
      elif i == last:
        break
      else:
        owner, slot = node, "middle"
        i += 1

    node.value = None
    node.has_value = False
    self._size -= 1

    while cells:
      owner, slot = cells.pop()
      node = getattr(owner, slot)
      if node.has_value or not node.is_leaf():
        break
      setattr(owner, slot, None)
    return True

  # ------------------------------------------------------------------
  # Batch operations
  # ------------------------------------------------------------------

  def batch_insert(self, pairs):
    """Insert many `(key, value)` pairs.

    Returns
    -------
    tuple[int, int]
        (inserted_count, duplicate_count)
    """
    inserted = 0
    duplicates = 0
    for key, value in pairs:
      if self.insert(key, value):
        inserted += 1
      else:
        duplicates += 1
    logger.debug("batch_insert: inserted=%d duplicates=%d size=%d",
                 inserted, duplicates, self._size)
    return inserted, duplicates

  def batch_remove(self, keys):
    """Remove many keys.

    Returns
    -------
    tuple[int, int]
        (removed_count, missing_count)
    """
    removed = 0
    missing = 0
    for key in keys:
      if self.remove(key):
        removed += 1
      else:
        missing += 1
    logger.debug("batch_remove: removed=%d missing=%d size=%d",
                 removed, missing, self._size)
    return removed, missing

  # ------------------------------------------------------------------
  # Traversal
  # ------------------------------------------------------------------

  def _walk(self, node, prefix):
    """Yield `(key, node)` for every valued node under `node`, in key order.

    `prefix` is the key text spelled by the path above `node`. Uses an
    explicit stack of ("visit" | "emit") entries; a visited node pushes its
    work in reverse so that low, self, middle, high come out in that order.
    """
    stack = [(False, node, prefix)]
    while stack:
      emit, n, acc = stack.pop()
      if n is None:
        continue
      if emit:
        if n.has_value:
          yield acc + n.char, n
        continue
      stack.append((False, n.high, acc))
      stack.append((False, n.middle, acc + n.char))
      stack.append((True, n, acc))
      stack.append((False, n.low, acc))

  def items(self):
    """Yield every `(key, value)` pair in ascending key order."""
    for key, node in self._walk(self.root, ""):
      yield key, node.value

  def keys(self):
    for key, _ in self._walk(self.root, ""):
      yield key

  def values(self):
    for _, node in self._walk(self.root, ""):
      yield node.value

  def chars(self):
    """Yield node characters in pre-order (node, low, middle, high)."""
    stack = [self.root]
    while stack:
      node = stack.pop()
      if node is None:
        continue
      yield node.char
      stack.append(node.high)
      stack.append(node.middle)
      stack.append(node.low)

  def print(self, file=None):
    """Write one `"<key> <value>"` line per stored key, in key order."""
    out = sys.stdout if file is None else file
    for key, value in self.items():
      print(f"{key} {value}", file=out)

  def print_all(self, file=None):
    """Write the pre-order character dump on a single line."""
    out = sys.stdout if file is None else file
    print(" ".join(self.chars()), file=out)

  # ------------------------------------------------------------------
  # Prefix queries
  # ------------------------------------------------------------------

  def prefix_search(self, prefix):
    """Return the node at the end of `prefix`, or None if the path is missing.

    Parameters
    ----------
    prefix : str
        Prefix to locate. "" is accepted and returns None (the empty prefix
        has no node of its own; use `enumerate_prefix("")` for everything).

    Returns
    -------
    TernaryNode | None
        Node corresponding to the full prefix (may or may not hold a value).
    """
    if not isinstance(prefix, str):
      raise TypeError(f"prefix must be str, not {type(prefix).__name__}")
    if not prefix:
      return None
    return self._find(prefix)

  def enumerate_prefix(self, prefix, k=None):
    """Yield keys that start with `prefix`, in ascending order.

    Parameters
    ----------
    prefix : str
        Use "" to export the entire tree.
    k : int | None, default=None
        If None, yield all matches; otherwise, yield up to `k` matches.
    """
    if k is not None and k <= 0:
      return
    if prefix == "":
      matches = self._walk(self.root, "")
    else:
      node = self.prefix_search(prefix)
      if node is None:
        return
      matches = self._walk(node.middle, prefix)
      if node.has_value:
        yield prefix
        if k is not None:
          k -= 1
          if k == 0:
            return

    yielded = 0
    for key, _ in matches:
      yield key
      yielded += 1
      if k is not None and yielded >= k:
        return

  # ------------------------------------------------------------------
  # Structural stats
  # ------------------------------------------------------------------

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count.
        If True, return the average number of occupied child slots
        (`low`, `middle`, `high`) over nodes with at least one child.

    Returns
    -------
    int | float
        Total nodes (int) or average branching factor (float).

    Complexity
    ----------
    O(#nodes) time, O(height) extra space.
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self.root] if self.root is not None else []
    while stack:
      node = stack.pop()
      total_nodes += 1
      deg = 0
      for child in (node.low, node.middle, node.high):
        if child is not None:
          deg += 1
          stack.append(child)
      if deg:
        total_deg += deg
        internal += 1
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes

  def height(self):
    """Longest root-to-node path, counted in nodes (0 when empty)."""
    best = 0
    stack = [(self.root, 1)] if self.root is not None else []
    while stack:
      node, depth = stack.pop()
      if depth > best:
        best = depth
      for child in (node.low, node.middle, node.high):
        if child is not None:
          stack.append((child, depth + 1))
    return best


if __name__ == "__main__":
  tree = TernaryTree()
  tree.insert("SPACE", 10)
  tree.insert("APPLE", 20)
  tree.insert("TIGER", 70)
  tree.insert("SPACES", 30)
  tree.insert("APPS", 80)

  print("-----First print invocation-----")
  tree.print()
  print()
  tree.print_all()
  print()

  print(f"remove('Golden') -> {tree.remove('Golden')}")
  print(f"remove('SPACE')  -> {tree.remove('SPACE')}")
  print(f"remove('TIGER')  -> {tree.remove('TIGER')}")
  print()

  print("-----Second print after remove-----")
  tree.print()
  tree.print_all()
