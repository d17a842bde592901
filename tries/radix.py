"""
Radix (PATRICIA) tree mapping string keys to values.

This module implements a compact prefix tree that binds string keys to
caller-chosen values. Labels live on **edges**; a node is reached by
concatenating the labels on the path from the root, and it may or may not
carry a value of its own.

Key features
------------
- **Tagged node variant**
  - Every `RadixNode` holds `value` next to its edges. `None` means the node is
    a plain branch point; anything else makes it a valued node.
  - Promotion (plain -> valued) and demotion (valued -> plain) are in-place
    assignments that never touch the subtree below.
- **First-character edge index**
  - Outgoing edges are stored adaptively:
    - small fanout -> list of `(label, child)` tuples
    - large fanout -> dict mapping `first_char -> (label, child)`
  - The switch threshold is the module constant `fanout_switch`.
- **Single traversal primitive**
  - `_match(node, key)` classifies the remaining key against the children of
    `node` as MISS, EXACT, DESCEND or DIVERGE; every public operation is a loop
    over it.
- **Existence vs. binding**
  - `exist` answers whether a key names a node (valued or plain); `get`
    answers whether that node carries a value.

Classes
-------
Match
    Outcome of one traversal step.
RadixNode
    Tree node. Holds `edges` (None | list | dict) and `value`.
RadixTree
    Public API: `exist`, `get`, `set`, `delete`, plus `batch_set`,
    `batch_delete` and `count_nodes`.

Conventions & invariants
------------------------
- **Prefix-free branching:** no two edge labels under one node share a
  non-empty prefix, i.e. no two share a first character.
- **Non-empty labels:** the root is never addressed; `""` is never a key.
- **Compaction is local:** `delete` fuses a plain parent left with a single
  child into the grandparent's edge, one level only. Ancestors further up are
  not re-checked.
- **None is the absent sentinel:** it is rejected as a key (operations return
  False / None) and refused as a value (`TypeError`).
- **Not thread-safe:** callers serialize access with their own lock.

Complexity
----------
Let L be the key length. `exist`, `get`, `set`, `delete` are O(L) plus the
per-node edge lookup (O(1) in dict mode, O(fanout_switch) in list mode).
"""

import enum
import logging
from typing import Generic, Iterable, Optional, Tuple, TypeVar

log = logging.getLogger("tries.radix")

V = TypeVar("V")

fanout_switch = 8


class Match(enum.Enum):
  MISS = "miss"          # no child label shares a first character with the key
  EXACT = "exact"        # a child label equals the key
  DESCEND = "descend"    # a child label is a proper prefix of the key
  DIVERGE = "diverge"    # overlap ends inside the label


class RadixNode:
  __slots__ = ("edges", "value")

  def __init__(self, value=None):
    self.edges = None
    self.value = value

  def __repr__(self):
    return f"RadixNode(value={self.value!r}, degree={self.degree()})"

  @property
  def has_value(self):
    return self.value is not None

  def edge(self, ch):
    """Return (label, child) for the edge whose label starts with ch, or None."""
    e = self.edges
    if e is None:
      return None
    if isinstance(e, dict):
      return e.get(ch)
    for pair in e:
      if pair[0][0] == ch:
        return pair
    return None

  def attach(self, label, child):
    """Hang `child` under `label`, replacing any edge with the same first char."""
    e = self.edges
    ch = label[0]
    if e is None:
      self.edges = [(label, child)]
      return
    if isinstance(e, dict):
      e[ch] = (label, child)
      return

    for i, pair in enumerate(e):
      if pair[0][0] == ch:
        e[i] = (label, child)
        return
    e.append((label, child))
    if len(e) >= fanout_switch:
      self.edges = {lbl[0]: (lbl, node) for lbl, node in e}

  def detach(self, ch):
    """Unlink and return the (label, child) edge starting with ch, or None."""
    e = self.edges
    if e is None:
      return None

    if isinstance(e, dict):
      pair = e.pop(ch, None)
      if pair is not None and len(e) <= fanout_switch - 2:
        self.edges = list(e.values())
      return pair

    for i, pair in enumerate(e):
      if pair[0][0] == ch:
        del e[i]
        if not e:
          self.edges = None
        return pair
    return None

  def iter_edges(self):
    """Yield (label, child) for all outgoing edges."""
    e = self.edges
    if not e:
      return
    if isinstance(e, dict):
      yield from e.values()
    else:
      yield from e

  def degree(self):
    e = self.edges
    return 0 if not e else len(e)

  def only_edge(self):
    """Return (label, child) if exactly one outgoing edge; else None."""
    if self.degree() != 1:
      return None
    return next(self.iter_edges())


def _lcp(a, b):
  """Length of the longest common prefix of a and b."""
  i = 0
  n = min(len(a), len(b))
  while i < n and a[i] == b[i]:
    i += 1
  return i


def _match(node, key):
  """Classify a non-empty `key` against the children of `node`.

  Returns
  -------
  tuple[Match, str | None, RadixNode | None, int]
      `(outcome, label, child, common)` where `label`/`child` is the only
      candidate edge (None on MISS) and `common` is the length of the common
      prefix between `key` and `label`.
  """
  hit = node.edge(key[0])
  if hit is None:
    return Match.MISS, None, None, 0
  label, child = hit
  i = _lcp(key, label)
  if i == len(label):
    return (Match.EXACT if i == len(key) else Match.DESCEND), label, child, i
  return Match.DIVERGE, label, child, i


#### ===================================================  ####
#    Radix tree: exist / get / set / delete
#### ===================================================  ####

class RadixTree(Generic[V]):
  """Compact prefix tree binding `str` keys to values of type V.

  >>> t = RadixTree()
  >>> t.set("insert", 1)
  True
  >>> t.set("inactive", 3)
  True
  >>> t.exist("in"), t.get("in")
  (True, None)
  >>> t.get("insert")
  1
  """
  __slots__ = ("root", )

  def __init__(self):
    self.root = RadixNode()

  def _find(self, key):
    """Return the node named exactly by `key`, or None."""
    node = self.root
    while True:
      outcome, _, child, i = _match(node, key)
      if outcome is Match.EXACT:
        return child
      if outcome is Match.DESCEND:
        node = child
        key = key[i:]
        continue
      return None

  def exist(self, key: Optional[str]) -> bool:
    """Return True if `key` names a node, whether or not it carries a value."""
    if not key:
      return False
    return self._find(key) is not None

  def get(self, key: Optional[str]) -> Optional[V]:
    """Return the value bound to `key`, or None when unbound or missing."""
    if not key:
      return None
    node = self._find(key)
    return None if node is None else node.value

  def set(self, key: Optional[str], value: V) -> bool:
    """Bind `value` to `key`, inserting or updating as needed.

    - MISS: hang a new valued leaf for the remaining key under the current node.
    - EXACT: overwrite the value, or promote a plain node in place.
    - DESCEND: consume the label and continue below it.
    - DIVERGE: split the edge. If the remaining key ends inside the label, a
      valued node takes the label's place; otherwise a plain branch node for
      the common prefix receives both the old subtree and a new leaf.

    Args:
        key (str | None): Key to bind. None is rejected. "" names the root,
            which never holds a value, so it is accepted and nothing is stored.
        value: Value to bind. Must not be None.

    Returns:
        bool: True unless the key was None.

    Raises:
        TypeError: If `value` is None.
    """
    if key is None:
      return False
    if value is None:
      raise TypeError("RadixTree values must not be None")
    if not key:
      return True

    node = self.root
    while True:
      outcome, label, child, i = _match(node, key)

      if outcome is Match.MISS:
        node.attach(key, RadixNode(value))
        return True

      if outcome is Match.EXACT:
        if not child.has_value:
          log.debug("promote %r", key)
        child.value = value
        return True

      if outcome is Match.DESCEND:
        node = child
        key = key[i:]
        continue

      node.detach(label[0])
      if i == len(key):
        mid = RadixNode(value)
        node.attach(key, mid)
        mid.attach(label[i:], child)
        log.debug("split %r: %r now valued above %r", label, key, label[i:])
      else:
        mid = RadixNode()
        node.attach(key[:i], mid)
        mid.attach(label[i:], child)
        mid.attach(key[i:], RadixNode(value))
        log.debug("split %r: branch %r over %r and %r",
                  label, key[:i], label[i:], key[i:])
      return True

  def delete(self, key: Optional[str]) -> bool:
    """Erase the binding of `key`.

    - A valued node with children is demoted to a plain node; the key keeps
      existing and `get` returns None from then on.
    - A valued leaf is unlinked. If that leaves its (non-root, plain) parent
      with a single child, the parent is fused away: the child is re-hung on
      the grandparent under the concatenated label. A valued parent is left
      alone. Only this one level is compacted.

    Returns:
        bool: True if a binding was erased; False if the key was None, empty,
        missing, or named a plain node.
    """
    if not key:
      return False

    parent = None
    parent_label = None
    node = self.root
    while True:
      outcome, label, child, i = _match(node, key)
      if outcome is Match.DESCEND:
        parent, parent_label = node, label
        node = child
        key = key[i:]
        continue
      if outcome is not Match.EXACT or not child.has_value:
        return False
      break

    node.detach(label[0])
    if child.degree():
      child.value = None
      node.attach(label, child)
      log.debug("demote %r", label)
      return True

    if parent is not None and not node.has_value and node.degree() == 1:
      only_label, only_child = node.only_edge()
      node.detach(only_label[0])
      parent.detach(parent_label[0])
      parent.attach(parent_label + only_label, only_child)
      log.debug("compact %r + %r", parent_label, only_label)
    return True

  def batch_set(self, items: Iterable[Tuple[str, V]]) -> int:
    """Apply `set` to each (key, value) pair in order; return how many succeeded.

    Raises TypeError without touching the tree if any value is None.
    """
    items = list(items)
    if any(value is None for _, value in items):
      raise TypeError("RadixTree values must not be None")
    done = 0
    for key, value in items:
      if self.set(key, value):
        done += 1
    return done

  def batch_delete(self, keys: Iterable[str]) -> Tuple[int, int]:
    """Delete many keys; returns (deleted_count, missing_count)."""
    deleted = 0
    missing = 0
    for key in keys:
      if self.delete(key):
        deleted += 1
      else:
        missing += 1
    return deleted, missing

  def count_nodes(self, valued_only=False, get_avg_branch_factor=False):
    """Count nodes below and including the root.

    Parameters
    ----------
    valued_only : bool, default=False
        Count only nodes that carry a value, i.e. the number of bound keys.
        Plain branch points (the root included) are skipped.
    get_avg_branch_factor : bool, default=False
        Return the mean out-degree of nodes that have children instead.
        0.0 for an empty tree.

    Returns
    -------
    int | float
    """
    nodes = 0
    valued = 0
    internal = 0
    edges = 0

    stack = [self.root]
    while stack:
      node = stack.pop()
      nodes += 1
      if node.has_value:
        valued += 1
      for _, child in node.iter_edges():
        edges += 1
        stack.append(child)
      if node.edges:
        internal += 1

    if get_avg_branch_factor:
      return edges / internal if internal else 0.0
    return valued if valued_only else nodes
