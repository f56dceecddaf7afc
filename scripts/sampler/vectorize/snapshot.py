"""snapshot.py

What it does:
- Turns one rrweb DOM snapshot tree into a count vector over the run's FeatureDictionary.

Main entrypoints:
- vectorize_snapshot(root, dictionary) -> List[int]
- pad_vector(vector, length) -> vector (right-padded in place)

Notes:
- Pre-order depth-first walk. Ignored tags and tagless nodes (text, comments) add
  nothing, but their children are still visited.
- The vector starts at the dictionary size at call time and only grows while new
  features are discovered; earlier vectors are widened later by the corpus step.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .features import FeatureDictionary


def pad_vector(vector: List[int], length: int) -> List[int]:
    """Right-pad with zeros up to `length`. Never truncates."""
    if len(vector) < length:
        vector.extend([0] * (length - len(vector)))
    return vector


def _children(node: Dict[str, Any]) -> List[Any]:
    kids = node.get("childNodes")
    return kids if isinstance(kids, list) else []


def vectorize_snapshot(root: Dict[str, Any], dictionary: FeatureDictionary) -> List[int]:
    vector: List[int] = [0] * dictionary.size()
    if not isinstance(root, dict):
        return vector

    # explicit stack: real pages nest deeper than the recursion limit
    stack: List[Any] = [root]
    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue

        tag = node.get("tagName")
        if tag:
            attrs = node.get("attributes")
            if not isinstance(attrs, dict):
                attrs = {}
            idx = dictionary.register(
                str(tag),
                attrs.get("class"),
                attrs.get("style"),
                attrs.get("src"),
            )
            if idx is not None:
                pad_vector(vector, idx + 1)
                vector[idx] += 1

        # reversed so the first child is popped first (pre-order)
        stack.extend(reversed(_children(node)))

    return vector
