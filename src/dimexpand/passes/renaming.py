"""
Indexed-name fusion.

An indexed name is spelled base_binder. Once the binder has a value the
name fuses into base followed by the decimal digits of that value:
i_d with d=3 becomes i3. Matching is purely lexical: a name matches a
known binder when it ends in separator + binder (so i_dim_k matches the
binder dim_k). Names matching no known binder are split on their last
separator; that suffix must be a plain identifier without separators, so
names like A_1 or my__ are never candidates.
"""

import re
from typing import Optional, Tuple, Union

from ..shared.errors import MalformedIndexedName
from ..shared.nodes import IndexedName, Symbol
from ..utils.config import INDEX_SEPARATOR

_BINDER_SUFFIX = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")


def split_indexed_name(name: str) -> Optional[Tuple[str, str]]:
    """
    Split name into (base, suffix) on its last separator.

    Returns None when name is not spelled like an indexed name at all.
    The base may be empty; callers decide whether that is an error.
    """
    base, sep, suffix = name.rpartition(INDEX_SEPARATOR)
    if not sep or not _BINDER_SUFFIX.match(suffix):
        return None
    return base, suffix


def strip_binder(name: str, binder: str) -> Optional[str]:
    """Base of name spelled base_binder, or None when name does not end in _binder."""
    suffix = f"{INDEX_SEPARATOR}{binder}"
    if not binder or not name.endswith(suffix):
        return None
    return name[:-len(suffix)]


def fuse(base: str, value: int) -> str:
    """fuse("i", 3) -> "i3" """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"indexed names fuse with integers, got {value!r}")
    return f"{base}{value}"


def is_indexed_name(symbol: Symbol) -> bool:
    return not symbol.verbatim and split_indexed_name(symbol.name) is not None


class Renamer:
    """
    Applies the fusion rule for one binder at one value.

    Fires independently for every occurrence it is handed; the caller
    (TemplateEvaluator) walks the tree.
    """

    def __init__(self, binder: str, value: int):
        self.binder = binder
        self.value = value

    def rename(self, node: Union[Symbol, IndexedName]) -> Union[Symbol, IndexedName]:
        """Fused Symbol if node names this binder, otherwise node itself."""
        if isinstance(node, IndexedName):
            if node.binder != self.binder:
                return node
            return self._fused(node.base, f"{node.base}{INDEX_SEPARATOR}{node.binder}", node)
        if node.verbatim:
            return node
        base = strip_binder(node.name, self.binder)
        if base is None:
            return node
        return self._fused(base, node.name, node)

    def _fused(self, base: str, spelled: str, node) -> Symbol:
        if not base:
            raise MalformedIndexedName(spelled, "base name is empty", node.location)
        return Symbol(fuse(base, self.value), location=node.location)
