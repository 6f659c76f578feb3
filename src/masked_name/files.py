"""Filesystem node hierarchy

Nodes know their base name and parent directory. A node's full name is
its parent's full name with the node's own base name appended, so the
hierarchy only ever talks to names through their public operations.
"""

from enum import Enum
from typing import Optional, Set

from .log import get_logger
from .masked_name import AbstractName, PreconditionViolation, StringName, mask

logger = get_logger(__name__)

PATH_DELIMITER = "/"


class FileState(Enum):
    """Lifecycle states of a file"""
    OPEN = 1
    CLOSED = 2
    DELETED = 3


class Node:
    """A named entry inside a directory"""

    def __init__(self, base_name: str, parent: 'Directory'):
        PreconditionViolation.check(isinstance(base_name, str), "base name must be a string")
        PreconditionViolation.check(parent is not None, "parent directory must not be None")
        self._base_name = ""
        self._do_set_base_name(base_name)
        self._parent_node = parent
        self._initialize(parent)

    def _initialize(self, parent: 'Directory') -> None:
        self._parent_node = parent
        self._parent_node.add_child_node(self)

    def move(self, to: 'Directory') -> None:
        """Detach this node from its parent and attach it to `to`"""
        PreconditionViolation.check(isinstance(to, Directory), "target must be a directory")
        PreconditionViolation.check(
            not self._is_ancestor_of(to),
            "cannot move a node into itself or its own subtree",
        )
        self._parent_node.remove_child_node(self)
        to.add_child_node(self)
        logger.debug("moved %r from %r to %r", self._base_name,
                     self._parent_node.get_base_name(), to.get_base_name())
        self._parent_node = to

    def _is_ancestor_of(self, node: 'Node') -> bool:
        """True if `node` is this node or lies below it"""
        while True:
            if node is self:
                return True
            parent = node.get_parent_node()
            if parent is node:
                return False
            node = parent

    def get_full_name(self) -> AbstractName:
        """Parent's full name with this node's base name appended

        The base name is masked for the delimiter of the name it is
        appended to, so a base name may contain that delimiter.
        """
        result = self._parent_node.get_full_name()
        result.append(mask(self.get_base_name(), result.get_delimiter_character()))
        return result

    def get_base_name(self) -> str:
        return self._do_get_base_name()

    def _do_get_base_name(self) -> str:
        return self._base_name

    def rename(self, base_name: str) -> None:
        PreconditionViolation.check(isinstance(base_name, str), "base name must be a string")
        logger.debug("renamed %r to %r", self._base_name, base_name)
        self._do_set_base_name(base_name)

    def _do_set_base_name(self, base_name: str) -> None:
        self._base_name = base_name

    def get_parent_node(self) -> 'Directory':
        return self._parent_node

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_full_name().as_string()!r})"


class Directory(Node):
    """A node that holds child nodes"""

    def __init__(self, base_name: str, parent: 'Directory'):
        self._child_nodes: Set[Node] = set()
        super().__init__(base_name, parent)

    def has_child_node(self, cn: Node) -> bool:
        return cn in self._child_nodes

    def add_child_node(self, cn: Node) -> None:
        PreconditionViolation.check(cn is not None, "child node must not be None")
        self._child_nodes.add(cn)

    def remove_child_node(self, cn: Node) -> None:
        PreconditionViolation.check(self.has_child_node(cn), "node is not a child of this directory")
        self._child_nodes.remove(cn)

    def get_child_nodes(self) -> Set[Node]:
        return set(self._child_nodes)


class RootNode(Directory):
    """The top of the hierarchy; it is its own parent and has an empty base name"""

    _root_node: Optional['RootNode'] = None

    @classmethod
    def get_root_node(cls) -> 'RootNode':
        if cls._root_node is None:
            cls._root_node = cls()
        return cls._root_node

    def __init__(self):
        super().__init__("", self)

    def _initialize(self, parent: 'Directory') -> None:
        self._parent_node = self

    def get_full_name(self) -> AbstractName:
        # One empty component, so children format as "/usr", "/usr/bin"
        return StringName("", PATH_DELIMITER)

    def move(self, to: 'Directory') -> None:
        pass

    def _do_set_base_name(self, base_name: str) -> None:
        pass


class File(Node):
    """A file with an open/read/close lifecycle"""

    def __init__(self, base_name: str, parent: Directory):
        super().__init__(base_name, parent)
        self._state = FileState.CLOSED

    def open(self) -> None:
        PreconditionViolation.check(self._state == FileState.CLOSED, "file must be closed to be opened")
        self._state = FileState.OPEN

    def read(self, no_bytes: int) -> bytes:
        """Read `no_bytes` bytes from an open file"""
        PreconditionViolation.check(self._state == FileState.OPEN, "file must be open to read")
        PreconditionViolation.check(
            isinstance(no_bytes, int) and not isinstance(no_bytes, bool) and no_bytes >= 0,
            "no_bytes must be a non-negative integer",
        )
        return bytes(no_bytes)

    def close(self) -> None:
        PreconditionViolation.check(self._state == FileState.OPEN, "file must be open to close")
        self._state = FileState.CLOSED

    def delete(self) -> None:
        """Delete a closed file and detach it from its directory"""
        PreconditionViolation.check(self._state == FileState.CLOSED, "file must be closed to be deleted")
        self._parent_node.remove_child_node(self)
        self._state = FileState.DELETED
        logger.debug("deleted %r", self._base_name)

    def get_file_state(self) -> FileState:
        return self._state
