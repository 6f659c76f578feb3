"""Delimiter-Configurable Hierarchical Names

This module provides a name abstraction made of ordered, masked components
joined by a single-character delimiter, with two interchangeable storage
strategies and contract checks around every accessor and mutator.
"""

import copy
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence

from .log import get_logger

logger = get_logger(__name__)

DEFAULT_DELIMITER = "."
ESCAPE_CHARACTER = "\\"


# Error classes
class ContractViolation(Exception):
    """Base exception for contract violations"""

    # Whether a failed check is logged before raising
    logged = False

    @classmethod
    def check(cls, condition: bool, message: str) -> None:
        """Raise this violation with `message` unless `condition` holds"""
        if not condition:
            if cls.logged:
                logger.error("%s: %s", cls.__name__, message)
            raise cls(message)


class PreconditionViolation(ContractViolation):
    """Bad caller input: missing argument, index out of range, malformed delimiter"""
    pass


class PostconditionViolation(ContractViolation):
    """An operation failed to deliver its stated guarantee"""
    logged = True


class InvariantViolation(ContractViolation):
    """Internal consistency broken after a mutation"""
    logged = True


def _is_delimiter(delimiter: object) -> bool:
    return (
        isinstance(delimiter, str)
        and len(delimiter) == 1
        and delimiter != ESCAPE_CHARACTER
    )


def _check_delimiter(delimiter: object) -> None:
    PreconditionViolation.check(
        _is_delimiter(delimiter),
        f"delimiter must be a single character other than {ESCAPE_CHARACTER!r}, got {delimiter!r}",
    )


def mask(raw: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Turn raw text into masked text for `delimiter`

    Backslashes are escaped before the delimiter so the second step never
    touches escapes produced by the first: `Oh...` -> `Oh\\.\\.\\.`
    """
    _check_delimiter(delimiter)
    PreconditionViolation.check(isinstance(raw, str), "raw text must be a string")
    step1 = raw.replace(ESCAPE_CHARACTER, ESCAPE_CHARACTER + ESCAPE_CHARACTER)
    return step1.replace(delimiter, ESCAPE_CHARACTER + delimiter)


def unmask(masked: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Turn masked text back into raw text, the exact reverse of `mask`"""
    _check_delimiter(delimiter)
    PreconditionViolation.check(isinstance(masked, str), "masked text must be a string")
    step1 = masked.replace(ESCAPE_CHARACTER + delimiter, delimiter)
    return step1.replace(ESCAPE_CHARACTER + ESCAPE_CHARACTER, ESCAPE_CHARACTER)


def split_masked(masked: str, delimiter: str = DEFAULT_DELIMITER) -> List[str]:
    """Split a masked string into its masked components

    An escape character and the character after it always stay together,
    so an escaped delimiter never ends a component. A dangling escape at the
    very end is kept as-is. The component in progress when the input runs
    out is always emitted, which means `""` splits into `[""]` and a
    trailing delimiter yields a trailing empty component.
    """
    _check_delimiter(delimiter)
    PreconditionViolation.check(isinstance(masked, str), "masked text must be a string")

    result: List[str] = []
    current = ""
    pos = 0

    while pos < len(masked):
        c = masked[pos]

        if c == ESCAPE_CHARACTER:
            if pos + 1 < len(masked):
                current += c + masked[pos + 1]
                pos += 2
                continue
            # Dangling escape
            current += c
        elif c == delimiter:
            result.append(current)
            current = ""
        else:
            current += c

        pos += 1

    result.append(current)
    return result


def is_masked(component: str, delimiter: str = DEFAULT_DELIMITER) -> bool:
    """Check that `component` is one properly masked component

    It must hold no unescaped delimiter and must not end in a dangling escape.
    """
    _check_delimiter(delimiter)
    if not isinstance(component, str):
        return False

    escaped = False
    for c in component:
        if escaped:
            escaped = False
        elif c == ESCAPE_CHARACTER:
            escaped = True
        elif c == delimiter:
            return False
    return not escaped


def join_masked(components: Sequence[str], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Join already-masked components with `delimiter`"""
    _check_delimiter(delimiter)
    return delimiter.join(components)


class AbstractName(ABC):
    """A name made of ordered, masked components and a delimiter character

    Examples (delimiter `.` unless noted):
    - `oss.cs.fau.de` has four components
    - `///` has four empty components with delimiter `/`
    - `Oh\\.\\.\\.` has one component, `Oh...` when unmasked

    Subclasses supply component storage through the `_do_*` primitives.
    The public accessors and mutators defined here check preconditions
    first, then delegate, then check postconditions and the class invariant.
    Failed post checks do not roll the instance back.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER):
        _check_delimiter(delimiter)
        self._delimiter = delimiter

    # Storage primitives

    @abstractmethod
    def _do_get_no_components(self) -> int:
        ...

    @abstractmethod
    def _do_get_component(self, i: int) -> str:
        ...

    @abstractmethod
    def _do_set_component(self, i: int, c: str) -> None:
        ...

    @abstractmethod
    def _do_insert(self, i: int, c: str) -> None:
        ...

    @abstractmethod
    def _do_append(self, c: str) -> None:
        ...

    @abstractmethod
    def _do_remove(self, i: int) -> None:
        ...

    @abstractmethod
    def clone(self) -> 'AbstractName':
        """Return an independent name with the same delimiter and components"""
        ...

    # Contract helpers

    @staticmethod
    def _is_index(i: object) -> bool:
        return isinstance(i, int) and not isinstance(i, bool)

    def _check_index(self, i: object, upper: int, operation: str) -> None:
        PreconditionViolation.check(
            self._is_index(i) and 0 <= i < upper,
            f"index {i!r} out of range for {operation} (0..{upper - 1})",
        )

    def _check_component(self, c: object) -> None:
        PreconditionViolation.check(isinstance(c, str), "component must be a string")
        PreconditionViolation.check(
            is_masked(c, self._delimiter),
            f"component {c!r} is not masked for delimiter {self._delimiter!r}",
        )

    def _assert_class_invariant(self) -> None:
        InvariantViolation.check(
            isinstance(self._delimiter, str) and len(self._delimiter) == 1,
            "delimiter must be a single character",
        )

    # Accessors

    def get_delimiter_character(self) -> str:
        return self._delimiter

    def get_no_components(self) -> int:
        return self._do_get_no_components()

    def get_component(self, i: int) -> str:
        """Get the masked component at index `i`"""
        self._check_index(i, self.get_no_components(), "get_component")
        return self._do_get_component(i)

    def components(self) -> Iterator[str]:
        """Iterate over the masked components in order"""
        for i in range(self.get_no_components()):
            yield self._do_get_component(i)

    # Mutators

    def set_component(self, i: int, c: str) -> None:
        """Replace the component at index `i`; `c` must already be masked"""
        old_count = self.get_no_components()
        self._check_index(i, old_count, "set_component")
        self._check_component(c)

        self._do_set_component(i, c)

        PostconditionViolation.check(
            self.get_no_components() == old_count,
            "set_component must not change the number of components",
        )
        self._assert_class_invariant()

    def insert(self, i: int, c: str) -> None:
        """Insert masked component `c` before index `i` (0..count inclusive)"""
        old_count = self.get_no_components()
        self._check_index(i, old_count + 1, "insert")
        self._check_component(c)

        self._do_insert(i, c)

        PostconditionViolation.check(
            self.get_no_components() == old_count + 1,
            "insert failed: wrong number of components",
        )
        self._assert_class_invariant()
        logger.debug("inserted component at %d: %d -> %d components", i, old_count, old_count + 1)

    def append(self, c: str) -> None:
        """Append masked component `c`"""
        self._check_component(c)
        old_count = self.get_no_components()

        self._do_append(c)

        PostconditionViolation.check(
            self.get_no_components() == old_count + 1,
            "append failed: wrong number of components",
        )
        self._assert_class_invariant()
        logger.debug("appended component: %d -> %d components", old_count, old_count + 1)

    def remove(self, i: int) -> None:
        """Remove the component at index `i`"""
        old_count = self.get_no_components()
        self._check_index(i, old_count, "remove")

        self._do_remove(i)

        PostconditionViolation.check(
            self.get_no_components() == old_count - 1,
            "remove failed: wrong number of components",
        )
        self._assert_class_invariant()
        logger.debug("removed component at %d: %d -> %d components", i, old_count, old_count - 1)

    def concat(self, other: 'AbstractName') -> None:
        """Append every component of `other`, in order

        Components are re-masked from `other`'s delimiter to this name's.
        """
        PreconditionViolation.check(other is not None, "other must not be None")
        PreconditionViolation.check(isinstance(other, AbstractName), "other must be a name")

        old_count = self.get_no_components()
        to_add = other.get_no_components()

        other_delimiter = other.get_delimiter_character()
        for i in range(to_add):
            c = other.get_component(i)
            if other_delimiter != self._delimiter:
                c = mask(unmask(c, other_delimiter), self._delimiter)
            self.append(c)

        PostconditionViolation.check(
            self.get_no_components() == old_count + to_add,
            "concat failed: wrong number of components",
        )
        self._assert_class_invariant()

    # Shared algorithms

    def as_string(self, delimiter: Optional[str] = None) -> str:
        """Human-readable form joined with `delimiter`

        Components are unmasked with this name's own delimiter; `delimiter`
        defaults to it and only affects the output.
        """
        if delimiter is None:
            delimiter = self._delimiter
        PreconditionViolation.check(
            isinstance(delimiter, str) and len(delimiter) == 1,
            "delimiter must be a single character",
        )
        return delimiter.join(unmask(c, self._delimiter) for c in self.components())

    def as_data_string(self) -> str:
        """Canonical form: components re-masked and joined with the default delimiter

        The result does not depend on this name's delimiter and can be
        parsed back with `StringName(s)`.
        """
        return DEFAULT_DELIMITER.join(self._canonical_components())

    def _canonical_components(self) -> Iterator[str]:
        """Components re-masked for the default delimiter"""
        for c in self.components():
            yield mask(unmask(c, self._delimiter), DEFAULT_DELIMITER)

    def is_equal(self, other: Optional['AbstractName']) -> bool:
        """Same number of components and identical components

        Components are compared in canonical form, so the delimiter is not
        part of the comparison and equal names always hash equal. For names
        sharing a delimiter this is the same as comparing masked components.
        """
        if other is None:
            return False
        if self.get_no_components() != other.get_no_components():
            return False
        return all(
            a == b for a, b in zip(self._canonical_components(), other._canonical_components())
        )

    def get_hash_code(self) -> int:
        """32-bit polynomial hash (multiplier 31) of `as_data_string()`

        Computed over UTF-16 code units and returned as a signed 32-bit int.
        """
        hash_code = 0
        data = self.as_data_string().encode("utf-16-le")
        for pos in range(0, len(data), 2):
            unit = data[pos] | (data[pos + 1] << 8)
            hash_code = (hash_code * 31 + unit) & 0xFFFFFFFF
        if hash_code & 0x80000000:
            hash_code -= 0x100000000
        return hash_code

    def is_empty(self) -> bool:
        return self.get_no_components() == 0

    def __len__(self) -> int:
        return self.get_no_components()

    def __str__(self) -> str:
        return self.as_data_string()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractName):
            return False
        return self.is_equal(other)

    def __hash__(self) -> int:
        return self.get_hash_code()


class StringArrayName(AbstractName):
    """Name stored as a list of masked components"""

    def __init__(self, source: Sequence[str], delimiter: str = DEFAULT_DELIMITER):
        """Create a name from already-masked components

        The sequence is copied; later changes to `source` do not affect the name.
        """
        super().__init__(delimiter)
        PreconditionViolation.check(
            isinstance(source, (list, tuple)),
            "source must be a list or tuple of components",
        )
        PreconditionViolation.check(
            all(isinstance(c, str) for c in source),
            "name components must be strings",
        )
        PreconditionViolation.check(
            all(is_masked(c, self._delimiter) for c in source),
            f"name components must be masked for delimiter {self._delimiter!r}",
        )
        self._components: List[str] = list(source)
        self._assert_class_invariant()

    def clone(self) -> 'StringArrayName':
        return StringArrayName(list(self._components), self._delimiter)

    def _do_get_no_components(self) -> int:
        return len(self._components)

    def _do_get_component(self, i: int) -> str:
        return self._components[i]

    def _do_set_component(self, i: int, c: str) -> None:
        self._components[i] = c

    def _do_insert(self, i: int, c: str) -> None:
        self._components.insert(i, c)

    def _do_append(self, c: str) -> None:
        self._components.append(c)

    def _do_remove(self, i: int) -> None:
        del self._components[i]

    def _assert_class_invariant(self) -> None:
        super()._assert_class_invariant()
        InvariantViolation.check(
            isinstance(self._components, list),
            "components must be a list",
        )
        InvariantViolation.check(
            all(isinstance(c, str) for c in self._components),
            "name component must be a string",
        )

    def __repr__(self) -> str:
        return f"StringArrayName({self._components!r}, delimiter={self._delimiter!r})"


class StringName(AbstractName):
    """Name stored as one masked string plus the component list derived from it

    Whole-string access is free; every mutation rebuilds the string.
    """

    def __init__(self, source: str, delimiter: str = DEFAULT_DELIMITER):
        """Create a name by splitting an already-masked string

        An empty source gives one empty component, not zero components.
        """
        super().__init__(delimiter)
        PreconditionViolation.check(isinstance(source, str), "source must be a string")

        if source == "":
            self._components: List[str] = [""]
        else:
            self._components = split_masked(source, self._delimiter)
        self._name = source
        self._no_components = len(self._components)
        self._assert_class_invariant()

    def clone(self) -> 'StringName':
        # Copy rather than re-parse: a drained name has no components but
        # its empty string would parse back into one
        result = copy.copy(self)
        result._components = list(self._components)
        return result

    def _update_name_from_components(self) -> None:
        self._name = join_masked(self._components, self._delimiter)
        self._no_components = len(self._components)

    def _do_get_no_components(self) -> int:
        return self._no_components

    def _do_get_component(self, i: int) -> str:
        return self._components[i]

    def _do_set_component(self, i: int, c: str) -> None:
        self._components[i] = c
        self._update_name_from_components()

    def _do_insert(self, i: int, c: str) -> None:
        self._components.insert(i, c)
        self._update_name_from_components()

    def _do_append(self, c: str) -> None:
        self._components.append(c)
        self._update_name_from_components()

    def _do_remove(self, i: int) -> None:
        del self._components[i]
        self._update_name_from_components()

    def as_masked_string(self) -> str:
        """The stored masked string, joined with this name's delimiter"""
        return self._name

    def _assert_class_invariant(self) -> None:
        super()._assert_class_invariant()
        InvariantViolation.check(
            isinstance(self._components, list),
            "components must be a list",
        )
        InvariantViolation.check(
            all(isinstance(c, str) for c in self._components),
            "name component must be a string",
        )
        InvariantViolation.check(
            self._no_components == len(self._components),
            "component count must equal the length of the component list",
        )
        InvariantViolation.check(
            self._name == join_masked(self._components, self._delimiter),
            "stored string must equal the joined components",
        )

    def __repr__(self) -> str:
        return f"StringName({self._name!r}, delimiter={self._delimiter!r})"
