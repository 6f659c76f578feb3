"""Masked Name - Delimiter-configurable hierarchical names

This package provides names made of ordered components joined by a
single-character delimiter, a masking grammar that lets components contain
the delimiter or the escape character, and a small filesystem node
hierarchy that uses names for full paths.
"""

from .masked_name import (
    DEFAULT_DELIMITER,
    ESCAPE_CHARACTER,
    AbstractName,
    StringArrayName,
    StringName,
    ContractViolation,
    PreconditionViolation,
    PostconditionViolation,
    InvariantViolation,
    mask,
    unmask,
    split_masked,
    is_masked,
    join_masked,
)
from .files import Node, Directory, RootNode, File, FileState
from .log import setup_logging, get_logger

__version__ = "0.4.0"

__all__ = [
    "DEFAULT_DELIMITER",
    "ESCAPE_CHARACTER",
    "AbstractName",
    "StringArrayName",
    "StringName",
    "ContractViolation",
    "PreconditionViolation",
    "PostconditionViolation",
    "InvariantViolation",
    "mask",
    "unmask",
    "split_masked",
    "is_masked",
    "join_masked",
    "Node",
    "Directory",
    "RootNode",
    "File",
    "FileState",
    "setup_logging",
    "get_logger",
]
