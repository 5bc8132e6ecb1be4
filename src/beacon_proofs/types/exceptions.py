"""Exception hierarchy for schema resolution and proof generation."""

from __future__ import annotations


class SSZError(Exception):
    """
    Base exception for all errors raised by this package.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class SSZTypeError(SSZError):
    """Base class for type-related errors."""


class SchemaError(SSZTypeError):
    """
    Raised when a schema is malformed or a path cannot be resolved against it.

    Covers undeclared fields, indices beyond a declared capacity and depths the
    tree cannot represent. These are programming errors and are never coerced.

    Attributes:
        type_name: The type the error was detected on.
        detail: What went wrong.
    """

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        self.detail = detail
        super().__init__(f"{type_name}: {detail}")


class SSZValueError(SSZError):
    """
    Base class for value-related errors.

    Raised when a value is invalid for an operation, even if the type is correct.
    """


class CapacityError(SSZValueError):
    """
    Raised when a populated leaf lies outside its tree's declared capacity.

    Attributes:
        type_name: The structure whose bound was violated.
        position: The offending leaf position.
        capacity: The number of leaf slots the structure declares.
    """

    def __init__(self, type_name: str, *, position: int, capacity: int) -> None:
        self.type_name = type_name
        self.position = position
        self.capacity = capacity
        super().__init__(
            f"{type_name}: position {position} is outside capacity (valid range: [0, {capacity}))"
        )


class ProofError(SSZError):
    """Raised when a proof cannot be generated from the supplied data."""


class IndexOutOfBoundsError(ProofError):
    """
    Raised when a claim names an element the supplied data does not contain.

    Attributes:
        collection: Name of the list being indexed.
        index: The requested element index.
        length: The number of elements actually supplied.
    """

    def __init__(self, collection: str, *, index: int, length: int) -> None:
        self.collection = collection
        self.index = index
        self.length = length
        super().__init__(f"{collection} index {index} out of bounds (length {length})")
