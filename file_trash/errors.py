"""Exception types raised by the trash engine."""
from typing import List, Optional, Tuple


class TrashError(Exception):
    """Base error for the project."""


class ArgumentError(TrashError):
    pass


class NotFoundError(TrashError):
    pass


class PathResolutionError(TrashError):
    pass


class MoveError(TrashError):
    pass


class InventoryIOError(TrashError):
    """The inventory could not be written.

    When raised at the end of a removal batch, `failures` holds the
    `(path, exception)` pairs of the paths that were not trashed either.
    """

    def __init__(self, message: str, failures: Optional[List[Tuple[str, Exception]]] = None):
        self.failures = list(failures or [])
        super().__init__(message)


class EmptyInventoryError(TrashError):
    pass


class SelectionCancelledError(TrashError):
    pass


class RemoveError(TrashError):
    """One or more paths of a removal batch could not be trashed.

    `failures` holds `(path, exception)` pairs in input order and `records`
    the records that were moved and saved anyway.
    """

    def __init__(self, failures: List[Tuple[str, Exception]], records=None):
        self.failures = failures
        self.records = list(records or [])
        super().__init__("\n".join(str(e) for _, e in failures))

    @property
    def paths(self) -> List[str]:
        return [p for p, _ in self.failures]
