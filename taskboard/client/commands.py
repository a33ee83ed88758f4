import copy
from typing import Any, Callable, Optional


class OptimisticCommand:
    """A local state change applied before the server confirms it.

    ``forward`` is run right away by :meth:`apply`. If the server call fails,
    :meth:`rollback` runs ``inverse``; without an explicit inverse the
    ``snapshot`` taken at construction is handed to ``restore``.
    """

    def __init__(
        self,
        snapshot: Any,
        forward: Callable[[], None],
        inverse: Optional[Callable[[], None]] = None,
        restore: Optional[Callable[[Any], None]] = None,
    ) -> None:
        if inverse is None and restore is None:
            raise ValueError("OptimisticCommand needs an inverse or a restore callback")
        self.snapshot = copy.deepcopy(snapshot)
        self.forward = forward
        self.inverse = inverse
        self.restore = restore
        self.applied = False

    def apply(self) -> None:
        self.forward()
        self.applied = True

    def rollback(self) -> None:
        if not self.applied:
            return
        if self.inverse is not None:
            self.inverse()
        else:
            self.restore(copy.deepcopy(self.snapshot))
        self.applied = False
