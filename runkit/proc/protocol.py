"""
Protocol for anything that can be run to completion.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Runnable(Protocol):
    """
    Something with ``run() -> bool``.

    Command and Pipeline both satisfy it, which lets an installer be either
    a single command or a pipeline (e.g. ``curl ... | sh``).
    """

    def run(self) -> bool: ...
