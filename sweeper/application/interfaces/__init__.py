"""Capability interfaces (ports) for sweep sources and deletion targets."""

from sweeper.application.interfaces.stores import (
    IBatchSource,
    IDeletionTarget,
    IJobQueue,
    IKeyspace,
)

__all__ = ["IBatchSource", "IDeletionTarget", "IJobQueue", "IKeyspace"]
