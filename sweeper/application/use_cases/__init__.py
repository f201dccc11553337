"""Sweep use cases: batch sweep loop, queue clean loop and cache inventory."""

from sweeper.application.use_cases.inventory_scan import InventoryScanner
from sweeper.application.use_cases.sweep_loop import QueueCleanLoop, SweepLoop

__all__ = ["InventoryScanner", "QueueCleanLoop", "SweepLoop"]
