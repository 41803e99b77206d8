"""Background workers for the invoicing service"""
from .overdue_sweeper import OverdueSweepWorker

__all__ = ["OverdueSweepWorker"]
