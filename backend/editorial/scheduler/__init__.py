"""Background jobs"""
from .publish_scheduler import PublishScheduler, start_scheduler, stop_scheduler

__all__ = ["PublishScheduler", "start_scheduler", "stop_scheduler"]
