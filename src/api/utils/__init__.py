from .executors import cancel_on_disconnect, run_sync

__all__ = ["cancel_on_disconnect", "run_sync"]
