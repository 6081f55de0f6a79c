"""Batched, order-preserving execution of deferred async work."""

from .errors import BatchConfigurationError, default_error_handler, with_default_error_handler
from .results import chunk_list, filter_empty, flatten, not_empty, resolve_all_and_filter_empty
from .tasks import DeferredTask, combine_deferred_tasks, execute_in_batches, execute_sequential

__all__ = [
    "BatchConfigurationError",
    "DeferredTask",
    "chunk_list",
    "combine_deferred_tasks",
    "default_error_handler",
    "execute_in_batches",
    "execute_sequential",
    "filter_empty",
    "flatten",
    "not_empty",
    "resolve_all_and_filter_empty",
    "with_default_error_handler",
]
