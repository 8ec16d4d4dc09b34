"""Thread pool execution for partition-local tasks."""

from __future__ import annotations

import contextvars
import os
from concurrent.futures import ThreadPoolExecutor, as_completed


def parallel_map(func, args_list, n_jobs=1):
    """Execute func(*args) for each args in args_list, optionally in parallel.

    Every task runs in its own snapshot of the caller's context, so a
    worker identity set with :func:`~workerskew.core.topology.worker_context`
    inside ``func`` never leaks into another task, and one set around the
    call is visible to all of them.

    Parameters
    ----------
    func : callable
        Function to call for each set of arguments.
    args_list : list of tuples
        Arguments for each call.
    n_jobs : int
        1 = sequential (default), -1 = all cores, >1 = that many threads.

    Returns
    -------
    list
        Results in the same order as args_list.
    """
    contexts = [contextvars.copy_context() for _ in args_list]

    if n_jobs == 1:
        return [ctx.run(func, *args) for ctx, args in zip(contexts, args_list, strict=True)]

    max_workers = os.cpu_count() if n_jobs == -1 else n_jobs
    results = [None] * len(args_list)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_idx = {
            executor.submit(ctx.run, func, *args): i
            for i, (ctx, args) in enumerate(zip(contexts, args_list, strict=True))
        }
        for future in as_completed(future_to_idx):
            idx = future_to_idx[future]
            results[idx] = future.result()
    return results
