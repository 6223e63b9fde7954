#!/usr/bin/env python3

from typing import Callable, Optional
import functools
import logging


def log_exceptions(func: Optional[Callable] = None, *, logger: Optional[logging.Logger] = None):
    """
    Decorator that logs an escaping exception with its traceback and re-raises it.

    Usable bare or with an explicit logger:

    >>> from mktinfo.tools import log_exceptions
    >>>
    >>> @log_exceptions
    ... def on_read_clicked():
    ...     ...
    >>>
    >>> @log_exceptions(logger=logging.getLogger("mktinfo.gui"))
    ... def refresh():
    ...     ...

    The exception is never swallowed; the caller still sees it.
    """
    def decorate(target: Callable) -> Callable:
        @functools.wraps(target)
        def wrapper(*args, **kwargs):
            try:
                return target(*args, **kwargs)
            except Exception as e:
                log = logger or logging.getLogger(target.__module__)
                log.error(f"Exception in {target.__name__}: {e}", exc_info=True)
                raise
        return wrapper

    if func is not None:
        return decorate(func)
    return decorate
