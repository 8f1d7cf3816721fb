"""
Middleware run against every resolved rich-command dispatch.

A middleware is a plain callable taking the :class:`~chatmux.context.Context`.
It may read or annotate the context (log, rewrite arguments, stash values in
``ctx.extras``) but cannot stop the dispatch: the return value is ignored.
Middleware runs before the permission check, in registration order.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, List

from chatmux.context import Context

logger = logging.getLogger(__name__)

Middleware = Callable[[Context], None]


class MiddlewareChain:
    def __init__(self) -> None:
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> Middleware:
        if not callable(middleware):
            raise TypeError("middleware must be callable")
        self._middleware.append(middleware)
        logger.debug("Added middleware %s", getattr(middleware, "__name__", middleware))
        return middleware

    def run(self, ctx: Context) -> None:
        for middleware in self._middleware:
            middleware(ctx)

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(tuple(self._middleware))


__all__ = ["Middleware", "MiddlewareChain"]
