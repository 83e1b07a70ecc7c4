# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''Function decorators that cache results.'''

from __future__ import annotations

import functools
import logging
import numbers
from typing import Any, Callable, Dict, Hashable, TypeVar

logger = logging.getLogger(__name__)

_CallableT = TypeVar('_CallableT', bound=Callable)


def once(func: _CallableT) -> _CallableT:
    '''
    Make `func` run at most one time.

    The first call runs `func` and remembers its result. Every later call returns that result
    without calling `func` again, whatever arguments it gets. If the first call raises, nothing is
    remembered and the next call tries again.
    '''
    did_run = False
    result = None

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        nonlocal did_run, result
        if not did_run:
            result = func(*args, **kwargs)
            did_run = True
        return result

    return wrapper


def _freeze(value: Any) -> Hashable:
    if value is None or isinstance(value, (str, bytes, numbers.Number)):
        return value
    elif isinstance(value, (list, tuple)):
        return (type(value), tuple(map(_freeze, value)))
    elif isinstance(value, dict):
        return (dict, frozenset((_freeze(key), _freeze(item)) for key, item in value.items()))
    else:
        raise TypeError(
            f'memoize only supports primitive arguments and lists, tuples and dicts of them, '
            f'got {value!r}.'
        )


def make_cache_key(args: tuple, kwargs: Dict[str, Any]) -> Hashable:
    '''
    Make a cache key out of an argument list.

    Arguments that compare equal give equal keys, so `1` and `1.0` share a key. Containers are
    tagged with their type, so `[1]` and `(1,)` don't, and neither do `{1: 'a'}` and `{'1': 'a'}`.
    Keyword order doesn't matter.
    '''
    return (_freeze(args),
            tuple(sorted((name, _freeze(value)) for name, value in kwargs.items())))


class Memoized:
    '''
    A function that remembers its results for every distinct argument list.

    The cache is available as `.cache`, a plain dict you may inspect or clear. It's never evicted
    by itself. When used as a method, the instance is passed on to the function but isn't part of
    the cache key, so all instances share one cache.
    '''
    def __init__(self, func: Callable) -> None:
        functools.update_wrapper(self, func)
        self.func = func
        self.cache = {}

    def __call__(self, *args, **kwargs) -> Any:
        return self._call((), args, kwargs)

    def __get__(self, instance: Any, owner: type = None) -> Callable:
        if instance is None:
            return self
        return functools.partial(self._call_with_receiver, (instance,))

    def _call_with_receiver(self, receiver_args: tuple, /, *args, **kwargs) -> Any:
        return self._call(receiver_args, args, kwargs)

    def _call(self, receiver_args: tuple, args: tuple, kwargs: Dict[str, Any]) -> Any:
        key = make_cache_key(args, kwargs)
        # Explicit membership test, falsy results are cached too.
        if key not in self.cache:
            logger.debug(f'Computing {getattr(self.func, "__qualname__", repr(self.func))} '
                         f'for {key}')
            self.cache[key] = self.func(*receiver_args, *args, **kwargs)
        return self.cache[key]


def memoize(func: Callable) -> Memoized:
    '''
    Remember the results of `func` for every distinct argument list it was called with.

    Arguments must be primitives, or lists, tuples and dicts of primitives. See `make_cache_key`
    for how argument lists are compared. The cache is available as `.cache`.
    '''
    return Memoized(func)
