# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''Helpers for merging mappings into each other.'''

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, TypeVar

_MutableMappingT = TypeVar('_MutableMappingT', bound=MutableMapping)


def extend(target: _MutableMappingT, /, *sources: Mapping[str, Any]) -> _MutableMappingT:
    '''
    Copy all the items of `sources` into `target`, and return `target`.

    Sources are applied in order, so when the same key appears in several of them, the last one
    wins. Existing keys of `target` are overwritten.

        >>> extend({'a': 1}, {'b': 2}, {'a': 3})
        {'a': 3, 'b': 2}

    '''
    for source in sources:
        for key, value in source.items():
            target[key] = value
    return target


def defaults(target: _MutableMappingT, /, *sources: Mapping[str, Any]) -> _MutableMappingT:
    '''
    Like `extend`, but never overwrite a key that already exists in `target`.

    The check happens per assignment, so a key supplied by an earlier source can't be overwritten
    by a later one either.

        >>> defaults({'a': 1}, {'a': 9, 'b': 2}, {'b': 3})
        {'a': 1, 'b': 2}

    '''
    for source in sources:
        for key, value in source.items():
            if key not in target:
                target[key] = value
    return target
