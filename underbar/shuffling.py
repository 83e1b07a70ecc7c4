# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

from __future__ import annotations

import random
from typing import Iterable, List, Optional, TypeVar

_T = TypeVar('_T')


def shuffle(sequence: Iterable[_T], *,
            random_generator: Optional[random.Random] = None) -> List[_T]:
    '''
    Return a new list with the items of `sequence` in a random order.

    Uses the Fisher-Yates shuffle on a copy, so `sequence` itself is left alone. Pass a
    `random.Random` as `random_generator` to get reproducible results.
    '''
    if random_generator is None:
        random_generator = random
    shuffled = list(sequence)
    for index in range(len(shuffled) - 1, 0, -1):
        other_index = random_generator.randrange(index + 1)
        shuffled[index], shuffled[other_index] = shuffled[other_index], shuffled[index]
    return shuffled
