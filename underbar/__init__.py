# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

'''Small helpers for merging objects, decorating functions and shuffling sequences.'''

import collections

from .objecting import extend, defaults
from .decorating import once, memoize
from .delaying import delay
from .shuffling import shuffle

__VersionInfo = collections.namedtuple('VersionInfo',
                                       ('major', 'minor', 'micro'))

__version__ = '0.1.0'
__version_info__ = __VersionInfo(*(map(int, __version__.split('.'))))


del collections, __VersionInfo # Avoid polluting the namespace
