"""
broping schema definitions

Resource schemas (``User`` and ``Bar``) describe the documents
kept in the store, while the envelope schemas describe the shape
of every response body. This package also contains the ``config``
module, but it's not exported by default, since it's currently
only used internally.
"""

from .bases import *
from .envelope import *
