"""
# Path algebra: normalization, joining, resolution, and relative path construction.

# The functions are pure and stateless; they never consult a file system and are
# safe to call concurrently. See &.core for the implementations.
"""
from . import core

normalize = core.normalize
join = core.join
resolve = core.resolve
relative = core.relative
split = core.split
is_absolute = core.is_absolute
