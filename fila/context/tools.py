"""
# Function tools used by local packages.
"""
import functools
import dataclasses

partial = functools.partial

# Immutable dataclass constructor used for records.
record = struct = partial(dataclasses.dataclass, slots=True, eq=True, frozen=True)
