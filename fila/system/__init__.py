"""
# File system entities, configuration contexts, and storage backends.

# [ Modules ]
# /&.files/
	# &.files.Entity and the module level factories.
# /&.context/
	# &.context.Context, the immutable configuration used by the factory.
# /&.environment/
	# Registration of the process default context.
# /&.abstract/
	# The backend capability interface, &.abstract.Event, and &.abstract.WriteOptions.
# /&.memory/
	# Memory-backed storage.
# /&.native/
	# Operating system storage.
"""
