"""
# Path identity and path algebra for cross-backend file system access.

# [ Packages ]
# /&.route/
	# String path algebra: &.route.normalize, &.route.join, &.route.resolve, &.route.relative.
# /&.system/
	# &.system.files.Entity, the process context, and the storage backends.
"""
