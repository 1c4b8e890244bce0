#: Project name.
name = 'fila'
abstract = 'canonical path identity and path algebra over interchangeable storage backends'
icon = '📁'

#: Version tuple: (major, minor, patch)
version_info = (0, 1, 0)

#: The version string.
version = '.'.join(map(str, version_info))
