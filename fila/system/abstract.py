"""
# Capability interface implemented by storage backends.

# A &Backend performs the I/O on behalf of &.files.Entity instances. Entities hold
# a reference to the backend of their &.context.Context and delegate every
# operation that touches storage; the path algebra itself never performs I/O.

# [ Errors ]

# Operations raise the builtin &OSError family when they fail. &Backend.delete
# is the exception: it returns the &OSError instance describing why the deletion
# could not complete, or &None when it succeeded.

# [ Events ]

# Watch callbacks receive an &Event and the &.files.Entity that it concerns.
"""
import enum
from abc import abstractmethod
from collections.abc import Callable, Sequence
from typing import Protocol, Optional, TYPE_CHECKING

from ..context.tools import record

if TYPE_CHECKING:
	from .files import Entity

class Event(enum.Enum):
	"""
	# Kinds of changes reported by &Backend.watch.
	"""
	create = 'create'
	modify = 'modify'
	delete = 'delete'

@record
class WriteOptions(object):
	"""
	# Options recognized by &Backend.write_text.

	# [ Properties ]
	# /append/
		# Add the text to the end of existing content instead of replacing it.
	"""
	append: bool = False

Callback = Callable[[Event, 'Entity'], None]
Cancel = Callable[[], None]

class Backend(Protocol):
	"""
	# Storage operations addressed by &.files.Entity instances.

	# Every operation except &watch is a coroutine; the caller is suspended while
	# the backend performs the I/O.
	"""

	@abstractmethod
	async def read_text(self, entity:'Entity') -> str:
		"""
		# Retrieve the entire content of the data file as a &str.
		"""
		raise NotImplementedError

	@abstractmethod
	async def read_binary(self, entity:'Entity') -> bytes:
		"""
		# Retrieve the entire content of the data file.
		"""
		raise NotImplementedError

	@abstractmethod
	async def read_directory(self, entity:'Entity') -> Sequence['Entity']:
		"""
		# The entities contained by the directory, ordered by name.
		"""
		raise NotImplementedError

	@abstractmethod
	async def write_text(self, entity:'Entity', text:str, options:WriteOptions) -> None:
		"""
		# Store &text in the data file, replacing or appending per &options.
		# Leading directories are created as needed.
		"""
		raise NotImplementedError

	@abstractmethod
	async def write_binary(self, entity:'Entity', data:bytes) -> None:
		"""
		# Replace the content of the data file with &data.
		# Leading directories are created as needed.
		"""
		raise NotImplementedError

	@abstractmethod
	async def write_directory(self, entity:'Entity') -> None:
		"""
		# Create the directory and any missing leading directories.
		"""
		raise NotImplementedError

	@abstractmethod
	async def write_symlink(self, entity:'Entity', at:'Entity') -> None:
		"""
		# Create a symbolic link at &at that refers to &entity.
		"""
		raise NotImplementedError

	@abstractmethod
	async def delete(self, entity:'Entity') -> Optional[OSError]:
		"""
		# Remove the file or directory, recursively.

		# Returns the error that prevented the deletion instead of raising it.
		"""
		raise NotImplementedError

	@abstractmethod
	async def move(self, entity:'Entity', target:'Entity') -> None:
		"""
		# Relocate the file or directory to &target, creating leading directories.
		"""
		raise NotImplementedError

	@abstractmethod
	async def copy(self, entity:'Entity', target:'Entity') -> None:
		"""
		# Duplicate the file or directory at &target, creating leading directories.
		"""
		raise NotImplementedError

	@abstractmethod
	def watch(self, entity:'Entity', recursive:bool, callback:Callback) -> Cancel:
		"""
		# Report changes to &entity, or to the files it contains, through &callback.

		# When &recursive is &False, only &entity and its immediate children are
		# observed. Returns a callable that terminates the watch.
		"""
		raise NotImplementedError

	@abstractmethod
	async def rename(self, entity:'Entity', name:str) -> None:
		"""
		# Change the final component of the file's path to &name.
		"""
		raise NotImplementedError

	@abstractmethod
	async def exists(self, entity:'Entity') -> bool:
		raise NotImplementedError

	@abstractmethod
	async def get_size(self, entity:'Entity') -> int:
		"""
		# Number of bytes held by the data file.
		"""
		raise NotImplementedError

	@abstractmethod
	async def get_modified_ticks(self, entity:'Entity') -> int:
		"""
		# Time of last modification in milliseconds since the epoch.
		"""
		raise NotImplementedError

	@abstractmethod
	async def get_created_ticks(self, entity:'Entity') -> int:
		raise NotImplementedError

	@abstractmethod
	async def get_accessed_ticks(self, entity:'Entity') -> int:
		raise NotImplementedError

	@abstractmethod
	async def is_directory(self, entity:'Entity') -> bool:
		raise NotImplementedError
