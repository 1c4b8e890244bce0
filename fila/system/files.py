"""
# File system entities.

# An &Entity identifies a location by its canonical component sequence. Entities
# are immutable values: navigation methods construct new entities through the
# factory of their &.context.Context, so every entity is canonical by construction.
# Storage operations are delegated to the context's backend.

# [ Elements ]
# /new/
	# Construct an &Entity using the registered default context.
# /from_path/
	# Return an &Entity for a string, or the given &Entity as-is.
"""
from collections.abc import Sequence
from typing import Optional

from .. import route
from . import environment
from .abstract import WriteOptions, Callback, Cancel
from .context import Context

class Entity(object):
	"""
	# Identity of a file system location.

	# Two entities are equal when their component sequences are equal. The root is
	# represented by a sequence holding the separator alone.

	# [ Properties ]
	# /context/
		# The &.context.Context that constructed the entity.
	# /components/
		# The canonical sequence of path components.
	"""
	__slots__ = ('context', 'components',)

	context: Context
	components: Sequence[str]

	def __init__(self, context:Context, components:Sequence[str]):
		init = object.__setattr__
		init(self, 'context', context)
		init(self, 'components', tuple(components))

	def __setattr__(self, name, value):
		raise AttributeError("entities are immutable")

	def __eq__(self, operand):
		if not isinstance(operand, Entity):
			return NotImplemented
		return self.components == operand.components

	def __hash__(self):
		return hash(self.components)

	def __repr__(self):
		return "(file@%r)" %(self.path,)

	def __str__(self):
		return self.path

	def __fspath__(self) -> str:
		return self.path

	def __truediv__(self, component:str) -> 'Entity':
		return self.down(component)

	@property
	def is_root(self) -> bool:
		"""
		# Whether the entity identifies the root directory.
		"""
		return self.components == (self.context.separator,)

	@property
	def name(self) -> str:
		"""
		# The final component of the path; empty for the root.
		"""
		if self.is_root:
			return ''
		return self.components[-1]

	@property
	def extension(self) -> str:
		"""
		# The portion of &name starting at its last `.`, inclusive.
		# Empty when the name has no `.`.
		"""
		name = self.name
		p = name.rfind('.')
		if p == -1:
			return ''

		return name[p:]

	@property
	def path(self) -> str:
		"""
		# The fully qualified path string.
		"""
		s = self.context.separator
		if self.is_root:
			return s

		return s + route.join(*self.components, separator=s)

	def up(self, count:int=1) -> 'Entity':
		"""
		# The entity &count levels above &self.

		# Entities with fewer than two components, including the root, are
		# returned unchanged.
		"""
		if count < 1 or len(self.components) < 2:
			return self

		parent = self.components[:-count]
		if not parent:
			return self.context.root

		return self.context.anchor(self.context.separator, *parent)

	def down(self, *components:str) -> 'Entity':
		"""
		# The entity identified by &components relative to &self.

		# Components may contain separators and navigation components.
		# Whether &self is a directory is not checked.
		"""
		return self.context.anchor(self.path, *components)

	def relative(self, target) -> str:
		"""
		# The relative path string leading from &self to &target.
		"""
		ctx = self.context
		return route.relative(self, target, cwd=ctx.cwd.path, separator=ctx.separator)

	async def upscan(self, name:str) -> Optional['Entity']:
		"""
		# Search &self and its ancestry for the nearest directory containing &name.

		# The scan stops after checking the first one-component ancestor, or the
		# root when &self is the root. Returns the entity of the found file, or
		# &None when no checked directory contains it. Backend errors raised
		# while checking propagate.
		"""
		ancestor = self
		while True:
			candidate = ancestor.down(name)
			if await candidate.exists():
				return candidate

			if len(ancestor.components) < 2:
				return None
			ancestor = ancestor.up()

	async def get_directory(self) -> 'Entity':
		"""
		# &self when it is a directory, otherwise its containing directory.
		"""
		if await self.is_directory():
			return self
		return self.up()

	# Backend delegation.

	async def read_text(self) -> str:
		return await self.context.backend.read_text(self)

	async def read_binary(self) -> bytes:
		return await self.context.backend.read_binary(self)

	async def read_directory(self) -> Sequence['Entity']:
		return await self.context.backend.read_directory(self)

	async def write_text(self, text:str, options:Optional[WriteOptions]=None, *, append:bool=False) -> None:
		"""
		# Store &text in the file; appended when &append or `options.append` is &True.
		"""
		if options is None:
			options = WriteOptions(append=append)
		return await self.context.backend.write_text(self, text, options)

	async def write_binary(self, data:bytes) -> None:
		return await self.context.backend.write_binary(self, data)

	async def write_directory(self) -> None:
		return await self.context.backend.write_directory(self)

	async def write_symlink(self, at:'Entity') -> None:
		"""
		# Create a symbolic link at &at that refers to &self.
		"""
		return await self.context.backend.write_symlink(self, at)

	async def delete(self) -> Optional[OSError]:
		"""
		# Remove the file or directory.

		# Returns the error that prevented the deletion rather than raising it.
		"""
		return await self.context.backend.delete(self)

	async def move(self, target:'Entity') -> None:
		return await self.context.backend.move(self, target)

	async def copy(self, target:'Entity') -> None:
		"""
		# Copy the file or directory to &target creating any necessary directories.
		"""
		return await self.context.backend.copy(self, target)

	def watch(self, *args, recursive:bool=False) -> Cancel:
		"""
		# Watch for changes to the file or directory.

		#!/pl/python
			cancel = entity.watch(callback)
			cancel = entity.watch('recursive', callback)

		# The callback is invoked with an &Event and the affected &Entity.
		# Returns a callable that terminates the watch.
		"""
		if args[:1] == ('recursive',):
			recursive = True
			args = args[1:]

		if len(args) != 1 or not callable(args[0]):
			raise TypeError("watch requires a single callback, optionally preceded by 'recursive'")

		callback:Callback = args[0]
		return self.context.backend.watch(self, recursive, callback)

	async def rename(self, name:str) -> None:
		return await self.context.backend.rename(self, name)

	async def exists(self) -> bool:
		return await self.context.backend.exists(self)

	async def get_size(self) -> int:
		return await self.context.backend.get_size(self)

	async def get_modified_ticks(self) -> int:
		return await self.context.backend.get_modified_ticks(self)

	async def get_created_ticks(self) -> int:
		return await self.context.backend.get_created_ticks(self)

	async def get_accessed_ticks(self) -> int:
		return await self.context.backend.get_accessed_ticks(self)

	async def is_directory(self) -> bool:
		return await self.context.backend.is_directory(self)

def new(*fragments:str, context:Optional[Context]=None) -> Entity:
	"""
	# Construct an &Entity from &fragments using &context or the registered default.
	"""
	if context is None:
		context = environment.default()
	return context.new(*fragments)

def from_path(via, *, context:Optional[Context]=None) -> Entity:
	if context is None:
		context = environment.default()
	return context.from_path(via)
