"""
# Memory-backed storage.

# &Backend keeps a tree of &Node records keyed by entity component sequences.
# It implements the complete capability surface of &.abstract.Backend, including
# symbolic links and watch notifications, and is suitable for tests and for
# environments without a writable file system.

# Watch callbacks are dispatched synchronously by the operation that caused the
# change, after the change has been applied.
"""
import time
import errno
import logging
import threading
from collections.abc import Sequence
from typing import Optional

from . import abstract
from .abstract import Event, WriteOptions, Callback, Cancel

logger = logging.getLogger(__name__)

Key = tuple[str, ...]

def ticks() -> int:
	return time.time_ns() // 1_000_000

class Node(object):
	"""
	# Stored file.

	# [ Properties ]
	# /type/
		# `'data'`, `'directory'`, or `'link'`.
	# /data/
		# Content of a data file.
	# /target/
		# Key of the file referred to by a link.
	"""
	__slots__ = ('type', 'data', 'target', 'created', 'modified', 'accessed')

	def __init__(self, type:str, data:bytes=b'', target:Optional[Key]=None):
		self.type = type
		self.data = data
		self.target = target
		self.created = self.modified = self.accessed = ticks()

	def clone(self) -> 'Node':
		return self.__class__(self.type, self.data, self.target)

class Backend(abstract.Backend):
	"""
	# Storage held in process memory.
	"""

	#: Maximum number of links followed while resolving a path.
	link_limit = 32

	def __init__(self):
		self._nodes:dict[Key, Node] = {}
		self._watches:list[tuple[Key, bool, Callback, object]] = []
		self._lock = threading.RLock()

	def __repr__(self):
		return "%s.%s()" %(__name__, self.__class__.__name__)

	# Key management.

	@staticmethod
	def _key(entity) -> Key:
		return tuple(entity.components)

	@staticmethod
	def _root(entity) -> Key:
		return (entity.context.separator,)

	def _parent(self, key:Key, root:Key) -> Key:
		return key[:-1] or root

	def _contains(self, key:Key, subject:Key, root:Key) -> bool:
		# Whether &subject is &key or one of its descendants.
		if key == root:
			return True
		return subject[:len(key)] == key

	def _node(self, key:Key, root:Key) -> Optional[Node]:
		if key == root:
			# The root always exists.
			return self._nodes.setdefault(root, Node('directory'))
		return self._nodes.get(key)

	def _real(self, key:Key, root:Key, depth:int=0) -> Key:
		# Substitute links in &key with their targets.
		for i in range(1, len(key) + 1):
			node = self._nodes.get(key[:i])
			if node is not None and node.type == 'link':
				if depth >= self.link_limit:
					raise OSError(errno.ELOOP, "too many levels of symbolic links", root[0] + root[0].join(key))
				target = node.target if node.target != root else ()
				return self._real(target + key[i:] or root, root, depth + 1)

		return key

	def _leading(self, key:Key, root:Key) -> Key:
		# Substitute links in the leading components of &key; the final component is kept.
		if len(key) < 2:
			return key

		parent = self._real(key[:-1], root)
		return (parent if parent != root else ()) + key[-1:]

	def _lookup(self, entity, type:Optional[str]=None) -> Node:
		root = self._root(entity)
		key = self._real(self._key(entity), root)
		node = self._node(key, root)
		if node is None:
			raise FileNotFoundError(errno.ENOENT, "no such file or directory", entity.path)

		if type == 'data' and node.type == 'directory':
			raise IsADirectoryError(errno.EISDIR, "file is a directory", entity.path)
		elif type == 'directory' and node.type != 'directory':
			raise NotADirectoryError(errno.ENOTDIR, "file is not a directory", entity.path)

		return node

	def _allocate(self, key:Key, root:Key, events:list) -> None:
		# Create the missing leading directories of &key.
		for i in range(1, len(key)):
			prefix = self._real(key[:i], root)
			node = self._node(prefix, root)
			if node is None:
				self._nodes[prefix] = Node('directory')
				events.append((Event.create, prefix))
			elif node.type != 'directory':
				raise NotADirectoryError(errno.ENOTDIR, "leading path is not a directory", root[0] + root[0].join(prefix))

	def _subtree(self, key:Key, root:Key) -> Sequence[Key]:
		# &key and its descendants, deepest first.
		keys = [x for x in self._nodes if x != root and self._contains(key, x, root)]
		keys.sort(key=len, reverse=True)
		return keys

	# Notification.

	def _dispatch(self, events, context) -> None:
		root = (context.separator,)
		for event, key in events:
			parent = self._parent(key, root)
			for watched, recursive, callback, wcontext in list(self._watches):
				if key == watched or parent == watched or (recursive and self._contains(watched, key, root)):
					callback(event, wcontext.anchor(context.separator, *key))

	def watch(self, entity, recursive:bool, callback:Callback) -> Cancel:
		record = (self._key(entity), recursive, callback, entity.context)
		with self._lock:
			self._watches.append(record)
		logger.debug("watching %s (recursive=%r)", entity.path, recursive)

		def cancel(watches=self._watches):
			with self._lock:
				if record in watches:
					watches.remove(record)
					logger.debug("cancelled watch of %s", entity.path)
		return cancel

	# Reads.

	async def read_binary(self, entity) -> bytes:
		with self._lock:
			node = self._lookup(entity, 'data')
			node.accessed = ticks()
			return node.data

	async def read_text(self, entity) -> str:
		return (await self.read_binary(entity)).decode('utf-8')

	async def read_directory(self, entity) -> Sequence:
		root = self._root(entity)
		with self._lock:
			self._lookup(entity, 'directory')
			key = self._real(self._key(entity), root)
			names = sorted(x[-1] for x in self._nodes if x != root and self._parent(x, root) == key)
		return [entity.down(x) for x in names]

	async def exists(self, entity) -> bool:
		with self._lock:
			try:
				self._lookup(entity)
			except FileNotFoundError:
				return False
		return True

	async def is_directory(self, entity) -> bool:
		with self._lock:
			try:
				return self._lookup(entity).type == 'directory'
			except FileNotFoundError:
				return False

	async def get_size(self, entity) -> int:
		with self._lock:
			node = self._lookup(entity)
			return len(node.data) if node.type == 'data' else 0

	async def get_modified_ticks(self, entity) -> int:
		with self._lock:
			return self._lookup(entity).modified

	async def get_created_ticks(self, entity) -> int:
		with self._lock:
			return self._lookup(entity).created

	async def get_accessed_ticks(self, entity) -> int:
		with self._lock:
			return self._lookup(entity).accessed

	# Writes.

	def _store(self, entity, data:bytes, append:bool=False) -> None:
		root = self._root(entity)
		events = []
		with self._lock:
			key = self._real(self._key(entity), root)
			if key == root:
				raise IsADirectoryError(errno.EISDIR, "file is a directory", entity.path)

			self._allocate(key, root, events)
			node = self._nodes.get(key)
			if node is None:
				self._nodes[key] = Node('data', data)
				events.append((Event.create, key))
			elif node.type == 'directory':
				raise IsADirectoryError(errno.EISDIR, "file is a directory", entity.path)
			else:
				node.data = node.data + data if append else data
				node.modified = ticks()
				events.append((Event.modify, key))

		logger.debug("stored %d bytes at %s", len(data), entity.path)
		self._dispatch(events, entity.context)

	async def write_text(self, entity, text:str, options:WriteOptions) -> None:
		self._store(entity, text.encode('utf-8'), options.append)

	async def write_binary(self, entity, data:bytes) -> None:
		self._store(entity, bytes(data))

	async def write_directory(self, entity) -> None:
		root = self._root(entity)
		events = []
		with self._lock:
			key = self._real(self._key(entity), root)
			node = self._node(key, root)
			if node is not None:
				if node.type != 'directory':
					raise FileExistsError(errno.EEXIST, "file exists", entity.path)
				return

			self._allocate(key, root, events)
			self._nodes[key] = Node('directory')
			events.append((Event.create, key))

		self._dispatch(events, entity.context)

	async def write_symlink(self, entity, at) -> None:
		root = self._root(at)
		events = []
		with self._lock:
			key = self._leading(self._key(at), root)
			if key == root:
				raise FileExistsError(errno.EEXIST, "file exists", at.path)

			self._allocate(key, root, events)
			existed = key in self._nodes
			for x in self._subtree(key, root):
				del self._nodes[x]

			self._nodes[key] = Node('link', target=self._key(entity))
			events.append((Event.modify if existed else Event.create, key))

		self._dispatch(events, at.context)

	async def delete(self, entity) -> Optional[OSError]:
		root = self._root(entity)
		key = self._key(entity)
		if key == root:
			return PermissionError(errno.EPERM, "the root cannot be deleted", entity.path)

		with self._lock:
			try:
				key = self._leading(key, root)
			except OSError as err:
				return err

			removed = self._subtree(key, root)
			for x in removed:
				del self._nodes[x]

		logger.debug("deleted %d files at %s", len(removed), entity.path)
		self._dispatch([(Event.delete, x) for x in removed], entity.context)

	def _transfer(self, entity, target, remove:bool) -> None:
		root = self._root(entity)
		events = []
		with self._lock:
			key = self._key(entity)
			source = self._leading(key, root) if remove else self._real(key, root)
			destination = self._leading(self._key(target), root)

			if self._node(source, root) is None:
				raise FileNotFoundError(errno.ENOENT, "no such file or directory", entity.path)
			if source == destination:
				return
			if self._contains(source, destination, root):
				raise OSError(errno.EINVAL, "cannot transfer a directory into itself", target.path)
			if self._contains(destination, source, root):
				raise OSError(errno.ENOTEMPTY, "target contains the transferred file", target.path)

			# Replace the existing target.
			for x in self._subtree(destination, root):
				del self._nodes[x]
				events.append((Event.delete, x))

			self._allocate(destination, root, events)
			moved = self._subtree(source, root)
			moved.reverse()
			for x in moved:
				y = destination + x[len(source):]
				if remove:
					self._nodes[y] = self._nodes.pop(x)
					events.append((Event.delete, x))
				else:
					self._nodes[y] = self._nodes[x].clone()
				events.append((Event.create, y))

		self._dispatch(events, entity.context)

	async def move(self, entity, target) -> None:
		self._transfer(entity, target, True)

	async def copy(self, entity, target) -> None:
		self._transfer(entity, target, False)

	async def rename(self, entity, name:str) -> None:
		self._transfer(entity, entity.context.anchor(entity.path, '..', name), True)
