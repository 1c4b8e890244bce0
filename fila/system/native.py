"""
# Operating system storage.

# &Backend performs I/O with &os and &shutil. Blocking calls are executed in worker
# threads using &asyncio.to_thread so that the event loop is not suspended.

# Watching is implemented by &Poller, a thread that periodically compares
# snapshots of file status records and reports the differences.
"""
import os
import stat
import errno
import shutil
import asyncio
import logging
import threading
from collections.abc import Sequence, Mapping
from typing import Optional

from .. import route
from . import abstract
from .abstract import Event, WriteOptions, Callback, Cancel

logger = logging.getLogger(__name__)

Snapshot = Mapping[str, tuple[int, int, int]]

class Poller(threading.Thread):
	"""
	# Thread reporting changes to a file or directory by comparing snapshots.

	# [ Properties ]
	# /entity/
		# The watched entity.
	# /recursive/
		# Whether the files of nested directories are observed.
	# /interval/
		# Seconds between snapshots.
	"""

	def __init__(self, entity, recursive:bool, callback:Callback, interval:float):
		super().__init__(name=f"fila-watch:{entity.path}", daemon=True)
		self.entity = entity
		self.recursive = recursive
		self.callback = callback
		self.interval = interval
		self.terminated = threading.Event()
		self.previous = self.snapshot()

	def snapshot(self, *, lstat=os.lstat, scandir=os.scandir) -> Snapshot:
		"""
		# Status of the watched file and the files contained by it.
		"""
		entries = {}
		origin = self.entity.path

		try:
			st = lstat(origin)
		except FileNotFoundError:
			return entries

		entries[origin] = (st.st_mode, st.st_mtime_ns, st.st_size)
		if not stat.S_ISDIR(st.st_mode):
			return entries

		queue = [origin]
		while queue:
			try:
				scan = scandir(queue.pop())
			except (FileNotFoundError, NotADirectoryError):
				# Concurrently removed.
				continue

			with scan:
				for de in scan:
					try:
						st = de.stat(follow_symlinks=False)
					except FileNotFoundError:
						continue

					entries[de.path] = (st.st_mode, st.st_mtime_ns, st.st_size)
					if self.recursive and stat.S_ISDIR(st.st_mode):
						queue.append(de.path)

		return entries

	def emit(self, event:Event, path:str) -> None:
		try:
			self.callback(event, self.entity.context.anchor(path))
		except Exception:
			logger.exception("watch callback failed for %s event at %s", event.value, path)

	def run(self):
		logger.debug("watching %s (recursive=%r)", self.entity.path, self.recursive)

		while not self.terminated.wait(self.interval):
			current = self.snapshot()
			previous = self.previous
			self.previous = current

			for path in sorted(current.keys() - previous.keys()):
				self.emit(Event.create, path)
			for path in sorted(current.keys() & previous.keys()):
				if current[path] != previous[path]:
					self.emit(Event.modify, path)
			for path in sorted(previous.keys() - current.keys(), reverse=True):
				self.emit(Event.delete, path)

		logger.debug("cancelled watch of %s", self.entity.path)

	def cancel(self):
		self.terminated.set()
		if threading.current_thread() is not self:
			self.join()

class Backend(abstract.Backend):
	"""
	# Storage provided by the operating system's file systems.

	# [ Properties ]
	# /interval/
		# Seconds between the snapshots taken by watches.
	"""

	@staticmethod
	def _container(entity):
		# The directory holding &entity; the root for one-component entities.
		return entity.context.anchor(entity.path, '..')

	def __init__(self, interval:float=0.5):
		self.interval = interval

	def __repr__(self):
		return "%s.%s(interval=%r)" %(__name__, self.__class__.__name__, self.interval)

	@classmethod
	def _alloc(Class, entity, *, makedirs=os.makedirs):
		# Create the leading directories of &entity.
		if not entity.is_root:
			makedirs(Class._container(entity).path, exist_ok=True)

	# Reads.

	async def read_text(self, entity) -> str:
		def read():
			with open(entity.path, 'r', encoding='utf-8') as f:
				return f.read()
		return await asyncio.to_thread(read)

	async def read_binary(self, entity) -> bytes:
		def read():
			with open(entity.path, 'rb') as f:
				return f.read()
		return await asyncio.to_thread(read)

	async def read_directory(self, entity, *, listdir=os.listdir) -> Sequence:
		names = await asyncio.to_thread(listdir, entity.path)
		return [entity.down(x) for x in sorted(names)]

	@staticmethod
	def _status(entity, *, stat=os.stat):
		# Status of the file referred to by &entity; &None when it is absent.
		try:
			return stat(entity.path)
		except (FileNotFoundError, NotADirectoryError):
			return None

	async def exists(self, entity) -> bool:
		"""
		# Whether the file exists. Links to absent files are reported as absent;
		# other failures, such as link loops, are raised.
		"""
		return (await asyncio.to_thread(self._status, entity)) is not None

	async def is_directory(self, entity) -> bool:
		st = await asyncio.to_thread(self._status, entity)
		return st is not None and stat.S_ISDIR(st.st_mode)

	async def get_size(self, entity, *, stat=os.stat) -> int:
		return (await asyncio.to_thread(stat, entity.path)).st_size

	async def get_modified_ticks(self, entity, *, stat=os.stat) -> int:
		return (await asyncio.to_thread(stat, entity.path)).st_mtime_ns // 1_000_000

	async def get_created_ticks(self, entity, *, stat=os.stat) -> int:
		st = await asyncio.to_thread(stat, entity.path)
		try:
			return int(st.st_birthtime * 1000)
		except AttributeError:
			# Not available on all systems.
			return st.st_ctime_ns // 1_000_000

	async def get_accessed_ticks(self, entity, *, stat=os.stat) -> int:
		return (await asyncio.to_thread(stat, entity.path)).st_atime_ns // 1_000_000

	# Writes.

	async def write_text(self, entity, text:str, options:WriteOptions) -> None:
		def write():
			self._alloc(entity)
			with open(entity.path, 'a' if options.append else 'w', encoding='utf-8') as f:
				f.write(text)
		await asyncio.to_thread(write)

	async def write_binary(self, entity, data:bytes) -> None:
		def write():
			self._alloc(entity)
			with open(entity.path, 'wb') as f:
				f.write(data)
		await asyncio.to_thread(write)

	async def write_directory(self, entity, *, makedirs=os.makedirs) -> None:
		await asyncio.to_thread(makedirs, entity.path, exist_ok=True)

	async def write_symlink(self, entity, at, *, link=os.symlink) -> None:
		"""
		# Create a relative symbolic link at &at referring to &entity.
		"""
		target = route.relative(self._container(at).path, entity.path) or '.'

		def write():
			self._alloc(at)
			try:
				link(target, at.path)
			except FileExistsError:
				self._void(at)
				link(target, at.path)
		await asyncio.to_thread(write)

	@staticmethod
	def _void(entity, *, lstat=os.lstat, rmtree=shutil.rmtree, remove=os.remove):
		fp = entity.path
		try:
			mode = lstat(fp).st_mode
		except FileNotFoundError:
			# Work complete.
			return

		if stat.S_ISDIR(mode):
			rmtree(fp)
		else:
			try:
				remove(fp)
			except FileNotFoundError:
				pass

	async def delete(self, entity) -> Optional[OSError]:
		try:
			await asyncio.to_thread(self._void, entity)
		except OSError as err:
			logger.debug("deletion of %s failed: %s", entity.path, err)
			return err

		logger.debug("deleted %s", entity.path)
		return None

	@staticmethod
	def _transferable(entity, target, *, lstat=os.lstat):
		# Check that replacing &target cannot destroy &entity.
		lstat(entity.path)

		source = entity.components
		destination = target.components
		if destination[:len(source)] == source:
			raise OSError(errno.EINVAL, "cannot transfer a directory into itself", target.path)
		if target.is_root or source[:len(destination)] == destination:
			raise OSError(errno.ENOTEMPTY, "target contains the transferred file", target.path)

	async def move(self, entity, target, *, move=shutil.move) -> None:
		if entity == target:
			return

		def transfer():
			self._transferable(entity, target)
			self._alloc(target)
			# Replace the existing target.
			self._void(target)
			move(entity.path, target.path)
		await asyncio.to_thread(transfer)

	async def copy(self, entity, target, *, copytree=shutil.copytree, copyfile=shutil.copy2) -> None:
		if entity == target:
			return

		def transfer():
			self._transferable(entity, target)
			self._alloc(target)
			directory = os.path.isdir(entity.path)
			# Removal for replacement.
			self._void(target)
			if directory:
				copytree(entity.path, target.path, symlinks=True, copy_function=copyfile)
			else:
				copyfile(entity.path, target.path)
		await asyncio.to_thread(transfer)

	async def rename(self, entity, name:str, *, rename=os.rename) -> None:
		sibling = entity.context.anchor(entity.path, '..', name)
		await asyncio.to_thread(rename, entity.path, sibling.path)

	def watch(self, entity, recursive:bool, callback:Callback) -> Cancel:
		poller = Poller(entity, recursive, callback, self.interval)
		poller.start()
		return poller.cancel
