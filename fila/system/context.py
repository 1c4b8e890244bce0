"""
# Configuration used to construct &.files.Entity instances.

# A &Context binds a backend to the separator, working directory, and temporary
# directory that entities are resolved against. Contexts are immutable once
# built; the only state they acquire afterwards are the lazily resolved
# &Context.cwd and &Context.temporary entities, which are computed once under a lock.

# The process-wide default context is managed by &.environment.
"""
import threading
from collections.abc import Mapping

from .. import route
from .abstract import Backend

#: Separators that may be configured for a &Context.
separators = ('/', '\\')

class ConfigurationError(RuntimeError):
	"""
	# Raised when entities are requested without a usable configuration.

	# Configuration errors are fatal; they designate a defect in the
	# initialization of the process rather than a recoverable condition.
	"""

class Context(object):
	"""
	# Immutable set of defaults used by the entity factory.

	# [ Properties ]
	# /backend/
		# The &Backend performing I/O for entities made by this context.
	# /separator/
		# The canonical separator, `/` or `\\`.
	# /cwd/
		# The &.files.Entity of the working directory.
	# /temporary/
		# The &.files.Entity of the temporary directory.
	"""
	__slots__ = ('backend', 'separator', 'cwd_string', 'temporary_string', '_resolved', '_lock')

	backend: Backend
	separator: str
	cwd_string: str
	temporary_string: str
	_resolved: Mapping[str, object]

	def __init__(self, backend:Backend, separator:str='/', cwd:str='/', temporary:str='/tmp'):
		if backend is None:
			raise ConfigurationError("backend not set")
		if separator not in separators:
			raise ConfigurationError(f"unsupported path separator: {separator!r}")
		if not cwd:
			raise ConfigurationError("working directory path is empty")
		if not temporary:
			raise ConfigurationError("temporary directory path is empty")

		init = object.__setattr__
		init(self, 'backend', backend)
		init(self, 'separator', separator)
		init(self, 'cwd_string', cwd)
		init(self, 'temporary_string', temporary)
		init(self, '_resolved', {})
		init(self, '_lock', threading.Lock())

	def __setattr__(self, name, value):
		raise AttributeError(f"{self.__class__.__name__} instances are immutable")

	def __repr__(self):
		return "%s(%r, %r, cwd=%r, temporary=%r)" %(
			self.__class__.__name__,
			self.backend, self.separator,
			self.cwd_string, self.temporary_string,
		)

	def _memoize(self, key:str, path:str):
		try:
			return self._resolved[key]
		except KeyError:
			pass

		with self._lock:
			# Concurrent callers observe the first resolution.
			if key not in self._resolved:
				self._resolved[key] = self.anchor(path)
			return self._resolved[key]

	@property
	def cwd(self):
		return self._memoize('cwd', self.cwd_string)

	@property
	def temporary(self):
		return self._memoize('temporary', self.temporary_string)

	@property
	def root(self):
		from .files import Entity
		return Entity(self, (self.separator,))

	def anchor(self, *fragments:str):
		"""
		# Construct an entity from &fragments without consulting the working directory.

		# Fragments may contain embedded separators; both `/` and &separator are
		# recognized. The joined form is normalized as an absolute path, so navigation
		# above the root is discarded, and split into components.
		"""
		from .files import Entity

		s = self.separator
		if s != '/':
			fragments = tuple(x.replace('/', s) for x in fragments)

		canonical = route.join(s, *fragments, separator=s)
		components = route.split(canonical, s)

		if not components or components == (s,):
			return self.root

		return Entity(self, components)

	def new(self, *fragments:str):
		"""
		# Construct an entity from the given path &fragments.

		# Empty fragments are ignored. Unless the first fragment is absolute or
		# starts with a `.`, the path of &cwd is prepended. Fragments starting
		# with `.` are resolved against the literal string and do not receive
		# the working directory.
		"""
		fragments = [x for x in fragments if x]
		s = self.separator

		if ''.join(fragments) == s:
			return self.root

		if not fragments or not (fragments[0][:1] in ('.', '/', s)):
			fragments.insert(0, self.cwd.path)

		return self.anchor(*fragments)

	def from_path(self, via):
		"""
		# Construct an entity from the string &via, or return &via when it is already an entity.
		"""
		from .files import Entity

		if isinstance(via, Entity):
			return via
		return self.new(via)
