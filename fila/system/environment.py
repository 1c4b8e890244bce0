"""
# Process-wide registration of the default &.context.Context.

# The default context is registered once during initialization with &register
# or &use, and retrieved by the module level factories in &.files. Requesting
# the default before registration raises &ConfigurationError.

# [ Environment Variables ]
# /`FILA_CWD`/
	# Overrides the working directory used by &from_process.
# /`FILA_TEMPORARY`/
	# Overrides the temporary directory used by &from_process.
# /`FILA_SEPARATOR`/
	# Overrides the separator used by &from_process.
"""
import os
import logging
import tempfile
import threading
from collections.abc import Mapping
from typing import Optional

from .abstract import Backend
from .context import Context, ConfigurationError

logger = logging.getLogger(__name__)

_default: Optional[Context] = None
_lock = threading.Lock()

def _env(name:str, default:str, environ:Mapping[str, str]=os.environ) -> str:
	if not name.startswith('FILA_'):
		raise ValueError(f"only FILA_* environment variables are recognized, got: {name}")
	return environ.get(name) or default

def _instantiate(backend):
	if isinstance(backend, type):
		return backend()
	return backend

def from_process(backend:Backend, *, environ:Mapping[str, str]=os.environ) -> Context:
	"""
	# Build a &Context for &backend using the process' working and temporary directories.
	"""
	return Context(
		_instantiate(backend),
		_env('FILA_SEPARATOR', '/', environ),
		_env('FILA_CWD', os.getcwd(), environ),
		_env('FILA_TEMPORARY', tempfile.gettempdir(), environ),
	)

def use(context:Context) -> Context:
	"""
	# Designate &context as the process default.

	# Registration is permitted once; registering a distinct context afterwards
	# raises &ConfigurationError.
	"""
	global _default

	with _lock:
		if _default is not None and _default is not context:
			raise ConfigurationError("default context already registered")
		_default = context

	logger.info("registered %s with working directory %r", type(context.backend).__name__, context.cwd_string)
	return context

def register(backend:Backend, separator:str='/', cwd:Optional[str]=None, temporary:Optional[str]=None) -> Context:
	"""
	# Construct and &use a context for &backend.

	# [ Parameters ]
	# /backend/
		# The backend instance, or a backend class that is instantiated without arguments.
	# /separator/
		# The canonical separator.
	# /cwd/
		# The working directory path; defaults to &os.getcwd.
	# /temporary/
		# The temporary directory path; defaults to &tempfile.gettempdir.
	"""
	return use(Context(
		_instantiate(backend),
		separator,
		os.getcwd() if cwd is None else cwd,
		tempfile.gettempdir() if temporary is None else temporary,
	))

def registered() -> bool:
	return _default is not None

def default() -> Context:
	"""
	# The registered default context.
	"""
	if _default is None:
		raise ConfigurationError("backend not set; register a default context before constructing entities")
	return _default

def reset() -> None:
	"""
	# Remove the default context. Intended for test isolation.
	"""
	global _default

	with _lock:
		_default = None
