"""
# String path algebra.

# The functions here operate on strings and never consult a file system.
# Besides the separator, `.` is the only structurally significant character;
# everything else is an opaque part of a path component.

# All functions are total over the string domain: degenerate input is normalized
# to `'.'` or the separator rather than raising an exception.
"""
import os
from collections.abc import Sequence
from typing import Optional

def is_absolute(path:str, separator:str='/') -> bool:
	"""
	# Whether &path is anchored at the root.
	"""
	return path[:1] == separator

def collapse(path:str, relative:bool, separator:str='/') -> str:
	"""
	# Remove redundant separators, `.` components, and resolvable `..` components from &path.

	# When &relative is &True, a `..` that has no preceding component to remove is
	# retained; otherwise it is discarded as the root cannot be escaped.
	# The result carries neither a leading nor a trailing separator.
	"""
	res = ''
	last = -1
	dots = 0

	if not path.endswith(separator):
		# Sentinel terminating the final component.
		path += separator

	for i, char in enumerate(path):
		if char != separator:
			if char == '.' and dots != -1:
				dots += 1
			else:
				dots = -1
			continue

		if last == i - 1 or dots == 1:
			# Empty component or `.`.
			pass
		elif dots == 2:
			p = res.rfind(separator)
			if res and res[p+1:] != '..':
				# Ascend by removing the last component.
				res = res[:p] if p > 0 else ''
				last = i
				dots = 0
				continue

			if relative:
				res = res + separator + '..' if res else '..'
		else:
			component = path[last+1:i]
			res = res + separator + component if res else component

		last = i
		dots = 0

	return res

def normalize(path:str, separator:str='/') -> str:
	"""
	# Produce the canonical form of &path.

	# Runs of separators are collapsed, `.` components removed, and `..` components
	# resolved. A `..` that would escape a relative path is preserved; a `..` at
	# the root of an absolute path is dropped. A trailing separator is kept when
	# the result is not empty.

	#!/pl/python
		normalize("a//b/./c/") == "a/b/c/"
		normalize("../a") == "../a"
		normalize("/..") == "/"
	"""
	if not path:
		return '.'

	absolute = path[0] == separator
	trailing = path[-1] == separator

	path = collapse(path, not absolute, separator)

	if not path and not absolute:
		path = '.'
	if path and trailing:
		path += separator

	if absolute:
		return separator + path
	return path

def join(*segments:str, separator:str='/') -> str:
	"""
	# Concatenate the non-empty &segments using &separator and normalize the result.
	# When no segment has content, `'.'` is returned.
	"""
	joined = separator.join(x for x in segments if x)
	if not joined:
		return '.'

	return normalize(joined, separator)

def resolve(*segments:str, cwd:Optional[str]=None, separator:str='/', getcwd=os.getcwd) -> str:
	"""
	# Resolve &segments into an absolute path.

	# Segments are processed from right to left, stopping at the first absolute
	# segment. If none is found, &cwd, or the process' working directory when
	# &cwd is &None, is prepended.
	"""
	resolved = ''
	for segment in reversed(segments):
		if not segment:
			continue

		resolved = segment + separator + resolved
		if segment[0] == separator:
			break
	else:
		base = getcwd() if cwd is None else cwd
		if base:
			resolved = base + separator + resolved

	absolute = resolved[:1] == separator
	resolved = collapse(resolved, not absolute, separator)

	if absolute:
		return separator + resolved
	return resolved or '.'

def relative(source, target, *, cwd:Optional[str]=None, separator:str='/') -> str:
	"""
	# Construct the shortest relative path that leads from &source to &target.

	# Both arguments are resolved with &resolve before comparison, so they may be
	# relative strings or any object supporting &os.fspath. Identical locations
	# produce an empty string.

	#!/pl/python
		relative("/foo/bar", "/foo/bar/baz") == "baz"
		relative("/foo/bar/baz", "/foo/bar") == ".."
		relative("/foo/bar", "/foo/qux") == "../qux"
	"""
	if source is target:
		return ''

	source = resolve(os.fspath(source), cwd=cwd, separator=separator)
	target = resolve(os.fspath(target), cwd=cwd, separator=separator)
	if source == target:
		return ''

	# Resolved paths have exactly one leading separator.
	start = 1
	source_length = len(source) - start
	target_length = len(target) - start
	length = min(source_length, target_length)

	# Offset of the last separator shared by both paths.
	common = -1
	for i in range(length + 1):
		if i == length:
			if target_length > length:
				if target[start+i] == separator:
					# source is the base path of target.
					return target[start+i+1:]
				elif i == 0:
					# source is the root.
					return target[start:]
			elif source_length > length:
				if source[start+i] == separator:
					# target is the base path of source.
					common = i
				elif i == 0:
					# target is the root.
					common = 0
			break

		char = source[start+i]
		if char != target[start+i]:
			break
		elif char == separator:
			common = i

	ascent = []
	end = len(source)
	for i in range(start + common + 1, end + 1):
		if i == end or source[i] == separator:
			ascent.append('..')

	if ascent:
		return separator.join(ascent) + target[start+common:]

	i = start + common
	if target[i:i+1] == separator:
		i += 1
	return target[i:]

def split(path:str, separator:str='/') -> Sequence[str]:
	"""
	# Divide the canonical &path into its components.

	# The root is represented by a sequence holding the separator alone;
	# no other component contains the separator.
	"""
	if path == separator:
		return (separator,)

	return tuple(x for x in path.split(separator) if x)
