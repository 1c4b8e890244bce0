"""
# Check the identity and navigation of &.files.Entity.
"""
import asyncio
from .. import files as lib
from .. import context
from .. import memory
from ..abstract import Event, WriteOptions

def mkcontext(backend=None):
	return context.Context(backend or memory.Backend(), '/', '/home/user', '/tmp')

def test_Entity_identity(test):
	"""
	# - &lib.Entity.name
	# - &lib.Entity.extension
	# - &lib.Entity.path
	"""
	ctx = mkcontext()
	e = ctx.new('foo', 'bar.txt')
	test/e.name == 'bar.txt'
	test/e.extension == '.txt'
	test/e.path == '/home/user/foo/bar.txt'
	test/str(e) == e.path
	test/repr(e) == "(file@'/home/user/foo/bar.txt')"

	archive = ctx.new('/srv/data.tar.gz')
	test/archive.extension == '.gz'
	test/ctx.new('/srv/README').extension == ''
	test/ctx.new('/srv/.profile').extension == '.profile'

def test_Entity_root(test):
	"""
	# - &lib.Entity.is_root
	"""
	ctx = mkcontext()
	root = ctx.root
	test/root.is_root == True
	test/root.name == ''
	test/root.extension == ''
	test/root.path == '/'
	test/ctx.new('/a').is_root == False

def test_Entity_equality(test):
	"""
	# - &lib.Entity.__eq__
	# - &lib.Entity.__hash__
	"""
	ctx = mkcontext()
	a = ctx.new('/a/b')
	test/a == ctx.new('/a//b/./')
	test/a == ctx.new('/a/b/c/..')
	test/a != ctx.new('/a/b/c')
	test/len({a, ctx.new('/a', 'b'), ctx.new('/a/b/')}) == 1
	test/(a == '/a/b') == False

def test_Entity_immutable(test):
	ctx = mkcontext()
	e = ctx.new('/a')
	test/AttributeError ^ (lambda: setattr(e, 'components', ('b',)))
	test.isinstance(e.components, tuple)

def test_Entity_fspath(test):
	import os
	ctx = mkcontext()
	test/os.fspath(ctx.new('/a/b')) == '/a/b'

def test_Entity_up(test):
	"""
	# - &lib.Entity.up
	"""
	ctx = mkcontext()
	e = ctx.new('/a/b/c/d')
	test/e.up() == ctx.new('/a/b/c')
	test/e.up(2) == ctx.new('/a/b')
	test/e.up(3) == ctx.new('/a')
	test/e.up(4) == ctx.root
	test/e.up(10) == ctx.root
	test/(e.up(0) is e) == True

	root = ctx.root
	test/root.up() == root
	test/(root.up(3) is root) == True
	# Fewer than two components are returned unchanged.
	a = ctx.new('/a')
	test/(a.up() is a) == True
	test/(a.up(2) is a) == True
	test/ctx.new('/a/b').up(2) == root

def test_Entity_down(test):
	"""
	# - &lib.Entity.down
	"""
	ctx = mkcontext()
	root = ctx.root
	test/root.down('a', 'b').path == '/a/b'
	test/root.down('a/b', 'c').path == '/a/b/c'

	e = ctx.new('/srv/app')
	test/e.down('lib').path == '/srv/app/lib'
	test/e.down('../x').path == '/srv/x'
	test/e.down('./y/').path == '/srv/app/y'
	test/e.down('..', '..', '..').path == '/'
	test/e.down() == e
	test/(e / 'z').path == '/srv/app/z'

	# Descending never consults the working directory.
	test/e.down('bin').components[0] == 'srv'

def test_Entity_relative(test):
	"""
	# - &lib.Entity.relative
	"""
	ctx = mkcontext()
	a = ctx.new('/foo/bar')
	test/a.relative(ctx.new('/foo/bar/baz')) == 'baz'
	test/a.relative(ctx.new('/foo')) == '..'
	test/a.relative(a) == ''
	test/a.relative('/foo/qux') == '../qux'
	test/a.relative('docs') == '../../home/user/docs'

def run(coroutine):
	return asyncio.run(coroutine)

def test_Entity_upscan(test):
	"""
	# - &lib.Entity.upscan
	"""
	ctx = mkcontext()
	project = ctx.new('/work/project')
	deep = project.down('src', 'pkg', 'deep')

	async def scan():
		await deep.write_directory()
		await project.down('config.json').write_text('{}')

		found = await deep.upscan('config.json')
		test/found == project.down('config.json')

		# Nearest ancestor wins, including the start.
		await deep.down('config.json').write_text('{"nested": true}')
		test/(await deep.upscan('config.json')) == deep.down('config.json')

		test/(await deep.upscan('absent.txt')) == None

		# The scan stops after the one-component ancestor.
		await ctx.new('/work/marker').write_text('')
		test/(await deep.upscan('marker')) == ctx.new('/work/marker')
		await ctx.root.down('top').write_text('')
		test/(await deep.upscan('top')) == None
		test/(await ctx.root.upscan('top')) == ctx.root.down('top')

		# Relative names may contain separators.
		await project.down('etc', 'settings.ini').write_text('')
		test/(await deep.upscan('etc/settings.ini')) == project.down('etc', 'settings.ini')

	run(scan())

def test_Entity_upscan_error(test):
	"""
	# - &lib.Entity.upscan

	# Backend failures are not interpreted as absence.
	"""
	class Failing(memory.Backend):
		async def exists(self, entity):
			raise PermissionError(13, "permission denied", entity.path)

	ctx = mkcontext(Failing())
	test/PermissionError ^ (lambda: run(ctx.new('/a/b').upscan('x')))

def test_Entity_get_directory(test):
	"""
	# - &lib.Entity.get_directory
	"""
	ctx = mkcontext()
	d = ctx.new('/data')
	f = d / 'file.bin'

	async def check():
		await f.write_binary(b'\x00')
		test/((await d.get_directory()) is d) == True
		test/(await f.get_directory()) == d
		test/(await ctx.root.get_directory()) == ctx.root
		test/(await d.down('missing', 'x').get_directory()) == d.down('missing')

	run(check())

def test_Entity_rename_top_level(test):
	"""
	# - &lib.Entity.rename

	# Renaming does not depend on &lib.Entity.up.
	"""
	ctx = mkcontext()
	f = ctx.new('/first')

	async def check():
		await f.write_text('x')
		await f.rename('second')
		test/(await f.exists()) == False
		test/(await ctx.new('/second').read_text()) == 'x'

	run(check())

def test_Entity_write_text_options(test):
	"""
	# - &lib.Entity.write_text
	"""
	ctx = mkcontext()
	f = ctx.new('/log.txt')

	async def check():
		await f.write_text('a')
		await f.write_text('b', append=True)
		await f.write_text('c', WriteOptions(append=True))
		test/(await f.read_text()) == 'abc'
		await f.write_text('d')
		test/(await f.read_text()) == 'd'

	run(check())

def test_Entity_watch_arguments(test):
	"""
	# - &lib.Entity.watch

	# The `'recursive'` marker is equivalent to the keyword.
	"""
	calls = []

	class Recorder(memory.Backend):
		def watch(self, entity, recursive, callback):
			calls.append((entity, recursive, callback))
			return super().watch(entity, recursive, callback)

	ctx = mkcontext(Recorder())
	d = ctx.new('/d')
	callback = (lambda event, entity: None)

	d.watch(callback)()
	d.watch('recursive', callback)()
	d.watch(callback, recursive=True)()

	test/calls == [
		(d, False, callback),
		(d, True, callback),
		(d, True, callback),
	]

	test/TypeError ^ (lambda: d.watch())
	test/TypeError ^ (lambda: d.watch('recursive'))
	test/TypeError ^ (lambda: d.watch(callback, callback))

def test_Entity_watch_events(test):
	"""
	# - &lib.Entity.watch
	"""
	ctx = mkcontext()
	d = ctx.new('/d')
	events = []
	cancel = d.watch(lambda event, entity: events.append((event, entity.path)))

	async def check():
		await (d / 'f').write_text('1')
		await (d / 'f').write_text('2')
		await (d / 'f').delete()

	run(check())
	cancel()
	run((d / 'g').write_text(''))

	test/events == [
		(Event.create, '/d'),
		(Event.create, '/d/f'),
		(Event.modify, '/d/f'),
		(Event.delete, '/d/f'),
	]

def test_new(test):
	"""
	# - &lib.new
	# - &lib.from_path
	"""
	ctx = mkcontext()
	test/lib.new('a', context=ctx).path == '/home/user/a'
	test/lib.from_path('/x', context=ctx).path == '/x'

if __name__ == '__main__':
	import sys; from ...test import library as libtest
	libtest.execute(sys.modules[__name__])
