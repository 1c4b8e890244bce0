"""
# Provide &fila.test.library.Test instances to pytest collected test subjects.
"""
import pytest

from fila.test import library

class Test(library.Test):
	__slots__ = ()

	def skip(self, condition):
		if condition:
			pytest.skip(str(condition))

@pytest.fixture
def test(request):
	t = Test(request.node.nodeid, request.function)
	with t.exits:
		yield t
