from linalign.utils import RESOURCES, jit


class TestResources:
    def test_has_module(self):
        assert RESOURCES.has_module('numpy')
        assert not RESOURCES.has_module('linalign_no_such_module')

    def test_jit_enabled_tracks_numba(self):
        assert RESOURCES.jit_enabled == RESOURCES.has_module('numba')


class TestJit:
    def test_bare_and_configured(self):
        @jit
        def add(a, b): return a + b

        @jit(nopython=True, cache=False)
        def mul(a, b): return a * b

        assert add(2, 3) == 5
        assert mul(2, 3) == 6
