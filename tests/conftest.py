import pytest

import zmqffi
from fakezmq import FakeLibrary


# One representative release per backend variant, plus a later 4.x to
# confirm that 4.1+ releases share a backend.

versions = [(2, 2, 0), (3, 2, 5), (4, 0, 10), (4, 1, 6), (4, 3, 4)]


def _dotted(version):
    return '.'.join(str(number) for number in version)


@pytest.fixture(params=versions, ids=_dotted)
def library(request):
    return FakeLibrary(request.param)


@pytest.fixture
def context(library):

    context = zmqffi.new(library=library)

    yield context

    context.destroy()


@pytest.fixture
def pipeline(context):
    """ A connected PUSH/PULL pair, returned as (sender, receiver). """

    receiver = context.socket(zmqffi.PULL)
    receiver.bind('inproc://pipeline')

    sender = context.socket(zmqffi.PUSH)
    sender.connect('inproc://pipeline')

    return sender, receiver


@pytest.fixture(scope="session")
def system_library():
    """ The libzmq installed on this host, if there is one. Tests using
        this fixture are skipped otherwise.
    """

    try:
        return zmqffi.native.load(accept=zmqffi.descriptor.supported)
    except zmqffi.UnresolvableBackend as error:
        pytest.skip('no usable libzmq: %s' % (error))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
