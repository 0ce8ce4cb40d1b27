""" Version-agnostic Python bindings for ZeroMQ, calling libzmq directly
    through ctypes. A single object model, contexts and the sockets they
    create, is presented regardless of whether the installed libzmq is
    2.x, 3.x or 4.x; where the revisions differ, each call is dispatched to
    the matching backend.

    Typical use::

        import zmqffi

        with zmqffi.new() as context:
            server = context.socket(zmqffi.REP)
            server.bind('ipc:///tmp/example')
            ...

    Sockets are closed before their context is destroyed, each exactly
    once, and only by the process and thread that created them.
"""

# Utility components.

from . import config
from . import constants
from . import errors
from . import lifecycle

# Constants are re-exported at the top level, as they are by pyzmq.

from .constants import *

from .errors import ZMQFFIError, UnresolvableBackend, UnsupportedOperation, \
        TypeMismatch, NativeCallError, AddressError, InvalidSocketType, \
        CrossThreadTeardown

# Submodules used by multiple other components.

from . import codec
from . import descriptor
from . import native
from . import backend

# Primary public-facing interfaces.

from . import dispatch
new = dispatch.new

from .backend.base import Context, Socket


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
