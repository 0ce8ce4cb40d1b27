""" Backend for libzmq 4.0.

    Socket behaviour is unchanged from 3.x; 4.0 adds the security and
    transport options described in :data:`zmqffi.descriptor.ZMQ4`, and
    renames context termination to zmq_ctx_term().
"""

import ctypes

from . import zmq3
from .. import descriptor


prototypes = dict(zmq3.prototypes)
prototypes['zmq_ctx_term'] = (ctypes.c_int, (ctypes.c_void_p,))
del prototypes['zmq_ctx_destroy']


class Socket(zmq3.Socket):
    pass



class Context(zmq3.Context):

    descriptor = descriptor.ZMQ4
    prototypes = prototypes
    socket_class = Socket

    def _term(self, handle):
        self._terminate('zmq_ctx_term', handle)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
