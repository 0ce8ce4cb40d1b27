""" Backend for libzmq 4.1 and later.

    Beyond the wider option table in :data:`zmqffi.descriptor.ZMQ4_1`,
    4.1 is the first release able to report which optional transports and
    security mechanisms it was built with, through zmq_has().
"""

import ctypes

from . import zmq4
from .. import codec
from .. import descriptor


prototypes = dict(zmq4.prototypes)
prototypes['zmq_has'] = (ctypes.c_int, (ctypes.c_char_p,))


class Socket(zmq4.Socket):
    pass



class Context(zmq4.Context):

    descriptor = descriptor.ZMQ4_1
    prototypes = prototypes
    socket_class = Socket

    def has(self, capability):
        capability = codec.to_bytes(capability)
        return self.library.zmq_has(capability) == 1


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
