""" Backend for libzmq 2.x.

    The 2.x API predates zmq_ctx_new() and friends: contexts come from
    zmq_init() and end with zmq_term(), there are no context options,
    messages are always sent and received through a zmq_msg_t, sockets
    cannot unbind or disconnect, and the only way to relay between two
    sockets is zmq_device().
"""

import ctypes
import logging

from . import base
from .. import constants
from .. import descriptor


logger = logging.getLogger(__name__)

_vp = ctypes.c_void_p
_int = ctypes.c_int

prototypes = {
    'zmq_init': (_vp, (_int,)),
    'zmq_term': (_int, (_vp,)),
    'zmq_send': (_int, (_vp, _vp, _int)),
    'zmq_recv': (_int, (_vp, _vp, _int)),
    'zmq_device': (_int, (_int, _vp, _vp)),
}


class Socket(base.Socket):

    def _send(self, handle, data, flags):

        library = self.library
        size = len(data)

        message = base.zmq_msg_t()
        rc = library.zmq_msg_init_size(message, size)
        if self._check(rc, 'zmq_msg_init_size') == False:
            return False

        if size:
            ctypes.memmove(library.zmq_msg_data(message), data, size)

        rc = library.zmq_send(handle, message, flags)
        if rc == -1:
            errno = library.errno()

        library.zmq_msg_close(message)

        if rc == -1:
            return self._fail('zmq_send', errno)

        self._clear()
        return True


    def _recv(self, handle, flags):

        library = self.library

        message = base.zmq_msg_t()
        rc = library.zmq_msg_init(message)
        if self._check(rc, 'zmq_msg_init') == False:
            return None

        rc = library.zmq_recv(handle, message, flags)
        if rc == -1:
            errno = library.errno()
            library.zmq_msg_close(message)
            self._fail('zmq_recv', errno)
            return None

        size = library.zmq_msg_size(message)
        if size:
            data = ctypes.string_at(library.zmq_msg_data(message), size)
        else:
            data = b''

        library.zmq_msg_close(message)
        self._clear()
        return data



class Context(base.Context):

    descriptor = descriptor.ZMQ2
    prototypes = prototypes
    socket_class = Socket

    def _create(self, threads, max_sockets):

        if max_sockets is not None:
            raise self._unsupported('max_sockets')

        handle = self.library.zmq_init(threads)
        if not handle:
            self._check(-1, 'zmq_init')

        return handle


    def _term(self, handle):
        self._terminate('zmq_term', handle)


    def proxy(self, frontend, backend, capture=None):
        """ Emulate zmq_proxy() with a streamer device. There is nothing to
            emulate capture with, so a *capture* socket is accepted but
            ignored.
        """

        if capture is not None:
            logger.warning('libzmq %s has no zmq_proxy(), the capture socket will not receive anything', base._dotted(self.library.version))

        self.device(constants.STREAMER, frontend, backend)


    def device(self, type, frontend, backend):

        self._live_handle('zmq_device')
        rc = self.library.zmq_device(type, frontend.handle, backend.handle)
        self._relayed(rc, 'zmq_device')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
