""" Backend for libzmq 3.x.

    3.x introduced zmq_ctx_new() with settable context options, buffer
    based zmq_send() alongside zmq_msg_recv(), unbind and disconnect, and
    a native zmq_proxy() with an optional capture socket.
"""

import ctypes

from . import base
from .. import codec
from .. import constants
from .. import descriptor


_vp = ctypes.c_void_p
_int = ctypes.c_int

prototypes = {
    'zmq_ctx_new': (_vp, ()),
    'zmq_ctx_destroy': (_int, (_vp,)),
    'zmq_ctx_get': (_int, (_vp, _int)),
    'zmq_ctx_set': (_int, (_vp, _int, _int)),
    'zmq_send': (_int, (_vp, _vp, ctypes.c_size_t, _int)),
    'zmq_msg_recv': (_int, (_vp, _vp, _int)),
    'zmq_unbind': (_int, (_vp, ctypes.c_char_p)),
    'zmq_disconnect': (_int, (_vp, ctypes.c_char_p)),
    'zmq_proxy': (_int, (_vp, _vp, _vp)),
}


class Socket(base.Socket):

    def unbind(self, endpoint):
        return self._endpoint('zmq_unbind', endpoint)


    def disconnect(self, endpoint):
        return self._endpoint('zmq_disconnect', endpoint)


    def _send(self, handle, data, flags):
        rc = self.library.zmq_send(handle, data, len(data), flags)
        return self._check(rc, 'zmq_send')


    def _recv(self, handle, flags):

        library = self.library

        message = base.zmq_msg_t()
        rc = library.zmq_msg_init(message)
        if self._check(rc, 'zmq_msg_init') == False:
            return None

        size = library.zmq_msg_recv(message, handle, flags)
        if size == -1:
            errno = library.errno()
            library.zmq_msg_close(message)
            self._fail('zmq_msg_recv', errno)
            return None

        if size:
            data = ctypes.string_at(library.zmq_msg_data(message), size)
        else:
            data = b''

        library.zmq_msg_close(message)
        self._clear()
        return data



class Context(base.Context):

    descriptor = descriptor.ZMQ3
    prototypes = prototypes
    socket_class = Socket

    def _create(self, threads, max_sockets):

        library = self.library

        handle = library.zmq_ctx_new()
        if not handle:
            self._check(-1, 'zmq_ctx_new')

        # The handle is not adopted yet, so a failure here has to release
        # it before propagating.

        try:
            if threads is not None:
                self._set(handle, constants.IO_THREADS, threads)
            if max_sockets is not None:
                self._set(handle, constants.MAX_SOCKETS, max_sockets)
        except Exception:
            self._term(handle)
            raise

        return handle


    def _term(self, handle):
        self._terminate('zmq_ctx_destroy', handle)


    def get(self, option):

        type = self._option_type(option)
        handle = self._live_handle('zmq_ctx_get')

        value = self.library.zmq_ctx_get(handle, option)
        self._check(value, 'zmq_ctx_get')

        if type == 'bool':
            return bool(value)

        return value


    def set(self, option, value):
        self._set(self._live_handle('zmq_ctx_set'), option, value)


    def proxy(self, frontend, backend, capture=None):

        self._live_handle('zmq_proxy')

        if capture is None:
            capture_handle = None
        else:
            capture_handle = capture.handle

        rc = self.library.zmq_proxy(frontend.handle, backend.handle, capture_handle)
        self._relayed(rc, 'zmq_proxy')


    def _set(self, handle, option, value):

        # Context options are passed by value rather than through a buffer;
        # encoding is only done to validate the value against its type.

        type = self._option_type(option)
        codec.encode(codec.Option(option, type, value))

        rc = self.library.zmq_ctx_set(handle, option, int(value))
        self._check(rc, 'zmq_ctx_set')


    def _option_type(self, option):

        type = self.descriptor.context_option_type(option)
        if type is None:
            type = 'int'

        return type


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
