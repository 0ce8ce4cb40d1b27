""" Behaviour shared by every backend variant.

    The :class:`Context` and :class:`Socket` classes here implement
    everything that is the same across libzmq revisions: ownership and
    teardown, generic option access, error state, multipart framing and
    readiness queries. Each variant module subclasses them, supplies its
    :class:`zmqffi.descriptor.Descriptor` and C prototypes, and fills in
    the operations whose native calls differ. An operation a revision does
    not have is left to the default here, which raises
    :class:`UnsupportedOperation`.
"""

import ctypes
import logging

from .. import codec
from .. import config
from .. import constants
from .. import lifecycle
from ..errors import AddressError, CrossThreadTeardown, InvalidSocketType, \
        NativeCallError, UnsupportedOperation


logger = logging.getLogger(__name__)

# Opaque storage for a zmq_msg_t. Every libzmq revision fits in 64 bytes.

zmq_msg_t = ctypes.c_ubyte * 64

# errno values that indicate a problem with the endpoint itself, as opposed
# to the socket or context.

address_errors = frozenset((
    constants.EINVAL,
    constants.EPROTONOSUPPORT,
    constants.ENOCOMPATPROTO,
    constants.EADDRINUSE,
    constants.EADDRNOTAVAIL,
    constants.ENODEV,
    constants.ENOENT,
))

_vp = ctypes.c_void_p
_int = ctypes.c_int

# Prototypes for the calls every revision shares, with the same signature.

common_prototypes = {
    'zmq_socket': (_vp, (_vp, _int)),
    'zmq_close': (_int, (_vp,)),
    'zmq_bind': (_int, (_vp, ctypes.c_char_p)),
    'zmq_connect': (_int, (_vp, ctypes.c_char_p)),
    'zmq_setsockopt': (_int, (_vp, _int, _vp, ctypes.c_size_t)),
    'zmq_getsockopt': (_int, (_vp, _int, _vp, _vp)),
    'zmq_msg_init': (_int, (_vp,)),
    'zmq_msg_init_size': (_int, (_vp, ctypes.c_size_t)),
    'zmq_msg_data': (_vp, (_vp,)),
    'zmq_msg_size': (ctypes.c_size_t, (_vp,)),
    'zmq_msg_close': (_int, (_vp,)),
}


def _dotted(version):
    return '.'.join(str(number) for number in version)


class Context(lifecycle.Resource):
    """ A libzmq context: the owner of the I/O thread pool, and the factory
        for :class:`Socket` instances. Contexts are created by
        :func:`zmqffi.new`, never directly.

        *threads* is the I/O thread pool size and *max_sockets* the maximum
        number of sockets; either may be None to use the configured default.

        A context is destroyed exactly once, by :func:`destroy`, by leaving
        a ``with`` block, or when it is garbage collected. Sockets hold a
        reference to their context, so through ordinary use a context
        cannot be collected while any of its sockets remain open.
    """

    descriptor = None
    prototypes = dict()
    socket_class = None

    def __init__(self, library, threads=None, max_sockets=None):

        self.library = library
        self._sockets = lifecycle.Children()

        library.attach(common_prototypes)
        library.attach(self.prototypes)

        if threads is None:
            threads = config.get('threads')
        if max_sockets is None:
            max_sockets = config.get('max_sockets')

        handle = self._create(threads, max_sockets)
        self._adopt(handle)
        lifecycle.contexts.add(self)

        logger.debug('created %r', self)


    def __del__(self):
        self.destroy()


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.destroy()


    def __repr__(self):
        return 'zmqffi.Context(%s, libzmq %s, %s)' % (self.descriptor.name, _dotted(self.library.version), self.state)


    def version(self):
        """ Return the loaded libzmq version as (major, minor, patch). """
        return self.library.version


    def supports(self, operation):
        """ Return True if *operation* exists for this context's revision.
            See :mod:`zmqffi.descriptor` for the operation names.
        """

        return self.descriptor.supports(operation)


    def get(self, option):
        """ Return the value of the context *option*. """
        raise self._unsupported('context get')


    def set(self, option, value):
        """ Set the context *option* to *value*. """
        raise self._unsupported('context set')


    def socket(self, type):
        """ Create and return a new :class:`Socket` of the given *type*, one
            of the socket type constants such as :data:`zmqffi.REQ`.
        """

        handle = None
        if self.state == lifecycle.LIVE:
            handle = self.library.zmq_socket(self.handle, type)

        if not handle:
            if self.state == lifecycle.LIVE:
                errno = self.library.errno()
            else:
                errno = constants.ETERM

            strerror = self.library.strerror(errno)

            if errno == constants.EINVAL:
                raise InvalidSocketType('zmq_socket', errno, strerror)
            raise NativeCallError('zmq_socket', errno, strerror)

        socket = self.socket_class(self, handle, type)
        logger.debug('created %r', socket)
        return socket


    def proxy(self, frontend, backend, capture=None):
        """ Relay messages between the *frontend* and *backend* sockets,
            copying everything to *capture* if one is given. This blocks the
            calling thread until the context is terminated.
        """

        raise self._unsupported('proxy')


    def device(self, type, frontend, backend):
        """ Run a zmq_device() of the given *type* between *frontend* and
            *backend*. Only libzmq 2.x has devices.
        """

        raise self._unsupported('device')


    def has(self, capability):
        """ Return True if libzmq was built with *capability*, such as
            'ipc' or 'curve'.
        """

        raise self._unsupported('has')


    def destroy(self):
        """ Close every socket this context still has open, in the order
            they were created, then terminate the context. Each socket may
            delay termination by up to its linger period.

            Calling :func:`destroy` again, or from a process or thread other
            than the one that created the context, does nothing.
        """

        try:
            proceed = self._claim('destroy')
        except CrossThreadTeardown as error:
            logger.debug('%s; leaving it alone', error)
            return

        if proceed == False:
            return

        # Sockets are closed through their records rather than the Socket
        # objects, which may already have been collected.

        for record in list(self._sockets):
            try:
                proceed = record.claim('close')
            except CrossThreadTeardown as error:
                logger.debug('%s; leaving it alone', error)
                continue

            if proceed:
                errno = self._close_socket(record)
                if errno:
                    logger.warning('%r: zmq_close: %s', self, self.library.strerror(errno))

        remaining = len(self._sockets)
        if remaining:
            logger.warning('%r: %d socket(s) belonging to other threads are still open, termination will wait for them', self, remaining)

        handle = self.handle

        try:
            self._term(handle)
        finally:
            self.record.release(lifecycle.DESTROYED)
            lifecycle.contexts.discard(self)

        logger.debug('destroyed %r', self)


    # Variant hooks.

    def _create(self, threads, max_sockets):
        raise NotImplementedError('backend variants must implement _create()')


    def _term(self, handle):
        raise NotImplementedError('backend variants must implement _term()')


    # Helpers for variants.

    def _close_socket(self, record):
        """ Close the native socket held by *record* and forget about it.
            Returns the errno of a failed zmq_close(), or 0.
        """

        rc = self.library.zmq_close(record.handle)
        if rc == -1:
            errno = self.library.errno()
        else:
            errno = 0

        record.release(lifecycle.CLOSED)
        self._sockets.discard(record)
        return errno


    def _terminate(self, function, handle):
        """ Call the named termination *function* on *handle*, retrying if
            it is interrupted by a signal.
        """

        call = getattr(self.library, function)

        while True:
            rc = call(handle)
            if rc != -1:
                return

            errno = self.library.errno()
            if errno == constants.EINTR:
                continue

            raise NativeCallError(function, errno, self.library.strerror(errno))


    def _check(self, rc, function):
        """ Raise :class:`NativeCallError` if *rc* indicates that the named
            native *function* failed.
        """

        if rc == -1:
            errno = self.library.errno()
            raise NativeCallError(function, errno, self.library.strerror(errno))


    def _live_handle(self, function):
        if self.state == lifecycle.LIVE:
            return self.handle

        errno = constants.ETERM
        raise NativeCallError(function, errno, self.library.strerror(errno))


    def _relayed(self, rc, function):
        """ A proxy or device returning because the context was terminated
            has finished normally; anything else is an error.
        """

        if rc != -1:
            return

        errno = self.library.errno()
        if errno == constants.ETERM:
            return

        raise NativeCallError(function, errno, self.library.strerror(errno))


    def _unsupported(self, operation):
        version = _dotted(self.library.version)
        return UnsupportedOperation('%s is not available in libzmq %s' % (operation, version))



class Socket(lifecycle.Resource):
    """ A single libzmq socket, created by :func:`Context.socket`.

        By default any failing native call raises :class:`NativeCallError`.
        Setting :attr:`die_on_error` to False instead records the failure,
        which can then be inspected via :func:`has_error`,
        :attr:`last_errno` and :attr:`last_strerror`; the call returns a
        best-effort result such as an empty message. Every operation
        overwrites the recorded state, successful or not.

        :ivar context: The owning :class:`Context`, or None once closed.
        :ivar type: The socket type this socket was created with.
        :ivar die_on_error: Whether native failures raise.
    """

    def __init__(self, context, handle, type):

        self.context = context
        self.descriptor = context.descriptor
        self.library = context.library
        self.type = type

        self.die_on_error = True
        self.last_errno = 0
        self.last_strerror = ''

        self._adopt(handle)
        context._sockets.add(self.record)

        linger = config.get('linger')
        if linger is not None:
            self.set_linger(linger)


    def __del__(self):
        self.close()


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def __repr__(self):
        return 'zmqffi.Socket(type %d, %s, %s)' % (self.type, self.descriptor.name, self.state)


    def has_error(self):
        """ Return True if the most recent operation on this socket failed. """
        return self.last_errno != 0


    def version(self):
        """ Return the loaded libzmq version as (major, minor, patch). """
        return self.library.version


    def connect(self, endpoint):
        """ Connect to *endpoint*, a transport-prefixed address string such
            as 'tcp://localhost:5555' or 'inproc://name'.
        """

        return self._endpoint('zmq_connect', endpoint)


    def bind(self, endpoint):
        """ Accept connections on *endpoint*. """
        return self._endpoint('zmq_bind', endpoint)


    def unbind(self, endpoint):
        """ Stop accepting connections on *endpoint*, previously bound. """
        raise self._unsupported('unbind')


    def disconnect(self, endpoint):
        """ Disconnect from *endpoint*, previously connected. """
        raise self._unsupported('disconnect')


    def get(self, option, type):
        """ Return the value of socket *option*. The *type* must agree with
            the option's declared type for this libzmq revision; see
            :mod:`zmqffi.descriptor`. Returns None if the call fails and
            :attr:`die_on_error` is False.
        """

        declared = self.descriptor.socket_option_type(option)
        codec.check(option, declared, type)

        handle = self._live_handle('zmq_getsockopt')
        if handle is None:
            return None

        buffer, size = codec.allocate(type)
        size = (ctypes.c_size_t * 1)(size)

        rc = self.library.zmq_getsockopt(handle, option, buffer, size)
        if self._check(rc, 'zmq_getsockopt') == False:
            return None

        return codec.decode(type, buffer, size[0])


    def set(self, option, type, value):
        """ Set socket *option*, of the given *type*, to *value*. """

        declared = self.descriptor.socket_option_type(option)
        codec.check(option, declared, type)
        buffer, size = codec.encode(codec.Option(option, type, value))

        handle = self._live_handle('zmq_setsockopt')
        if handle is None:
            return False

        rc = self.library.zmq_setsockopt(handle, option, buffer, size)
        return self._check(rc, 'zmq_setsockopt')


    def get_linger(self):
        return self.get(constants.LINGER, 'int')


    def set_linger(self, linger):
        """ Set the linger period, in milliseconds, that closing this socket
            (and so terminating its context) will wait for unsent messages.
            Zero discards them immediately; -1 waits indefinitely.
        """

        return self.set(constants.LINGER, 'int', linger)


    def get_identity(self):
        return self.get(constants.IDENTITY, 'binary')


    def set_identity(self, identity):
        return self.set(constants.IDENTITY, 'binary', identity)


    def get_fd(self):
        """ Return the file descriptor an event loop can watch to learn when
            this socket may have become readable or writable. It signals
            edge-triggered changes only; always confirm with
            :func:`has_pollin` or :func:`has_pollout`, and drain with
            non-blocking receives.
        """

        type = self.descriptor.socket_option_type(constants.FD)
        return self.get(constants.FD, type)


    def subscribe(self, topic):
        """ Subscribe to messages starting with *topic*; an empty topic
            subscribes to everything.
        """

        return self.set(constants.SUBSCRIBE, 'binary', topic)


    def unsubscribe(self, topic):
        return self.set(constants.UNSUBSCRIBE, 'binary', topic)


    def send(self, payload, flags=0):
        """ Send *payload* as a single message part. A list or tuple is sent
            as a multipart message instead; see :func:`send_multipart`.
            Returns True on success.
        """

        if isinstance(payload, (list, tuple)):
            return self.send_multipart(payload, flags)

        data = codec.to_bytes(payload)

        handle = self._live_handle('zmq_send')
        if handle is None:
            return False

        return self._send(handle, data, flags)


    def send_multipart(self, parts, flags=0):
        """ Send the sequence *parts* as one multipart message. Every part
            but the last is sent with :data:`SNDMORE` set, in addition to
            any *flags*. Returns True on success.
        """

        parts = [codec.to_bytes(part) for part in parts]
        if len(parts) == 0:
            raise ValueError('a multipart message needs at least one part')

        handle = self._live_handle('zmq_send')
        if handle is None:
            return False

        last = len(parts) - 1

        for index, part in enumerate(parts):
            if index == last:
                part_flags = flags
            else:
                part_flags = flags | constants.SNDMORE

            if self._send(handle, part, part_flags) == False:
                return False

        return True


    def recv(self, flags=0):
        """ Receive a single message part and return it as bytes. On failure
            with :attr:`die_on_error` False, an empty bytes value is returned
            and the error recorded; with :data:`DONTWAIT` and nothing queued
            that error is EAGAIN.
        """

        handle = self._live_handle('zmq_recv')
        if handle is None:
            return b''

        data = self._recv(handle, flags)
        if data is None:
            return b''

        return data


    def recv_multipart(self, flags=0):
        """ Receive every part of the next message and return them as a list
            of bytes, in order. On failure an empty list is returned; a
            partially received message is never returned.
        """

        handle = self._live_handle('zmq_recv')
        if handle is None:
            return list()

        parts = list()

        while True:
            data = self._recv(handle, flags)
            if data is None:
                return list()

            parts.append(data)

            more = self._more()
            if more is None:
                return list()
            if more == False:
                break

        return parts


    def has_pollin(self):
        """ Return True if a message can be received without blocking. """
        return (self._events() & constants.POLLIN) != 0


    def has_pollout(self):
        """ Return True if a message can be sent without blocking. """
        return (self._events() & constants.POLLOUT) != 0


    def close(self):
        """ Close the socket, releasing its reference to the owning context.
            Closing twice, or from a process or thread other than the one
            that created the socket, does nothing.
        """

        try:
            proceed = self._claim('close')
        except CrossThreadTeardown as error:
            logger.debug('%s; leaving it alone', error)
            return

        if proceed == False:
            return

        errno = self.context._close_socket(self.record)
        logger.debug('closed %r', self)

        # Dropping the reference may take the context with it, which is only
        # safe now that the native socket is gone.

        self.context = None

        if errno:
            self._fail('zmq_close', errno)
        else:
            self._clear()


    # Variant hooks.

    def _send(self, handle, data, flags):
        raise NotImplementedError('backend variants must implement _send()')


    def _recv(self, handle, flags):
        raise NotImplementedError('backend variants must implement _recv()')


    # Helpers.

    def _more(self):
        type = self.descriptor.socket_option_type(constants.RCVMORE)
        return self.get(constants.RCVMORE, type)


    def _events(self):
        type = self.descriptor.socket_option_type(constants.EVENTS)
        events = self.get(constants.EVENTS, type)
        if events is None:
            return 0

        return events


    def _endpoint(self, function, endpoint):

        endpoint = codec.to_bytes(endpoint)

        handle = self._live_handle(function)
        if handle is None:
            return False

        rc = getattr(self.library, function)(handle, endpoint)
        if rc == -1:
            errno = self.library.errno()
            if errno in address_errors:
                return self._fail(function, errno, AddressError)
            return self._fail(function, errno)

        self._clear()
        return True


    def _live_handle(self, function):
        """ Return the native handle, or record ENOTSOCK (raising, if
            :attr:`die_on_error` is set) and return None if the socket has
            already been closed.
        """

        if self.state == lifecycle.LIVE:
            return self.handle

        self._fail(function, constants.ENOTSOCK)
        return None


    def _check(self, rc, function):
        """ Record the outcome of the named native *function* given its
            return code *rc*. Returns True on success, False on failure when
            :attr:`die_on_error` is False, and raises otherwise.
        """

        if rc == -1:
            return self._fail(function, self.library.errno())

        self._clear()
        return True


    def _fail(self, function, errno, exception=NativeCallError):

        self.last_errno = errno
        self.last_strerror = self.library.strerror(errno)

        if self.die_on_error:
            raise exception(function, errno, self.last_strerror)

        return False


    def _clear(self):
        self.last_errno = 0
        self.last_strerror = ''


    def _unsupported(self, operation):
        version = _dotted(self.library.version)
        return UnsupportedOperation('%s is not available in libzmq %s' % (operation, version))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
