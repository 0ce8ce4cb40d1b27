""" Exceptions raised by :mod:`zmqffi`.

    Structural errors (:class:`UnresolvableBackend`,
    :class:`UnsupportedOperation`, :class:`TypeMismatch`,
    :class:`InvalidSocketType`) always propagate. Everything else derived
    from :class:`NativeCallError` raised by a socket is subject to that
    socket's ``die_on_error`` setting.
"""


class ZMQFFIError(Exception):
    """Base class for all zmqffi errors."""


class UnresolvableBackend(ZMQFFIError):
    """No usable libzmq could be found, or the one requested is unsupported."""


class UnsupportedOperation(ZMQFFIError):
    """The operation does not exist for the active libzmq revision."""


class TypeMismatch(ZMQFFIError):
    """An option value or type does not agree with the option's declaration."""


class CrossThreadTeardown(ZMQFFIError):
    """ Teardown was requested from a process or thread other than the one
        that created the resource. This is never surfaced to the caller;
        close() and destroy() catch it and leave the resource alone.
    """


class NativeCallError(ZMQFFIError):
    """ A libzmq call reported failure. The *function* is the name of the C
        function that failed, *errno* the system error code, and *strerror*
        the human readable text for that code.
    """

    def __init__(self, function, errno, strerror):

        self.function = function
        self.errno = errno
        self.strerror = strerror

        ZMQFFIError.__init__(self, '%s: %s' % (function, strerror))


class AddressError(NativeCallError):
    """An endpoint was malformed, unsupported, or could not be used."""


class InvalidSocketType(NativeCallError):
    """The native layer rejected the requested socket type."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
