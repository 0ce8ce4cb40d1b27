""" Encoding and decoding of option values for zmq_getsockopt(),
    zmq_setsockopt() and their context counterparts.

    Every value crosses the native boundary as a ctypes array, so that a
    pointer to it can be handed to libzmq directly: integers as one-element
    arrays of the matching C type, strings and binary values as character
    buffers.
"""

import collections
import ctypes

from .errors import TypeMismatch


# Largest value libzmq will hand back for a string or binary option. The
# longest in practice is LAST_ENDPOINT for an ipc:// path.

buffer_size = 1024

integers = {
    'int': ctypes.c_int,
    'bool': ctypes.c_int,
    'uint32': ctypes.c_uint32,
    'int64': ctypes.c_int64,
    'uint64': ctypes.c_uint64,
}

types = frozenset(integers) | frozenset(('string', 'binary'))

# 'bool' and 'int' share a representation, and are interchangeable when a
# caller names one where the table declares the other.

_compatible = {
    'bool': frozenset(('bool', 'int')),
    'int': frozenset(('bool', 'int')),
}


class Option(collections.namedtuple('Option', ('id', 'type', 'value'))):
    """ A transient (id, type, value) triple describing one option get or
        set. The *value* is None for a get that has not completed yet.
    """

    __slots__ = ()


def check(option, declared, requested):
    """ Confirm that the *requested* type is acceptable for an option whose
        table entry is *declared*. A *declared* type of None means the option
        is not in the table; any known type is then passed through for the
        native layer to judge.
    """

    if requested not in types:
        raise TypeMismatch('unknown option type %r for option %d' % (requested, option))

    if declared is None:
        return

    if requested == declared:
        return

    if requested in _compatible.get(declared, ()):
        return

    raise TypeMismatch("option %d is declared '%s', not '%s'" % (option, declared, requested))


def encode(option):
    """ Return a (buffer, size) pair holding the native representation of
        *option*, suitable for a set call.
    """

    type = option.type
    value = option.value

    if type in integers:
        ctype = integers[type]

        if type == 'bool':
            if isinstance(value, bool) or value in (0, 1):
                value = int(value)
            else:
                raise TypeMismatch('option %d expects a boolean, not %r' % (option.id, value))

        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatch("option %d expects an integer ('%s'), not %r" % (option.id, type, value))

        _range_check(option.id, type, ctype, value)

        buffer = (ctype * 1)(value)
        return buffer, ctypes.sizeof(ctype)

    if type == 'string':
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value)
        elif isinstance(value, str):
            value = value.encode()
        else:
            raise TypeMismatch('option %d expects a string, not %r' % (option.id, value))

        # The terminating NUL is not counted in the size.

        buffer = ctypes.create_string_buffer(value, len(value) + 1)
        return buffer, len(value)

    if type == 'binary':
        value = to_bytes(value, option.id)
        buffer = ctypes.create_string_buffer(value, max(len(value), 1))
        return buffer, len(value)

    raise TypeMismatch('unknown option type %r for option %d' % (type, option.id))


def allocate(type):
    """ Return an empty (buffer, size) pair large enough to receive a value
        of the given *type* from a get call.
    """

    try:
        ctype = integers[type]
    except KeyError:
        pass
    else:
        return (ctype * 1)(), ctypes.sizeof(ctype)

    if type in ('string', 'binary'):
        return ctypes.create_string_buffer(buffer_size), buffer_size

    raise TypeMismatch('unknown option type %r' % (type,))


def decode(type, buffer, size):
    """ Interpret *buffer*, of which *size* bytes were filled in by libzmq,
        as a value of the given *type*.
    """

    if type == 'bool':
        return bool(buffer[0])

    if type in integers:
        return int(buffer[0])

    raw = buffer.raw[:size]

    if type == 'string':
        # libzmq counts the terminating NUL for string options.
        raw = raw.split(b'\x00', 1)[0]
        return raw.decode()

    return raw


def to_bytes(value, option=None):
    """ Coerce a payload, topic or identity to bytes. Strings are encoded
        as UTF-8; anything else must support the buffer protocol.
    """

    if isinstance(value, bytes):
        return value

    if isinstance(value, str):
        return value.encode()

    try:
        return bytes(memoryview(value))
    except TypeError:
        pass

    if option is None:
        raise TypeMismatch('expected bytes or str, not %r' % (value,))
    raise TypeMismatch('option %d expects bytes, not %r' % (option, value))


def _range_check(option, type, ctype, value):

    bits = ctypes.sizeof(ctype) * 8

    if type.startswith('uint'):
        low = 0
        high = (1 << bits) - 1
    else:
        low = -(1 << (bits - 1))
        high = (1 << (bits - 1)) - 1

    if value < low or value > high:
        raise TypeMismatch("value %d out of range for option %d ('%s')" % (value, option, type))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
