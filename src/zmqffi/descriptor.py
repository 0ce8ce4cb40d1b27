""" Capability tables for each supported libzmq revision. A
    :class:`Descriptor` names which operations a revision offers, and the
    type of every socket and context option it knows about. Exactly one
    descriptor is chosen per context, by :func:`select`, and it is shared
    read-only with every socket that context creates.

    Option types are named with short strings: 'int', 'int64', 'uint64',
    'uint32', 'bool', 'string' and 'binary'. See :mod:`zmqffi.codec` for
    how each is represented in memory.
"""

import collections
import types

from . import constants as c
from .errors import UnresolvableBackend


# Operation tags. Socket operations first, then context operations.

CONNECT = 'connect'
BIND = 'bind'
UNBIND = 'unbind'
DISCONNECT = 'disconnect'
SOCKET_GET = 'socket.get'
SOCKET_SET = 'socket.set'
SUBSCRIBE = 'subscribe'
UNSUBSCRIBE = 'unsubscribe'
SEND = 'send'
SEND_MULTIPART = 'send_multipart'
RECV = 'recv'
RECV_MULTIPART = 'recv_multipart'
HAS_POLLIN = 'has_pollin'
HAS_POLLOUT = 'has_pollout'
CLOSE = 'close'

CONTEXT_GET = 'context.get'
CONTEXT_SET = 'context.set'
SOCKET = 'socket'
PROXY = 'proxy'
PROXY_CAPTURE = 'proxy.capture'
DEVICE = 'device'
HAS = 'has'
DESTROY = 'destroy'

common = frozenset((CONNECT, BIND, SOCKET_GET, SOCKET_SET, SUBSCRIBE,
                    UNSUBSCRIBE, SEND, SEND_MULTIPART, RECV, RECV_MULTIPART,
                    HAS_POLLIN, HAS_POLLOUT, CLOSE, SOCKET, PROXY, DESTROY))


_fields = ('name', 'major_version', 'minor_version', 'patch_version',
           'module', 'operations', 'socket_options', 'context_options')


class Descriptor(collections.namedtuple('Descriptor', _fields)):
    """ Immutable capability table for one libzmq revision. The version
        fields give the oldest release the descriptor covers; *module* is
        the name of the :mod:`zmqffi.backend` submodule implementing it.
    """

    __slots__ = ()

    def supports(self, operation):
        """ Return True if *operation*, one of the operation tags defined in
            this module, exists for this revision.
        """

        return operation in self.operations


    def socket_option_type(self, option):
        """ Return the declared type of socket *option*, or None if the
            option is not known to this revision.
        """

        return self.socket_options.get(option)


    def context_option_type(self, option):
        return self.context_options.get(option)


    @property
    def version(self):
        return (self.major_version, self.minor_version, self.patch_version)



def _freeze(table):
    return types.MappingProxyType(dict(table))



_zmq2_options = {
    c.HWM: 'uint64',
    c.SWAP: 'int64',
    c.AFFINITY: 'uint64',
    c.IDENTITY: 'binary',
    c.SUBSCRIBE: 'binary',
    c.UNSUBSCRIBE: 'binary',
    c.RATE: 'int64',
    c.RECOVERY_IVL: 'int64',
    c.MCAST_LOOP: 'int64',
    c.SNDBUF: 'uint64',
    c.RCVBUF: 'uint64',
    c.RCVMORE: 'int64',
    c.FD: 'int',
    c.EVENTS: 'uint32',
    c.TYPE: 'int',
    c.LINGER: 'int',
    c.RECONNECT_IVL: 'int',
    c.BACKLOG: 'int',
    c.RECOVERY_IVL_MSEC: 'int64',
    c.RECONNECT_IVL_MAX: 'int',
}

# 3.x narrowed most options to int and replaced the single HWM with a pair
# of send/receive high water marks.

_zmq3_options = {
    c.AFFINITY: 'uint64',
    c.IDENTITY: 'binary',
    c.SUBSCRIBE: 'binary',
    c.UNSUBSCRIBE: 'binary',
    c.RATE: 'int',
    c.RECOVERY_IVL: 'int',
    c.SNDBUF: 'int',
    c.RCVBUF: 'int',
    c.RCVMORE: 'int',
    c.FD: 'int',
    c.EVENTS: 'int',
    c.TYPE: 'int',
    c.LINGER: 'int',
    c.RECONNECT_IVL: 'int',
    c.BACKLOG: 'int',
    c.RECONNECT_IVL_MAX: 'int',
    c.MAXMSGSIZE: 'int64',
    c.SNDHWM: 'int',
    c.RCVHWM: 'int',
    c.MULTICAST_HOPS: 'int',
    c.RCVTIMEO: 'int',
    c.SNDTIMEO: 'int',
    c.IPV4ONLY: 'bool',
    c.LAST_ENDPOINT: 'string',
    c.ROUTER_MANDATORY: 'bool',
    c.TCP_KEEPALIVE: 'int',
    c.TCP_KEEPALIVE_CNT: 'int',
    c.TCP_KEEPALIVE_IDLE: 'int',
    c.TCP_KEEPALIVE_INTVL: 'int',
    c.TCP_ACCEPT_FILTER: 'binary',
    c.DELAY_ATTACH_ON_CONNECT: 'bool',
    c.XPUB_VERBOSE: 'bool',
}

_zmq4_options = dict(_zmq3_options)
_zmq4_options.update({
    c.ROUTER_RAW: 'bool',
    c.IPV6: 'bool',
    c.MECHANISM: 'int',
    c.PLAIN_SERVER: 'bool',
    c.PLAIN_USERNAME: 'string',
    c.PLAIN_PASSWORD: 'string',
    c.CURVE_SERVER: 'bool',
    c.CURVE_PUBLICKEY: 'binary',
    c.CURVE_SECRETKEY: 'binary',
    c.CURVE_SERVERKEY: 'binary',
    c.PROBE_ROUTER: 'bool',
    c.REQ_CORRELATE: 'bool',
    c.REQ_RELAXED: 'bool',
    c.CONFLATE: 'bool',
    c.ZAP_DOMAIN: 'string',
})

# Options added across the 4.1 through 4.3 releases share one table; a
# library too old for a particular option rejects it natively with EINVAL.

_zmq4_1_options = dict(_zmq4_options)
_zmq4_1_options.update({
    c.ROUTER_HANDOVER: 'bool',
    c.TOS: 'int',
    c.CONNECT_RID: 'binary',
    c.GSSAPI_SERVER: 'bool',
    c.GSSAPI_PRINCIPAL: 'string',
    c.GSSAPI_SERVICE_PRINCIPAL: 'string',
    c.GSSAPI_PLAINTEXT: 'bool',
    c.HANDSHAKE_IVL: 'int',
    c.SOCKS_PROXY: 'string',
    c.XPUB_NODROP: 'bool',
    c.HEARTBEAT_IVL: 'int',
    c.HEARTBEAT_TTL: 'int',
    c.HEARTBEAT_TIMEOUT: 'int',
    c.CONNECT_TIMEOUT: 'int',
    c.TCP_MAXRT: 'int',
})

_zmq3_context_options = {
    c.IO_THREADS: 'int',
    c.MAX_SOCKETS: 'int',
}

_zmq4_context_options = dict(_zmq3_context_options)
_zmq4_context_options[c.IPV6] = 'bool'

_zmq4_1_context_options = dict(_zmq4_context_options)
_zmq4_1_context_options[c.SOCKET_LIMIT] = 'int'
_zmq4_1_context_options[c.THREAD_SCHED_POLICY] = 'int'
_zmq4_1_context_options[c.MAX_MSGSZ] = 'int'
_zmq4_1_context_options[c.BLOCKY] = 'bool'


ZMQ2 = Descriptor(
    name='zmq2',
    major_version=2, minor_version=0, patch_version=0,
    module='zmq2',
    operations=common | frozenset((DEVICE,)),
    socket_options=_freeze(_zmq2_options),
    context_options=_freeze(dict()),
)

ZMQ3 = Descriptor(
    name='zmq3',
    major_version=3, minor_version=0, patch_version=0,
    module='zmq3',
    operations=common | frozenset((UNBIND, DISCONNECT, CONTEXT_GET,
                                   CONTEXT_SET, PROXY_CAPTURE)),
    socket_options=_freeze(_zmq3_options),
    context_options=_freeze(_zmq3_context_options),
)

ZMQ4 = Descriptor(
    name='zmq4',
    major_version=4, minor_version=0, patch_version=0,
    module='zmq4',
    operations=ZMQ3.operations,
    socket_options=_freeze(_zmq4_options),
    context_options=_freeze(_zmq4_context_options),
)

ZMQ4_1 = Descriptor(
    name='zmq4_1',
    major_version=4, minor_version=1, patch_version=0,
    module='zmq4_1',
    operations=ZMQ4.operations | frozenset((HAS,)),
    socket_options=_freeze(_zmq4_1_options),
    context_options=_freeze(_zmq4_1_context_options),
)

descriptors = (ZMQ2, ZMQ3, ZMQ4, ZMQ4_1)


def select(version):
    """ Return the :class:`Descriptor` for a library reporting *version*,
        a (major, minor, patch) tuple. Within a major version one descriptor
        covers every release, except that 4.0 and 4.1+ are kept apart.
        Raises :class:`UnresolvableBackend` for any other major version.
    """

    major, minor = version[0], version[1]

    if major == 2:
        return ZMQ2
    if major == 3:
        return ZMQ3
    if major == 4:
        if minor == 0:
            return ZMQ4
        return ZMQ4_1

    version = '.'.join(str(number) for number in version)
    raise UnresolvableBackend('libzmq %s is not supported' % (version))


def supported(version):
    """ Predicate form of :func:`select`, suitable for filtering candidate
        libraries.
    """

    try:
        select(version)
    except UnresolvableBackend:
        return False

    return True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
