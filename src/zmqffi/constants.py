""" Numeric identifiers for socket types, flags, options and error codes.
    The values are libzmq's own; they are taken from pyzmq's constant
    tables so that the two bindings can never disagree. Identifiers that
    only existed in older libzmq headers are declared here directly, since
    the 2.x and 3.x backends still need to name them.

    Nothing in this module interprets the values. Which options exist, and
    with which type, for a given libzmq revision is the business of
    :mod:`zmqffi.descriptor`.
"""

import errno as _errno

import zmq


# Socket types.

PAIR = zmq.PAIR
PUB = zmq.PUB
SUB = zmq.SUB
REQ = zmq.REQ
REP = zmq.REP
DEALER = zmq.DEALER
ROUTER = zmq.ROUTER
PULL = zmq.PULL
PUSH = zmq.PUSH
XPUB = zmq.XPUB
XSUB = zmq.XSUB
STREAM = zmq.STREAM

# Send/receive flags. NOBLOCK is the 2.x spelling of DONTWAIT; the bit is
# the same.

DONTWAIT = zmq.DONTWAIT
NOBLOCK = zmq.NOBLOCK
SNDMORE = zmq.SNDMORE

# Readiness bits reported by the EVENTS option.

POLLIN = zmq.POLLIN
POLLOUT = zmq.POLLOUT
POLLERR = zmq.POLLERR

# Device types, used by zmq_device() in 2.x.

STREAMER = zmq.STREAMER
FORWARDER = zmq.FORWARDER
QUEUE = zmq.QUEUE

# Context options (3.x and later).

IO_THREADS = zmq.IO_THREADS
MAX_SOCKETS = zmq.MAX_SOCKETS
SOCKET_LIMIT = 3
THREAD_PRIORITY = 3
THREAD_SCHED_POLICY = 4
MAX_MSGSZ = 5
BLOCKY = 70

# Socket options common to every revision.

AFFINITY = zmq.AFFINITY
IDENTITY = zmq.IDENTITY
SUBSCRIBE = zmq.SUBSCRIBE
UNSUBSCRIBE = zmq.UNSUBSCRIBE
RATE = zmq.RATE
RECOVERY_IVL = zmq.RECOVERY_IVL
SNDBUF = zmq.SNDBUF
RCVBUF = zmq.RCVBUF
RCVMORE = zmq.RCVMORE
FD = zmq.FD
EVENTS = zmq.EVENTS
TYPE = zmq.TYPE
LINGER = zmq.LINGER
RECONNECT_IVL = zmq.RECONNECT_IVL
BACKLOG = zmq.BACKLOG
RECONNECT_IVL_MAX = zmq.RECONNECT_IVL_MAX

# Socket options that only exist in 2.x.

HWM = 1
SWAP = 3
MCAST_LOOP = 10
RECOVERY_IVL_MSEC = 20

# Socket options introduced in 3.x.

MAXMSGSIZE = zmq.MAXMSGSIZE
SNDHWM = zmq.SNDHWM
RCVHWM = zmq.RCVHWM
MULTICAST_HOPS = zmq.MULTICAST_HOPS
RCVTIMEO = zmq.RCVTIMEO
SNDTIMEO = zmq.SNDTIMEO
IPV4ONLY = 31
LAST_ENDPOINT = zmq.LAST_ENDPOINT
ROUTER_MANDATORY = zmq.ROUTER_MANDATORY
TCP_KEEPALIVE = zmq.TCP_KEEPALIVE
TCP_KEEPALIVE_CNT = zmq.TCP_KEEPALIVE_CNT
TCP_KEEPALIVE_IDLE = zmq.TCP_KEEPALIVE_IDLE
TCP_KEEPALIVE_INTVL = zmq.TCP_KEEPALIVE_INTVL
TCP_ACCEPT_FILTER = 38
DELAY_ATTACH_ON_CONNECT = 39
XPUB_VERBOSE = zmq.XPUB_VERBOSE

# Socket options introduced in 4.0. IMMEDIATE is the 4.x name for
# DELAY_ATTACH_ON_CONNECT.

IMMEDIATE = zmq.IMMEDIATE
ROUTER_RAW = 41
IPV6 = zmq.IPV6
MECHANISM = zmq.MECHANISM
PLAIN_SERVER = zmq.PLAIN_SERVER
PLAIN_USERNAME = zmq.PLAIN_USERNAME
PLAIN_PASSWORD = zmq.PLAIN_PASSWORD
CURVE_SERVER = zmq.CURVE_SERVER
CURVE_PUBLICKEY = zmq.CURVE_PUBLICKEY
CURVE_SECRETKEY = zmq.CURVE_SECRETKEY
CURVE_SERVERKEY = zmq.CURVE_SERVERKEY
PROBE_ROUTER = zmq.PROBE_ROUTER
REQ_CORRELATE = zmq.REQ_CORRELATE
REQ_RELAXED = zmq.REQ_RELAXED
CONFLATE = zmq.CONFLATE
ZAP_DOMAIN = zmq.ZAP_DOMAIN

# Socket options introduced in 4.1 and later.

ROUTER_HANDOVER = zmq.ROUTER_HANDOVER
TOS = zmq.TOS
CONNECT_RID = 61
GSSAPI_SERVER = zmq.GSSAPI_SERVER
GSSAPI_PRINCIPAL = zmq.GSSAPI_PRINCIPAL
GSSAPI_SERVICE_PRINCIPAL = zmq.GSSAPI_SERVICE_PRINCIPAL
GSSAPI_PLAINTEXT = zmq.GSSAPI_PLAINTEXT
HANDSHAKE_IVL = zmq.HANDSHAKE_IVL
SOCKS_PROXY = zmq.SOCKS_PROXY
XPUB_NODROP = zmq.XPUB_NODROP
HEARTBEAT_IVL = zmq.HEARTBEAT_IVL
HEARTBEAT_TTL = zmq.HEARTBEAT_TTL
HEARTBEAT_TIMEOUT = zmq.HEARTBEAT_TIMEOUT
CONNECT_TIMEOUT = zmq.CONNECT_TIMEOUT
TCP_MAXRT = zmq.TCP_MAXRT

# Error codes. libzmq reports system errno values where the platform has
# them, and its own values (offset from HAUSNUMERO) for the rest.

EAGAIN = zmq.EAGAIN
EINVAL = zmq.EINVAL
EINTR = _errno.EINTR
ENOENT = _errno.ENOENT
ENODEV = _errno.ENODEV
EPROTONOSUPPORT = zmq.EPROTONOSUPPORT
EADDRINUSE = zmq.EADDRINUSE
EADDRNOTAVAIL = zmq.EADDRNOTAVAIL
ENOTSOCK = zmq.ENOTSOCK
ENOTSUP = zmq.ENOTSUP
EFSM = zmq.EFSM
ENOCOMPATPROTO = zmq.ENOCOMPATPROTO
ETERM = zmq.ETERM
EMTHREAD = zmq.EMTHREAD


__all__ = [name for name in dir() if name.isupper()]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
