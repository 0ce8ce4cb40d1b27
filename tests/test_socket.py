import pytest

import zmqffi
from fakezmq import FakeLibrary


def test_send_recv(pipeline):
    sender, receiver = pipeline

    assert sender.send(b'first') == True
    assert sender.send('second') == True
    assert sender.send(bytearray(b'third')) == True
    assert sender.send(b'') == True

    assert receiver.recv() == b'first'
    assert receiver.recv() == b'second'
    assert receiver.recv() == b'third'
    assert receiver.recv() == b''

    assert sender.has_error() == False
    assert receiver.has_error() == False


def test_no_leaked_messages(library, pipeline):
    sender, receiver = pipeline

    sender.send(b'one')
    sender.send_multipart((b'two', b'three'))
    receiver.recv()
    receiver.recv_multipart()

    receiver.die_on_error = False
    receiver.recv(zmqffi.DONTWAIT)

    assert library.open_messages() == 0


def test_request_reply(context):

    server = context.socket(zmqffi.REP)
    server.bind('tcp://127.0.0.1:5555')

    client = context.socket(zmqffi.REQ)
    client.connect('tcp://127.0.0.1:5555')

    client.send('ping')
    assert server.recv() == b'ping'

    server.send('pong')
    assert client.recv() == b'pong'


def test_bad_endpoints(context):
    socket = context.socket(zmqffi.PAIR)

    with pytest.raises(zmqffi.AddressError) as error:
        socket.bind('nonsense')

    assert error.value.errno == zmqffi.EINVAL
    assert error.value.function == 'zmq_bind'
    assert str(error.value) == 'zmq_bind: Invalid argument'

    with pytest.raises(zmqffi.AddressError) as error:
        socket.connect('carrier-pigeon://coop')

    assert error.value.errno == zmqffi.EPROTONOSUPPORT

    with pytest.raises(zmqffi.AddressError) as error:
        socket.bind('tcp://127.0.0.1:port')

    assert error.value.errno == zmqffi.EINVAL

    # An address error is still a native call error.

    with pytest.raises(zmqffi.NativeCallError):
        socket.bind('')


def test_address_in_use(context):

    first = context.socket(zmqffi.PULL)
    second = context.socket(zmqffi.PULL)

    first.bind('ipc:///tmp/zmqffi-test')

    with pytest.raises(zmqffi.AddressError) as error:
        second.bind('ipc:///tmp/zmqffi-test')

    assert error.value.errno == zmqffi.EADDRINUSE

    # The endpoint is released with the socket that bound it.

    first.close()
    assert second.bind('ipc:///tmp/zmqffi-test') == True


def test_unbind_disconnect(context):

    server = context.socket(zmqffi.PULL)
    client = context.socket(zmqffi.PUSH)

    server.bind('inproc://unbind')
    client.connect('inproc://unbind')

    if context.version()[0] == 2:
        assert context.supports(zmqffi.descriptor.UNBIND) == False

        with pytest.raises(zmqffi.UnsupportedOperation):
            server.unbind('inproc://unbind')

        with pytest.raises(zmqffi.UnsupportedOperation):
            client.disconnect('inproc://unbind')

        return

    assert client.disconnect('inproc://unbind') == True
    assert server.unbind('inproc://unbind') == True

    with pytest.raises(zmqffi.AddressError) as error:
        server.unbind('inproc://unbind')

    assert error.value.errno == zmqffi.ENOENT

    with pytest.raises(zmqffi.AddressError):
        client.disconnect('inproc://unbind')

    # The endpoint can be bound again.

    assert server.bind('inproc://unbind') == True


def test_unsupported_ignores_die_on_error():

    context = zmqffi.new(library=FakeLibrary((2, 2, 0)))
    socket = context.socket(zmqffi.PULL)
    socket.die_on_error = False

    with pytest.raises(zmqffi.UnsupportedOperation):
        socket.unbind('inproc://nowhere')

    assert socket.has_error() == False
    context.destroy()


def test_linger(context):
    socket = context.socket(zmqffi.DEALER)

    # New sockets discard unsent messages on close, rather than holding
    # up termination of the context.

    assert socket.get_linger() == 0

    assert socket.set_linger(250) == True
    assert socket.get_linger() == 250
    assert socket.get(zmqffi.LINGER, 'int') == 250


def test_configured_linger(monkeypatch, context):
    monkeypatch.setenv('ZMQFFI_LINGER', '100')

    socket = context.socket(zmqffi.DEALER)
    assert socket.get_linger() == 100


def test_linger_discards(library, context):

    socket = context.socket(zmqffi.PUSH)
    socket.send(b'nobody is listening')
    socket.close()

    assert library.discarded == [[b'nobody is listening']]


def test_identity(context):
    socket = context.socket(zmqffi.DEALER)

    assert socket.get_identity() == b''

    socket.set_identity('dealer')
    assert socket.get_identity() == b'dealer'

    socket.set_identity(b'\x01\x02')
    assert socket.get(zmqffi.IDENTITY, 'binary') == b'\x01\x02'


def test_fd(library, context):
    socket = context.socket(zmqffi.DEALER)
    assert socket.get_fd() == 1000 + socket.handle


def test_option_widths(context):
    """ Options whose width depends on the revision round trip through the
        declared type.
    """

    socket = context.socket(zmqffi.PULL)

    if context.version()[0] == 2:
        socket.set(zmqffi.HWM, 'uint64', 2**40)
        assert socket.get(zmqffi.HWM, 'uint64') == 2**40
        assert socket.get(zmqffi.RCVMORE, 'int64') == 0
        assert socket.get(zmqffi.EVENTS, 'uint32') == 0
        assert socket.get(zmqffi.RATE, 'int64') == 100

        with pytest.raises(zmqffi.TypeMismatch):
            socket.get(zmqffi.RCVMORE, 'int')

    else:
        socket.set(zmqffi.SNDHWM, 'int', 50)
        assert socket.get(zmqffi.SNDHWM, 'int') == 50
        assert socket.get(zmqffi.RCVMORE, 'int') == 0
        socket.set(zmqffi.MAXMSGSIZE, 'int64', 2**33)
        assert socket.get(zmqffi.MAXMSGSIZE, 'int64') == 2**33

        with pytest.raises(zmqffi.TypeMismatch):
            socket.get(zmqffi.RCVMORE, 'int64')

        socket.bind('inproc://widths')
        assert socket.get(zmqffi.LAST_ENDPOINT, 'string') == 'inproc://widths'


def test_bool_options(context):

    if context.version()[0] < 4:
        pytest.skip('IPV6 is a 4.x socket option')

    socket = context.socket(zmqffi.PULL)

    assert socket.get(zmqffi.IPV6, 'bool') is False
    socket.set(zmqffi.IPV6, 'bool', True)
    assert socket.get(zmqffi.IPV6, 'bool') is True
    assert socket.get(zmqffi.IPV6, 'int') == 1


def test_type_mismatch(context):
    socket = context.socket(zmqffi.PULL)
    socket.die_on_error = False

    with pytest.raises(zmqffi.TypeMismatch):
        socket.set(zmqffi.LINGER, 'binary', b'abc')

    with pytest.raises(zmqffi.TypeMismatch):
        socket.set(zmqffi.LINGER, 'int', 'abc')

    with pytest.raises(zmqffi.TypeMismatch):
        socket.get(zmqffi.IDENTITY, 'int')

    with pytest.raises(zmqffi.TypeMismatch):
        socket.set(zmqffi.LINGER, 'int', 2**40)

    assert socket.has_error() == False


def test_unknown_option(context):
    """ Options missing from the table are left to libzmq to reject. """

    socket = context.socket(zmqffi.PULL)

    with pytest.raises(zmqffi.NativeCallError) as error:
        socket.set(9999, 'int', 1)

    assert error.value.errno == zmqffi.EINVAL
    assert type(error.value) is zmqffi.NativeCallError

    socket.die_on_error = False
    assert socket.get(9999, 'int') is None
    assert socket.last_errno == zmqffi.EINVAL


def test_pub_sub(context):

    publisher = context.socket(zmqffi.PUB)
    publisher.bind('inproc://weather')

    subscriber = context.socket(zmqffi.SUB)
    subscriber.connect('inproc://weather')
    subscriber.subscribe('weather')

    everything = context.socket(zmqffi.SUB)
    everything.connect('inproc://weather')
    everything.subscribe(b'')

    publisher.send('weather: sunny')
    publisher.send('sports: 3-1')

    assert subscriber.recv() == b'weather: sunny'
    assert subscriber.has_pollin() == False

    assert everything.recv() == b'weather: sunny'
    assert everything.recv() == b'sports: 3-1'

    subscriber.unsubscribe('weather')
    publisher.send('weather: rain')
    assert subscriber.has_pollin() == False
    assert everything.recv() == b'weather: rain'


def test_multipart(pipeline):
    sender, receiver = pipeline

    assert sender.send_multipart([b'header', 'body', b'']) == True
    assert receiver.recv_multipart() == [b'header', b'body', b'']

    # A list or tuple passed to send() is multipart as well.

    sender.send(('one', 'two'))
    assert receiver.recv_multipart() == [b'one', b'two']

    sender.send_multipart([b'single'])
    assert receiver.recv_multipart() == [b'single']

    # The parts of a multipart message can be read one at a time.

    sender.send_multipart([b'a', b'b'])
    assert receiver.recv() == b'a'
    assert receiver.recv() == b'b'


def test_empty_multipart(pipeline):
    sender, receiver = pipeline

    with pytest.raises(ValueError):
        sender.send_multipart([])

    with pytest.raises(ValueError):
        sender.send([])


def test_router_identity(context):

    router = context.socket(zmqffi.ROUTER)
    router.bind('inproc://router')

    dealer = context.socket(zmqffi.DEALER)
    dealer.set_identity('dealer')
    dealer.connect('inproc://router')

    dealer.send_multipart([b'', b'request'])
    assert router.recv_multipart() == [b'dealer', b'', b'request']

    router.send_multipart([b'dealer', b'', b'reply'])
    assert dealer.recv_multipart() == [b'', b'reply']


def test_nonblocking(pipeline):
    sender, receiver = pipeline

    with pytest.raises(zmqffi.NativeCallError) as error:
        receiver.recv(zmqffi.DONTWAIT)

    assert error.value.errno == zmqffi.EAGAIN
    assert receiver.has_error() == True
    assert receiver.last_errno == zmqffi.EAGAIN

    receiver.die_on_error = False

    assert receiver.recv(zmqffi.DONTWAIT) == b''
    assert receiver.last_errno == zmqffi.EAGAIN
    assert receiver.last_strerror != ''

    assert receiver.recv_multipart(zmqffi.DONTWAIT) == []
    assert receiver.has_error() == True

    # The next successful call clears the error.

    sender.send(b'ready')
    assert receiver.recv(zmqffi.DONTWAIT) == b'ready'
    assert receiver.has_error() == False
    assert receiver.last_errno == 0
    assert receiver.last_strerror == ''


def test_nonblocking_send(context):
    """ A socket with no peer cannot send without blocking. """

    socket = context.socket(zmqffi.PUSH)

    with pytest.raises(zmqffi.NativeCallError) as error:
        socket.send(b'nowhere', zmqffi.DONTWAIT)

    assert error.value.errno == zmqffi.EAGAIN

    socket.die_on_error = False
    assert socket.send(b'nowhere', zmqffi.DONTWAIT) == False
    assert socket.send_multipart([b'no', b'where'], zmqffi.DONTWAIT) == False
    assert socket.last_errno == zmqffi.EAGAIN


def test_polling(pipeline):
    sender, receiver = pipeline

    assert receiver.has_pollin() == False
    assert sender.has_pollout() == True

    sender.send(b'data')

    assert receiver.has_pollin() == True
    receiver.recv()
    assert receiver.has_pollin() == False


def test_error_state_is_per_socket(context):

    first = context.socket(zmqffi.PAIR)
    second = context.socket(zmqffi.PAIR)

    first.die_on_error = False
    second.die_on_error = False

    assert first.bind('bogus') == False
    assert first.has_error() == True
    assert first.last_errno == zmqffi.EINVAL
    assert first.last_strerror == 'Invalid argument'

    assert second.has_error() == False

    assert second.bind('inproc://fine') == True
    assert first.has_error() == True

    assert first.bind('inproc://also-fine') == True
    assert first.has_error() == False


def test_closed_socket(context):
    socket = context.socket(zmqffi.PAIR)
    socket.close()

    assert socket.state == zmqffi.lifecycle.CLOSED
    assert socket.handle is None
    assert socket.context is None

    with pytest.raises(zmqffi.NativeCallError) as error:
        socket.bind('inproc://closed')

    assert error.value.errno == zmqffi.ENOTSOCK

    with pytest.raises(zmqffi.NativeCallError):
        socket.recv()

    socket.die_on_error = False

    assert socket.send(b'data') == False
    assert socket.recv() == b''
    assert socket.recv_multipart() == []
    assert socket.get_linger() is None
    assert socket.has_pollin() == False
    assert socket.last_errno == zmqffi.ENOTSOCK


def test_double_close(library, context):
    socket = context.socket(zmqffi.PAIR)

    socket.close()
    socket.close()

    assert len(library.events('close')) == 1
    assert socket.has_error() == False


def test_context_manager(library, context):

    with context.socket(zmqffi.PAIR) as socket:
        handle = socket.handle
        assert socket.live == True

    assert socket.live == False
    assert library.events('close') == [('close', handle)]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
