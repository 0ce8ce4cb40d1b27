""" Ownership and teardown bookkeeping shared by contexts and sockets.

    libzmq does not reclaim contexts or sockets on its own, and it is not
    safe to close a socket from any thread but the one using it, nor to
    touch either kind of handle from a forked child. The rules enforced
    here are:

    * every resource remembers the process and thread that created it,
      and teardown issued from anywhere else is skipped;
    * teardown happens at most once;
    * a context closes its remaining sockets, in the order they were
      created, before its own handle is released.

    The bookkeeping is not internally synchronized. Creating and closing
    sockets against one context from several threads must be serialized by
    the caller.
"""

import atexit
import logging
import os
import threading
import weakref

from .errors import CrossThreadTeardown


logger = logging.getLogger(__name__)

LIVE = 'live'
CLOSED = 'closed'
DESTROYED = 'destroyed'


def creator():
    """ Return a (process id, thread id) tuple identifying the caller. """
    return (os.getpid(), threading.get_ident())


class Record:
    """ The teardown state of one native handle: the handle itself, who
        created it, and whether it is still live. A record is kept apart
        from the object wrapping the handle, so that a parent can still
        release the handle after the wrapper has been collected.
    """

    __slots__ = ('handle', 'pid', 'tid', 'state')

    def __init__(self, handle):
        self.handle = handle
        self.pid, self.tid = creator()
        self.state = LIVE


    def __repr__(self):
        return 'lifecycle.Record(%s, %s)' % (self.handle, self.state)


    def claim(self, action, owner=None):
        """ Decide whether the calling thread may perform *action* (a verb
            such as 'close' or 'destroy', used in messages) on this handle
            right now. Returns True if teardown should proceed, False if the
            handle is already released. Raises :class:`CrossThreadTeardown`
            if the caller is not the creator.
        """

        if owner is None:
            owner = self

        pid, tid = creator()

        if pid != self.pid:
            raise CrossThreadTeardown('cannot %s %r: created by process %s, not %s' % (action, owner, self.pid, pid))

        if tid != self.tid:
            raise CrossThreadTeardown('cannot %s %r: created by thread %s, not %s' % (action, owner, self.tid, tid))

        return self.state == LIVE


    def release(self, state):
        self.handle = None
        self.state = state



class Resource:
    """ Mixin for objects owning a native handle. Subclasses call
        :func:`_adopt` once the handle exists, and :func:`_claim` at the
        top of their teardown method.
    """

    record = None

    def _adopt(self, handle):
        self.record = Record(handle)


    def _claim(self, action):

        if self.record is None:
            # Construction never completed; there is nothing to tear down.
            return False

        return self.record.claim(action, self)


    @property
    def handle(self):
        if self.record is None:
            return None
        return self.record.handle


    @property
    def state(self):
        if self.record is None:
            return None
        return self.record.state


    @property
    def live(self):
        return self.state == LIVE



class Children:
    """ Ordered collection of the :class:`Record` instances belonging to one
        parent. Records are held strongly: the parent must still be able to
        release a child handle whose wrapper has already been collected,
        as happens when both are part of one unreachable reference cycle.
    """

    def __init__(self):
        self._records = dict()


    def __len__(self):
        return len(list(self.__iter__()))


    def __iter__(self):
        """ Iterate over the live records, oldest first. """

        for record in list(self._records.values()):
            if record.state == LIVE:
                yield record


    def add(self, record):
        self._records[id(record)] = record


    def discard(self, record):
        self._records.pop(id(record), None)



class Registry:
    """ Ordered, non-owning collection of resources. Entries vanish when
        the resource is garbage collected, or when explicitly discarded.
    """

    def __init__(self):
        self._references = dict()


    def __len__(self):
        return len(list(self.__iter__()))


    def __iter__(self):
        """ Iterate over the live entries, oldest first. """

        for reference in list(self._references.values()):
            thing = reference()
            if thing is not None and thing.live:
                yield thing


    def add(self, thing):

        key = id(thing)

        def forget(reference, key=key, references=self._references):
            if references.get(key) is reference:
                del references[key]

        self._references[key] = weakref.ref(thing, forget)


    def discard(self, thing):

        key = id(thing)

        try:
            reference = self._references[key]
        except KeyError:
            return

        if reference() is thing:
            del self._references[key]



# Every context created in this process, so that anything left open at
# interpreter exit is shut down in an orderly fashion.

contexts = Registry()


def _cleanup():

    pid = os.getpid()

    for context in list(contexts):
        if context.record.pid != pid:
            continue

        try:
            context.destroy()
        except Exception:
            logger.exception('failed to destroy %r at exit', context)


atexit.register(_cleanup)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
