""" Implementation of the top-level :func:`new` function, the one entry
    point for creating contexts. The libzmq found on this host decides
    which backend variant is instantiated; that decision is made once per
    context, and everything created from the context follows it.
"""

import logging

from . import backend
from . import descriptor
from . import native


logger = logging.getLogger(__name__)


def new(soname=None, threads=None, max_sockets=None, library=None):
    """ Return a new :class:`zmqffi.Context` appropriate for the installed
        libzmq.

        *soname* names the library to load, either a bare name such as
        'libzmq.so.3' or a path; by default the configured library is used,
        or else the first supported libzmq found on the loader path.
        *threads* is the I/O thread pool size, default 1. *max_sockets*
        limits the number of sockets the context may have open, and
        requires libzmq 3.x or later.

        An already loaded *library* may be supplied instead of a *soname*;
        it must offer the same interface as :class:`zmqffi.native.Library`.

        Raises :class:`UnresolvableBackend` if no suitable libzmq is found.
        It is possible to hold contexts backed by different libzmq versions
        in one process, though rarely useful.
    """

    if library is None:
        library = native.load(soname, accept=descriptor.supported)
    elif soname is not None:
        raise ValueError('specify either a soname or a library, not both')

    chosen = descriptor.select(library.version)
    logger.debug('%s: libzmq %s, using the %s backend', library.path, '.'.join(str(number) for number in library.version), chosen.name)

    Context = backend.context_class(chosen)
    return Context(library, threads=threads, max_sockets=max_sockets)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
