""" Loading libzmq and calling into it.

    A :class:`Library` wraps one loaded shared library. Backends describe
    the C signatures they need as a prototype table and :func:`attach` it;
    each attached function is then available as an attribute of the
    :class:`Library` instance. :func:`load` locates a library, either the
    one explicitly requested or the first usable candidate on this host.
"""

import ctypes
import ctypes.util
import logging
import sys
import threading

from . import config
from .errors import UnresolvableBackend


logger = logging.getLogger(__name__)

_cache = dict()
_cache_lock = threading.Lock()


class Library:
    """ A loaded libzmq, identified by the *path* (or soname) it was loaded
        from. The (major, minor, patch) *version* is read once, at load time.
    """

    def __init__(self, path):

        self.path = path
        self.dll = ctypes.CDLL(path)
        self._functions = dict()

        try:
            self.attach(_common)
        except UnresolvableBackend:
            raise UnresolvableBackend("'%s' does not look like libzmq" % (path))

        major = (ctypes.c_int * 1)()
        minor = (ctypes.c_int * 1)()
        patch = (ctypes.c_int * 1)()
        self.zmq_version(major, minor, patch)

        self.version = (major[0], minor[0], patch[0])


    def __getattr__(self, name):

        # Only reached for attributes not found the usual way, which for
        # a Library means the attached C functions.

        try:
            return self.__dict__['_functions'][name]
        except KeyError:
            pass

        raise AttributeError('%s has not been attached from %s' % (name, self.path))


    def __repr__(self):
        version = '.'.join(str(number) for number in self.version)
        return 'native.Library(%r, version %s)' % (self.path, version)


    def attach(self, prototypes):
        """ Declare the C signatures in *prototypes*, a dictionary mapping
            function names to (restype, argtypes) pairs, and make each one
            callable as an attribute of this instance. Attaching a name twice
            is harmless; attaching a name the library does not export raises
            :class:`UnresolvableBackend`.
        """

        for name, prototype in prototypes.items():
            if name in self._functions:
                continue

            try:
                function = getattr(self.dll, name)
            except AttributeError:
                raise UnresolvableBackend('%s does not export %s' % (self.path, name))

            restype, argtypes = prototype
            function.restype = restype
            function.argtypes = argtypes
            self._functions[name] = function


    def errno(self):
        """ Return the errno value of the last failed call in this thread. """
        return self.zmq_errno()


    def strerror(self, errno):
        """ Return the libzmq text describing *errno*. """

        text = self.zmq_strerror(errno)
        if text is None:
            return 'Unknown error %d' % (errno)

        return text.decode(errors='replace')



_common = {
    'zmq_version': (None, (ctypes.c_void_p, ctypes.c_void_p, ctypes.c_void_p)),
    'zmq_errno': (ctypes.c_int, ()),
    'zmq_strerror': (ctypes.c_char_p, (ctypes.c_int,)),
}


def candidates():
    """ Return the ordered sequence of library names worth trying on this
        platform: the generic name first, then versioned sonames from newest
        to oldest, then whatever the system's library search turns up.
    """

    if sys.platform == 'darwin':
        names = ['libzmq.dylib', 'libzmq.5.dylib', 'libzmq.4.dylib',
                 'libzmq.3.dylib', 'libzmq.1.dylib']
    elif sys.platform.startswith('win') or sys.platform == 'cygwin':
        names = ['libzmq.dll', 'libzmq-v4.dll', 'zmq.dll']
    else:
        names = ['libzmq.so', 'libzmq.so.5', 'libzmq.so.4', 'libzmq.so.3',
                 'libzmq.so.1']

    found = ctypes.util.find_library('zmq')
    if found is not None and found not in names:
        names.append(found)

    return names


def load(soname=None, accept=None):
    """ Return a :class:`Library` for *soname*, which may be a bare library
        name or a filesystem path. If no *soname* is given the configured
        default is used, and failing that every name from
        :func:`candidates` is tried in turn. The optional *accept* predicate
        receives each library's (major, minor, patch) version and filters out
        those it returns False for.

        Raises :class:`UnresolvableBackend` if nothing suitable loads.
    """

    if soname is None:
        soname = config.get('soname')

    if soname is not None:
        try:
            library = _open(soname)
        except OSError:
            raise UnresolvableBackend("failed to load '%s', is it on your loader path?" % (soname))

        if accept is not None and not accept(library.version):
            raise UnresolvableBackend('%s is libzmq %s, which is not supported' % (soname, _dotted(library.version)))

        return library

    rejected = list()

    for name in candidates():
        try:
            library = _open(name)
        except (OSError, UnresolvableBackend):
            continue

        if accept is None or accept(library.version):
            return library

        rejected.append('%s (%s)' % (name, _dotted(library.version)))

    if rejected:
        raise UnresolvableBackend('no supported libzmq found; rejected ' + ', '.join(rejected))

    raise UnresolvableBackend('no libzmq found, is it installed and on your loader path?')


def _open(name):

    with _cache_lock:
        try:
            library = _cache[name]
        except KeyError:
            library = Library(name)
            _cache[name] = library
            logger.debug('loaded %s, libzmq %s', name, _dotted(library.version))

    return library


def _dotted(version):
    return '.'.join(str(number) for number in version)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
