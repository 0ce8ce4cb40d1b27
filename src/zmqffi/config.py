""" Default settings used when creating contexts and sockets. Each default
    can be overridden with an environment variable, in the same way that
    the transport choice is made elsewhere; explicit arguments passed to
    :func:`zmqffi.new` always take precedence over both.
"""

import os


defaults = dict()
defaults['soname'] = None
defaults['threads'] = 1
defaults['max_sockets'] = None
defaults['linger'] = 0

integers = set(('threads', 'max_sockets', 'linger'))

environment = dict()
environment['soname'] = 'ZMQFFI_SONAME'
environment['threads'] = 'ZMQFFI_THREADS'
environment['max_sockets'] = 'ZMQFFI_MAX_SOCKETS'
environment['linger'] = 'ZMQFFI_LINGER'


def get(name):
    """ Return the effective value of the setting *name*. A non-empty
        environment variable wins over the built-in default; integer
        settings are parsed, and a value that does not parse raises
        :class:`ValueError` naming the offending variable.
    """

    default = defaults[name]
    variable = environment[name]

    value = os.environ.get(variable)
    if value is None or value == '':
        return default

    if name in integers:
        try:
            value = int(value)
        except ValueError:
            raise ValueError('%s must be an integer, not %r' % (variable, value))

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
