""" Backend variants, one submodule per supported libzmq revision. Each
    submodule defines a ``Context`` and a ``Socket`` class; submodules are
    only imported once a context actually needs them.
"""

import importlib


def context_class(descriptor):
    """ Return the ``Context`` class implementing *descriptor*. """

    module = importlib.import_module('.' + descriptor.module, __name__)
    return module.Context


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
