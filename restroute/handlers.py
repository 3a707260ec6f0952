"""

    restroute.handlers -- action handlers and loaders
    =================================================

    Action handlers come in two shapes: a single callable invoked for every
    format (:class:`SingleHandler`) or a mapping from format name to
    callable (:class:`FormatTable`). Loaders come in two shapes as well,
    :class:`LegacyLoader` receives only id value, :class:`ContextualLoader`
    receives request too. Shapes are resolved once, at registration time.

"""

import logging
from collections.abc import Mapping

from restroute.negotiation import negotiate
from restroute.exc import InvalidHandler

__all__ = (
    'Handler', 'SingleHandler', 'FormatTable', 'as_handler',
    'Loader', 'LegacyLoader', 'ContextualLoader', 'as_loader')

log = logging.getLogger('restroute')

class Handler(object):
    """ Base class for action handlers

    Handlers are called with ``(request, response, next)`` after
    ``request.format`` was resolved.
    """

    def __call__(self, request, response, next):
        raise NotImplementedError()

class SingleHandler(Handler):
    """ Handler which calls ``fn`` regardless of requested format"""

    def __init__(self, fn):
        self.fn = fn

    def __call__(self, request, response, next):
        return self.fn(request, response, next)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.fn)

class FormatTable(Handler):
    """ Handler which dispatches on requested format

    Falls back to negotiation by ``Accept`` header if there's no entry for
    requested format.
    """

    def __init__(self, table):
        for fmt, fn in table.items():
            if not callable(fn):
                raise InvalidHandler(
                    "entry '%s' of format table isn't callable" % fmt)
        self.table = dict(table)

    def __call__(self, request, response, next):
        fn = self.table.get(request.format) if request.format else None
        if fn is not None:
            return fn(request, response, next)
        return negotiate(request, response, next, self.table)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, sorted(self.table))

def as_handler(obj):
    """ Resolve ``obj`` into a :class:`Handler`"""
    if isinstance(obj, Handler):
        return obj
    if isinstance(obj, Mapping):
        return FormatTable(obj)
    if callable(obj):
        return SingleHandler(obj)
    raise InvalidHandler("%r isn't a callable nor a format table" % (obj,))

class Loader(object):
    """ Base class for entity loaders

    Loaders are called with ``(request, value, callback)`` where ``value``
    is id parameter value and ``callback(err=None, obj=None)`` should be
    called exactly once.
    """

    def __init__(self, fn):
        if not callable(fn):
            raise InvalidHandler("loader %r isn't callable" % (fn,))
        self.fn = fn

    def __call__(self, request, value, callback):
        raise NotImplementedError()

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.fn)

class LegacyLoader(Loader):
    """ Loader which calls ``fn(value, callback)``"""

    def __call__(self, request, value, callback):
        return self.fn(value, _once(callback, self))

class ContextualLoader(Loader):
    """ Loader which calls ``fn(request, value, callback)``"""

    def __call__(self, request, value, callback):
        return self.fn(request, value, _once(callback, self))

def as_loader(obj):
    """ Resolve ``obj`` into a :class:`Loader`

    Plain callables are treated as :class:`ContextualLoader`.
    """
    if isinstance(obj, Loader):
        return obj
    return ContextualLoader(obj)

def _once(callback, loader):
    called = []
    def wrapper(err=None, obj=None):
        if called:
            log.warning('%r invoked its callback more than once', loader)
            return
        called.append(True)
        return callback(err, obj)
    return wrapper
