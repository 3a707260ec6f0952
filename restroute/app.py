"""

    restroute.app -- WSGI application to host resources
    ===================================================

    Minimal WebOb based application which implements the protocol resources
    are registered with: ``app.<method>(pattern, handler)``,
    ``app.param(name, hook)`` and handlers called as
    ``handler(request, response, next)``.

    Routes are tried in order of registration, a handler calls ``next()`` to
    pass the request to the next matching route or ``next(err)`` to abort
    processing with an error.

"""

import logging

from webob import Request, Response
from webob.exc import HTTPException, HTTPNotFound

from restroute.urlpattern import URLPattern
from restroute.utils import METHODS
from restroute.exc import NoURLPatternMatched

__all__ = ('Application', 'Layer', 'Dispatcher')

log = logging.getLogger('restroute.app')

class Layer(object):
    """ Route registered within application

    :param method:
        lower-cased HTTP method or ``all``
    :param pattern:
        route pattern
    :param handler:
        callable ``handler(request, response, next)``
    """

    def __init__(self, method, pattern, handler, url_pattern_cls=None):
        self.method = method
        self.pattern = (url_pattern_cls or URLPattern)(pattern)
        self.handler = handler

    def match_method(self, request):
        method = request.method.lower()
        return (self.method in ('all', method)
            or (self.method == 'get' and method == 'head'))

    def match(self, path_info, request):
        """ Match ``request`` against layer

        Returns captured route parameters or ``None`` if method doesn't
        match.

        :raises restroute.exc.NoURLPatternMatched:
            if path doesn't match route pattern
        """
        params = self.pattern.match(path_info)
        if not self.match_method(request):
            return None
        return params

    def __repr__(self):
        return '%s(method=%r, pattern=%r, handler=%r)' % (
            self.__class__.__name__, self.method, self.pattern.pattern,
            self.handler)

class Dispatcher(object):
    """ Processing of a single request

    Instances are passed to handlers as ``next`` callable.
    """

    def __init__(self, app, request, response):
        self.app = app
        self.request = request
        self.response = response
        self.layers = iter(app.layers)
        self.error = None
        self.exhausted = False
        self.seen = {}

    def __call__(self, err=None):
        if err is not None:
            self.error = err
            return
        path_info = self.request.path_info or '/'
        for layer in self.layers:
            try:
                params = layer.match(path_info, self.request)
            except NoURLPatternMatched:
                continue
            if params is None:
                continue
            log.debug('%s %s matched %r',
                self.request.method, path_info, layer)
            self.request.urlvars = params
            keys = []
            for name in layer.pattern.names:
                if name in params and name in self.app.params \
                        and not name in keys:
                    keys.append(name)
            return self.run_params(keys, layer)
        self.exhausted = True

    def run_params(self, keys, layer):
        """ Run param hooks for ``keys`` and then ``layer`` handler"""
        if not keys:
            return layer.handler(self.request, self.response, self)
        key, rest = keys[0], keys[1:]
        value = self.request.urlvars[key]
        if self.seen.get(key) == value:
            return self.run_params(rest, layer)
        hooks = list(self.app.params[key])

        def proceed(err=None):
            if err is not None:
                return self(err)
            if hooks:
                return hooks.pop(0)(self.request, self.response, proceed)
            self.seen[key] = value
            return self.run_params(rest, layer)

        return proceed()

class Application(object):
    """ WSGI application

    Register routes with ``app.get(pattern, handler)`` and alike methods
    (``app.all`` matches any method), and param hooks with
    ``app.param(name, hook)``.
    """

    url_pattern_cls = None

    def __init__(self, url_pattern_cls=None):
        self.layers = []
        self.params = {}
        if url_pattern_cls is not None:
            self.url_pattern_cls = url_pattern_cls

    def route(self, method, pattern, handler):
        """ Register ``handler`` for ``method`` requests matching
        ``pattern``
        """
        layer = Layer(method.lower(), pattern, handler,
            url_pattern_cls=self.url_pattern_cls)
        self.layers.append(layer)
        log.debug('registered %r', layer)
        return self

    def param(self, name, hook):
        """ Register ``hook`` to run before handlers of routes which capture
        ``name`` parameter
        """
        self.params.setdefault(name, []).append(hook)
        return self

    def handle(self, request):
        """ Process ``request`` and return response"""
        response = Response()
        dispatcher = Dispatcher(self, request, response)
        try:
            dispatcher()
        except HTTPException as e:
            return e
        err = dispatcher.error
        if err is not None:
            if isinstance(err, HTTPException):
                return err
            if isinstance(err, BaseException):
                raise err
            raise RuntimeError(err)
        if dispatcher.exhausted:
            return HTTPNotFound()
        return response

    def __call__(self, environ, start_response):
        request = Request(environ)
        response = self.handle(request)
        return response(environ, start_response)

def _register(method):
    def register(self, pattern, handler):
        return self.route(method, pattern, handler)
    register.__name__ = method
    register.__doc__ = """ Register ``handler`` for ``%s`` requests""" % (
        method.upper())
    return register

for _method in METHODS:
    setattr(Application, _method, _register(_method))
del _method
