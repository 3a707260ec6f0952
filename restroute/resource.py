"""

    restroute.resource -- conventional REST routes for a resource
    =============================================================

    Maps a set of named actions onto conventional HTTP method and path pairs
    and registers them with a host application::

        app.resource('photos', {
            'index': list_photos,
            'show': {'json': photo_json, 'html': photo_html},
            'load': load_photo,
        })

    registers ``GET /photos.:format?`` and ``GET /photos/:photo.:format?``
    and loads ``request.photo`` before the latter runs.

"""

import logging
from collections.abc import Mapping

from webob import Request

from restroute.handlers import as_handler, as_loader
from restroute.negotiation import set_type
from restroute.utils import METHODS, singular, last_segment, ensure_slash
from restroute.exc import ReservedIdName

__all__ = ('Resource', 'resource', 'ACTIONS', 'OPTIONS', 'METHODS')

log = logging.getLogger('restroute')

#: Actions in order of registration, ``new`` should precede ``show`` so
#: ``/new`` isn't captured as an id value
ACTIONS = (
    'index',    # GET     /
    'new',      # GET     /new
    'create',   # POST    /
    'show',     # GET     /:id
    'edit',     # GET     /:id/edit
    'update',   # PUT     /:id
    'patch',    # PATCH   /:id
    'destroy',  # DELETE  /:id
    )

OPTIONS = ('id', 'base', 'format', 'load')

DEFAULT_ID = 'id'

def _verb(method):
    def verb(self, path, fn=None):
        return self.map(method, path, fn)
    verb.__name__ = method
    verb.__doc__ = """ Map ``%s`` requests on ``path`` to ``fn``""" % (
        method.upper())
    return verb

class Resource(object):
    """ Resource with conventional routes

    :param name:
        resource name, ``None`` for a root resource
    :param actions:
        mapping of action names and options
    :param app:
        host application
    """

    def __init__(self, name, actions, app):
        actions = dict(actions or {})

        self.name = name
        self.routes = {}
        self.app = app
        self.actions = actions
        self.base = ensure_slash(actions.get('base'))
        self.format = actions.get('format')
        self.default_id = (
            singular(last_segment(name)) if name else None) or DEFAULT_ID
        self.id = actions.get('id') or self.default_id
        self.param = ':' + self.id

        for key in ACTIONS:
            if actions.get(key):
                self.map_action(key, actions[key])

        if actions.get('load'):
            self.load(actions['load'])

    def map(self, method, path=None, fn=None):
        """ Map HTTP ``method`` and optional ``path`` to ``fn``

        Path starting with ``/`` is relative to resource collection, other
        paths are relative to resource member. If ``path`` is omitted
        ``fn`` can be passed in its place and route points to a member.

        :param fn:
            callable or a mapping from format name to callable
        """
        if not isinstance(path, str):
            path, fn = '', path
        handler = as_handler(fn)

        if path.startswith('/'):
            path = path[1:]
        elif path:
            path = self.param + '/' + path
        else:
            path = self.param
        method = method.lower()

        route = self.base + (self.name or '')
        if self.name and path:
            route += '/'
        route += path
        route += '.:format?'

        default_format = self.format

        def dispatch(request, response, next):
            request.format = (
                request.urlvars.get('format')
                or getattr(request, 'format', None)
                or default_format)
            if request.format:
                set_type(response, request.format)
            return handler(request, response, next)

        getattr(self.app, method)(route, dispatch)
        self.routes['%s %s' % (method.upper(), route)] = handler
        log.debug('mapped %s %s to %r', method.upper(), route, handler)
        return self

    def load(self, fn):
        """ Set the auto-load ``fn`` for resource's id parameter

        Loaded object is set on request under resource id name, if loader
        yields no object the response is 404 Not Found.

        :param fn:
            :class:`restroute.handlers.LegacyLoader`,
            :class:`restroute.handlers.ContextualLoader` or a callable
            ``fn(request, value, callback)``

        :raises restroute.exc.ReservedIdName:
            if request already has an attribute named as resource id
        """
        loader = as_loader(fn)
        field = self.id
        if field == 'format' or hasattr(Request, field):
            raise ReservedIdName(
                "can't load '%s' onto request, it's a request attribute;"
                " pass 'id' option with another name" % field)

        def hook(request, response, next):
            def callback(err=None, obj=None):
                if err is not None:
                    return next(err)
                if obj is None:
                    response.status = 404
                    response.content_type = 'text/plain'
                    response.body = b'Not Found'
                    return
                setattr(request, field, obj)
                return next()
            return loader(request, request.urlvars.get(field), callback)

        self.app.param(field, hook)
        return self

    def add(self, name, actions=None, opts=None, **options):
        """ Nest resource under this resource's member path

        Returns this (parent) resource for chaining.
        """
        base = (self.base
            + (self.name + '/' if self.name else '')
            + self.param + '/')
        name, actions = _resolve(name, actions, opts, options)
        actions['base'] = base
        Resource(name, actions, self.app)
        return self

    def map_action(self, key, fn):
        """ Map conventional action ``key`` to ``fn``"""
        if key == 'index':
            self.get('/', fn)
        elif key == 'new':
            self.get('/new', fn)
        elif key == 'create':
            self.post('/', fn)
        elif key == 'show':
            self.get(fn)
        elif key == 'edit':
            self.get('edit', fn)
        elif key == 'update':
            self.put(fn)
        elif key == 'patch':
            self.patch(fn)
        elif key == 'destroy':
            self.delete(fn)

    def __repr__(self):
        return '%s(name=%r, base=%r, id=%r)' % (
            self.__class__.__name__, self.name, self.base, self.id)

for _method in METHODS:
    setattr(Resource, _method, _verb(_method))
del _method

def resource(app, name, actions=None, opts=None, **options):
    """ Define a resource on ``app`` with the given ``name`` and ``actions``

    :param name:
        resource name or, for a root resource, the actions
    :param actions:
        mapping or object with action handlers and options; extra options
        if ``name`` was omitted
    :param opts:
        extra options which override ones found in ``actions``
    """
    name, actions = _resolve(name, actions, opts, options)
    return Resource(name, actions, app)

def _resolve(name, actions, opts, options):
    """ Return ``(name, actions)`` with options merged into a new dict"""
    if name is not None and not isinstance(name, str):
        name, actions, opts = None, name, _merge(actions, opts)
    merged = _as_dict(actions)
    merged.update(_as_dict(opts))
    merged.update(options)
    return name, merged

def _merge(a, b):
    merged = _as_dict(a)
    merged.update(_as_dict(b))
    return merged

def _as_dict(obj):
    """ Copy actions and options of ``obj`` into a new dict

    ``obj`` can be a mapping or an object with actions as attributes.
    """
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    return dict(
        (key, getattr(obj, key))
        for key in ACTIONS + OPTIONS
        if getattr(obj, key, None) is not None)
