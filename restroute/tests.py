"""

    restroute.tests -- test suite
    =============================

"""

from unittest import TestCase
from webob import Request, Response
from webob.exc import HTTPForbidden

from restroute import install, resource, Resource
from restroute import InvalidHandler, InvalidRoutePattern, ReservedIdName
from restroute.app import Application
from restroute.handlers import (
    SingleHandler, FormatTable, LegacyLoader, ContextualLoader,
    as_handler, as_loader)
from restroute.negotiation import mime_type
from restroute.urlpattern import URLPattern
from restroute.utils import METHODS, singular, ensure_slash
from restroute.exc import NoURLPatternMatched

__all__ = ()

class RecordingApp(object):
    """ Host which only records registrations"""

    def __init__(self):
        self.registered = []
        self.params = {}

    def param(self, name, hook):
        self.params[name] = hook

    def routes(self):
        return [(m, p) for (m, p, _) in self.registered]

    def handler(self, method, pattern):
        for (m, p, h) in self.registered:
            if (m, p) == (method, pattern):
                return h
        raise KeyError((method, pattern))

def _record(method):
    def register(self, pattern, handler):
        self.registered.append((method, pattern, handler))
    return register

for _method in METHODS:
    setattr(RecordingApp, _method, _record(_method))
del _method

def noop(request, response, next):
    pass

def answer(text):
    def handler(request, response, next):
        response.body = text.encode('utf-8')
    return handler

class TestUtils(TestCase):

    def test_singular(self):
        self.assertEqual(singular('photos'), 'photo')
        self.assertEqual(singular('comments'), 'comment')
        self.assertEqual(singular('categories'), 'category')
        self.assertEqual(singular('photo'), 'photo')
        self.assertEqual(singular('addresses'), 'address')
        self.assertEqual(singular('address'), 'address')
        self.assertEqual(singular('process'), 'process')
        self.assertEqual(singular('status'), 'status')
        self.assertEqual(singular(''), '')

    def test_ensure_slash(self):
        self.assertEqual(ensure_slash('/api'), '/api/')
        self.assertEqual(ensure_slash('/api/'), '/api/')
        self.assertEqual(ensure_slash(None), '/')
        self.assertEqual(ensure_slash(''), '/')

    def test_mime_type(self):
        self.assertEqual(mime_type('json'), 'application/json')
        self.assertEqual(mime_type('html'), 'text/html')
        self.assertEqual(mime_type('text/csv'), 'text/csv')
        self.assertEqual(mime_type('bogus'), 'application/octet-stream')

class TestURLPattern(TestCase):

    def test_format(self):
        p = URLPattern('/photos.:format?')
        self.assertEqual(p.match('/photos'), {})
        self.assertEqual(p.match('/photos/'), {})
        self.assertEqual(p.match('/photos.json'), {'format': 'json'})
        self.assertEqual(p.match('/PHOTOS'), {})
        self.assertRaises(NoURLPatternMatched, p.match, '/photos/42')
        self.assertRaises(NoURLPatternMatched, p.match, '/photosx')

    def test_param(self):
        p = URLPattern('/photos/:photo.:format?')
        self.assertEqual(p.names, ['photo', 'format'])
        self.assertEqual(p.match('/photos/42'), {'photo': '42'})
        self.assertEqual(p.match('/photos/42.json'),
            {'photo': '42', 'format': 'json'})
        self.assertEqual(p.match('/photos/new'), {'photo': 'new'})
        self.assertRaises(NoURLPatternMatched, p.match, '/photos')
        self.assertRaises(NoURLPatternMatched, p.match, '/photos/42/edit')

    def test_nested(self):
        p = URLPattern('/photos/:photo/comments/:comment/edit.:format?')
        self.assertEqual(p.match('/photos/1/comments/2/edit.html'),
            {'photo': '1', 'comment': '2', 'format': 'html'})

    def test_root(self):
        p = URLPattern('/.:format?')
        self.assertEqual(p.match('/'), {})
        self.assertEqual(p.match('/.json'), {'format': 'json'})
        self.assertRaises(NoURLPatternMatched, p.match, '/photos')

        p = URLPattern('/:id.:format?')
        self.assertEqual(p.match('/42.xml'), {'id': '42', 'format': 'xml'})

    def test_invalid(self):
        self.assertRaises(InvalidRoutePattern, URLPattern, 'photos')

class TestHandlers(TestCase):

    def test_as_handler(self):
        self.assertIsInstance(as_handler(noop), SingleHandler)
        self.assertIsInstance(as_handler({'json': noop}), FormatTable)
        h = SingleHandler(noop)
        self.assertIs(as_handler(h), h)
        self.assertRaises(InvalidHandler, as_handler, 42)
        self.assertRaises(InvalidHandler, as_handler, {'json': 42})

    def test_as_loader(self):
        self.assertIsInstance(as_loader(noop), ContextualLoader)
        l = LegacyLoader(noop)
        self.assertIs(as_loader(l), l)
        self.assertRaises(InvalidHandler, as_loader, 'loader')

class TestDefaultId(TestCase):

    def test_from_name(self):
        r = resource(RecordingApp(), 'photos', {})
        self.assertEqual(r.default_id, 'photo')
        self.assertEqual(r.id, 'photo')
        self.assertEqual(r.param, ':photo')

    def test_last_segment(self):
        r = resource(RecordingApp(), 'admin/categories', {})
        self.assertEqual(r.id, 'category')

    def test_anonymous(self):
        r = resource(RecordingApp(), {})
        self.assertEqual(r.name, None)
        self.assertEqual(r.id, 'id')
        self.assertEqual(r.param, ':id')

    def test_empty_segment(self):
        r = resource(RecordingApp(), 'photos/', {})
        self.assertEqual(r.id, 'id')

    def test_singular_name(self):
        r = resource(RecordingApp(), 'address', {})
        self.assertEqual(r.param, ':address')

    def test_id_option(self):
        r = resource(RecordingApp(), 'photos', {'id': 'pic'})
        self.assertEqual(r.default_id, 'photo')
        self.assertEqual(r.param, ':pic')

        r = resource(RecordingApp(), 'photos', {}, {'id': 'pic'})
        self.assertEqual(r.id, 'pic')

        r = resource(RecordingApp(), 'photos', {}, id='pic')
        self.assertEqual(r.id, 'pic')

class TestBase(TestCase):

    def test_default(self):
        self.assertEqual(resource(RecordingApp(), 'photos', {}).base, '/')

    def test_normalized(self):
        r = resource(RecordingApp(), 'photos', {'base': '/api'})
        self.assertEqual(r.base, '/api/')
        r = resource(RecordingApp(), 'photos', {'base': '/api/'})
        self.assertEqual(r.base, '/api/')

    def test_routes(self):
        app = RecordingApp()
        resource(app, 'photos', {'index': noop, 'show': noop}, base='/api')
        self.assertEqual(app.routes(), [
            ('get', '/api/photos.:format?'),
            ('get', '/api/photos/:photo.:format?')])

class TestRegistration(TestCase):

    def test_order(self):
        app = RecordingApp()
        resource(app, 'photos', {'show': noop, 'new': noop, 'index': noop})
        self.assertEqual(app.routes(), [
            ('get', '/photos.:format?'),
            ('get', '/photos/new.:format?'),
            ('get', '/photos/:photo.:format?')])

    def test_all_actions(self):
        app = RecordingApp()
        actions = dict((key, noop) for key in (
            'destroy', 'patch', 'update', 'edit', 'show', 'create', 'new',
            'index'))
        r = resource(app, 'photos', actions)
        self.assertEqual(app.routes(), [
            ('get', '/photos.:format?'),
            ('get', '/photos/new.:format?'),
            ('post', '/photos.:format?'),
            ('get', '/photos/:photo.:format?'),
            ('get', '/photos/:photo/edit.:format?'),
            ('put', '/photos/:photo.:format?'),
            ('patch', '/photos/:photo.:format?'),
            ('delete', '/photos/:photo.:format?')])
        self.assertEqual(list(r.routes), [
            'GET /photos.:format?',
            'GET /photos/new.:format?',
            'POST /photos.:format?',
            'GET /photos/:photo.:format?',
            'GET /photos/:photo/edit.:format?',
            'PUT /photos/:photo.:format?',
            'PATCH /photos/:photo.:format?',
            'DELETE /photos/:photo.:format?'])

    def test_anonymous(self):
        app = RecordingApp()
        resource(app, {'index': noop, 'show': noop})
        self.assertEqual(app.routes(), [
            ('get', '/.:format?'),
            ('get', '/:id.:format?')])

    def test_anonymous_options(self):
        app = RecordingApp()
        resource(app, {'show': noop}, {'id': 'slug'})
        self.assertEqual(app.routes(), [('get', '/:slug.:format?')])

    def test_unknown_keys_ignored(self):
        app = RecordingApp()
        resource(app, 'photos', {'index': noop, 'search': noop})
        self.assertEqual(app.routes(), [('get', '/photos.:format?')])

    def test_controller_object(self):
        class Photos(object):
            format = 'json'
            def index(self, request, response, next):
                pass
            def destroy(self, request, response, next):
                pass
        app = RecordingApp()
        r = resource(app, 'photos', Photos())
        self.assertEqual(r.format, 'json')
        self.assertEqual(app.routes(), [
            ('get', '/photos.:format?'),
            ('delete', '/photos/:photo.:format?')])

    def test_options_not_mutated(self):
        actions = {'index': noop}
        opts = {'id': 'pic', 'format': 'json'}
        r = resource(RecordingApp(), 'photos', actions, opts)
        self.assertEqual(actions, {'index': noop})
        self.assertEqual(opts, {'id': 'pic', 'format': 'json'})
        self.assertEqual((r.id, r.format), ('pic', 'json'))
        self.assertIsNot(r.actions, actions)

    def test_opts_override(self):
        r = resource(RecordingApp(), 'photos',
            {'base': '/a', 'format': 'html'}, {'base': '/b'}, format='json')
        self.assertEqual((r.base, r.format), ('/b/', 'json'))

    def test_invalid_handler(self):
        self.assertRaises(InvalidHandler,
            resource, RecordingApp(), 'photos', {'index': 'photos.index'})

    def test_install(self):
        app = install(RecordingApp())
        r = app.resource('photos', {'index': noop})
        self.assertIsInstance(r, Resource)
        self.assertIs(r.app, app)
        self.assertEqual(app.routes(), [('get', '/photos.:format?')])

class TestMap(TestCase):

    def setUp(self):
        self.app = RecordingApp()
        self.r = resource(self.app, 'photos', {})

    def test_collection_path(self):
        self.assertIs(self.r.get('/search', noop), self.r)
        self.assertEqual(self.app.routes(),
            [('get', '/photos/search.:format?')])

    def test_member_path(self):
        self.r.post('publish', noop)
        self.assertEqual(self.app.routes(),
            [('post', '/photos/:photo/publish.:format?')])

    def test_bare(self):
        self.r.all(noop).map('OPTIONS', noop)
        self.assertEqual(self.app.routes(), [
            ('all', '/photos/:photo.:format?'),
            ('options', '/photos/:photo.:format?')])

    def test_extended_verbs(self):
        self.r.purge(noop).search('/search', noop).map('M-SEARCH', noop)
        self.assertEqual(self.app.routes(), [
            ('purge', '/photos/:photo.:format?'),
            ('search', '/photos/search.:format?'),
            ('m-search', '/photos/:photo.:format?')])

    def test_anonymous_root(self):
        app = RecordingApp()
        resource(app, {}).get('/', noop).get('/about', noop)
        self.assertEqual(app.routes(), [
            ('get', '/.:format?'),
            ('get', '/about.:format?')])

    def test_format_resolution(self):
        calls = []
        def show(request, response, next):
            calls.append(request.format)
        self.r.get(show)
        handler = self.app.handler('get', '/photos/:photo.:format?')

        request = Request.blank('/photos/1.json')
        request.urlvars = {'photo': '1', 'format': 'json'}
        response = Response()
        handler(request, response, noop)
        self.assertEqual(calls, ['json'])
        self.assertEqual(response.content_type, 'application/json')

        request = Request.blank('/photos/1')
        request.urlvars = {'photo': '1'}
        request.format = 'html'
        handler(request, Response(), noop)
        self.assertEqual(calls, ['json', 'html'])

    def test_default_format(self):
        calls = []
        def show(request, response, next):
            calls.append(request.format)
        app = RecordingApp()
        resource(app, 'photos', {'show': show}, format='json')
        handler = app.handler('get', '/photos/:photo.:format?')

        request = Request.blank('/photos/1')
        request.urlvars = {'photo': '1'}
        response = Response()
        handler(request, response, noop)
        self.assertEqual(calls, ['json'])
        self.assertEqual(response.content_type, 'application/json')

        request = Request.blank('/photos/1.html')
        request.urlvars = {'photo': '1', 'format': 'html'}
        handler(request, Response(), noop)
        self.assertEqual(calls, ['json', 'html'])

    def test_format_table(self):
        calls = []
        table = {
            'json': lambda req, res, next: calls.append('json'),
            'html': lambda req, res, next: calls.append('html'),
        }
        self.r.get(table)
        handler = self.app.handler('get', '/photos/:photo.:format?')

        request = Request.blank('/photos/1.json')
        request.urlvars = {'photo': '1', 'format': 'json'}
        handler(request, Response(), noop)
        self.assertEqual(calls, ['json'])

        request = Request.blank('/photos/1.bogus',
            headers={'Accept': 'text/html'})
        request.urlvars = {'photo': '1', 'format': 'bogus'}
        response = Response()
        handler(request, response, noop)
        self.assertEqual(calls, ['json', 'html'])
        self.assertEqual(response.content_type, 'text/html')

    def test_format_table_not_acceptable(self):
        errors = []
        self.r.get({'json': noop})
        handler = self.app.handler('get', '/photos/:photo.:format?')
        request = Request.blank('/photos/1',
            headers={'Accept': 'image/png'})
        request.urlvars = {'photo': '1'}
        handler(request, Response(), errors.append)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].status_int, 406)

    def test_format_table_default(self):
        calls = []
        self.r.get({
            'json': lambda req, res, next: calls.append('json'),
            'default': lambda req, res, next: calls.append('default'),
        })
        handler = self.app.handler('get', '/photos/:photo.:format?')
        request = Request.blank('/photos/1',
            headers={'Accept': 'image/png'})
        request.urlvars = {'photo': '1'}
        handler(request, Response(), noop)
        self.assertEqual(calls, ['default'])

class TestNesting(TestCase):

    def test_add(self):
        app = RecordingApp()
        photos = resource(app, 'photos', {'index': noop})
        r = photos.add('comments', {'index': noop, 'show': noop})
        self.assertIs(r, photos)
        self.assertEqual(app.routes(), [
            ('get', '/photos.:format?'),
            ('get', '/photos/:photo/comments.:format?'),
            ('get', '/photos/:photo/comments/:comment.:format?')])

    def test_add_chain(self):
        app = RecordingApp()
        resource(app, 'photos', {}) \
            .add('comments', {'index': noop}) \
            .add('tags', {'index': noop})
        self.assertEqual(app.routes(), [
            ('get', '/photos/:photo/comments.:format?'),
            ('get', '/photos/:photo/tags.:format?')])

    def test_add_with_base(self):
        app = RecordingApp()
        photos = resource(app, 'photos', {}, base='/api')
        photos.add('comments', {'index': noop, 'base': '/x'},
            {'base': '/y'}, id='cid')
        photos.add('tags', {'show': noop}, base='/z')
        self.assertEqual(app.routes(), [
            ('get', '/api/photos/:photo/comments.:format?'),
            ('get', '/api/photos/:photo/tags/:tag.:format?')])

    def test_add_anonymous(self):
        app = RecordingApp()
        resource(app, {}).add({'index': noop}, {'id': 'child'})
        resource(app, {}).add('photos', {'index': noop})
        self.assertEqual(app.routes(), [
            ('get', '/:id/.:format?'),
            ('get', '/:id/photos.:format?')])

class TestLoad(TestCase):

    def setUp(self):
        self.app = RecordingApp()
        self.next_calls = []

    def next(self, err=None):
        self.next_calls.append(err)

    def run_hook(self, loader):
        resource(self.app, 'photos', {'show': noop, 'load': loader})
        request = Request.blank('/photos/42')
        request.urlvars = {'photo': '42'}
        response = Response()
        self.app.params['photo'](request, response, self.next)
        return request, response

    def test_loaded(self):
        seen = []
        def load(request, id, callback):
            seen.append((request.path_info, id))
            callback(None, {'id': id})
        request, response = self.run_hook(load)
        self.assertEqual(seen, [('/photos/42', '42')])
        self.assertEqual(request.photo, {'id': '42'})
        self.assertEqual(self.next_calls, [None])

    def test_legacy(self):
        seen = []
        def load(id, callback):
            seen.append(id)
            callback(None, 'photo-%s' % id)
        request, response = self.run_hook(LegacyLoader(load))
        self.assertEqual(seen, ['42'])
        self.assertEqual(request.photo, 'photo-42')

    def test_not_found(self):
        request, response = self.run_hook(
            lambda request, id, callback: callback(None, None))
        self.assertEqual(response.status_int, 404)
        self.assertEqual(response.body, b'Not Found')
        self.assertEqual(self.next_calls, [])
        self.assertFalse(hasattr(request, 'photo'))

    def test_error(self):
        err = ValueError('db is down')
        request, response = self.run_hook(
            lambda request, id, callback: callback(err))
        self.assertEqual(self.next_calls, [err])
        self.assertFalse(hasattr(request, 'photo'))

    def test_callback_once(self):
        def load(request, id, callback):
            callback(None, 'a')
            callback(None, 'b')
        request, response = self.run_hook(load)
        self.assertEqual(request.photo, 'a')
        self.assertEqual(self.next_calls, [None])

    def test_custom_id(self):
        r = resource(self.app, 'photos', {'id': 'slug'})
        self.assertIs(r.load(noop), r)
        self.assertEqual(list(self.app.params), ['slug'])

    def test_reserved_id(self):
        for name in ('urls', 'bodies', 'methods', 'hosts', 'formats'):
            self.assertRaises(ReservedIdName,
                resource, RecordingApp(), name, {'show': noop, 'load': noop})
        app = RecordingApp()
        resource(app, 'urls', {'show': noop, 'load': noop, 'id': 'url_id'})
        self.assertEqual(list(app.params), ['url_id'])

class TestApplication(TestCase):

    def setUp(self):
        self.app = install(Application())

    def get(self, url, **kw):
        return Request.blank(url, **kw).get_response(self.app)

    def test_new_before_show(self):
        self.app.resource('photos', {
            'index': answer('index'),
            'new': answer('new'),
            'show': answer('show'),
        })
        self.assertEqual(self.get('/photos').body, b'index')
        self.assertEqual(self.get('/photos/new').body, b'new')
        self.assertEqual(self.get('/photos/42').body, b'show')

    def test_methods(self):
        self.app.resource('photos', {
            'create': answer('create'),
            'update': answer('update'),
            'patch': answer('patch'),
            'destroy': answer('destroy'),
            'edit': answer('edit'),
        })
        self.assertEqual(self.get('/photos', method='POST').body, b'create')
        self.assertEqual(self.get('/photos/1', method='PUT').body, b'update')
        self.assertEqual(
            self.get('/photos/1', method='PATCH').body, b'patch')
        self.assertEqual(
            self.get('/photos/1', method='DELETE').body, b'destroy')
        self.assertEqual(self.get('/photos/1/edit').body, b'edit')
        self.assertEqual(self.get('/photos/1').status_int, 404)

    def test_head(self):
        self.app.resource('photos', {'index': answer('index')})
        response = self.get('/photos', method='HEAD')
        self.assertEqual(response.status_int, 200)

    def test_extended_verbs(self):
        self.app.resource('photos', {}).purge(answer('purged'))
        self.assertEqual(
            self.get('/photos/1', method='PURGE').body, b'purged')
        self.assertEqual(self.get('/photos/1').status_int, 404)

    def test_format_suffix(self):
        formats = []
        def show(request, response, next):
            formats.append((request.format, request.urlvars['photo']))
        self.app.resource('photos', {'show': show})
        response = self.get('/photos/42.json')
        self.assertEqual(formats, [('json', '42')])
        self.assertEqual(response.content_type, 'application/json')

    def test_format_table(self):
        self.app.resource('photos', {'show': {
            'json': answer('json'),
            'html': answer('html'),
        }})
        self.assertEqual(self.get('/photos/1.json').body, b'json')
        self.assertEqual(self.get('/photos/1.html').body, b'html')
        self.assertEqual(
            self.get('/photos/1.bogus', accept='text/html').body, b'html')
        self.assertEqual(
            self.get('/photos/1', accept='application/json').body, b'json')
        self.assertEqual(
            self.get('/photos/1', accept='image/png').status_int, 406)

    def test_nested(self):
        def comments(request, response, next):
            response.body = ('%s/%s' % (
                request.urlvars['photo'], request.urlvars['comment'])
                ).encode('utf-8')
        self.app.resource('photos', {}).add('comments', {'show': comments})
        self.assertEqual(self.get('/photos/1/comments/2').body, b'1/2')

    def test_load(self):
        photos = {'1': 'sunset'}
        def load(request, id, callback):
            callback(None, photos.get(id))
        def show(request, response, next):
            response.body = request.photo.encode('utf-8')
        self.app.resource('photos', {'show': show, 'load': load})
        self.assertEqual(self.get('/photos/1').body, b'sunset')

        response = self.get('/photos/2')
        self.assertEqual(response.status_int, 404)
        self.assertEqual(response.body, b'Not Found')

    def test_load_errors(self):
        def load(request, id, callback):
            if id == 'secret':
                return callback(HTTPForbidden())
            callback(ValueError(id))
        self.app.resource('photos', {'show': noop, 'load': load})
        self.assertEqual(self.get('/photos/secret').status_int, 403)
        self.assertRaises(ValueError, self.get, '/photos/1')

    def test_load_once_per_value(self):
        loads = []
        def load(request, id, callback):
            loads.append(id)
            callback(None, id)
        def first(request, response, next):
            next()
        self.app.resource('photos', {'load': load}) \
            .all(first) \
            .get(answer('show'))
        self.assertEqual(self.get('/photos/1').body, b'show')
        self.assertEqual(loads, ['1'])

    def test_next_exhausted(self):
        self.app.resource('photos', {'index': lambda req, res, next: next()})
        self.assertEqual(self.get('/photos').status_int, 404)
        self.assertEqual(self.get('/nothing').status_int, 404)

    def test_handler_raises_http_exception(self):
        def index(request, response, next):
            raise HTTPForbidden()
        self.app.resource('photos', {'index': index})
        self.assertEqual(self.get('/photos').status_int, 403)
