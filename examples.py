import json
from wsgiref.simple_server import make_server

from restroute import install, LegacyLoader
from restroute.app import Application

photos = {'1': {'id': '1', 'title': 'Sunset'}}

def index(request, response, next):
    """ List photos"""
    response.body = json.dumps(sorted(photos)).encode('utf-8')

def show_json(request, response, next):
    """ Show photo as JSON"""
    response.body = json.dumps(request.photo).encode('utf-8')

def show_html(request, response, next):
    """ Show photo as HTML"""
    response.text = '<h1>%s</h1>' % request.photo['title']

def load_photo(id, callback):
    """ Load photo by ``id``"""
    callback(None, photos.get(id))

def comments(request, response, next):
    """ List comments for photo"""
    response.body = b'[]'

app = install(Application())
app.resource('photos', {
    'index': index,
    'show': {'json': show_json, 'html': show_html},
    'load': LegacyLoader(load_photo),
    }, format='json').add('comments', {'index': comments})

if __name__ == '__main__':
    make_server('', 8000, app).serve_forever()
