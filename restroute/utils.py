"""

    restroute.utils -- utility code
    ===============================

"""

import inflect

__all__ = (
    'METHODS', 'cached_property', 'singular', 'last_segment', 'ensure_slash')

#: HTTP methods hosts accept routes for, ``all`` stands for any method;
#: ``m-search`` is reachable only through ``getattr`` or ``map``
METHODS = (
    'acl', 'bind', 'checkout', 'connect', 'copy', 'delete', 'get', 'head',
    'link', 'lock', 'm-search', 'merge', 'mkactivity', 'mkcalendar',
    'mkcol', 'move', 'notify', 'options', 'patch', 'post', 'propfind',
    'proppatch', 'purge', 'put', 'rebind', 'report', 'search', 'source',
    'subscribe', 'trace', 'unbind', 'unlink', 'unlock', 'unsubscribe',
    'all')

_inflector = inflect.engine()

class cached_property(object):
    """ Just like ``property`` but computed only once"""

    def __init__(self, func):
        self.func = func
        self.__name__ = func.__name__
        self.__doc__ = func.__doc__

    def __get__(self, obj, cls):
        if obj is None:
            return self
        val = self.func(obj)
        obj.__dict__[self.__name__] = val
        return val

def singular(word):
    """ Return singular form of ``word``

        >>> singular('photos')
        'photo'

    Words which are already singular are returned unchanged, a candidate
    is accepted only if its plural form is ``word`` again.
    """
    if not word:
        return word
    candidate = _inflector.singular_noun(word)
    if candidate and _inflector.plural(candidate) == word:
        return candidate
    return word

def last_segment(path):
    """ Return the last ``/``-delimited segment of ``path``

        >>> last_segment('admin/photos')
        'photos'

    """
    return path.split('/')[-1]

def ensure_slash(path):
    """ Make ``path`` end with ``/``

        >>> ensure_slash('/api')
        '/api/'

    """
    path = path or '/'
    if not path.endswith('/'):
        path += '/'
    return path
