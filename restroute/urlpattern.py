"""

    restroute.urlpattern -- matching URL against pattern
    ====================================================

    Patterns are made of literal segments and ``:name`` parameters. A
    parameter may be preceded by a dot (``.:format``) to capture a dotted
    suffix and followed by ``?`` to become optional, so ``/photos.:format?``
    matches ``/photos``, ``/photos/`` and ``/photos.json``.

"""

import re

from restroute.utils import cached_property
from restroute.exc import InvalidRoutePattern, NoURLPatternMatched

__all__ = ('URLPattern',)

class URLPattern(object):

    _param_re = re.compile(r"""
        (?P<slash>/)?                       # optional preceding slash
        (?P<dot>\.)?                        # optional preceding dot
        :(?P<label>[a-zA-Z_][a-zA-Z0-9_]*)  # label
        (?P<optional>\?)?                   # optional marker
        """, re.VERBOSE)

    def __init__(self, pattern):
        if not pattern.startswith('/'):
            raise InvalidRoutePattern(
                "pattern '%s' should start with '/'" % pattern)
        self.pattern = pattern
        self._names = None

    @cached_property
    def compiled(self):
        return self.compile()

    @property
    def names(self):
        """ Parameter labels in order of appearance"""
        self.compiled
        return [label for _, label in self._names]

    def compile(self):
        names = []
        compiled = ''
        last = 0
        for n, m in enumerate(self._param_re.finditer(self.pattern)):
            compiled += re.escape(self.pattern[last:m.start()])
            slash = '/' if m.group('slash') else ''
            dot = r'\.' if m.group('dot') else ''
            name = '_gpt%d' % n
            names.append((name, m.group('label')))
            capture = '(?P<%s>[^/%s]+?)' % (name, '.' if dot else '')
            if m.group('optional'):
                compiled += '(?:%s%s%s)?' % (slash, dot, capture)
            else:
                compiled += '%s(?:%s%s)' % (slash, dot, capture)
            last = m.end()
        compiled += re.escape(self.pattern[last:])
        if compiled.endswith('/'):
            compiled = compiled[:-1]
        self._names = names
        return re.compile('^%s/?$' % compiled, re.IGNORECASE)

    def match(self, path_info):
        """ Match ``path_info`` against pattern

        Returns a dict of captured parameters, optional parameters which
        weren't captured are omitted.
        """
        m = self.compiled.match(path_info)
        if not m:
            raise NoURLPatternMatched("no match for '%s' against '%s'" % (
                path_info, self.compiled.pattern))
        groups = m.groupdict()
        return dict(
            (label, groups[n])
            for (n, label) in self._names
            if groups[n] is not None)

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.pattern)
