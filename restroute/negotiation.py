"""

    restroute.negotiation -- response formats
    =========================================

    Helpers for mapping format names (``json``, ``html``) to media types and
    for picking an entry of a format table according to request's
    ``Accept`` header.

"""

import mimetypes

from webob.exc import HTTPNotAcceptable

__all__ = ('mime_type', 'set_type', 'negotiate')

DEFAULT = 'default'

def mime_type(fmt):
    """ Return media type for format name ``fmt``

        >>> mime_type('json')
        'application/json'

    Values which already look like media types are returned as is.
    """
    if '/' in fmt:
        return fmt
    return (mimetypes.guess_type('_.' + fmt.lstrip('.'))[0]
        or 'application/octet-stream')

def set_type(response, fmt):
    """ Set ``response`` content type according to format name ``fmt``"""
    response.content_type = mime_type(fmt)
    return response

def negotiate(request, response, next, table):
    """ Dispatch to an entry of format ``table`` acceptable by ``request``

    Entries are tried in table order when request doesn't express any
    preference. A ``default`` entry is used when nothing is acceptable,
    otherwise :class:`webob.exc.HTTPNotAcceptable` is passed to ``next``.
    """
    offers = [(mime_type(key), key) for key in table if key != DEFAULT]
    acceptable = request.accept.acceptable_offers([m for m, _ in offers])
    if acceptable:
        best = acceptable[0][0]
        for mime, key in offers:
            if mime == best:
                request.format = key
                response.content_type = mime
                return table[key](request, response, next)
    if DEFAULT in table:
        return table[DEFAULT](request, response, next)
    return next(HTTPNotAcceptable(
        detail='Supported formats: %s' % ', '.join(m for m, _ in offers)))
