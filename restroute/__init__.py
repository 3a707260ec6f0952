"""

    restroute -- conventional RESTful routes for WebOb applications
    ===============================================================

    This module provides easy-to-use API to expose collections of entities
    as RESTful resources. Given a resource name and a set of action handlers
    it registers conventional routes with a host application::

        from restroute import install
        from restroute.app import Application

        app = install(Application())
        photos = app.resource('photos', {'index': index, 'show': show})
        photos.add('comments', {'index': comments})

"""

from functools import partial

from restroute.resource import Resource, resource, ACTIONS, OPTIONS
from restroute.handlers import (
    SingleHandler, FormatTable, LegacyLoader, ContextualLoader)
from restroute.utils import METHODS
from restroute.exc import (
    NoMatchFound, RouteConfigurationError, InvalidRoutePattern,
    InvalidHandler, ReservedIdName)

__all__ = (
    'install', 'resource', 'Resource', 'ACTIONS', 'OPTIONS', 'METHODS',
    'SingleHandler', 'FormatTable', 'LegacyLoader', 'ContextualLoader',
    'NoMatchFound', 'RouteConfigurationError', 'InvalidRoutePattern',
    'InvalidHandler', 'ReservedIdName')

def install(app):
    """ Install ``resource`` directive onto host ``app``

    After installation ``app.resource(name, actions, opts)`` defines
    resources on ``app``.

    :param app:
        host application, should provide a registration method per
        lower-cased HTTP method (and ``all``) along with ``param`` method
    :return:
        ``app`` itself
    """
    app.resource = partial(resource, app)
    return app
