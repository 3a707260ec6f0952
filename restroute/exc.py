"""

    restroute.exc -- exceptions
    ===========================

"""

__all__ = (
    'NoMatchFound', 'NoURLPatternMatched', 'RouteConfigurationError',
    'InvalidRoutePattern', 'InvalidHandler', 'ReservedIdName')

class NoMatchFound(Exception):
    """ Raised when request wasn't matched against any route"""

class NoURLPatternMatched(NoMatchFound):
    """ Raised when request path wasn't matched against URL pattern"""

class RouteConfigurationError(Exception):
    """ Routes were configured improperly

    Errors of such type can be only raised during initial configuration and not
    during runtime.
    """

class InvalidRoutePattern(RouteConfigurationError):
    """ Route configured with invalid route pattern"""

class InvalidHandler(RouteConfigurationError):
    """ Action or loader is neither a callable nor a format table"""

class ReservedIdName(RouteConfigurationError):
    """ Loaded object can't be set on request under resource id name
    because request already has an attribute with such name
    """
