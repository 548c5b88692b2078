"""
broping router modules for handling requests to various endpoints

This module exports the ``ROUTERS`` list which holds the routers of
all known endpoints. They are registered by the application factory.
"""

from . import generic, users, bars

# The order of the routers defines the order of the endpoints in the OpenAPI documentation
ROUTERS = [generic.router, users.router, bars.router]
