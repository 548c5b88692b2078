"""
broping core REST API

Use the ``create_app`` factory of the ``api`` module to build a new
application. The ``api`` wrapper object of the same module can be
used to serve the application with default settings via ``uvicorn``:

.. code-block::

    uvicorn broping_core.api.api:api.app
"""
