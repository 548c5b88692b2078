"""
Helper functions to make writing unit tests for the broping core easier
"""

import os
import sys
import random
import string
import secrets
import unittest
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

import httpx
import sqlalchemy.orm
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine as _Engine

from broping_core import settings as _settings
from broping_core.api.api import create_app
from broping_core.persistence import database, models
from broping_core.persistence.store import DocumentStore
from broping_core.schemas import config as _config

from . import conf


class BaseTest(unittest.TestCase):
    """
    A base class for unit tests which introduces simple setup and teardown of unit tests

    If a subclass needs special setup or teardown functionality, it **MUST**
    call the superclasses setup and teardown methods: the superclass setup
    method at the beginning of the subclass setup method, the superclass
    teardown method at the end of the subclass teardown method.
    """

    config_file: Optional[str] = None
    database_url: Optional[str] = None
    _database_file: Optional[str] = None

    def setUp(self) -> None:
        self.config_file = f"config_{os.getpid()}_{secrets.token_hex(8)}.json"
        _settings.CONFIG_PATHS = [self.config_file]

        if conf.DATABASE_URL is not None:
            self.database_url = conf.DATABASE_URL

        else:
            self._database_file = conf.DATABASE_DEFAULT_FILE_FORMAT.format(
                os.getpid(),
                "".join([random.choice(string.ascii_lowercase) for _ in range(6)])
            )

            try:
                open(self._database_file, "wb").close()
                os.remove(self._database_file)
                self.database_url = conf.DATABASE_URL_FORMAT.format(self._database_file)

            except OSError as exc:
                self.database_url = conf.DATABASE_FALLBACK_URL
                self._database_file = None
                print(
                    f"{exc}: Falling back to in-memory database. This is not recommended!",
                    file=sys.stderr
                )

    def tearDown(self) -> None:
        if self._database_file and os.path.exists(self._database_file):
            os.remove(self._database_file)

        if self.config_file and os.path.exists(self.config_file):
            os.remove(self.config_file)


class BasePersistenceTests(BaseTest):
    engine: _Engine
    session: sqlalchemy.orm.Session
    store: DocumentStore

    def setUp(self) -> None:
        super().setUp()
        opts = {"echo": conf.SQLALCHEMY_ECHOING}
        if self.database_url.startswith("sqlite:"):
            opts["connect_args"] = {"check_same_thread": False}
        self.engine = sqlalchemy.create_engine(self.database_url, **opts)
        self.session = sqlalchemy.orm.sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )()
        models.Base.metadata.create_all(bind=self.engine)
        self.store = DocumentStore(self.session)

    def tearDown(self) -> None:
        self.session.close()
        models.Base.metadata.drop_all(bind=self.engine)
        self.engine.dispose()
        super().tearDown()


class BaseAPITests(BaseTest):
    client: TestClient

    def setUp(self) -> None:
        super().setUp()
        database.PRINT_SQLITE_WARNING = False
        settings = _settings.Settings(
            database=_config.DatabaseConfig(connection=self.database_url, debug_sql=conf.SQLALCHEMY_ECHOING)
        )
        self.client = TestClient(create_app(settings, configure_logging=False), raise_server_exceptions=False)

    def tearDown(self) -> None:
        self.client.close()
        models.Base.metadata.drop_all(bind=database.get_engine())
        database.get_engine().dispose()
        super().tearDown()

    def assertQuery(
            self,
            endpoint: Tuple[str, str],
            status_code: Union[int, Iterable[int]] = 200,
            json: Optional[Any] = None,
            content: Optional[Union[str, bytes]] = None,
            r_headers: Optional[Union[Mapping, Iterable]] = None,
            r_content: Optional[Any] = None,
            r_error: Optional[str] = None,
            **kwargs
    ) -> httpx.Response:
        """
        Do a query to the specified endpoint and return the response

        Besides carrying the optional JSON data or raw content, this function
        asserts that the response has the specified status code and that the
        body is a proper response envelope repeating that status code. The
        optional asserted response headers are either an iterable to only
        assert certain keys or a mapping to also assert values.

        :param endpoint: tuple of the method and the path of the endpoint
        :param status_code: asserted status code(s) of the server's response
        :param json: optional JSON-serializable object holding the request data
        :param content: optional raw request body (used instead of ``json``)
        :param r_headers: optional set of headers which are asserted in the response
        :param r_content: optional asserted value of the envelope's ``Content`` field
        :param r_error: optional asserted value of the envelope's ``Error`` field
        :param kwargs: dict of any further keyword arguments, passed to ``TestClient.request``
        :return: response to the requested resource
        """

        method, path = endpoint
        if content is not None:
            kwargs["content"] = content
            kwargs.setdefault("headers", {"Content-Type": "application/json"})
        elif json is not None:
            kwargs["json"] = json
        response = self.client.request(method.upper(), path, **kwargs)

        if isinstance(status_code, int):
            self.assertEqual(status_code, response.status_code, response.text)
        else:
            self.assertIn(response.status_code, status_code, response.text)

        self.assertEqual("application/json; charset=utf-8", response.headers.get("Content-Type"))
        self.assertEqual("nosniff", response.headers.get("X-Content-Type-Options"))

        if r_headers is not None:
            for k in (r_headers if isinstance(r_headers, Iterable) else r_headers.keys()):
                self.assertIsNotNone(response.headers.get(k), response.headers)
                if isinstance(r_headers, Mapping):
                    self.assertEqual(r_headers[k], response.headers.get(k), response.headers)

        body = response.json()
        self.assertEqual(response.status_code, body["StatusCode"], body)
        if response.status_code == 200:
            self.assertEqual("", body["Error"], body)
        else:
            self.assertEqual("", body["Content"], body)
            self.assertNotEqual("", body["Error"], body)
        if r_content is not None:
            self.assertEqual(r_content, body["Content"], body)
        if r_error is not None:
            self.assertEqual(r_error, body["Error"], body)
        return response
