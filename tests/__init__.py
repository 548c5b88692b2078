"""
broping core unit tests
"""

import unittest
from .test_api import BarAPITests, GenericAPITests, UserAPITests
from .test_misc import EnvelopeTests, KeyTests, ResourceServiceTests, SettingsTests
from .test_persistence import DocumentStoreTests


TEST_CLASSES = [
    BarAPITests,
    DocumentStoreTests,
    EnvelopeTests,
    GenericAPITests,
    KeyTests,
    ResourceServiceTests,
    SettingsTests,
    UserAPITests,
]


def get_suite() -> unittest.TestSuite:
    suite = unittest.TestSuite()
    for cls in TEST_CLASSES:
        for fixture in filter(lambda f: f.startswith("test_"), dir(cls)):
            suite.addTest(cls(fixture))
    return suite
