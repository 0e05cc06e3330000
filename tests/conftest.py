"""
Shared fixtures
"""
import logging
import os

import pytest

from girouette.metadata_store import MetadataStore
from girouette.registrar import Girouette
from girouette.routing.router import Router
from girouette.support import Config

CONTROLLERS_PATH = os.path.join(os.path.dirname(__file__), 'fixtures', 'controllers')


@pytest.fixture
def router():
    return Router()


@pytest.fixture
def store():
    return MetadataStore()


@pytest.fixture
def controllers_path():
    return CONTROLLERS_PATH


@pytest.fixture
def load_routes():
    """
    Scan one fixture case and return its committed routes as dicts

    Usage:
        routes = await load_routes('group')
    """
    async def loader(case, pattern=None):
        router = Router()
        await Girouette(router).load(os.path.join(CONTROLLERS_PATH, case), pattern)
        return router.commit().to_dict()['routes']

    return loader


@pytest.fixture(autouse=True)
def reset_config():
    yield
    Config.clear_runtime_overrides()


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo whatever LoggerConfig did to the 'girouette' logger during a test"""
    logger = logging.getLogger('girouette')
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
