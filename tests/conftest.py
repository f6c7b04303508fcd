#-------------------------------------------------------------------------bh-
# pytest configuration and fixtures for the sanitizer tests
#-------------------------------------------------------------------------eh-

import pytest
import sys
from pathlib import Path

# Add project root and src to path for imports
PROJ_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJ_ROOT / 'src'))
sys.path.insert(0, str(PROJ_ROOT / 'tests'))

from fixtures.test_config import (
    create_test_engine,
    create_test_session_factory,
    seed_wordpress,
    ACTIVE_PLUGINS_WOOCOMMERCE,
)


@pytest.fixture
def engine():
    """
    Create a fresh in-memory WordPress database for each test.

    Sanitization commits per batch, so tests cannot share a database and
    roll back afterwards the way read-only tests can.
    """
    engine = create_test_engine()
    yield engine
    engine.dispose()


@pytest.fixture
def SessionFactory(engine):
    """Create a session factory bound to the test database."""
    return create_test_session_factory(engine)


@pytest.fixture
def session(SessionFactory):
    """Provide a session on the (empty) test database."""
    session = SessionFactory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(session):
    """
    Seed the standard data set (WooCommerce active, no Gravity Forms).

    Returns:
        dict of primary keys, see ``seed_wordpress``
    """
    return seed_wordpress(session, active_plugins=ACTIVE_PLUGINS_WOOCOMMERCE)


@pytest.fixture
def config():
    """A config that never touches the developer's environment or .env."""
    from sanitize_db.config import SanitizeConfig
    from unittest.mock import patch

    with patch.object(SanitizeConfig, '_load_env', return_value={}):
        return SanitizeConfig(batch_size=2, progress_interval=2, seed=1234)


@pytest.fixture
def stage_ctx(session, config):
    """StageContext over the test session with a seeded provider."""
    from sanitize_db.stages import StageContext
    return StageContext(session, config)
