from uuid import uuid4

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture
from reviews.directory import reset_directory, set_directory
from reviews.directory.fake_adapter import FakeDirectory
from reviews.settings import reset_settings


@pytest.fixture(scope="session")
def reviews_bed():
    from reviews.domain import reviews
    from reviews.utils.db import drop_db, setup_db

    bed = DomainFixture(reviews)
    bed.setup()
    setup_db(reviews)
    yield bed
    drop_db(reviews)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviews_bed):
    with reviews_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture(autouse=True)
def directory():
    """A fresh in-memory reference directory for every test."""
    reset_settings()
    fake = FakeDirectory()
    set_directory(fake)
    yield fake
    reset_directory()
    reset_settings()


@pytest.fixture()
def product_id(directory):
    """Id of a product that exists in the reference directory."""
    pid = f"prod-{uuid4().hex[:8]}"
    directory.add_product(pid, name="Stainless kettle")
    return pid
