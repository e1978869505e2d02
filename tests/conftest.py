"""Pytest configuration and fixtures."""

# pylint: disable=redefined-outer-name

import os

import pytest

from hosts_webhook.core.config import Settings
from hosts_webhook.core.store import MemoryHostsStore

# Keep application code away from the real /etc/hosts
os.environ.setdefault("HOSTS_FILE", os.path.join(os.devnull, "hosts"))
os.environ.setdefault("SENTRY_DSN", "")

SAMPLE_HOSTS = (
    "# Static table lookup for hostnames.\n"
    "127.0.0.1\tlocalhost\n"
    "::1\tlocalhost ip6-localhost ip6-loopback\n"
    "\n"
    "192.168.1.10 web.local www.local # front end\n"
    "192.168.1.20\tdb.local\n"
)


@pytest.fixture
def test_settings(tmp_path):
    """Provide test settings with predictable values."""
    return Settings(
        hosts_file=str(tmp_path / "hosts"),
        atomic_write=True,
        sentry_dsn=None,
        _env_file=None,
    )


@pytest.fixture
def hosts_store():
    """In-memory hosts file seeded with a typical table."""
    return MemoryHostsStore(SAMPLE_HOSTS)
