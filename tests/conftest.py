import json

import pytest

from urlsentry.api import create_app
from urlsentry.app.threat_intel import LocalBlacklist, RemoteBlacklist


@pytest.fixture
def write_local(tmp_path):
    def _write(sites):
        path = tmp_path / "caught.json"
        path.write_text(json.dumps({"flagged_sites": list(sites)}), encoding="utf-8")
        return LocalBlacklist(str(path))

    return _write


@pytest.fixture
def make_client(write_local):
    def _make(sites=(), deny=None):
        remote = RemoteBlacklist(deny) if deny is not None else RemoteBlacklist(error="unreachable")
        app = create_app(remote=remote, local=write_local(sites))
        app.config['TESTING'] = True
        return app.test_client()

    return _make
