"""Tests for version management.

``npc_relay.__version__`` comes from the installed package metadata and must
agree with what the API reports at ``/`` and in the OpenAPI schema.
"""

from __future__ import annotations

import re

import pytest

import npc_relay

_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+(-[A-Za-z0-9]+(\.[A-Za-z0-9]+)*)?$")


@pytest.mark.unit
def test_version_is_semver_string():
    assert isinstance(npc_relay.__version__, str)
    assert _SEMVER_RE.match(npc_relay.__version__)


@pytest.mark.api
def test_root_endpoint_reports_version(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "NPC Voice Relay", "version": npc_relay.__version__}


@pytest.mark.api
def test_openapi_schema_reports_version(test_client):
    schema = test_client.get("/openapi.json").json()

    assert schema["info"]["version"] == npc_relay.__version__
    assert schema["info"]["title"] == "NPC Voice Relay"
