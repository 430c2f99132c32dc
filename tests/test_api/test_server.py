"""Tests for the application factory and its lifespan."""

import logging

import pytest
from fastapi.testclient import TestClient

from npc_relay.api.server import create_app, log_startup_status


@pytest.mark.api
def test_lifespan_starts_and_stops_sweeper(relay_services):
    app = create_app(relay_services)

    with TestClient(app) as client:
        assert relay_services.store.sweeper_running
        assert client.get("/health").status_code == 200

    assert not relay_services.store.sweeper_running


@pytest.mark.api
def test_services_are_attached_to_app_state(relay_services):
    app = create_app(relay_services)

    assert app.state.services is relay_services


@pytest.mark.api
def test_cors_allows_any_origin_by_default(test_client):
    response = test_client.get("/health", headers={"Origin": "http://game.example"})

    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.unit
def test_startup_status_never_logs_key(relay_services, caplog):
    relay_services.config.provider.api_key = "gsk_secret_value"

    with caplog.at_level(logging.INFO, logger="npc_relay.api.server"):
        log_startup_status(relay_services)

    assert "OK" in caplog.text
    assert "gsk_secret_value" not in caplog.text
