"""Shared pytest fixtures."""

from __future__ import annotations

import os

# Force settings to use test-safe defaults before any import
os.environ.setdefault("SWITCH_HOST", "127.0.0.1")
os.environ.setdefault("SWITCH_PASSWORD", "test")
os.environ.setdefault("SWITCH_API_KEY", "")
os.environ.setdefault("SWITCH_MAINTENANCE_MODE", "false")

import pytest
from httpx import ASGITransport, AsyncClient

from switch_tools.config import Settings
from switch_tools.services.session import SwitchSession
from tests.mock_switch import ENABLE_SECRET, FakeSwitchStream


@pytest.fixture
def switch_settings(tmp_path):
    """Settings with short timing so every transaction finishes quickly."""
    return Settings(
        settle_delay=0.0,
        window=0.02,
        long_window=0.03,
        enable_secret=ENABLE_SECRET,
        export_dir=str(tmp_path / "exports"),
    )


@pytest.fixture
def fake_switch():
    """Provide a fresh FakeSwitchStream that asks for the enable secret."""
    return FakeSwitchStream(enable_secret=ENABLE_SECRET)


@pytest.fixture
def session(fake_switch, switch_settings):
    return SwitchSession(fake_switch, switch_settings)


@pytest.fixture
def manager(fake_switch, switch_settings):
    """A real session manager whose sessions run over the fake switch."""
    from switch_tools.services.session_manager import SwitchSessionManager

    opened: list[SwitchSession] = []

    def opener(cfg: Settings) -> SwitchSession:
        # a reconnect gets a live shell again
        fake_switch.closed = False
        sess = SwitchSession(fake_switch, cfg)
        opened.append(sess)
        return sess

    mgr = SwitchSessionManager(switch_settings, opener=opener)
    mgr.opened = opened
    return mgr


@pytest.fixture
async def client(manager, switch_settings, monkeypatch):
    """Async test client with the fake-switch session manager injected."""
    import switch_tools.routers.config as rc
    import switch_tools.routers.health as rh
    import switch_tools.routers.show as rs
    import switch_tools.services.session_manager as sm_mod

    monkeypatch.setattr(sm_mod, "session_manager", manager)
    monkeypatch.setattr(rh, "session_manager", manager)
    monkeypatch.setattr(rs, "session_manager", manager)
    monkeypatch.setattr(rc, "session_manager", manager)
    monkeypatch.setattr(rs.settings, "export_dir", switch_settings.export_dir)

    from switch_tools.main import app as fastapi_app

    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await manager.close()
