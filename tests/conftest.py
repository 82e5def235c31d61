from __future__ import annotations

import pytest

from terradactyl.config import API_KEY_ENV_VAR, HOST_ENV_VAR, MAX_RETRIES_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_panel_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (HOST_ENV_VAR, API_KEY_ENV_VAR, MAX_RETRIES_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
