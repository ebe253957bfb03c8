from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fwmon.config import get_settings
from fwmon.notify.mailer import DEST_ENV_VAR, PASSWORD_ENV_VAR, USER_ENV_VAR


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("FWMON_CONFIG", raising=False)
    monkeypatch.delenv("FWMON_DATA_DIR", raising=False)
    for name in (USER_ENV_VAR, PASSWORD_ENV_VAR, DEST_ENV_VAR):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_reference(tmp_path: Path) -> Callable[..., Path]:
    def _write(rows: list[tuple[str, str]], name: str = "reference.csv") -> Path:
        path = tmp_path / name
        lines = ["Serial;Model;LFV"]
        lines += [f"{serial};iR-ADV;{version}" for serial, version in rows]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
