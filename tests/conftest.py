from __future__ import annotations

import pytest

from utf8edit.runtime import telemetry
from utf8edit.runtime.settings import TelemetrySettings


@pytest.fixture(autouse=True, scope="session")
def quiet_telemetry() -> None:
    telemetry.configure(settings=TelemetrySettings(console=False))
