import pytest
from predefine.config import ENV_PREDEFINE_MERGE_EQUALITY, ENV_PREDEFINE_STRICT


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	monkeypatch.delenv(ENV_PREDEFINE_STRICT, raising=False)
	monkeypatch.delenv(ENV_PREDEFINE_MERGE_EQUALITY, raising=False)
