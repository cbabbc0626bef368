# Package import smoke tests
import importlib

import pytest


@pytest.mark.parametrize(
    "module",
    [
        "shared",
        "shared.config",
        "shared.logger",
        "shared.network",
        "shared.console",
        "keyward",
        "keyward.analyzers",
        "keyward.core",
        "keyward.core.engine",
        "keyward.generators",
        "keyward.output",
        "keyward.cli",
    ],
)
def test_module_imports(module):
    assert importlib.import_module(module) is not None


def test_shared_exports():
    import shared

    assert shared.__all__ == ["KeywardConfig"]
    assert shared.KeywardConfig().analysis.debounce_ms == 300
