import importlib
import pkgutil

import wp_env
import pytest


ALL_MODULES = sorted(
    module_info.name
    for module_info in pkgutil.walk_packages(wp_env.__path__, prefix=f"{wp_env.__name__}.")
)


@pytest.mark.parametrize("module_name", ALL_MODULES)
def test_import_module(module_name: str) -> None:
    importlib.import_module(module_name)
