"""Router modules load in any order, the way domain traversal imports them."""

import importlib.util
import sys
from pathlib import Path

import pytest

import marketplace

API_DIR = Path(next(iter(marketplace.__path__))) / "api"
ROUTER_MODULES = {
    "products": "product_router",
    "orders": "order_router",
    "withdrawals": "withdraw_router",
    "shops": "shop_router",
    "payments": "payment_router",
}


@pytest.fixture()
def fresh_api_modules():
    """Forget every loaded ``marketplace.api`` module, restoring them afterwards."""
    saved = {name: module for name, module in sys.modules.items() if name.startswith("marketplace.api")}
    for name in saved:
        del sys.modules[name]
    yield
    for name in [name for name in sys.modules if name.startswith("marketplace.api")]:
        del sys.modules[name]
    sys.modules.update(saved)


@pytest.mark.parametrize("module_name,router_name", ROUTER_MODULES.items())
def test_router_module_loads_before_its_package(fresh_api_modules, module_name, router_name):
    full_name = f"marketplace.api.{module_name}"
    spec = importlib.util.spec_from_file_location(full_name, API_DIR / f"{module_name}.py")
    module = importlib.util.module_from_spec(spec)
    sys.modules[full_name] = module

    spec.loader.exec_module(module)

    assert hasattr(module, router_name)
