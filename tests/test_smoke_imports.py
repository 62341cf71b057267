"""Smoke tests for DeskMate.

These tests validate imports and the tool plugin contract.
"""

import importlib

import pytest

TOOL_MODULES = [
    "plugins.cache_cleaner.tool",
    "plugins.antivirus.tool",
    "plugins.batch_transfer.tool",
]


def test_deskmate_modules_import():
    import deskmate.launcher as launcher
    import deskmate.textui as textui

    assert launcher.TEXTUI_AVAILABLE
    assert textui.Q_STYLE is not None


def test_shared_public_api_imports():
    from shared import (
        BaseWorker,
        build_settings,
        get_config_dir,
        iter_files,
        load_persistent_config,
        merge_settings,
        run_process,
        run_with_progress,
        scan_and_delete,
        scan_and_transfer,
    )

    assert callable(load_persistent_config)
    assert callable(get_config_dir)
    assert callable(merge_settings)
    assert callable(build_settings)
    assert callable(iter_files)
    assert callable(run_process)
    assert callable(run_with_progress)
    assert callable(scan_and_delete)
    assert callable(scan_and_transfer)
    assert BaseWorker is not None


@pytest.mark.parametrize("module_name", TOOL_MODULES)
def test_tool_modules_follow_the_plugin_contract(module_name):
    module = importlib.import_module(module_name)

    assert callable(module.run)
    assert callable(module.register_cli)
    assert callable(module.main)
    assert {"id", "name", "description", "order"} <= set(module.TOOL_INFO)
    assert " " not in module.TOOL_INFO["id"]

    fields = module.form_config["fields"]
    assert fields
    for field in fields:
        assert field["id"].isupper()
        assert field["type"] in ("select", "text", "directory")
        if field["type"] == "select":
            assert field["default"] in field["options"]


def test_package_run_wrappers_delegate_lazily():
    import plugins.antivirus
    import plugins.batch_transfer
    import plugins.cache_cleaner

    for package in (plugins.antivirus, plugins.batch_transfer, plugins.cache_cleaner):
        assert callable(package.run)
