from __future__ import annotations

import logging

from floatwm.config.settings import DEFAULT_SETTINGS, Settings, load_settings


def test_defaults() -> None:
    settings = Settings()
    assert (settings.min_width, settings.min_height) == (300, 200)
    assert settings.drag_threshold == 5
    assert settings.snap_threshold == 20
    assert (settings.default_width, settings.default_height) == (600, 400)
    assert settings.initial_z == 100


def test_empty_mapping_returns_defaults() -> None:
    assert load_settings(None) is DEFAULT_SETTINGS
    assert load_settings({}) is DEFAULT_SETTINGS


def test_overrides_are_applied() -> None:
    settings = load_settings({"min_width": 400, "snap_threshold": 32, "initial_z": 0})
    assert settings.min_width == 400
    assert settings.snap_threshold == 32
    assert settings.initial_z == 0
    assert settings.min_height == DEFAULT_SETTINGS.min_height


def test_unknown_key_is_logged_and_ignored(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="floatwm.config.settings"):
        settings = load_settings({"min_widht": 10})
    assert settings == DEFAULT_SETTINGS
    assert "min_widht" in caplog.text


def test_invalid_values_fall_back_to_default(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="floatwm.config.settings"):
        settings = load_settings({
            "min_width": "wide",
            "min_height": -5,
            "header_height": 0,
            "drag_threshold": True,
            "button_size": 12.9,
        })
    assert settings.min_width == 300
    assert settings.min_height == 200
    assert settings.header_height == 32
    assert settings.drag_threshold == 5
    assert settings.button_size == 14
    assert caplog.text.count("default") == 5


def test_float_values_are_rejected(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="floatwm.config.settings"):
        settings = load_settings({"drag_threshold": 5.9, "min_width": 400.0})
    assert settings.drag_threshold == 5
    assert settings.min_width == 300
    assert "no es entero" in caplog.text
