from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ixtable.settings import SettingsError, get_settings


def test_defaults():
    s = get_settings({})
    assert s.output_dir == Path(".")
    assert s.label_lang == "en"
    assert s.log_level == logging.WARNING


def test_overrides(tmp_path):
    s = get_settings({
        "IXTABLE_OUTPUT_DIR": str(tmp_path),
        "IXTABLE_LABEL_LANG": "EN-US",
        "IXTABLE_LOG_LEVEL": "debug",
    })
    assert s.output_dir == tmp_path
    assert s.label_lang == "en-us"
    assert s.log_level == logging.DEBUG


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("IXTABLE_LABEL_LANG", "fr")
    assert get_settings().label_lang == "fr"


def test_bad_values():
    with pytest.raises(SettingsError):
        get_settings({"IXTABLE_LOG_LEVEL": "LOUD"})
    with pytest.raises(SettingsError):
        get_settings({"IXTABLE_LABEL_LANG": "   "})
