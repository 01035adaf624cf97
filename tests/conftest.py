"""
Pytest configuration and shared fixtures for the calculator tests.
"""

import random

import pytest

from Calculator import config_manager


FUZZ_ALPHABET = "0123456789+-*/^().,%abcegilnopqrstx ×÷−"


@pytest.fixture
def config_paths(tmp_path, monkeypatch):
    """Point config_manager at a temporary config.json / ui_strings.json."""
    config_file = tmp_path / "config.json"
    strings_file = tmp_path / "ui_strings.json"
    monkeypatch.setattr(config_manager, "config_json", config_file)
    monkeypatch.setattr(config_manager, "ui_strings", strings_file)
    return config_file, strings_file


@pytest.fixture
def fuzz_inputs():
    """Deterministic pseudo-random strings over the calculator alphabet."""
    rng = random.Random(1234)
    inputs = []
    for _ in range(1000):
        length = rng.randint(0, 24)
        inputs.append("".join(rng.choice(FUZZ_ALPHABET) for _ in range(length)))
    return inputs
