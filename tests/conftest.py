# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import os

import pytest

from carbonscope.calculation import (
    DEFAULT_EMISSION_FACTORS,
    Scope1Activity,
    Scope2Activity,
    Scope3Activity,
)
from carbonscope.config import reset_config


# ==================== CONFIG ISOLATION ====================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Drop CS_* environment overrides and the config singleton per test."""
    for key in list(os.environ):
        if key.startswith("CS_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


# ==================== ACTIVITY FIXTURES ====================

@pytest.fixture
def baseline_scope1():
    """Scope 1 activity of the sample baseline scenario."""
    return Scope1Activity(
        natural_gas=50000, diesel=15000, petrol=8000, refrigerants=50, lpg=2000
    )


@pytest.fixture
def baseline_scope2():
    """Scope 2 activity of the sample baseline scenario."""
    return Scope2Activity(electricity=500000, heating=100000, cooling=80000, steam=50000)


@pytest.fixture
def baseline_scope3():
    """Scope 3 activity of the sample baseline scenario."""
    return Scope3Activity(
        business_travel=200000,
        employee_commuting=500000,
        waste_generated=100,
        purchased_goods=5000000,
        upstream_transport=100000,
        downstream_transport=150000,
    )


@pytest.fixture
def default_factors():
    return DEFAULT_EMISSION_FACTORS


@pytest.fixture
def factor_mapping():
    """Complete factor mapping in camelCase, as a custom table file would hold it."""
    return DEFAULT_EMISSION_FACTORS.to_dict(by_alias=True)
