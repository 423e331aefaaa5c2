"""Shared fixtures for the asset graph tests."""

import logging

import pytest

from assetgraph import AssetGraph, GraphConfig


@pytest.fixture
def graph():
    return AssetGraph()


@pytest.fixture
def strict_graph():
    config = GraphConfig()
    config.update({"type_conflict": "reject"})
    return AssetGraph(config)


@pytest.fixture(autouse=True)
def _debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="assetgraph")
