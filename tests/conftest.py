"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from structclone import CopySettings, DeepCopyEngine, StrategyRegistry, TypeClassifier


class Department:
    """Plain class with a required constructor argument and a self-typed link."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.related: "Department | None" = None


class Node:
    """Linked node without a zero-argument constructor."""

    def __init__(self, value: int, next: "Node | None" = None) -> None:
        self.value = value
        self.next = next


class Holder:
    """Zero-argument class holding an arbitrary child."""

    def __init__(self) -> None:
        self.child = None


@pytest.fixture
def registry():
    """Isolated strategy registry with the built-in strategies."""
    return StrategyRegistry.with_defaults()


@pytest.fixture
def engine(registry):
    """Engine with its own registry and classifier, immune to global registrations."""
    return DeepCopyEngine(
        classifier=TypeClassifier(registry),
        strategies=registry,
        settings=CopySettings(),
    )


@pytest.fixture
def department_cls():
    return Department


@pytest.fixture
def node_cls():
    return Node


@pytest.fixture
def holder_cls():
    return Holder
