"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest


RED = (255, 0, 0)
BLUE = (0, 0, 255)
GRAY = (128, 128, 128)


def constant_distance(value: float):
    """Stub metric returning the same weight for every pair."""

    def distance(a, b) -> float:
        return value

    return distance


def walk_to_root(forest, index: int) -> int:
    """Follow parent links without compressing; fails on a cycle."""
    nodes = forest._nodes
    seen: set[int] = set()
    while nodes[index].parent is not None:
        assert index not in seen, "cycle in parent links"
        seen.add(index)
        index = nodes[index].parent
    return index


@pytest.fixture
def uniform_2x2() -> list[list[tuple[int, int, int]]]:
    return [[GRAY, GRAY], [GRAY, GRAY]]


@pytest.fixture
def step_row() -> list[list[int]]:
    """1×8 intensity row with one sharp jump between columns 3 and 4."""
    return [[10, 10, 10, 10, 250, 250, 250, 250]]


@pytest.fixture
def two_halves() -> np.ndarray:
    """4×6 RGB image: left half red, right half blue."""
    img = np.zeros((4, 6, 3), dtype=np.uint8)
    img[:, :3] = RED
    img[:, 3:] = BLUE
    return img


@pytest.fixture
def noisy_image() -> np.ndarray:
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(12, 15, 3), dtype=np.uint8)


@pytest.fixture
def const_distance():
    return constant_distance


@pytest.fixture
def root_of():
    return walk_to_root
