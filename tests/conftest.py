"""
Shared network fixtures.
"""

import numpy as np
import pytest

from bnexact import BayesianNetwork


@pytest.fixture
def rain_network():
    """Rain -> WetGrass."""
    return BayesianNetwork.build(
        {"Rain": ["T", "F"], "WetGrass": ["T", "F"]},
        {
            "Rain": ((), [0.2, 0.8]),
            "WetGrass": (("Rain",), [0.9, 0.1, 0.1, 0.9]),
        },
    )


@pytest.fixture
def alarm_network():
    """Burglary and Earthquake -> Alarm -> JohnCalls, MaryCalls."""
    return BayesianNetwork.build(
        {
            "B": ["T", "F"],
            "E": ["T", "F"],
            "A": ["T", "F"],
            "J": ["T", "F"],
            "M": ["T", "F"],
        },
        {
            "B": ((), [0.001, 0.999]),
            "E": ((), [0.002, 0.998]),
            "A": (("B", "E"), [0.95, 0.05, 0.94, 0.06, 0.29, 0.71, 0.001, 0.999]),
            "J": (("A",), [0.9, 0.1, 0.05, 0.95]),
            "M": (("A",), [0.7, 0.3, 0.01, 0.99]),
        },
    )


def random_table(rng, parent_cards, card):
    """Flat CPT table whose rows (one per parent assignment) sum to one."""
    rows = rng.uniform(0.05, 1.0, size=tuple(parent_cards) + (card,))
    rows /= rows.sum(axis=-1, keepdims=True)
    return rows.reshape(-1)


@pytest.fixture
def mixed_network():
    """
    Mixed domain sizes with a v-structure and a chain:

        X(3) -> Y(2)
        X, Y -> Z(3)
        Z    -> W(2)
        V(2) -> W
    """
    rng = np.random.RandomState(7)
    domains = {
        "X": ["x0", "x1", "x2"],
        "Y": ["y0", "y1"],
        "Z": ["z0", "z1", "z2"],
        "V": ["v0", "v1"],
        "W": ["w0", "w1"],
    }
    cpts = {
        "X": ((), random_table(rng, (), 3)),
        "Y": (("X",), random_table(rng, (3,), 2)),
        "Z": (("X", "Y"), random_table(rng, (3, 2), 3)),
        "V": ((), random_table(rng, (), 2)),
        "W": (("Z", "V"), random_table(rng, (3, 2), 2)),
    }
    return BayesianNetwork.build(domains, cpts)
