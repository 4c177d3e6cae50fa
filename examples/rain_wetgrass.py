"""
Example: Rain -> WetGrass.

Posterior P(Rain=T | WetGrass=T) by all three algorithms, checked against
Bayes' rule.
"""

import numpy as np
from bnexact import BayesianNetwork
from bnexact.engine.inference import ALGORITHMS


def main():
    # P(Rain) and P(WetGrass | Rain); WetGrass value varies fastest
    network = BayesianNetwork.build(
        {"Rain": ["T", "F"], "WetGrass": ["T", "F"]},
        {
            "Rain": ((), [0.2, 0.8]),
            "WetGrass": (("Rain",), [0.9, 0.1, 0.1, 0.9]),
        },
    )

    print("Direct CPT lookup:")
    r = network.conditional_probability("P(WetGrass=T|Rain=T)", 1)
    print(f"  P(WetGrass=T|Rain=T) = {r.probability:.5f} ({r.additions} adds, {r.multiplications} mults)")

    print("\nPosterior P(Rain=T|WetGrass=T):")
    for algorithm, label in ALGORITHMS.items():
        r = network.conditional_probability("P(Rain=T|WetGrass=T)", algorithm)
        print(f"  {label:40s} {r.probability:.5f} ({r.additions} adds, {r.multiplications} mults)")

    # Verify by Bayes' rule
    print("\n--- Verification by Bayes' rule ---")
    exact = 0.2 * 0.9 / (0.2 * 0.9 + 0.8 * 0.1)
    print(f"Bayes' rule = {exact:.5f}")
    print(f"Match: {np.isclose(r.probability, exact)}")


if __name__ == "__main__":
    main()
