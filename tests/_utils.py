import numpy as np
import pandas as pd

# Codes of the particle types with their own scintillation yield and two without
pdg_codes_for_tests = [2212, 13, -13, 211, -211, 321, -321, 1000020040, 11, -11, 22, 2112, 111]


def build_random_deposits(n, seed=42):
    rng = np.random.default_rng(seed)
    df = pd.DataFrame()

    df["x"] = rng.uniform(-100, 100, n)
    df["y"] = rng.uniform(-100, 100, n)
    df["z"] = rng.uniform(0, 300, n)

    df["energy"] = rng.uniform(0.01, 5, n)
    df["step_length"] = rng.uniform(0.01, 0.5, n)
    # Some degenerate steps
    df.loc[df.index[::10], "step_length"] = 0.0

    df["pdg"] = rng.choice(pdg_codes_for_tests, n)
    df["eventid"] = np.arange(n) // 5
    df["t"] = np.arange(n) * 1000

    return df
