import numpy as np
import numba

from .physics import EnergyDepositStep


@numba.njit()
def dynamic_chunking(data, scale, n_min):
    """Assign a chunk index to each (time) value.

    A new chunk starts at a gap larger than scale, but only once the
    current chunk holds at least n_min entries.
    """
    idx_sort = np.argsort(data)
    idx_undo_sort = np.argsort(idx_sort)

    data_sorted = data[idx_sort]

    diff = data_sorted[1:] - data_sorted[:-1]

    clusters = [0]
    c = 0
    n_cluster = 0
    for value in diff:
        if value <= scale:
            clusters.append(c)
            n_cluster += 1
        elif n_cluster + 1 < n_min:
            clusters.append(c)
            n_cluster += 1
        elif value > scale:
            c = c + 1
            clusters.append(c)
            n_cluster = 0

    clusters = np.array(clusters)
    clusters_undo_sort = clusters[idx_undo_sort]

    return clusters_undo_sort


def deposits_from_array(deposits):
    """Yield EnergyDepositStep values for a structured array of
    deposits."""
    for deposit in deposits:
        yield EnergyDepositStep(
            energy=float(deposit["energy"]),
            step_length=float(deposit["step_length"]),
            x=float(deposit["x"]),
            y=float(deposit["y"]),
            z=float(deposit["z"]),
            pdg=int(deposit["pdg"]),
        )


def deposit_positions(deposits):
    """(n, 3) array with the step midpoints of a structured array of
    deposits."""
    return np.stack((deposits["x"], deposits["y"], deposits["z"]), axis=1).astype(np.float64)
