import numpy as np


energy_deposit_fields = [
    (("Energy deposit [MeV]", "energy"), np.float64),
    (("Length of the step depositing the energy [cm]", "step_length"), np.float64),
    (("PDG code of the particle depositing the energy", "pdg"), np.int32),
    (("Event ID of the generator", "eventid"), np.int32),
]


deposit_positions_fields = [
    (("x position of the step midpoint [cm]", "x"), np.float32),
    (("y position of the step midpoint [cm]", "y"), np.float32),
    (("z position of the step midpoint [cm]", "z"), np.float32),
]


csv_deposit_misc_fields = [
    (("Time of the deposit with respect to the start of the run [ns]", "t"), np.int64),
]


electric_fields = [
    (("Effective electric field at the deposit position [kV/cm]", "e_field"), np.float64),
]


quanta_fields = [
    (("Number of ionization electrons, not corrected for attachment", "electrons"), np.float64),
    (("Number of scintillation photons", "photons"), np.float64),
    (("dE/dx of the deposit used for recombination [MeV/cm]", "dedx"), np.float64),
    (("Fraction of electrons escaping recombination", "recombination"), np.float64),
]
