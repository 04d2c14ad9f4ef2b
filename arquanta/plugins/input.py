from typing import Tuple

import numpy as np
import pandas as pd
import strax
import straxen

from ..dtypes import energy_deposit_fields, deposit_positions_fields, csv_deposit_misc_fields
from ..common import dynamic_chunking
from ..plugin import ArQuantaBasePlugin

export, __all__ = strax.exporter()


@export
class ChunkCsvDeposits(ArQuantaBasePlugin):
    """Plugin which reads a CSV file with energy deposits and returns them in
    chunks.

    The file needs the columns t (ns), eventid, energy (MeV), step_length
    (cm), x, y, z (cm) and pdg.
    """

    __version__ = "0.1.0"

    depends_on: Tuple = tuple()
    provides = "energy_deposits"
    data_kind = "energy_deposits"

    save_when = strax.SaveWhen.TARGET

    source_done = False

    # Config options
    input_file = straxen.URLConfig(
        track=False,
        infer_type=False,
        help="CSV file with the energy deposits",
    )

    separation_scale = straxen.URLConfig(
        default=1e8,
        type=(int, float),
        help="Start a new chunk when the previous deposit is separated by this time scale [ns]",
    )

    n_deposits_per_chunk = straxen.URLConfig(
        default=1e5,
        type=(int, float),
        help="Minimum number of deposits in a chunk",
    )

    first_chunk_left = straxen.URLConfig(
        default=1e6,
        type=(int, float),
        help="Time left of the first chunk [ns]",
    )

    last_chunk_length = straxen.URLConfig(
        default=1e8,
        type=(int, float),
        help="Time length of the last chunk [ns]",
    )

    def infer_dtype(self):
        return energy_deposit_fields + deposit_positions_fields + strax.time_fields

    @staticmethod
    def needed_csv_input_fields():
        return energy_deposit_fields + deposit_positions_fields + csv_deposit_misc_fields

    def setup(self):
        super().setup()

        self.file_reader = csv_file_loader(
            input_file=self.input_file,
            separation_scale=self.separation_scale,
            n_deposits_per_chunk=self.n_deposits_per_chunk,
            first_chunk_left=self.first_chunk_left,
            last_chunk_length=self.last_chunk_length,
            log=self.log,
        )
        self.file_reader_iterator = self.file_reader.output_chunk()

    def compute(self):
        try:
            chunk_data, chunk_left, chunk_right, source_done = next(self.file_reader_iterator)
            chunk_data["endtime"] = chunk_data["time"]
            data = np.zeros(len(chunk_data), dtype=self.dtype)
            strax.copy_to_buffer(chunk_data, data, "_bring_deposits_into_correct_format")

            self.source_done = source_done

            return self.chunk(start=chunk_left, end=chunk_right, data=data)

        except StopIteration:
            raise RuntimeError("Bug in chunk building!")

    def source_finished(self):
        return self.source_done

    def is_ready(self, chunk_i):
        """Overwritten to mimic online input plugin.

        Returns False to check source finished; Returns True to get next
        chunk.
        """
        if "ready" not in self.__dict__:
            self.ready = False
        self.ready ^= True  # Flip
        return self.ready


class csv_file_loader:
    """Class to load a CSV file with energy deposits."""

    def __init__(
        self,
        input_file,
        separation_scale,
        n_deposits_per_chunk,
        chunk_delay_fraction=0.75,
        first_chunk_left=1e6,
        last_chunk_length=1e8,
        log=None,
    ):
        self.input_file = input_file
        self.separation_scale = separation_scale
        self.n_deposits_per_chunk = n_deposits_per_chunk
        self.chunk_delay_fraction = chunk_delay_fraction
        self.last_chunk_length = np.int64(last_chunk_length)
        self.first_chunk_left = np.int64(first_chunk_left)
        self.log = log

        _fields = ChunkCsvDeposits.needed_csv_input_fields()
        self.columns = list(np.dtype(_fields).names)
        self.dtype = _fields + strax.time_fields

    def output_chunk(self):
        deposits = self.__load_csv_file()

        if len(deposits) == 0:
            raise ValueError(f"No energy deposits found in {self.input_file}")

        if np.any(deposits["t"] < 0):
            raise ValueError("Deposit times must not be negative!")

        deposits["time"] = deposits["t"]

        sort_idx = np.argsort(deposits["time"], kind="stable")
        deposits = deposits[sort_idx]

        # Group into chunks
        chunk_idx = dynamic_chunking(
            deposits["time"], scale=self.separation_scale, n_min=self.n_deposits_per_chunk
        )

        # Calculate chunk start and end times
        unique_chunk_index_values = np.unique(chunk_idx)
        chunk_start = np.array(
            [deposits[chunk_idx == i][0]["time"] for i in unique_chunk_index_values]
        )
        chunk_end = np.array(
            [deposits[chunk_idx == i][-1]["time"] for i in unique_chunk_index_values]
        )

        # Chunks must not start before t = 0
        first_left = max(np.int64(0), chunk_start[0] - self.first_chunk_left)

        if (len(chunk_start) > 1) & (len(chunk_end) > 1):
            gap_length = chunk_start[1:] - chunk_end[:-1]
            gap_length = np.append(gap_length, gap_length[-1] + self.last_chunk_length)
            chunk_bounds = chunk_end + np.int64(self.chunk_delay_fraction * gap_length)
            self.chunk_bounds = np.append(first_left, chunk_bounds)
        else:
            self.log.debug("All deposits fit into a single chunk.")
            self.chunk_bounds = [
                first_left,
                chunk_end[0] + self.last_chunk_length,
            ]

        source_done = False
        for c_ix, chunk_left, chunk_right in zip(
            unique_chunk_index_values, self.chunk_bounds[:-1], self.chunk_bounds[1:]
        ):
            if c_ix == unique_chunk_index_values[-1]:
                source_done = True
                self.log.debug("Build last chunk.")

            yield deposits[chunk_idx == c_ix], chunk_left, chunk_right, source_done

    def __load_csv_file(self):
        self.log.debug(f"Load energy deposits from {self.input_file}")
        df = pd.read_csv(self.input_file)

        missing_columns = set(self.columns) - set(df.columns)

        # Check if all needed columns are in place:
        if missing_columns:
            raise ValueError(f"Not all needed columns provided! {missing_columns} are missing.")

        deposits = np.zeros(len(df), dtype=self.dtype)
        for column in self.columns:
            deposits[column] = df[column]

        return deposits
