import logging
import strax
import arquanta

from .context_utils import apply_detector_constants

logging.basicConfig(handlers=[logging.StreamHandler()])
log = logging.getLogger("arquanta.context")


# Plugins to compute ionization electrons and scintillation photons
yields_plugins = [
    arquanta.plugins.ChunkCsvDeposits,
    arquanta.plugins.ElectricField,
    arquanta.plugins.SeparateYields,
    arquanta.plugins.DepositSummary,
]


def yields_context(
    output_folder="./arquanta_data",
    detector_config_file=None,
    extra_plugins=None,
):
    """Function to create an arquanta context.

    Args:
        output_folder: Folder where the processed data is stored.
        detector_config_file: Optional json file with detector constants.
            Each key is set as plugin option, e.g. {"modbox_b": 0.212}.
        extra_plugins: Plugins registered after the default ones, e.g. to
            replace the input plugin.
    """

    st = strax.Context(storage=output_folder)

    for plugin in yields_plugins:
        st.register(plugin)

    for plugin in extra_plugins or []:
        st.register(plugin)

    if detector_config_file is not None:
        log.info(f"Loading detector constants from {detector_config_file}")
        apply_detector_constants(st, detector_config_file)

    return st
