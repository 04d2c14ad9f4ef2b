import strax
import straxen
import logging

logging.basicConfig(handlers=[logging.StreamHandler()])


class ArQuantaBasePlugin(strax.Plugin):
    """Base plugin for arquanta plugins."""

    # Forbid rechunking
    rechunk_on_save = False

    input_timeout = 900

    # Config options
    debug = straxen.URLConfig(
        default=False,
        type=bool,
        track=False,
        help="Show debug informations",
    )

    def setup(self):
        super().setup()

        log = logging.getLogger(f"{self.__class__.__name__}")

        if self.debug:
            log.setLevel("DEBUG")
            log.debug(f"Running {self.__class__.__name__} version {self.__version__} in debug mode")
        else:
            log.setLevel("INFO")
