import logging

import straxen
from straxen import URLConfig

from .physics import ConstantOffsetMap, GridOffsetMap

logging.basicConfig(handlers=[logging.StreamHandler()])
log = logging.getLogger("arquanta.context_utils")


@URLConfig.register("constant_offset_map")
def get_constant_offset_map(data, x=0.0, y=0.0, z=0.0):
    """Make a field offset map with the same offset everywhere."""
    return ConstantOffsetMap(float(x), float(y), float(z))


@URLConfig.register("grid_offset_map")
def get_grid_offset_map(data):
    """Make a field offset map from a dict with the grid axes x, y, z and
    the offsets, e.g. loaded with resource://...?fmt=json."""
    return GridOffsetMap.from_dict(data)


def apply_detector_constants(context, config_file):
    """Set plugin options from the keys of a detector constants file.

    Keys without a matching plugin option are ignored with a warning.
    """
    config = straxen.get_resource(config_file, fmt="json")
    known_options = set()
    for plugin in context._plugin_class_registry.values():
        known_options.update(plugin.takes_config.keys())

    for key, value in config.items():
        if key not in known_options:
            log.warning(f"Ignoring {key} from {config_file}, no plugin takes this option")
            continue
        context.set_config({key: value})
        log.debug(f"Set '{key}' to '{value}' from {config_file}")
