__version__ = "0.1.0"

from . import physics
from .physics import *

from . import dtypes
from . import common
from . import plugin

from . import plugins
from .plugins import *

from . import context_utils
from . import context
