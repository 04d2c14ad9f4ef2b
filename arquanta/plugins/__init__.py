from . import input
from .input import *

from . import electric_field
from .electric_field import *

from . import yields
from .yields import *

from . import summary
from .summary import *
