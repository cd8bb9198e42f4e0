from .platformAccess import *
from .platformCapabilities import *
