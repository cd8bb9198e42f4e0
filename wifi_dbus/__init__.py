from .wifiDbus import *
from .nmDbus import *
from .wsDbus import *
from .polkitDbus import *
from .geoclueDbus import *
