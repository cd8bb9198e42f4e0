from .wifiInfo import *
from .authorization import *
from .wifiInfoProvider import *
from .wifiInfoChannel import *
