'''
Input/Output functionality:

* Reading/Writing simulation definition (.dbody) files
* Capturing console output into simulation logs
'''
# Make the classes in all submodules importable directly from DeformableBodies.IO
from .simDefinition import *
from .subDictReader import *
from .Logging import *

subModules = [ simDefinition, subDictReader, Logging ]

__all__ = []

for subModule in subModules:
    __all__ += subModule.__all__
