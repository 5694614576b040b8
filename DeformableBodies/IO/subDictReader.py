'''
    Wrapper class to read from a specific sub-dictionary in a SimDefinition.
'''

from typing import List, Union

import numpy as np

from DeformableBodies.Errors import DimensionError
from DeformableBodies.Utilities import evalExpression

__all__ = [ "SubDictReader", "parseVector", "parseBool" ]

_trueStrings = { "y", "yes", "t", "true", "on", "1" }
_falseStrings = { "n", "no", "f", "false", "off", "0" }

def parseBool(string: str) -> bool:
    value = string.strip().lower()
    if value in _trueStrings:
        return True
    elif value in _falseStrings:
        return False
    raise ValueError("Invalid truth value: {}".format(string))

def parseVector(string: str):
    '''
        Parses 3-vectors written as "(x y z)", "x y z" or "(x, y, z)" into numpy arrays.
        Raises DimensionError if the string does not contain exactly three components
    '''
    components = string.strip().strip("()").replace(",", " ").split()
    if len(components) != 3:
        raise DimensionError("Expected a three-dimensional vector, got: {}".format(string))

    return np.array([ float(x) for x in components ])

class SubDictReader():

    def __init__(self, stringPathToThisItemsSubDictionary, simDefinition):
        '''
            Example stringPathToThisItemsSubDictionary = 'Model.InitialRotation' if we're reading the initial rotation
        '''
        self.simDefDictPathToReadFrom = stringPathToThisItemsSubDictionary
        self.simDefinition = simDefinition

    def getString(self, key):
        '''
            Pass in either relative key or absolute key:
                Ex 1 (Relative): If object subdictionary (self.simDefDictPathToReadFrom) is 'Model', relative keys could be 'endTime' or 'InitialRotation.axis'
                    These would retrieve Model.endTime or Model.InitialRotation.axis from the sim definition
                Ex 2 (Absolute): Can also pass in full absolute key, like 'SimControl.velocityStep', and it will retrieve that value, as long as there isn't a 'path collision' with a relative path
        '''
        try:
            return self.simDefinition.getValue(self.simDefDictPathToReadFrom + "." + key)
        except KeyError:
            try:
                return self.simDefinition.getValue(key)
            except KeyError:
                attemptedKey1 = self.simDefDictPathToReadFrom + "." + key
                attemptedKey2 = key
                raise KeyError("{} and {} not found in {} or in default value dictionary".format(attemptedKey1, attemptedKey2, self.simDefinition.fileName))

    #### Get parsed values ####
    def getInt(self, key: str) -> int:
        return int(self.getString(key))

    def getFloat(self, key: str) -> float:
        ''' Plain numbers are parsed directly, anything else is evaluated as a math expression, ex: "pi/2" '''
        value = self.getString(key)
        try:
            return float(value)
        except ValueError:
            try:
                return float(evalExpression(value))
            except (NameError, SyntaxError, TypeError) as e:
                raise ValueError("Unable to parse {}: '{}' as a number".format(key, value)) from e

    def getVector(self, key: str):
        return parseVector(self.getString(key))

    def getBool(self, key: str) -> bool:
        return parseBool(self.getString(key))

    #### Try get values (return specified default value if not found) ####
    def tryGetString(self, key: str, defaultValue: Union[None, str]=None):
        try:
            return self.getString(key)
        except KeyError:
            return defaultValue

    def tryGetInt(self, key: str, defaultValue: Union[None, int]=None):
        try:
            return self.getInt(key)
        except KeyError:
            return defaultValue

    def tryGetFloat(self, key: str, defaultValue: Union[None, float]=None):
        try:
            return self.getFloat(key)
        except KeyError:
            return defaultValue

    def tryGetVector(self, key: str, defaultValue=None):
        try:
            return self.getVector(key)
        except KeyError:
            return defaultValue

    def tryGetBool(self, key: str, defaultValue: Union[None, bool]=None):
        try:
            return self.getBool(key)
        except KeyError:
            return defaultValue

    #### Introspection ####
    def getImmediateSubDicts(self, key=None) -> List[str]:
        if key == None:
            key = self.simDefDictPathToReadFrom
        return self.simDefinition.getImmediateSubDicts(key)

    def getSubKeys(self, key=None) -> List[str]:
        if key == None:
            key = self.simDefDictPathToReadFrom
        return self.simDefinition.getSubKeys(key)

    def getImmediateSubKeys(self, key=None) -> List[str]:
        if key == None:
            key = self.simDefDictPathToReadFrom
        return self.simDefinition.getImmediateSubKeys(key)

    def getDictName(self) -> str:
        lastDotIndex = self.simDefDictPathToReadFrom.rfind('.')
        return self.simDefDictPathToReadFrom[lastDotIndex+1:]
