'''
Contains a class meant to read, write and modify simulation definition (.dbody) files, the master dictionary of
default values for simulation definitions, and a few utility functions for working with string dictionary keys
'''
import re
from datetime import datetime
from typing import Dict, List, Tuple

__all__ = [ "defaultConfigValues", "SimDefinition" ]

#################### Default value dictionary  #########################
defaultConfigValues = {
    "SimControl.timeDiscretization":            "RK45Adaptive",
    "SimControl.absoluteTolerance":             "1e-8",
    "SimControl.relativeTolerance":             "1e-8",
    "SimControl.velocityStep":                  "1e-6",
    "SimControl.maxTimeStep":                   "inf",
    "SimControl.loggingLevel":                  "1",

    "Model.startTime":                          "0",
    "Model.angularMomentum":                    "(0 0 0)",
    "Model.InitialRotation.axis":               "(1 0 0)",
    "Model.InitialRotation.angle":              "0",

    "Animation.frame":                          "Both",
    "Animation.fps":                            "15",
    "Animation.duration":                       "5",
}
''' Holds default values for all recognized keys except Model.endTime, which every definition must provide '''

simDefinitionHelpMessage = \
"""
    All non-empty, non-comment lines are expected to end in either:
    {   (dictionary start)
    }   (dictionary end)

    Or to contain a space-separated key-value pair:
    key value
"""
class SimDefinition():

    #### Parsing / Initialization ####
    def __init__(self, fileName=None, dictionary=None, silent=False, defaultDict=None):
        '''
        Parse simulation definition files into a dictionary of string values accessible by string keys.

        Inputs:
            * fileName: (str) path to simulation definition file
            * dictionary: (dict[str,str]) if not providing a fileName, provide a pre-parsed dictionary equivalent to a simulation definition file
            * silent: (bool) Console output control
            * defaultDict: (dict[str,str] provide a custom dictionary of default values. If none is provided, defaultConfigValues is used.)

        Example:
            The file contents:
                'SimControl{
                    &nbsp;&nbsp;&nbsp;&nbsp;timeDiscretization RK23Adaptive
                }'
            Would be parsed into a single-key Python dictionary, stored in self.dict:
            `{ "SimControl.timeDiscretization": "RK23Adaptive"}`
        '''
        self.silent = silent
        ''' Boolean, controls console output '''

        self.dict = None # type: Dict[str:str]
        ''' Main dictionary of values, usually populated from a simulation definition file '''

        self.defaultDict = None
        ''' Holds all of the defined default values. These will fill in for missing values in self.dict. Unless a different dictionary is specified, will hold a reference to `defaultConfigValues` '''

        # Assign default dictionary
        if defaultDict == None:
            self.defaultDict = defaultConfigValues
        else:
            self.defaultDict = defaultDict

        # Parse/Assign main values dictionary
        if fileName != None:
            self._parseSimDefinitionFile(fileName)
        elif dictionary != None:
            self.dict = dictionary
            self.fileName = fileName
        else:
            raise ValueError("No fileName or dictionary provided to initialize the SimDefinition")

        # Initialize tracking of default values used and unaccessed keys
        self._resetUsedAndUnusedKeyTrackers()

    def _parseDictionaryContents(self, workingText, startLine, currDictName) -> int:
        '''
            Parses an individual subdictionary in a simdefinition file.
            Calls itself recursively to parse further sub dictionaries.
            Saves parsed key-value pairs to self.dict

            Returns index of next line to parse
        '''
        i = startLine

        while i < len(workingText):
            line = workingText[i]

            if line.strip()[-1] == '{':
                # Remove whitespace and dict start bracket
                subDictName = line.strip()[:-1].strip()

                # Recursive call to parse subdictionary
                if currDictName == "":
                    i = self._parseDictionaryContents(workingText, i+1, subDictName)
                else:
                    i = self._parseDictionaryContents(workingText, i+1, currDictName + "." + subDictName)

            elif line.strip() == '}':
                #End current dictionary - continue parsing at next line
                return i

            elif len(line.split()) > 1:
                #Add a key value pair
                keyVal = line.split()

                # Save the space-separated key-value pair
                key = keyVal[0]
                value = " ".join(keyVal[1:])
                if currDictName == "":
                    keyString = key
                else:
                    keyString = currDictName + "." + key

                if not keyString in self.dict:
                    self.dict[keyString] = value
                else:
                    raise ValueError("Duplicate Key: " + keyString + " in File: " + self.fileName)

            else:
                # Error: Line not recognized as a dict start/end or a key/value pair
                if not self.silent:
                    print(simDefinitionHelpMessage)
                raise ValueError("Problem reading line {}".format(line))

            # Next line
            i += 1

        return i

    def _parseSimDefinitionFile(self, fileName):
        self.fileName = fileName
        self.dict = {}

        # Read all of the file's contents
        with open(fileName, "r") as file:
            workingText = file.read()

        # Remove comments
        comment = re.compile("#.*")
        workingText = re.sub(comment, "", workingText)

        # Remove blank lines
        workingText = [line for line in workingText.split('\n') if line.strip() != '']

        # Start recursive parse by asking to parse the root-level dictionary
        self._parseDictionaryContents(workingText, 0, "")

    #### Normal Usage ####
    def getValue(self, key: str) -> str:
        """
            Input:
                Key should be a string of format "DictionaryName.SubdictionaryName.Key"
            Output:
                Always returns a string value
                Returns value from defaultConfigValues if key not present in current SimDefinition's dictionary
        """
        # Remove any whitespace from the key
        key = key.strip()

        if key in self.dict:
            if key in self.unaccessedFields: # Track which keys are accessed
                self.unaccessedFields.remove(key)
            return self.dict[key]

        elif key in self.defaultDict:
            self.defaultValuesUsed.add(key)
            return self.defaultDict[key]

        raise KeyError("Key: " + key + " not found in {} or default config values".format(self.fileName))

    def setValue(self, key: str, value) -> None:
        '''
            Will add the entry if it's not present
        '''
        # Remove whitespace
        key = key.strip()

        self.dict[key] = value

    def removeKey(self, key: str):
        if key in self.dict:
            return self.dict.pop(key)
        else:
            if not self.silent:
                print("Warning: " + key + " not found, can't delete")
            return None

    def setIfAbsent(self, key: str, value):
        ''' Sets a value, only if it doesn't currently exist in the dictionary '''
        if not key in self.dict:
            self.setValue(key, value)

    def writeToFile(self, fileName: str, writeHeader=True) -> None:
        '''
            Write a (potentially modified) sim definition to file.
            Newly written file will not contain any comments!
        '''
        self.fileName = fileName

        with open(fileName, 'w') as file:
            # Write Header
            if writeHeader:
                file.write("# DeformableBodies\n")
                file.write("# File: {}\n".format(fileName))
                file.write("# Autowritten on: " + str(datetime.now()) + "\n")

            # Sorting the keys before iterating through them ensures that dictionaries will be stored together
            currDicts = []
            for key in sorted(self.dict.keys()):
                dicts = key.split('.')[:-1]

                # Need to be in the appropriate dictionary before writing the key, value pair
                if dicts != currDicts:

                    #Close any uneeded dictionaries
                    dictDepth = len(currDicts)
                    while dictDepth > 0:
                        if dictDepth > len(dicts):
                            file.write("\t"*(dictDepth-1) + "}\n")
                        elif currDicts[dictDepth-1] != dicts[dictDepth-1]:
                            file.write("\t"*(dictDepth-1) + "}\n")
                        else:
                            break

                        dictDepth = dictDepth - 1

                    openedNewDict = False

                    #Open any new dictionaries
                    while dictDepth < len(dicts):
                        newDict = dicts[dictDepth]
                        file.write("\n" + "\t" * dictDepth + newDict + "{\n")
                        dictDepth = dictDepth + 1
                        openedNewDict = True

                    if not openedNewDict:
                        # If no new dictionary was openend after closing unneeded ones, add a spacing line before writing keys/values
                        file.write("\n")

                    currDicts = dicts

                #Add the key, value
                dictDepth = len(currDicts)
                realKey = key.split('.')[-1]
                file.write( "\t"*dictDepth + realKey + "\t" + str(self.dict[key]) + "\n")

            #Close any open dictionaries
            dictDepth = len(currDicts)
            while dictDepth > 0:
                dictDepth = dictDepth - 1
                file.write("\t"*dictDepth + "}\n")

    #### Introspection / Key Gymnastics ####
    def getSubKeys(self, key: str) -> List[str]:
        '''
            Returns a list of all keys that are children of key

            ## Example
                getSubKeys("Model") ->
                [ "Model.endTime", "Model.InitialRotation.axis", "Model.InitialRotation.angle", etc... ]
        '''
        subKeys = []
        for currentKey in self.dict.keys():
            if isSubKey(key, currentKey):
                subKeys.append(currentKey)

        return subKeys

    def getImmediateSubKeys(self, key: str) -> List[str]:
        """
            Returns all keys that are immediate children of the parentKey (one 'level' lower)

            .. note:: Will not return subdictionaries, only keys that have a value associated with them. Use self.getImmediateSubDicts() to discover sub-dictionaries

            ## Example:
                getImmediateSubKeys("Model") ->
                [ "Model.startTime", "Model.endTime", etc...]
        """
        results = set()
        for potentialChildKey in self.dict.keys():
            if isSubKey(key, potentialChildKey) and getKeyLevel(potentialChildKey) == getKeyLevel(key) + 1:
                results.add(potentialChildKey)

        return sorted(results)

    def getImmediateSubDicts(self, key: str) -> List[str]:
        '''
            Returns list of names of immediate subdictionaries

            ## Example
                getImmediateSubDicts("Model") ->
                [ "Model.InitialRotation" ]
        '''
        keyLevel = getKeyLevel(key)

        subDictionaries = set()
        for subKey in self.getSubKeys(key):
            if getKeyLevel(subKey) - keyLevel > 1:
                # A subkey of a subdictionary is at least 2 levels deeper
                subDictionaries.add(getParentKeyAtLevel(subKey, keyLevel+1))

        return sorted(subDictionaries)

    def __contains__(self, key):
        return key in self.dict

    #### Usage Reporting ####
    def printUnusedKeys(self):
        '''
            Checks which keys in the present simulation definition have not yet been accessed.
            Prints a list of those to the console.
        '''
        if len(self.unaccessedFields) > 0:
            print("\nWarning: The following keys were loaded from: {} but never accessed:".format(self.fileName))
            for key in sorted(self.unaccessedFields):
                value = self.dict[key]
                print("{:<45}{}".format(key+":", value))
            print("")

    def printDefaultValuesUsed(self):
        '''
            Checks which default values have been used since the creation of the current instance of SimDefinition. Prints those to the console.
        '''
        if len(self.defaultValuesUsed):
            print("\nThe following default values were used in this simulation:")
            for key in sorted(self.defaultValuesUsed):
                value = self.defaultDict[key]
                print("{:<45}{}".format(key+":", value))
            print("")

    def _resetUsedAndUnusedKeyTrackers(self):
        # Create a set to keep track of which keys have been accessed (initially none)
        self.unaccessedFields = set(self.dict.keys())
        # Create a set to track which default values have been used
        self.defaultValuesUsed = set()

    #### Utilities ####
    def __str__(self):
        result = "File: {}\n".format(self.fileName)

        for key, value in self.dict.items():
            result += "{}: {}\n".format(key, value)

        result += "\n"

        return result

    def __eq__ (self, simDef2):
        try:
            return self.dict == simDef2.dict
        except AttributeError:
            return False

################### Functions for dealing with string keys ########################
def isSubKey(potentialParent:str, potentialChild:str) -> bool:
    '''
        ## Example
        `isSubKey("Model", "Model.endTime")` -> True
        `isSubKey("SimControl", "Model.endTime")` -> False
        `isSubKey("Model", "ModelB.endTime")` -> False
        `isSubKey("", "Model")` -> True
    '''
    if potentialParent == "":
        return potentialChild != ""
    return potentialChild.startswith(potentialParent + ".")

def getKeyLevel(key:str) -> int:
    '''
        Sums the number of dots in the key
        ## Example
            getKeyLevel("Model") -> 0
            getKeyLevel("Model.endTime") -> 1
    '''
    if len(key) == 0:
        return -1
    else:
        return len(key.split('.'))-1

def getParentKeyAtLevel(key:str, desiredLevel:int) -> str:
    '''
        >>> getParentKeyAtLevel('Model.InitialRotation.axis', 0)
        'Model'
        >>> getParentKeyAtLevel('Model.InitialRotation.axis', 1)
        'Model.InitialRotation'
    '''
    desiredParts = key.split('.')[0:desiredLevel+1]
    return '.'.join(desiredParts)

def splitKeyAtLevel(key:str, prefixLevel:int) -> Tuple[str]:
    '''
        0 <= level <= getKeyLevel(key)
        ### Example
        >>> splitKeyAtLevel("Model", 0)
        ('Model', '')
        >>> splitKeyAtLevel("Model.InitialRotation.axis", 1)
        ('Model.InitialRotation', 'axis')
    '''
    n = prefixLevel + 1
    keyNames = key.split('.')
    prefix = ".".join(keyNames[:n])
    suffix = ".".join(keyNames[n:])
    return prefix, suffix
