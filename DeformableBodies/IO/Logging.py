'''
Capture of console output (print() calls) into simulation logs
'''

import os
import sys
from datetime import datetime
from platform import platform

__all__ = [ "Logger", "removeLogger", "getSystemInfo", "findNextAvailableNumberedFileName" ]

class Logger():
    '''
        Class intended to capture calls to print() and copy their contents to a list of strings, while still (optionally) printing them to the console

        Ex:
            logger = Logger(stringResultList)
            sys.stdout = logger

        Now anything passed into print() will be printed to the console and stored in stringResultList
    '''

    def __init__(self, stringListToCopyTo, continueWritingToTerminal=True, terminal=None):
        if terminal == None:
            terminal = sys.__stdout__
        self.terminal = terminal
        self.log = stringListToCopyTo
        self.currentMessage = ""
        self.continueWritingToTerminal = continueWritingToTerminal

    def write(self, msg):
        if self.continueWritingToTerminal:
            self.terminal.write(msg)
        self.log.append(msg)

    def flush(self):
        self.terminal.flush()

    def writeLine(self, msg=None):
        if msg == None:
            msg = self.currentMessage + "\n"
            self.currentMessage = ""

        if self.continueWritingToTerminal:
            self.terminal.write(msg)
        self.log.append(msg)

    def addToLine(self, msg):
        self.currentMessage += msg

    def writeLogToFile(self, filePath, overwrite=False):
        ''' Returns True if the log was written. Existing files are only replaced if overwrite is True '''
        if overwrite or not os.path.exists(filePath):
            with open(filePath, 'w+') as file:
                file.writelines(self.log)
            return True
        return False

def removeLogger(previousStdout=None):
    ''' Restores previousStdout, or the interpreter's original stdout if none is given '''
    if previousStdout == None:
        previousStdout = sys.__stdout__
    sys.stdout = previousStdout

def findNextAvailableNumberedFileName(fileBaseName="simulationLog", extension=".txt"):
    '''
        If fileBaseName is simLog, returns the first of: simLog1, simLog2, simLog3, etc... that isn't already a file.
        Returns a string of the form fileBaseName + Number + extension
    '''
    fileNumber = 0
    filePath = None
    while filePath == None or os.path.exists(filePath):
        fileNumber += 1
        filePath = fileBaseName + str(fileNumber) + extension

    return filePath

def getSystemInfo(printToConsole=False):
    ''' Returns string array containing the date and machine type '''
    result = [ "# DeformableBodies simulation log" ]

    now = datetime.now().strftime("%d/%m/%Y %H:%M:%S")
    result.append("# {}".format(now))
    result.append("# OS: {}".format(platform()))

    if printToConsole:
        for line in result:
            print(line)

    return result
