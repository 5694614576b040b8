'''
Runs deformable body problems whose solver settings and initial conditions are stored in simulation definition (.dbody) files.
The body-frame trajectory itself is code, so it is always passed in separately.

Example definition file:

    SimControl{
        timeDiscretization  RK45Adaptive
        absoluteTolerance   1e-10
        loggingLevel        2
    }

    Model{
        startTime           0
        endTime             10
        angularMomentum     (0 0 1)

        InitialRotation{
            axis            (0 0 1)
            angle           pi/4
        }
    }
'''

import sys

from DeformableBodies.Errors import DomainError
from DeformableBodies.IO import Logging, SimDefinition, SubDictReader
from DeformableBodies.Model.frames import (ReferenceFrame, getAnimationTimes,
                                           sampleFrames)
from DeformableBodies.Model.problem import (DeformableBodyProblem,
                                            SolverSettings, solve)
from DeformableBodies.Motion import axisAngleToQuaternion

__all__ = [ "Simulation", "loadSimDefinition", "loadSolverSettings", "loadProblem", "recognizedKeys" ]

recognizedKeys = {
    "SimControl": [ "timeDiscretization", "absoluteTolerance", "relativeTolerance", "velocityStep", "maxTimeStep", "loggingLevel" ],
    "Model": [ "startTime", "endTime", "angularMomentum", "InitialRotation.axis", "InitialRotation.angle" ],
    "Animation": [ "frame", "fps", "duration" ],
}
''' Keys, relative to their top-level dictionary, that may appear in a definition file '''

def loadSimDefinition(simDefinitionFilePath=None, simDefinition=None, silent=False):
    ''' Loads a simulation definition file into a `DeformableBodies.IO.SimDefinition` object - accepts either a file path or a `DeformableBodies.IO.SimDefinition` object as input '''
    if simDefinition == None and simDefinitionFilePath != None:
        return SimDefinition(simDefinitionFilePath, silent=silent) # Parse simulation definition file

    elif simDefinition != None:
        return simDefinition # Use the SimDefinition that was passed in

    else:
        raise ValueError(""" Insufficient information to initialize a Simulation.
            Please provide either simDefinitionFilePath (string) or simDefinition (SimDefinition), which has been created from the desired Sim Definition file.
            If both are provided, the SimDefinition is used.""")

def checkForUnrecognizedKeys(simDefinition):
    ''' Raises DomainError if any key in the SimControl, Model or Animation dictionaries is not in recognizedKeys '''
    for dictName, keys in recognizedKeys.items():
        validKeys = set(dictName + "." + key for key in keys)
        for key in simDefinition.getSubKeys(dictName):
            if key not in validKeys:
                raise DomainError("Unrecognized configuration option: {} in {}. Options in {} are: {}".format(key, simDefinition.fileName, dictName, ", ".join(keys)))

def loadSolverSettings(simDefinition) -> SolverSettings:
    checkForUnrecognizedKeys(simDefinition)
    reader = SubDictReader("SimControl", simDefinition)

    return SolverSettings(
        integrationMethod=reader.getString("timeDiscretization"),
        absoluteTolerance=reader.getFloat("absoluteTolerance"),
        relativeTolerance=reader.getFloat("relativeTolerance"),
        velocityStep=reader.getFloat("velocityStep"),
        maxTimeStep=reader.getFloat("maxTimeStep")
    )

def loadProblem(simDefinition, bodyFrame) -> DeformableBodyProblem:
    ''' Model.endTime has no default value, a KeyError is raised if it is missing '''
    checkForUnrecognizedKeys(simDefinition)
    reader = SubDictReader("Model", simDefinition)

    timeSpan = (reader.getFloat("startTime"), reader.getFloat("endTime"))
    initialRotation = axisAngleToQuaternion(reader.getVector("InitialRotation.axis"), reader.getFloat("InitialRotation.angle"))

    return DeformableBodyProblem(bodyFrame, timeSpan, initialRotation, reader.getVector("angularMomentum"))

class Simulation():

    def __init__(self, bodyFrame, simDefinitionFilePath=None, simDefinition=None, silent=False):
        '''
            Inputs:

                * bodyFrame:              Function: time -> [ PointMass ], or a list of functions: time -> PointMass
                * simDefinitionFilePath:  (string) path to simulation definition file
                * simDefinition:          (`DeformableBodies.IO.SimDefinition`) object that's already loaded and parsed the desired sim definition file
                * silent:                 (bool) toggles optional outputs to the console
        '''
        self.simDefinition = loadSimDefinition(simDefinitionFilePath, simDefinition, silent)
        ''' Instance of `DeformableBodies.IO.SimDefinition`. Defines the current simulation '''

        self.silent = silent
        ''' (bool) '''

        self.settings = loadSolverSettings(self.simDefinition)
        self.problem = loadProblem(self.simDefinition, bodyFrame)

        self.loggingLevel = SubDictReader("SimControl", self.simDefinition).getInt("loggingLevel")
        ''' 0: Nothing captured, 1: Solver output captured, 2: Model summary and default values used are captured too '''

        self.log = []
        ''' Console output captured while running, list of strings '''

        self.logger = None
        ''' Instance of `DeformableBodies.IO.Logging.Logger`, replaces sys.stdout while running '''

        self.previousStdout = None
        ''' sys.stdout as it was before run() installed self.logger, restored afterwards '''

        self.solution = None

    def run(self):
        '''
            Solves the problem defined by self.simDefinition

            Returns:
                * solution: (`DeformableBodies.Model.problem.DeformableBodySolution`)
        '''
        self._setUpConsoleLogging()
        try:
            if self.loggingLevel >= 2:
                print(self.problem)
                self.simDefinition.printDefaultValuesUsed()

            solverIsSilent = self.silent and self.loggingLevel == 0
            self.solution = solve(self.problem, self.settings, silent=solverIsSilent)
        finally:
            if self.logger != None:
                Logging.removeLogger(self.previousStdout)
                self.logger = None

        return self.solution

    def _setUpConsoleLogging(self):
        self.previousStdout = sys.stdout

        if self.loggingLevel > 0:
            # Set up logging so that the output of any print calls after this point is captured in self.log
            self.logger = Logging.Logger(self.log, continueWritingToTerminal=not self.silent, terminal=self.previousStdout)
            sys.stdout = self.logger

            Logging.getSystemInfo(printToConsole=True)
            if self.simDefinition.fileName != None:
                print("# Using sim definition file: {}".format(self.simDefinition.fileName))

        elif self.silent:
            # No intention of writing things to a log file, just prevent them from being printed to the terminal
            _ = []
            self.logger = Logging.Logger(_, continueWritingToTerminal=False)
            sys.stdout = self.logger

        else:
            self.logger = None

    def writeLogToFile(self, filePath=None, overwrite=False):
        ''' Returns the path written to. If no path is given, the first available "simulationLog<n>.txt" is used '''
        if filePath == None:
            filePath = Logging.findNextAvailableNumberedFileName("simulationLog")

        with open(filePath, 'w' if overwrite else 'x') as file:
            file.writelines(self.log)

        return filePath

    def getAnimationFrames(self):
        ''' Samples the solution at the times an animation described by the Animation dictionary would display '''
        if self.solution == None:
            self.run()

        reader = SubDictReader("Animation", self.simDefinition)
        frame = ReferenceFrame.fromString(reader.getString("frame"))
        times = getAnimationTimes(self.problem.timeSpan, reader.getFloat("fps"), reader.getFloat("duration"))

        return sampleFrames(self.solution, frame, times)
