'''
Contains all of the test code to make sure the code in `DeformableBodies` is running properly.
Directory structure mirrors that of DeformableBodies, with an additional data directory.

All test/test_XXXX modules contains unit testing code for DeformableBodies/XXXX.
Test simulation definitions (.dbody files) are in test/test_IO/data
Shared assertion helpers and example trajectories are in `test.testUtilities`
'''
