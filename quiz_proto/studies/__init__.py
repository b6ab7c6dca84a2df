"""
Studies: walk-throughs of the model, run from the command line.

quiz_roster - build a roster of base and paid users, drive them, observe
"""
