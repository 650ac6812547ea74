"""Worked solutions to a selection of the exercises, as plain Python modules."""