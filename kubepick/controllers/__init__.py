"""Controllers module for kubepick.

Subpackages:
- base: abstract cluster controller
- cluster: kubectl client and output parsers
- session: log stream sessions, timers and their supervisor
- picker: the picker controller tying them to the resource cache
"""
